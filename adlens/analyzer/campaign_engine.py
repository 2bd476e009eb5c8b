"""ADLENS — Campaign Reconciliation Engine.

Source tables hold one row per campaign per reporting period. The campaign
table shows one entry per campaign name: the row from the most recent period.
"""

import re
from datetime import date
from typing import Dict, Iterable, List, Optional

from adlens.analyzer.metrics_engine import cost_per_click, cpa
from adlens.core.field_registry import (
    CanonicalField,
    Source,
    candidates,
    recency_keys,
)
from adlens.core.logging import get_logger
from adlens.core.normalizers import (
    RawRecord,
    normalize_date,
    parse_iso_date,
    resolve_field,
    resolve_raw,
    resolve_text,
)
from adlens.models.view_models import PLATFORM_BY_SOURCE, Campaign, CanonicalMetrics

logger = get_logger("analyzer.campaign")

UNKNOWN_CAMPAIGN = "Unknown Campaign"
EPOCH = date(1970, 1, 1)


def _campaign_name(row: RawRecord, source: Source) -> str:
    return resolve_text(row, candidates(source, CanonicalField.NAME), UNKNOWN_CAMPAIGN)


def _recency(row: RawRecord, source: Source) -> Optional[date]:
    """Date used to order duplicate rows; None when it cannot be parsed.

    Empty date columns fall through to the next candidate; a row without any
    date counts as 1970-01-01.
    """
    raw = resolve_text(row, recency_keys(source))
    if not raw:
        return EPOCH
    return parse_iso_date(normalize_date(raw))


def latest_rows(rows: Iterable[RawRecord], source: Source) -> Dict[str, RawRecord]:
    """Map campaign name → most recent row.

    Only a strictly later date replaces the stored row, so ties and
    unparseable dates keep the first row seen.
    """
    latest: Dict[str, RawRecord] = {}
    for row in rows:
        name = _campaign_name(row, source)
        current = latest.get(name)
        if current is None:
            latest[name] = row
            continue
        existing_date = _recency(current, source)
        candidate_date = _recency(row, source)
        if (
            existing_date is not None
            and candidate_date is not None
            and candidate_date > existing_date
        ):
            latest[name] = row
    return latest


def _optional_date(row: RawRecord, source: Source, field: CanonicalField) -> Optional[str]:
    raw = resolve_raw(row, candidates(source, field))
    if raw is None or raw == "":
        return None
    return normalize_date(raw)


def resolve_metrics(row: RawRecord, source: Source) -> CanonicalMetrics:
    """Resolve the five canonical metrics of a row."""
    return CanonicalMetrics(
        impressions=resolve_field(row, candidates(source, CanonicalField.IMPRESSIONS)),
        clicks=resolve_field(row, candidates(source, CanonicalField.CLICKS)),
        spend=resolve_field(row, candidates(source, CanonicalField.SPEND)),
        leads=resolve_field(row, candidates(source, CanonicalField.LEADS)),
        conversions=resolve_field(row, candidates(source, CanonicalField.CONVERSIONS)),
    )


def build_campaign(row: RawRecord, source: Source) -> Campaign:
    """Map one raw row to a Campaign with derived metrics."""
    name = _campaign_name(row, source)
    raw_id = resolve_text(row, candidates(source, CanonicalField.RAW_ID))
    if not raw_id:
        raw_id = re.sub(r"\s+", "-", name)
    metrics = resolve_metrics(row, source)

    return Campaign(
        id=f"{source.value}-{raw_id}",
        name=name,
        platform=PLATFORM_BY_SOURCE[source],
        status=resolve_text(row, candidates(source, CanonicalField.STATUS), "active"),
        start_date=_optional_date(row, source, CanonicalField.START_DATE),
        end_date=_optional_date(row, source, CanonicalField.END_DATE),
        metrics=metrics,
        cost_per_click=cost_per_click(metrics.spend, metrics.clicks),
        cpa=cpa(metrics.spend, metrics.leads),
    )


def reconcile_campaigns(rows: Iterable[RawRecord], source: Source) -> List[Campaign]:
    """One Campaign per distinct name, built from its most recent row."""
    rows = list(rows)
    latest = latest_rows(rows, source)
    campaigns = [build_campaign(row, source) for row in latest.values()]
    logger.info(
        f"Reconciled {len(rows)} {source.value} rows into {len(campaigns)} campaigns",
        extra={"source": source.value, "row_count": len(rows)},
    )
    return campaigns
