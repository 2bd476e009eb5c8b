"""ADLENS — Daily Aggregation Engine.

Builds the chart series: one point per calendar day, metrics summed over every
row of that day. Consolidated views merge the per-source series by date.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Sequence

from adlens.core.field_registry import METRIC_FIELDS, CanonicalField, Source, candidates
from adlens.core.logging import get_logger
from adlens.core.normalizers import (
    RawRecord,
    date_sort_key,
    is_iso_date,
    normalize_date,
    resolve_field,
    resolve_raw,
)
from adlens.models.view_models import CONSOLIDATED, DailyPoint

logger = get_logger("analyzer.daily")

METRIC_NAMES = [f.value for f in METRIC_FIELDS]


def _row_date(row: RawRecord, source: Source) -> str:
    return normalize_date(resolve_raw(row, candidates(source, CanonicalField.DATE)))


def _to_points(sums: Dict[str, Dict[str, float]], tag: str | None = None) -> List[DailyPoint]:
    return [
        DailyPoint(date=day, source=tag, **sums[day])
        for day in sorted(sums, key=date_sort_key)
    ]


def aggregate_daily(rows: Iterable[RawRecord], source: Source) -> List[DailyPoint]:
    """Group rows by normalized date and sum their metrics."""
    sums: Dict[str, Dict[str, float]] = defaultdict(lambda: dict.fromkeys(METRIC_NAMES, 0.0))
    row_count = 0

    for row in rows:
        row_count += 1
        bucket = sums[_row_date(row, source)]
        for field in METRIC_FIELDS:
            bucket[field.value] += resolve_field(row, candidates(source, field))

    points = _to_points(sums)
    logger.info(
        f"Aggregated {row_count} {source.value} rows into {len(points)} days",
        extra={"source": source.value, "row_count": row_count},
    )
    return points


def merge_daily(*series: Sequence[DailyPoint]) -> List[DailyPoint]:
    """Sum several daily series date by date.

    A date missing from one series contributes zeros. Every point is tagged
    as consolidated.
    """
    sums: Dict[str, Dict[str, float]] = defaultdict(lambda: dict.fromkeys(METRIC_NAMES, 0.0))
    for points in series:
        for point in points:
            bucket = sums[point.date]
            for name in METRIC_NAMES:
                bucket[name] += getattr(point, name)
    return _to_points(sums, tag=CONSOLIDATED)


def available_dates(rows: Iterable[RawRecord], source: Source) -> List[str]:
    """Distinct calendar dates present in the rows, ascending.

    Buckets that are not real dates are left out.
    """
    return sorted({d for d in (_row_date(row, source) for row in rows) if is_iso_date(d)})


def merge_dates(*date_lists: Iterable[str]) -> List[str]:
    """Sorted union of several date lists."""
    merged: set[str] = set()
    for dates in date_lists:
        merged.update(dates)
    return sorted(merged)
