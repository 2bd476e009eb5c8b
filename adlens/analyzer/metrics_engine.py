"""ADLENS — Derived Metrics Engine.

Ratio metrics shown next to raw totals: cost per click and cost per
acquisition (lead). Both are 0 when their denominator is 0.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from adlens.core.normalizers import normalize_date
from adlens.models.view_models import Campaign, DailyPoint, ViewTotals

_CENTS = Decimal("0.01")


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    return float(Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def cost_per_click(spend: float, clicks: float) -> float:
    return round2(spend / clicks) if clicks > 0 else 0.0


def cpa(spend: float, leads: float) -> float:
    return round2(spend / leads) if leads > 0 else 0.0


def summarize_totals(
    daily: Sequence[DailyPoint],
    campaigns: Sequence[Campaign] = (),
) -> ViewTotals:
    """Headline totals for a view.

    The daily series is the source of truth when it has points; campaign rows
    are only summed when there is no daily data.
    """
    spend = impressions = clicks = leads = 0.0

    if daily:
        for point in daily:
            spend += point.spend
            impressions += point.impressions
            clicks += point.clicks
            leads += point.leads
    else:
        for campaign in campaigns:
            spend += campaign.metrics.spend
            impressions += campaign.metrics.impressions
            clicks += campaign.metrics.clicks
            leads += campaign.metrics.leads

    return ViewTotals(
        spend=round2(spend),
        impressions=impressions,
        clicks=clicks,
        leads=leads,
        cost_per_click=cost_per_click(spend, clicks),
        cpa=cpa(spend, leads),
    )


def filter_campaigns_by_date(
    campaigns: Sequence[Campaign], day: str
) -> list[Campaign]:
    """Keep campaigns whose start date falls on `day` (YYYY-MM-DD)."""
    return [
        c
        for c in campaigns
        if c.start_date and normalize_date(c.start_date) == day
    ]
