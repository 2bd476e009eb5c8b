"""ADLENS — Dashboard Output Models.

Plain, JSON-serializable records handed to the presentation layer. Field names
are snake_case in Python and camelCase on the wire.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from adlens.core.field_registry import Source

CONSOLIDATED = "consolidated"


class Platform(str, Enum):
    """Display platform of a campaign."""

    GOOGLE_ADS = "Google Ads"
    FACEBOOK_ADS = "Facebook Ads"


PLATFORM_BY_SOURCE: Dict[Source, Platform] = {
    Source.GOOGLE: Platform.GOOGLE_ADS,
    Source.META: Platform.FACEBOOK_ADS,
}


class WireModel(BaseModel):
    """Base for records serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─────────────────────────────────────────────
# CAMPAIGN LEVEL
# ─────────────────────────────────────────────


class CanonicalMetrics(WireModel):
    """Metric totals resolved from one raw row. Missing values are 0."""

    impressions: float = 0.0
    clicks: float = 0.0
    spend: float = 0.0
    leads: float = 0.0
    conversions: float = 0.0


class Campaign(WireModel):
    """One campaign as shown in the dashboard table."""

    id: str
    name: str
    platform: Platform
    status: str = "active"
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    metrics: CanonicalMetrics = CanonicalMetrics()
    cost_per_click: float = 0.0
    cpa: float = 0.0


# ─────────────────────────────────────────────
# DAY LEVEL
# ─────────────────────────────────────────────


class DailyPoint(WireModel):
    """Metric totals of one calendar day (one point per date)."""

    date: str
    clicks: float = 0.0
    leads: float = 0.0
    impressions: float = 0.0
    conversions: float = 0.0
    spend: float = 0.0
    source: Optional[str] = Field(default=None, alias="_source")


# ─────────────────────────────────────────────
# VIEW LEVEL
# ─────────────────────────────────────────────


class ViewResult(WireModel):
    """Everything one view load produces."""

    campaigns: List[Campaign] = []
    daily: List[DailyPoint] = []
    error: Optional[str] = None


class ViewTotals(WireModel):
    """Headline KPI cards of a view."""

    spend: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    leads: float = 0.0
    cost_per_click: float = 0.0
    cpa: float = 0.0


class Insight(WireModel):
    """A stored AI-generated insight text."""

    id: Optional[str] = None
    content: str = ""
    created_at: Optional[str] = None
    campaign: Optional[str] = None
    platform: Optional[Platform] = None


class SourceStatus(WireModel):
    """Whether a source table is reachable and how many rows it holds."""

    available: bool = False
    row_count: int = 0


class InsightsResult(WireModel):
    """Insights of a view, newest first per platform."""

    insights: List[Insight] = []
    error: Optional[str] = None
