"""ADLENS — Stored Insight Routes."""

from fastapi import APIRouter, Depends

from adlens.analyzer.pipeline import View, load_insights
from adlens.api.deps import get_fetcher, get_settings
from adlens.config import Settings
from adlens.connectors.supabase.endpoints import SourceFetcher
from adlens.models.view_models import InsightsResult

router = APIRouter(prefix="/insights", tags=["Insights"])


@router.get("/{view}", response_model=InsightsResult, response_model_exclude_none=True)
async def get_insights(
    view: View,
    config: Settings = Depends(get_settings),
    fetcher: SourceFetcher = Depends(get_fetcher),
):
    """AI insights stored for the view's platforms, newest first."""
    return await load_insights(view, config, fetcher=fetcher)


@router.get("/{view}/campaign/{campaign_name}")
async def get_campaign_insight(
    view: View,
    campaign_name: str,
    config: Settings = Depends(get_settings),
    fetcher: SourceFetcher = Depends(get_fetcher),
):
    """Most recent insight mentioning a campaign, or null."""
    result = await load_insights(view, config, fetcher=fetcher, campaign=campaign_name)
    # The principal view lists Google before Meta; pick the newest of both
    ranked = sorted(result.insights, key=lambda i: i.created_at or "", reverse=True)
    latest = ranked[0] if ranked else None
    return {
        "status": "error" if result.error else "success",
        "insight": latest.model_dump(mode="json", by_alias=True) if latest else None,
        "error": result.error,
    }
