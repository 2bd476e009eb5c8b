"""ADLENS — Dashboard View Routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from adlens.ai.claude_provider import ClaudeProvider
from adlens.analyzer.metrics_engine import filter_campaigns_by_date, summarize_totals
from adlens.analyzer.pipeline import View, ViewSession, load_dates, load_view
from adlens.api.deps import get_fetcher, get_settings, get_view_session
from adlens.config import Settings
from adlens.connectors.supabase.endpoints import SourceFetcher
from adlens.core.logging import get_logger
from adlens.models.view_models import (
    Campaign,
    DailyPoint,
    ViewResult,
    ViewTotals,
    WireModel,
)

logger = get_logger("api.views")

router = APIRouter(prefix="/views", tags=["Views"])


# ── Request / Response Models ──


class ViewResponse(WireModel):
    """Response for GET /views/{view}."""

    view: View
    campaigns: List[Campaign] = []
    daily: List[DailyPoint] = []
    totals: ViewTotals = ViewTotals()
    error: Optional[str] = None


class SummaryRequest(BaseModel):
    """Request body for POST /views/{view}/summary."""

    question: Optional[str] = None


class SummaryResponse(BaseModel):
    """Response for POST /views/{view}/summary."""

    status: str
    provider_used: str
    summary: str


def _to_response(view: View, result: ViewResult) -> ViewResponse:
    return ViewResponse(
        view=view,
        campaigns=result.campaigns,
        daily=result.daily,
        totals=summarize_totals(result.daily, result.campaigns),
        error=result.error,
    )


# ── Endpoints ──


@router.get("/current")
async def get_current_view(session: ViewSession = Depends(get_view_session)):
    """Return the last committed view result."""
    if session.current is None or session.current_view is None:
        return {"status": "no_data", "message": "No view has been loaded yet."}
    return _to_response(session.current_view, session.current).model_dump(
        by_alias=True, exclude_none=True
    )


@router.get("/{view}", response_model=ViewResponse, response_model_exclude_none=True)
async def get_view(
    view: View,
    session: ViewSession = Depends(get_view_session),
    fetcher: SourceFetcher = Depends(get_fetcher),
):
    """Load a dashboard view: campaigns, daily series and headline totals.

    Source failures are reported in `error`; the request itself succeeds.
    """
    result, _ = await session.load(view, fetcher=fetcher)
    return _to_response(view, result)


@router.get("/{view}/dates")
async def get_view_dates(
    view: View,
    config: Settings = Depends(get_settings),
    fetcher: SourceFetcher = Depends(get_fetcher),
):
    """Distinct dates (YYYY-MM-DD) with data in the view."""
    dates = await load_dates(view, config, fetcher=fetcher)
    return {"status": "success", "dates": dates}


@router.get(
    "/{view}/campaigns",
    response_model=List[Campaign],
    response_model_exclude_none=True,
)
async def get_view_campaigns(
    view: View,
    date: Optional[str] = Query(None, description="Filter by start date (YYYY-MM-DD)"),
    config: Settings = Depends(get_settings),
    fetcher: SourceFetcher = Depends(get_fetcher),
):
    """Campaigns of a view, optionally only those starting on a date."""
    result = await load_view(view, config, fetcher=fetcher)
    if date:
        return filter_campaigns_by_date(result.campaigns, date)
    return result.campaigns


@router.post("/{view}/summary", response_model=SummaryResponse)
async def generate_view_summary(
    view: View,
    request: SummaryRequest,
    config: Settings = Depends(get_settings),
    fetcher: SourceFetcher = Depends(get_fetcher),
):
    """Generate an AI narrative for a view."""
    provider = ClaudeProvider(config)
    if not provider.is_available():
        raise HTTPException(status_code=503, detail="No AI provider configured")

    result = await load_view(view, config, fetcher=fetcher)
    view_json = _to_response(view, result).model_dump(
        mode="json", by_alias=True, exclude_none=True
    )
    try:
        summary = await provider.generate_summary(view_json, request.question)
    except Exception as e:
        logger.error(f"Summary generation failed: {e}", extra={"view": view.value})
        raise HTTPException(status_code=502, detail=f"Summary generation failed: {str(e)}")

    return SummaryResponse(status="success", provider_used="claude", summary=summary)
