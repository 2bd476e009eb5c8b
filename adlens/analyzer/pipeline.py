"""ADLENS — View Orchestrator.

Runs the data flow for one dashboard view:
  fetch raw rows → reconcile campaigns + aggregate days → merge per view

Every fetch or transform failure is caught here and turned into a message;
nothing propagates to the presentation layer.
"""

import asyncio
from enum import Enum
from typing import Dict, List, Optional, Tuple

from adlens.analyzer.campaign_engine import reconcile_campaigns
from adlens.analyzer.daily_engine import (
    aggregate_daily,
    available_dates,
    merge_daily,
    merge_dates,
)
from adlens.config import Settings
from adlens.connectors.supabase.endpoints import SourceFetcher
from adlens.core.field_registry import Source
from adlens.core.logging import get_logger, log_duration
from adlens.core.messages import Message, get_message
from adlens.models.view_models import (
    Campaign,
    DailyPoint,
    Insight,
    InsightsResult,
    ViewResult,
)

logger = get_logger("analyzer.pipeline")


class View(str, Enum):
    """Reporting scope selectable in the dashboard."""

    PRINCIPAL = "principal"
    GOOGLE = "google"
    META = "meta"
    TIKTOK = "tiktok"
    OTHER = "other"


SINGLE_SOURCE_VIEWS: Dict[View, Source] = {
    View.GOOGLE: Source.GOOGLE,
    View.META: Source.META,
}

NOT_INTEGRATED: Dict[View, Message] = {
    View.TIKTOK: Message.TIKTOK_NOT_INTEGRATED,
    View.OTHER: Message.PLATFORM_NOT_INTEGRATED,
}

FETCH_FAILED: Dict[Source, Message] = {
    Source.GOOGLE: Message.FETCH_FAILED_GOOGLE,
    Source.META: Message.FETCH_FAILED_META,
}

NO_CAMPAIGNS: Dict[Source, Message] = {
    Source.GOOGLE: Message.NO_CAMPAIGNS_GOOGLE,
    Source.META: Message.NO_CAMPAIGNS_META,
}


def view_sources(view: View) -> List[Source]:
    """Sources queried for a view, empty for unintegrated platforms."""
    if view == View.PRINCIPAL:
        return [Source.GOOGLE, Source.META]
    if view in SINGLE_SOURCE_VIEWS:
        return [SINGLE_SOURCE_VIEWS[view]]
    return []


def _reraise_cancellation(result: object) -> None:
    if isinstance(result, BaseException) and not isinstance(result, Exception):
        raise result


async def _load_source(
    fetcher: SourceFetcher, source: Source
) -> Tuple[List[Campaign], List[DailyPoint]]:
    rows = await fetcher.fetch_raw_rows(source)
    return reconcile_campaigns(rows, source), aggregate_daily(rows, source)


async def _load_single(
    fetcher: SourceFetcher, source: Source, language: str
) -> ViewResult:
    try:
        campaigns, daily = await _load_source(fetcher, source)
    except Exception as e:
        logger.error(
            f"{source.value} view load failed: {e}",
            extra={"source": source.value},
        )
        return ViewResult(error=get_message(FETCH_FAILED[source], language))

    error = None if campaigns else get_message(NO_CAMPAIGNS[source], language)
    return ViewResult(campaigns=campaigns, daily=daily, error=error)


async def _load_consolidated(fetcher: SourceFetcher, language: str) -> ViewResult:
    sources = view_sources(View.PRINCIPAL)
    results = await asyncio.gather(
        *(_load_source(fetcher, source) for source in sources),
        return_exceptions=True,
    )

    campaigns: List[Campaign] = []
    series: List[List[DailyPoint]] = []
    failed = False

    for source, result in zip(sources, results):
        _reraise_cancellation(result)
        if isinstance(result, Exception):
            failed = True
            logger.error(
                f"{source.value} failed in consolidated view: {result}",
                extra={"source": source.value},
            )
            continue
        source_campaigns, source_daily = result
        campaigns.extend(source_campaigns)
        series.append(source_daily)

    return ViewResult(
        campaigns=campaigns,
        daily=merge_daily(*series),
        error=get_message(Message.CONSOLIDATED_FAILED, language) if failed else None,
    )


async def load_view(
    view: View,
    config: Settings,
    fetcher: Optional[SourceFetcher] = None,
) -> ViewResult:
    """Load campaigns and the daily series for a view.

    Unintegrated views return an informational message without any network
    call. A passed-in fetcher is left open for the caller to close.
    """
    view = View(view)
    if view in NOT_INTEGRATED:
        logger.info(f"View {view.value} is not integrated", extra={"view": view.value})
        return ViewResult(
            error=get_message(NOT_INTEGRATED[view], config.dashboard_language)
        )

    owns_fetcher = fetcher is None
    fetcher = fetcher or SourceFetcher(config)
    with log_duration(
        logger, "Loaded view {view}: {campaigns} campaigns, {days} days", view=view.value
    ) as fields:
        try:
            if view == View.PRINCIPAL:
                result = await _load_consolidated(fetcher, config.dashboard_language)
            else:
                result = await _load_single(
                    fetcher, SINGLE_SOURCE_VIEWS[view], config.dashboard_language
                )
        finally:
            if owns_fetcher:
                await fetcher.close()
        fields.update(campaigns=len(result.campaigns), days=len(result.daily))
    return result


async def load_dates(
    view: View,
    config: Settings,
    fetcher: Optional[SourceFetcher] = None,
) -> List[str]:
    """Calendar dates with data in a view; a failing source adds none."""
    sources = view_sources(View(view))
    if not sources:
        return []

    owns_fetcher = fetcher is None
    fetcher = fetcher or SourceFetcher(config)
    try:
        results = await asyncio.gather(
            *(fetcher.fetch_raw_rows(source) for source in sources),
            return_exceptions=True,
        )
    finally:
        if owns_fetcher:
            await fetcher.close()

    date_lists: List[List[str]] = []
    for source, rows in zip(sources, results):
        _reraise_cancellation(rows)
        if isinstance(rows, Exception):
            logger.error(
                f"Could not load {source.value} dates: {rows}",
                extra={"source": source.value},
            )
            continue
        date_lists.append(available_dates(rows, source))
    return merge_dates(*date_lists)


async def load_insights(
    view: View,
    config: Settings,
    fetcher: Optional[SourceFetcher] = None,
    campaign: Optional[str] = None,
) -> InsightsResult:
    """Stored insights of a view, Google's before Meta's in the principal view."""
    sources = view_sources(View(view))
    if not sources:
        return InsightsResult()

    owns_fetcher = fetcher is None
    fetcher = fetcher or SourceFetcher(config)
    insights: List[Insight] = []
    try:
        for source in sources:
            insights.extend(await fetcher.fetch_insights(source, campaign=campaign))
    except Exception as e:
        logger.error(f"Insight load failed: {e}", extra={"view": View(view).value})
        return InsightsResult(
            error=get_message(Message.INSIGHTS_FAILED, config.dashboard_language)
        )
    finally:
        if owns_fetcher:
            await fetcher.close()

    return InsightsResult(insights=insights)


class ViewSession:
    """Tracks the view currently displayed.

    Each load gets a generation number; a result is only committed as
    `current` if no newer load started while it was in flight.
    """

    def __init__(self, config: Settings):
        self.config = config
        self.generation = 0
        self.current: Optional[ViewResult] = None
        self.current_view: Optional[View] = None

    async def load(
        self, view: View, fetcher: Optional[SourceFetcher] = None
    ) -> Tuple[ViewResult, bool]:
        """Load a view; returns the result and whether it was committed."""
        self.generation += 1
        generation = self.generation

        result = await load_view(view, self.config, fetcher=fetcher)

        if generation != self.generation:
            logger.info(
                f"Discarding stale result of view {View(view).value}",
                extra={"view": View(view).value},
            )
            return result, False

        self.current = result
        self.current_view = View(view)
        return result, True
