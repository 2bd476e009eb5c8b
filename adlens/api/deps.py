"""ADLENS — Shared Route Dependencies."""

from typing import AsyncIterator

from fastapi import Depends, Request

from adlens.analyzer.pipeline import ViewSession
from adlens.config import Settings, settings
from adlens.connectors.supabase.endpoints import SourceFetcher


def get_settings() -> Settings:
    """Dependency — the process-wide settings instance."""
    return settings


async def get_fetcher(
    config: Settings = Depends(get_settings),
) -> AsyncIterator[SourceFetcher]:
    """Dependency — yields a SourceFetcher closed after the request."""
    fetcher = SourceFetcher(config)
    try:
        yield fetcher
    finally:
        await fetcher.close()


def get_view_session(request: Request) -> ViewSession:
    """Dependency — the view session created at startup."""
    return request.app.state.view_session
