"""ADLENS — Source Status Routes."""

from fastapi import APIRouter, Depends

from adlens.api.deps import get_fetcher
from adlens.connectors.supabase.endpoints import SourceFetcher
from adlens.core.field_registry import Source
from adlens.models.view_models import SourceStatus

router = APIRouter(prefix="/sources", tags=["Sources"])


@router.get("/{source}/status", response_model=SourceStatus)
async def get_source_status(
    source: Source,
    fetcher: SourceFetcher = Depends(get_fetcher),
):
    """Check whether a source table is reachable and count its rows."""
    return await fetcher.source_status(source)
