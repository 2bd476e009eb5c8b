"""ADLENS — Source Endpoints.

Maps each advertising source to its Supabase project and tables and returns
raw rows exactly as the store holds them.
"""

from typing import Any, Dict, List, Optional

import httpx

from adlens.config import Settings
from adlens.connectors.supabase.client import SupabaseAPIError, SupabaseClient
from adlens.core.field_registry import (
    INSIGHT_CAMPAIGN_KEYS,
    INSIGHT_CONTENT_KEYS,
    INSIGHT_CREATED_KEYS,
    Source,
)
from adlens.core.logging import get_logger
from adlens.core.normalizers import resolve_text
from adlens.models.view_models import PLATFORM_BY_SOURCE, Insight, SourceStatus

logger = get_logger("supabase.endpoints")


class SourceFetcher:
    """Fetch raw rows, insights and table status per source."""

    def __init__(
        self,
        config: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.clients: Dict[Source, SupabaseClient] = {
            Source.GOOGLE: SupabaseClient(
                config.google_supabase_url,
                config.google_supabase_key,
                page_size=config.page_size,
                timeout=config.request_timeout,
                transport=transport,
            ),
            Source.META: SupabaseClient(
                config.meta_supabase_url,
                config.meta_effective_key,
                page_size=config.page_size,
                timeout=config.request_timeout,
                transport=transport,
            ),
        }
        self.tables: Dict[Source, str] = {
            Source.GOOGLE: config.google_table,
            Source.META: config.meta_table,
        }
        self.insight_tables: Dict[Source, str] = {
            Source.GOOGLE: config.google_insights_table,
            Source.META: config.meta_insights_table,
        }

    async def close(self) -> None:
        for client in self.clients.values():
            await client.close()

    # ── Performance Rows ──

    async def fetch_raw_rows(self, source: Source) -> List[Dict[str, Any]]:
        """All rows of the source's performance table."""
        rows = await self.clients[source].select_all(self.tables[source])
        logger.info(
            f"Fetched {len(rows)} raw {source.value} rows",
            extra={"source": source.value, "row_count": len(rows)},
        )
        return rows

    # ── Insights ──

    async def fetch_insights(
        self, source: Source, campaign: Optional[str] = None
    ) -> List[Insight]:
        """Stored insight texts for a source, newest first.

        With `campaign`, only insights whose campaign column contains it
        (case-insensitive) are returned.
        """
        table = self.insight_tables[source]
        if not table:
            return []

        params = {"order": "created_at.desc"}
        if campaign:
            params["campanha"] = f"ilike.*{campaign}*"

        rows = await self.clients[source].select_all(table, params)
        return [
            Insight(
                id=resolve_text(row, ("id",)) or None,
                content=resolve_text(row, INSIGHT_CONTENT_KEYS),
                created_at=resolve_text(row, INSIGHT_CREATED_KEYS) or None,
                campaign=resolve_text(row, INSIGHT_CAMPAIGN_KEYS) or None,
                platform=PLATFORM_BY_SOURCE[source],
            )
            for row in rows
        ]

    # ── Status ──

    async def source_status(self, source: Source) -> SourceStatus:
        """Report whether the source table answers, and its row count."""
        try:
            count = await self.clients[source].count(self.tables[source])
        except SupabaseAPIError as e:
            logger.warning(
                f"{source.value} table unavailable: {e}",
                extra={"source": source.value, "status_code": e.status_code},
            )
            return SourceStatus(available=False, row_count=0)
        return SourceStatus(available=True, row_count=count)
