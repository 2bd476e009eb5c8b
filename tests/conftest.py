"""Pytest configuration for ADLENS tests

WHAT: Shared settings and a fake Supabase transport
WHY: Connector, pipeline and route tests run without network access
REFERENCES:
    - adlens/connectors/supabase/client.py: HTTP client under test
    - adlens/connectors/supabase/endpoints.py: table routing
"""

from typing import Any, Dict, List

import httpx
import pytest

from adlens.config import Settings
from adlens.connectors.supabase.endpoints import SourceFetcher

GOOGLE_HOST = "google.supabase.test"
META_HOST = "meta.supabase.test"


def make_settings(**overrides: Any) -> Settings:
    values = {
        "google_supabase_url": f"https://{GOOGLE_HOST}",
        "google_supabase_key": "google-anon",
        "meta_supabase_url": f"https://{META_HOST}",
        "meta_supabase_key": "meta-anon",
        "meta_insights_table": "meta_insights",
        "dashboard_language": "pt-BR",
        "page_size": 1000,
        "anthropic_api_key": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeSupabase:
    """In-memory PostgREST stand-in served through httpx.MockTransport.

    Tables are keyed by (host, table). Failing tables answer with `status`.
    Every request is recorded for assertions.
    """

    def __init__(self):
        self.tables: Dict[tuple, List[Dict[str, Any]]] = {}
        self.failures: Dict[tuple, int] = {}
        self.requests: List[httpx.Request] = []

    def add_table(self, host: str, table: str, rows: List[Dict[str, Any]]) -> None:
        self.tables[(host, table)] = rows

    def fail(self, host: str, table: str, status: int = 500) -> None:
        self.failures[(host, table)] = status

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        table = request.url.path.rsplit("/", 1)[-1]
        key = (request.url.host, table)

        if key in self.failures:
            return httpx.Response(
                self.failures[key], json={"message": "boom", "code": "XX000"}
            )
        rows = self.tables.get(key)
        if rows is None:
            return httpx.Response(
                404, json={"message": f"relation {table} does not exist"}
            )

        if request.method == "HEAD":
            return httpx.Response(
                200, headers={"content-range": f"0-{len(rows) - 1}/{len(rows)}"}
            )

        offset = int(request.url.params.get("offset", 0))
        limit = int(request.url.params.get("limit", len(rows) or 1))
        return httpx.Response(200, json=rows[offset : offset + limit])

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_store() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def fetcher(settings, fake_store) -> SourceFetcher:
    return SourceFetcher(settings, transport=fake_store.transport())
