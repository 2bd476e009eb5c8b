"""ADLENS — Supabase (PostgREST) Client.

Handles authentication headers, pagination and error mapping. Requests are
issued once: a failed call surfaces as SupabaseAPIError, never retried.
"""

from typing import Any, Dict, List, Optional

import httpx

from adlens.core.logging import get_logger

logger = get_logger("supabase.client")

REST_PATH = "rest/v1"
DEFAULT_ORDER = "id.asc"


class SupabaseAPIError(Exception):
    """Raised when the data store is unreachable or answers with an error."""

    def __init__(self, message: str, status_code: int = 0):
        self.status_code = status_code
        super().__init__(message)


class SupabaseClient:
    """Async HTTP client for one Supabase project's REST interface."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        page_size: int = 1000,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.page_size = page_size
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {self.api_key}",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def table_url(self, table: str) -> str:
        return f"{self.base_url}/{REST_PATH}/{table}"

    # ── Core Request Method ──

    async def _request(
        self,
        method: str,
        url: str,
        params: Dict[str, Any] | None = None,
        headers: Dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make a single request and map failures to SupabaseAPIError."""
        if not self.base_url:
            raise SupabaseAPIError("Supabase URL is not configured")

        client = await self._get_client()
        try:
            resp = await client.request(method, url, params=params, headers=headers)
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as e:
            body = {}
            if e.response.headers.get("content-type", "").startswith("application/json"):
                try:
                    body = e.response.json()
                except ValueError:
                    # HEAD errors carry the JSON content type with no body
                    body = {}
            error_msg = body.get("message", "") if isinstance(body, dict) else ""
            status = e.response.status_code
            logger.error(
                f"Supabase error {status} on {url}: {error_msg or e.response.text}",
                extra={"status_code": status},
            )
            raise SupabaseAPIError(
                f"Supabase error: {status} - {error_msg or e.response.text}", status
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise SupabaseAPIError(f"Connection failed: {e}") from e

    # ── Pagination ──

    async def select_all(
        self,
        table: str,
        params: Dict[str, Any] | None = None,
    ) -> List[Dict[str, Any]]:
        """Fetch every row of a table query, one page at a time.

        Pages are requested until a short one comes back. Without an explicit
        `order` the rows are ordered by id so offsets stay stable across pages.
        """
        all_rows: List[Dict[str, Any]] = []
        url = self.table_url(table)
        base_params = {"select": "*", "order": DEFAULT_ORDER, **(params or {})}

        page = 0
        while True:
            page_params = {
                **base_params,
                "limit": self.page_size,
                "offset": page * self.page_size,
            }
            resp = await self._request("GET", url, page_params)
            rows = resp.json() or []
            all_rows.extend(rows)
            if len(rows) < self.page_size:
                break
            page += 1

        logger.info(
            f"Fetched {len(all_rows)} rows from {table}",
            extra={"row_count": len(all_rows)},
        )
        return all_rows

    # ── Row Count ──

    async def count(self, table: str) -> int:
        """Exact row count of a table, read from the Content-Range header."""
        resp = await self._request(
            "HEAD",
            self.table_url(table),
            {"select": "*"},
            headers={"Prefer": "count=exact"},
        )
        content_range = resp.headers.get("content-range", "")
        total = content_range.rsplit("/", 1)[-1]
        return int(total) if total.isdigit() else 0
