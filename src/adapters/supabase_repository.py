"""Async PostgREST client for the Supabase content tables."""

from __future__ import annotations

from typing import Any

import httpx

from contracts.errors import PersistenceError
from utils.get_logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


def _eq(value: Any) -> str:
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


class SupabaseRepository:
    """Thin async wrapper around the Supabase REST endpoint (/rest/v1/{table})."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _build_headers(self) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=f"{self._base_url}/rest/v1",
                headers=self._build_headers(),
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        table: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        client = await self._get_client()
        try:
            resp = await client.request(method, f"/{table}", params=params, json=json, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:300]
            raise PersistenceError(
                f"Supabase {method} {table} failed ({exc.response.status_code}): {detail}"
            ) from exc
        except httpx.HTTPError as exc:
            raise PersistenceError(f"Supabase {method} {table} failed: {exc}") from exc
        return resp

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"select": "*"}
        for column, value in (filters or {}).items():
            params[column] = _eq(value)
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit:
            params["limit"] = limit

        resp = await self._request("GET", table, params=params)
        return resp.json()

    async def get(self, table: str, key_column: str, key: Any) -> dict[str, Any] | None:
        rows = await self.select(table, filters={key_column: key}, limit=1)
        return rows[0] if rows else None

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        resp = await self._request(
            "POST", table, json=[row], headers={"Prefer": "return=representation"}
        )
        rows = resp.json()
        if not rows:
            raise PersistenceError(f"Supabase insert into {table} returned no row")
        return rows[0]

    async def update(
        self, table: str, key_column: str, key: Any, changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        resp = await self._request(
            "PATCH",
            table,
            params={key_column: _eq(key)},
            json=changes,
            headers={"Prefer": "return=representation"},
        )
        rows = resp.json()
        return rows[0] if rows else None

    async def update_where(
        self, table: str, filters: dict[str, Any], changes: dict[str, Any]
    ) -> int:
        """Bulk update every row matching the equality filters. Returns the row count."""
        resp = await self._request(
            "PATCH",
            table,
            params={column: _eq(value) for column, value in filters.items()},
            json=changes,
            headers={"Prefer": "return=representation"},
        )
        return len(resp.json())

    async def delete(self, table: str, key_column: str, key: Any) -> bool:
        resp = await self._request(
            "DELETE",
            table,
            params={key_column: _eq(key)},
            headers={"Prefer": "return=representation"},
        )
        return len(resp.json()) > 0

    async def count(self, table: str) -> int:
        resp = await self._request(
            "HEAD", table, params={"select": "*"}, headers={"Prefer": "count=exact"}
        )
        # Content-Range: 0-24/25 or */0
        content_range = resp.headers.get("content-range", "")
        total = content_range.rsplit("/", 1)[-1]
        try:
            return int(total)
        except ValueError:
            raise PersistenceError(f"Unexpected Content-Range from Supabase: {content_range!r}")
