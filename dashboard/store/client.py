"""
HTTP client for the hosted database's PostgREST endpoint.

Every call is a single request; nothing is retried or cached here. Failures
are raised as ``PostgrestError`` carrying the backend's error code so the
gateway can classify them.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp

from dashboard.config import Settings
from dashboard.exceptions import PostgrestError
from dashboard.store.auth import AuthSession

logger = logging.getLogger(__name__)

SINGLE_OBJECT = "application/vnd.pgrst.object+json"


def _eq_filters(filters: Optional[Dict[str, Any]]) -> Dict[str, str]:
    return {column: f"eq.{value}" for column, value in (filters or {}).items()}


def _parse_error(status: int, body: str) -> PostgrestError:
    try:
        payload = json.loads(body) if body else {}
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}
    message = payload.get("message") or body or f"HTTP {status}"
    return PostgrestError(
        message,
        code=payload.get("code"),
        status=status,
        details=payload.get("details"),
        hint=payload.get("hint"),
    )


def _parse_count(content_range: Optional[str]) -> int:
    # "0-24/3573" or "*/0"
    if not content_range or "/" not in content_range:
        return 0
    total = content_range.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else 0


class StoreClient:
    """Issues table requests on behalf of one (optional) user session."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        session: Optional[AuthSession] = None,
        timeout: int = 15,
    ):
        self.rest_url = f"{base_url.rstrip('/')}/rest/v1"
        self.api_key = api_key
        self.session = session
        self.timeout = timeout
        self.metrics = {
            'requests': 0,
            'errors': 0,
            'total_time': 0.0,
        }

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[AuthSession] = None) -> "StoreClient":
        return cls(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY, session, settings.STORE_TIMEOUT)

    def get_metrics(self) -> Dict[str, Any]:
        return dict(self.metrics)

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        token = self.session.access_token if self.session else self.api_key
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        headers.update(extra or {})
        return headers

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        url = f"{self.rest_url}/{quote(table)}"
        loop = asyncio.get_event_loop()
        start_time = loop.time()
        self.metrics['requests'] += 1

        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as http:
                async with http.request(
                    method, url, params=params, json=payload, headers=self._headers(headers)
                ) as response:
                    body = await response.text()
                    status = response.status
                    response_headers = dict(response.headers)
        except asyncio.TimeoutError:
            self.metrics['errors'] += 1
            logger.warning(f"{method} {table} timed out after {self.timeout}s")
            raise PostgrestError(f"Request to {table} timed out")
        except aiohttp.ClientError as e:
            self.metrics['errors'] += 1
            logger.error(f"Network error for {method} {table}: {str(e)}")
            raise PostgrestError(f"Network error: {str(e)}")
        finally:
            self.metrics['total_time'] += loop.time() - start_time

        if status >= 400:
            self.metrics['errors'] += 1
            raise _parse_error(status, body)

        logger.debug(f"{method} {table} -> {status} ({len(body)} chars)")
        return body, response_headers

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        params = {"select": columns, **_eq_filters(filters)}
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"
        if limit is not None:
            params["limit"] = str(limit)
        body, _ = await self._request("GET", table, params=params)
        return json.loads(body) if body else []

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        body, _ = await self._request(
            "POST",
            table,
            params={"select": "*"},
            payload=row,
            headers={"Prefer": "return=representation", "Accept": SINGLE_OBJECT},
        )
        return json.loads(body)

    async def update(self, table: str, values: Dict[str, Any], filters: Dict[str, Any]) -> Dict[str, Any]:
        body, _ = await self._request(
            "PATCH",
            table,
            params={"select": "*", **_eq_filters(filters)},
            payload=values,
            headers={"Prefer": "return=representation", "Accept": SINGLE_OBJECT},
        )
        return json.loads(body)

    async def delete(self, table: str, filters: Dict[str, Any]) -> None:
        await self._request("DELETE", table, params=_eq_filters(filters))

    async def count(self, table: str) -> int:
        _, headers = await self._request(
            "HEAD",
            table,
            params={"select": "*"},
            headers={"Prefer": "count=exact"},
        )
        return _parse_count(headers.get("Content-Range") or headers.get("content-range"))
