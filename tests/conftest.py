import itertools
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from dashboard.api.deps import get_auth_client, get_store_client, require_admin
from dashboard.exceptions import PostgrestError
from dashboard.main import app
from dashboard.store.auth import AuthSession
from dashboard.store.gateway import RecordStoreGateway

logger = logging.getLogger(__name__)

ADMIN_TOKEN = "admin-token"
MEMBER_TOKEN = "member-token"

EMBED_PATTERN = re.compile(r"(\w+)\(\*\)")


class FakeStoreClient:
    """
    In-memory stand-in for StoreClient.

    Tables are plain lists of dicts. Every call is recorded in ``calls`` as
    (method, table, payload) and failures can be scripted per (method, table)
    with ``fail``.
    """

    def __init__(self, session: Optional[AuthSession] = None):
        self.session = session
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[Tuple[str, str, Any]] = []
        self.failures: Dict[Tuple[str, str], List[PostgrestError]] = {}
        self.tables_without_updated_at: set = set()
        self.missing_tables: set = set()
        self._ids = itertools.count(1)

    def seed(self, table: str, rows: List[Dict[str, Any]]) -> None:
        self.tables.setdefault(table, []).extend(dict(row) for row in rows)

    def fail(self, method: str, table: str, error: PostgrestError) -> None:
        self.failures.setdefault((method, table), []).append(error)

    def count_calls(self, method: str, table: str) -> int:
        return sum(1 for m, t, _ in self.calls if m == method and t == table)

    def _enter(self, method: str, table: str, payload: Any = None) -> List[Dict[str, Any]]:
        self.calls.append((method, table, payload))
        scripted = self.failures.get((method, table))
        if scripted:
            raise scripted.pop(0)
        if table in self.missing_tables:
            raise PostgrestError(f'relation "public.{table}" does not exist', code="42P01", status=404)
        return self.tables.setdefault(table, [])

    @staticmethod
    def _matches(row: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
        return all(str(row.get(k)) == str(v) for k, v in (filters or {}).items())

    async def select(self, table, columns="*", filters=None, order=None, ascending=True, limit=None):
        rows = [dict(r) for r in self._enter("select", table, filters) if self._matches(r, filters)]
        for embedded in EMBED_PATTERN.findall(columns):
            foreign_key = f"{table.rstrip('s')}_id"
            for row in rows:
                row[embedded] = [
                    dict(child) for child in self.tables.get(embedded, [])
                    if str(child.get(foreign_key)) == str(row.get("id"))
                ]
        if order:
            rows.sort(key=lambda r: str(r.get(order) or ""), reverse=not ascending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def insert(self, table, row):
        rows = self._enter("insert", table, row)
        stored = {"id": next(self._ids), "created_at": datetime.now(timezone.utc).isoformat(), **row}
        rows.append(stored)
        return dict(stored)

    async def update(self, table, values, filters):
        rows = self._enter("update", table, values)
        if table in self.tables_without_updated_at and "updated_at" in values:
            raise PostgrestError(
                f'column "updated_at" of relation "{table}" does not exist', code="42703", status=400
            )
        matched = [r for r in rows if self._matches(r, filters)]
        if len(matched) != 1:
            raise PostgrestError(
                "JSON object requested, multiple (or no) rows returned", code="PGRST116", status=406
            )
        matched[0].update(values)
        return dict(matched[0])

    async def delete(self, table, filters):
        rows = self._enter("delete", table, filters)
        self.tables[table] = [r for r in rows if not self._matches(r, filters)]

    async def count(self, table):
        return len(self._enter("count", table))


class FakeAuthClient:
    """Resolves the two test tokens; anything else is rejected."""

    async def get_session(self, access_token: str) -> Optional[AuthSession]:
        if access_token == ADMIN_TOKEN:
            return AuthSession(access_token=access_token, user_id="u-admin", email="admin@example.org", role="admin")
        if access_token == MEMBER_TOKEN:
            return AuthSession(access_token=access_token, user_id="u-member", email="member@example.org", role=None)
        return None


@pytest.fixture
def admin_session() -> AuthSession:
    return AuthSession(access_token=ADMIN_TOKEN, user_id="u-admin", email="admin@example.org", role="admin")


@pytest.fixture
def fake_store(admin_session) -> FakeStoreClient:
    return FakeStoreClient(session=admin_session)


@pytest.fixture
def gateway(fake_store) -> RecordStoreGateway:
    return RecordStoreGateway(fake_store)


@pytest.fixture
def client(fake_store):
    """
    Test client wired to the in-memory store.

    The admin gate still runs: requests need ``Authorization: Bearer admin-token``.
    """
    def override_store_client(session: AuthSession = Depends(require_admin)):
        fake_store.session = session
        return fake_store

    app.dependency_overrides[get_auth_client] = FakeAuthClient
    app.dependency_overrides[get_store_client] = override_store_client

    with TestClient(app) as test_client:
        yield test_client

    # Clean up
    app.dependency_overrides.pop(get_auth_client, None)
    app.dependency_overrides.pop(get_store_client, None)


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
