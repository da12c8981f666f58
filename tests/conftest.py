"""Shared fixtures for the test suite."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.db import get_session_factory
from app.engine.models import DailyTaskSlate
from app.engine.router import get_slate_store
from app.main import app


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]

    def fetchone(self):
        rows = self.fetchall()
        return rows[0] if rows else None


class FakeSession:
    """Minimal stand-in for AsyncSession.

    `tables` maps a SQL substring (usually a table name) to the rows any
    query mentioning it returns, or to a callable taking the bound params
    and returning rows. Unmatched queries return no rows.
    `fail_on` makes any query mentioning that substring raise.
    """

    def __init__(
        self,
        tables: dict[str, Any] | None = None,
        fail_on: set[str] | None = None,
    ):
        self._tables = tables or {}
        self._fail_on = fail_on or set()
        self.executed: list[tuple[str, dict[str, Any] | None]] = []
        self.commits = 0

    async def execute(self, stmt, params=None):
        sql = str(stmt)
        self.executed.append((sql, params))
        for needle in self._fail_on:
            if needle in sql:
                raise RuntimeError(f"simulated failure on {needle}")
        for needle, rows in self._tables.items():
            if needle in sql:
                if callable(rows):
                    rows = rows(params or {})
                return FakeResult(rows)
        return FakeResult([])

    async def commit(self):
        self.commits += 1

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


def session_factory_for(session: FakeSession):
    """Stand-in for async_sessionmaker: every call hands out the same fake."""
    def _factory():
        return session
    return _factory


def jsonb_order(value: Any) -> Any:
    """Reorder object keys the way Postgres JSONB stores them (shorter keys first)."""
    if isinstance(value, dict):
        return {k: jsonb_order(value[k]) for k in sorted(value, key=lambda k: (len(k), k))}
    if isinstance(value, list):
        return [jsonb_order(v) for v in value]
    return value


class SlateTableSession(FakeSession):
    """FakeSession that also keeps daily_task_slates rows, echoing payloads back as JSONB would."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.slates: dict[tuple[str, date], Any] = {}

    async def execute(self, stmt, params=None):
        sql = str(stmt)
        if "INSERT INTO daily_task_slates" in sql:
            self.executed.append((sql, params))
            key = (params["user_id"], params["slate_date"])
            self.slates[key] = jsonb_order(json.loads(params["payload"]))
            return FakeResult([])
        if "FROM daily_task_slates" in sql:
            self.executed.append((sql, params))
            payload = self.slates.get((params["user_id"], params["slate_date"]))
            return FakeResult([{"payload": payload}] if payload is not None else [])
        return await super().execute(stmt, params)


class InMemorySlateStore:
    """SlateStore double keyed by (user_id, slate_date); stores JSON with JSONB key order."""

    def __init__(self):
        self.rows: dict[tuple[str, date], str] = {}
        self.puts = 0

    async def get(self, user_id: str, slate_date: date) -> DailyTaskSlate | None:
        raw = self.rows.get((user_id, slate_date))
        if raw is None:
            return None
        return DailyTaskSlate.model_validate_json(raw)

    async def put(self, user_id: str, slate_date: date, slate: DailyTaskSlate) -> None:
        self.puts += 1
        self.rows[(user_id, slate_date)] = json.dumps(jsonb_order(slate.model_dump(mode="json")))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    """Return a FakeSession with no rows (every pillar reads as defaults)."""
    return FakeSession()


@pytest.fixture()
def slate_store():
    return InMemorySlateStore()


@pytest.fixture()
def override_deps(fake_session, slate_store):
    """Override the FastAPI dependencies so no real DB is needed."""
    app.dependency_overrides[get_session_factory] = lambda: session_factory_for(fake_session)
    app.dependency_overrides[get_slate_store] = lambda: slate_store
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_deps):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# Tuesday 2026-02-17, 14:00 UTC — afternoon, not a weigh-in or meal-prep day
AFTERNOON = datetime(2026, 2, 17, 14, 0, tzinfo=timezone.utc)
# Tuesday 2026-02-17, 08:00 UTC — morning window
MORNING = datetime(2026, 2, 17, 8, 0, tzinfo=timezone.utc)
# Monday 2026-02-16, 08:00 UTC
MONDAY_MORNING = datetime(2026, 2, 16, 8, 0, tzinfo=timezone.utc)
# Sunday 2026-02-15, 18:00 UTC
SUNDAY_EVENING = datetime(2026, 2, 15, 18, 0, tzinfo=timezone.utc)
