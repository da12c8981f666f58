"""Slate store — one DailyTaskSlate per (user_id, slate_date).

Table:
  daily_task_slates(
      user_id TEXT NOT NULL,
      slate_date DATE NOT NULL,
      generated_at TIMESTAMPTZ NOT NULL,
      payload JSONB NOT NULL,
      PRIMARY KEY (user_id, slate_date)
  )

`put` upserts on the primary key, so repeated generation for the same day
overwrites instead of adding rows.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Protocol

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.engine.models import DailyTaskSlate

CREATE_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS daily_task_slates ("
    "user_id TEXT NOT NULL, "
    "slate_date DATE NOT NULL, "
    "generated_at TIMESTAMPTZ NOT NULL, "
    "payload JSONB NOT NULL, "
    "PRIMARY KEY (user_id, slate_date))"
)


class SlateStore(Protocol):
    async def get(self, user_id: str, slate_date: date) -> DailyTaskSlate | None: ...

    async def put(self, user_id: str, slate_date: date, slate: DailyTaskSlate) -> None: ...


def decode_payload(payload: object) -> DailyTaskSlate:
    """JSONB may arrive as text or already decoded depending on the driver codec."""
    if isinstance(payload, (str, bytes)):
        return DailyTaskSlate.model_validate_json(payload)
    return DailyTaskSlate.model_validate(payload)


class SqlSlateStore:
    """SlateStore backed by the daily_task_slates table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def ensure_table(self) -> None:
        async with self._session_factory() as session:
            await session.execute(text(CREATE_TABLE_SQL))
            await session.commit()

    async def get(self, user_id: str, slate_date: date) -> DailyTaskSlate | None:
        query = (
            "SELECT payload FROM daily_task_slates "
            "WHERE user_id = :user_id AND slate_date = :slate_date"
        )
        async with self._session_factory() as session:
            result = await session.execute(text(query), {"user_id": user_id, "slate_date": slate_date})
            row = result.fetchone()
        if row is None:
            return None
        return decode_payload(row[0])

    async def put(self, user_id: str, slate_date: date, slate: DailyTaskSlate) -> None:
        query = (
            "INSERT INTO daily_task_slates (user_id, slate_date, generated_at, payload) "
            "VALUES (:user_id, :slate_date, :generated_at, CAST(:payload AS JSONB)) "
            "ON CONFLICT (user_id, slate_date) DO UPDATE "
            "SET generated_at = EXCLUDED.generated_at, payload = EXCLUDED.payload"
        )
        params = {
            "user_id": user_id,
            "slate_date": slate_date,
            "generated_at": slate.generated_at,
            "payload": json.dumps(slate.model_dump(mode="json"), sort_keys=True),
        }
        async with self._session_factory() as session:
            await session.execute(text(query), params)
            await session.commit()
