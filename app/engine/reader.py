"""Progress snapshot reader.

Reads the four pillars concurrently, each on its own session. A missing
progress row is not an error: the pillar gets its default snapshot. Any
exception while reading a pillar is logged and degrades only that pillar
to its default (PillarRead.ok = False).
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Any, Awaitable, Callable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.engine import connector
from app.engine import thresholds as th
from app.engine.models import (
    PILLAR_ORDER,
    AnySnapshot,
    Debt,
    FinanceSnapshot,
    MentalSnapshot,
    NutritionSnapshot,
    PhysicalSnapshot,
    Pillar,
    PillarRead,
    default_snapshot,
)

logger = logging.getLogger(__name__)


def _as_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            return None
    return None


def _num(row: dict[str, Any] | None, key: str, default: float = 0.0) -> float:
    """row[key] as float; None, missing or unparseable yields `default`."""
    if not row:
        return default
    value = row.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def common_fields(
    user_id: str,
    progress: dict[str, Any] | None,
    lessons: Sequence[dict[str, Any]],
    today: date,
) -> dict[str, Any]:
    """Fields shared by every pillar snapshot."""
    stage = int(_num(progress, "stage", 1)) or 1
    completed = frozenset(str(r["lesson_id"]) for r in lessons if r.get("lesson_id"))
    dates = [d for d in (_as_date(r.get("completed_at")) for r in lessons) if d is not None]
    days_since = max((today - max(dates)).days, 0) if dates else None
    return {
        "user_id": user_id,
        "stage": stage,
        "completed_lessons": completed,
        "days_since_last_lesson": days_since,
    }


# ---------------------------------------------------------------------------
# Per-pillar readers
# ---------------------------------------------------------------------------


async def read_finance(session: AsyncSession, user_id: str, today: date) -> FinanceSnapshot:
    progress = await connector.fetch_progress(session, Pillar.finance, user_id)
    lessons = await connector.fetch_completed_lessons(session, Pillar.finance, user_id)
    debts = await connector.fetch_active_debts(session, user_id)
    expenses_today = await connector.count_expenses(session, user_id, today, today)
    expenses_week = await connector.count_expenses(session, user_id, connector.week_start(today), today)

    return FinanceSnapshot(
        **common_fields(user_id, progress, lessons, today),
        emergency_fund_current=_num(progress, "emergency_fund_current"),
        emergency_fund_goal=_num(progress, "emergency_fund_goal", th.DEFAULT_EMERGENCY_FUND_GOAL)
        or th.DEFAULT_EMERGENCY_FUND_GOAL,
        debts=[
            Debt(
                name=str(d.get("name") or ""),
                balance=_num(d, "current_balance"),
                interest_rate=_num(d, "interest_rate"),
            )
            for d in debts
        ],
        expenses_today=expenses_today,
        expenses_last_7_days=expenses_week,
        monthly_income=_num(progress, "monthly_income"),
        monthly_expenses=_num(progress, "monthly_expenses"),
    )


async def read_mental(session: AsyncSession, user_id: str, today: date) -> MentalSnapshot:
    progress = await connector.fetch_progress(session, Pillar.mental, user_id)
    lessons = await connector.fetch_completed_lessons(session, Pillar.mental, user_id)
    meditation = await connector.fetch_meditation_week(session, user_id, today)
    screen = await connector.fetch_screen_minutes(session, user_id, today)
    routine = await connector.has_morning_routine(session, user_id, today)

    return MentalSnapshot(
        **common_fields(user_id, progress, lessons, today),
        meditation_sessions_this_week=int(_num(meditation, "sessions")),
        meditation_minutes_this_week=int(_num(meditation, "minutes")),
        screen_time_minutes_today=screen,
        morning_routine_completed_today=routine,
    )


async def read_physical(session: AsyncSession, user_id: str, today: date) -> PhysicalSnapshot:
    progress = await connector.fetch_progress(session, Pillar.physical, user_id)
    lessons = await connector.fetch_completed_lessons(session, Pillar.physical, user_id)
    workouts_today = await connector.count_workouts(session, user_id, today, today)
    workouts_week = await connector.count_workouts(session, user_id, connector.week_start(today), today)
    sleep = await connector.fetch_last_night_sleep(session, user_id, today)
    weight = await connector.fetch_recent_weight(session, user_id, today)

    return PhysicalSnapshot(
        **common_fields(user_id, progress, lessons, today),
        workout_logged_today=workouts_today > 0,
        workouts_this_week=workouts_week,
        sleep_hours_last_night=sleep,
        current_weight_kg=weight,
    )


async def read_nutrition(session: AsyncSession, user_id: str, today: date) -> NutritionSnapshot:
    progress = await connector.fetch_progress(session, Pillar.nutrition, user_id)
    lessons = await connector.fetch_completed_lessons(session, Pillar.nutrition, user_id)
    water = await connector.fetch_water_today(session, user_id, today)
    water_goal = await connector.fetch_water_goal(session, user_id, today)
    meals = await connector.fetch_meals_today(session, user_id, today)
    calorie_goal = await connector.fetch_calorie_goal(session, user_id)

    return NutritionSnapshot(
        **common_fields(user_id, progress, lessons, today),
        water_ml_today=water,
        water_goal_ml=water_goal or th.DEFAULT_WATER_GOAL_ML,
        meals_logged_today=int(_num(meals, "meals")),
        calories_consumed=_num(meals, "calories"),
        calorie_goal=calorie_goal if calorie_goal is not None else th.DEFAULT_CALORIE_GOAL,
    )


PillarReader = Callable[[AsyncSession, str, date], Awaitable[AnySnapshot]]

READERS: dict[Pillar, PillarReader] = {
    Pillar.finance: read_finance,
    Pillar.mental: read_mental,
    Pillar.physical: read_physical,
    Pillar.nutrition: read_nutrition,
}


# ---------------------------------------------------------------------------
# Isolation & fan-out
# ---------------------------------------------------------------------------


async def read_pillar(
    session_factory: async_sessionmaker[AsyncSession],
    pillar: Pillar,
    user_id: str,
    today: date,
) -> PillarRead:
    """Read one pillar on its own session. Never raises."""
    try:
        async with session_factory() as session:
            snapshot = await READERS[pillar](session, user_id, today)
        return PillarRead(pillar=pillar, snapshot=snapshot)
    except Exception as exc:
        logger.warning("Reading %s progress for user %s failed; using defaults: %s", pillar.value, user_id, exc)
        return PillarRead(
            pillar=pillar,
            snapshot=default_snapshot(pillar, user_id),
            ok=False,
            error=f"{type(exc).__name__}: {exc}",
        )


async def read_snapshots(
    session_factory: async_sessionmaker[AsyncSession],
    user_id: str,
    today: date,
) -> dict[Pillar, PillarRead]:
    """All four pillars, read concurrently. Keys follow PILLAR_ORDER."""
    reads = await asyncio.gather(
        *(read_pillar(session_factory, pillar, user_id, today) for pillar in PILLAR_ORDER)
    )
    return {r.pillar: r for r in reads}
