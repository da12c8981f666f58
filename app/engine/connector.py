"""Database connector — async reads of pillar progress and tool logs.

Progress tables (one row per user, all columns defaulted):
  finance_progress(user_id, current_step, monthly_income, monthly_expenses,
                   emergency_fund_goal, emergency_fund_current, ...)
  mental_progress / physical_progress / nutrition_progress
                  (user_id, current_foundation, ...)

Tool logs:
  lesson_progress(user_id, lesson_id, pillar, completed, completed_at)
  user_debts(user_id, name, current_balance, interest_rate, is_paid_off)
  user_expenses(user_id, expense_date, amount)
  meditation_sessions(user_id, session_date, duration_minutes)
  screen_time_logs(user_id, log_date, total_minutes)
  morning_routines(user_id, routine_date)
  workout_sessions(user_id, workout_date)
  sleep_logs(user_id, sleep_date, duration_hours)
  body_measurements(user_id, recorded_at, weight_kg)
  nutrition_water_intake(user_id, intake_date, amount_ml)
  daily_nutrition_summary(user_id, summary_date, water_goal_ml)
  meals(user_id, meal_date, total_calories)
  macro_goals(user_id, calories_target, is_active)

Missing rows come back as None, empty or 0; absence never raises.
Driver errors propagate; the reader isolates them per pillar.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Sequence

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.engine.models import Pillar

PROGRESS_TABLES: dict[Pillar, tuple[str, str]] = {
    Pillar.finance: ("finance_progress", "current_step"),
    Pillar.mental: ("mental_progress", "current_foundation"),
    Pillar.physical: ("physical_progress", "current_foundation"),
    Pillar.nutrition: ("nutrition_progress", "current_foundation"),
}


def week_start(today: date) -> date:
    """First day of the trailing 7-day window ending today (inclusive)."""
    return today - timedelta(days=6)


async def _fetch_first(session: AsyncSession, query: str, params: dict[str, Any]) -> dict[str, Any] | None:
    result = await session.execute(text(query), params)
    row = result.fetchone()
    if row is None:
        return None
    return dict(zip(result.keys(), row))


async def _fetch_all(session: AsyncSession, query: str, params: dict[str, Any]) -> list[dict[str, Any]]:
    result = await session.execute(text(query), params)
    columns = result.keys()
    return [dict(zip(columns, r)) for r in result.fetchall()]


async def _fetch_number(session: AsyncSession, query: str, params: dict[str, Any]) -> float:
    """First column of the first row as a number; NULL or no row is 0."""
    row = await _fetch_first(session, query, params)
    if not row:
        return 0
    value = next(iter(row.values()))
    return value or 0


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


async def fetch_progress(session: AsyncSession, pillar: Pillar, user_id: str) -> dict[str, Any] | None:
    """Progress row for a pillar, with the stage column aliased to `stage`."""
    table, stage_col = PROGRESS_TABLES[pillar]
    query = f"SELECT *, {stage_col} AS stage FROM {table} WHERE user_id = :user_id LIMIT 1"
    return await _fetch_first(session, query, {"user_id": user_id})


async def fetch_completed_lessons(
    session: AsyncSession,
    pillar: Pillar,
    user_id: str,
) -> Sequence[dict[str, Any]]:
    """Completed lessons for one pillar (lesson_id, completed_at), newest first."""
    query = (
        "SELECT lesson_id, completed_at FROM lesson_progress "
        "WHERE user_id = :user_id AND pillar = :pillar AND completed = 1 "
        "ORDER BY completed_at DESC"
    )
    return await _fetch_all(session, query, {"user_id": user_id, "pillar": pillar.value})


# ---------------------------------------------------------------------------
# Finance
# ---------------------------------------------------------------------------


async def fetch_active_debts(session: AsyncSession, user_id: str) -> Sequence[dict[str, Any]]:
    query = (
        "SELECT name, current_balance, interest_rate FROM user_debts "
        "WHERE user_id = :user_id AND is_paid_off = 0 AND current_balance > 0 "
        "ORDER BY current_balance"
    )
    return await _fetch_all(session, query, {"user_id": user_id})


async def count_expenses(session: AsyncSession, user_id: str, start: date, end_inclusive: date) -> int:
    query = (
        "SELECT COUNT(*) AS n FROM user_expenses "
        "WHERE user_id = :user_id AND expense_date >= :start AND expense_date <= :end"
    )
    return int(await _fetch_number(session, query, {"user_id": user_id, "start": start, "end": end_inclusive}))


# ---------------------------------------------------------------------------
# Mental
# ---------------------------------------------------------------------------


async def fetch_meditation_week(session: AsyncSession, user_id: str, today: date) -> dict[str, Any]:
    """{"sessions": n, "minutes": m} for the trailing 7 days."""
    query = (
        "SELECT COUNT(*) AS sessions, COALESCE(SUM(duration_minutes), 0) AS minutes "
        "FROM meditation_sessions "
        "WHERE user_id = :user_id AND CAST(session_date AS DATE) >= :start "
        "AND CAST(session_date AS DATE) <= :today"
    )
    row = await _fetch_first(session, query, {"user_id": user_id, "start": week_start(today), "today": today})
    return row or {"sessions": 0, "minutes": 0}


async def fetch_screen_minutes(session: AsyncSession, user_id: str, today: date) -> int:
    query = (
        "SELECT COALESCE(SUM(total_minutes), 0) AS minutes FROM screen_time_logs "
        "WHERE user_id = :user_id AND log_date = :today"
    )
    return int(await _fetch_number(session, query, {"user_id": user_id, "today": today}))


async def has_morning_routine(session: AsyncSession, user_id: str, today: date) -> bool:
    query = "SELECT COUNT(*) AS n FROM morning_routines WHERE user_id = :user_id AND routine_date = :today"
    return await _fetch_number(session, query, {"user_id": user_id, "today": today}) > 0


# ---------------------------------------------------------------------------
# Physical
# ---------------------------------------------------------------------------


async def count_workouts(session: AsyncSession, user_id: str, start: date, end_inclusive: date) -> int:
    query = (
        "SELECT COUNT(*) AS n FROM workout_sessions "
        "WHERE user_id = :user_id AND CAST(workout_date AS DATE) >= :start "
        "AND CAST(workout_date AS DATE) <= :end"
    )
    return int(await _fetch_number(session, query, {"user_id": user_id, "start": start, "end": end_inclusive}))


async def fetch_last_night_sleep(session: AsyncSession, user_id: str, today: date) -> float | None:
    """Hours from the newest sleep log dated today or yesterday; None if absent."""
    query = (
        "SELECT duration_hours FROM sleep_logs "
        "WHERE user_id = :user_id AND sleep_date >= :since AND sleep_date <= :today "
        "ORDER BY sleep_date DESC LIMIT 1"
    )
    row = await _fetch_first(session, query, {"user_id": user_id, "since": today - timedelta(days=1), "today": today})
    if row is None or row.get("duration_hours") is None:
        return None
    return float(row["duration_hours"])


async def fetch_recent_weight(session: AsyncSession, user_id: str, today: date) -> float | None:
    """Latest weight recorded in the trailing 7 days; None if absent."""
    query = (
        "SELECT weight_kg FROM body_measurements "
        "WHERE user_id = :user_id AND CAST(recorded_at AS DATE) >= :start "
        "AND CAST(recorded_at AS DATE) <= :today "
        "ORDER BY recorded_at DESC LIMIT 1"
    )
    row = await _fetch_first(session, query, {"user_id": user_id, "start": week_start(today), "today": today})
    if row is None or row.get("weight_kg") is None:
        return None
    return float(row["weight_kg"])


# ---------------------------------------------------------------------------
# Nutrition
# ---------------------------------------------------------------------------


async def fetch_water_today(session: AsyncSession, user_id: str, today: date) -> int:
    query = (
        "SELECT COALESCE(SUM(amount_ml), 0) AS ml FROM nutrition_water_intake "
        "WHERE user_id = :user_id AND intake_date = :today"
    )
    return int(await _fetch_number(session, query, {"user_id": user_id, "today": today}))


async def fetch_water_goal(session: AsyncSession, user_id: str, today: date) -> int | None:
    query = (
        "SELECT water_goal_ml FROM daily_nutrition_summary "
        "WHERE user_id = :user_id AND summary_date = :today LIMIT 1"
    )
    row = await _fetch_first(session, query, {"user_id": user_id, "today": today})
    if row is None or not row.get("water_goal_ml"):
        return None
    return int(row["water_goal_ml"])


async def fetch_meals_today(session: AsyncSession, user_id: str, today: date) -> dict[str, Any]:
    """{"meals": n, "calories": kcal} for today."""
    query = (
        "SELECT COUNT(*) AS meals, COALESCE(SUM(total_calories), 0) AS calories FROM meals "
        "WHERE user_id = :user_id AND meal_date = :today"
    )
    row = await _fetch_first(session, query, {"user_id": user_id, "today": today})
    return row or {"meals": 0, "calories": 0}


async def fetch_calorie_goal(session: AsyncSession, user_id: str) -> float | None:
    query = (
        "SELECT calories_target FROM macro_goals "
        "WHERE user_id = :user_id AND is_active = 1 "
        "ORDER BY created_at DESC LIMIT 1"
    )
    row = await _fetch_first(session, query, {"user_id": user_id})
    if row is None or row.get("calories_target") is None:
        return None
    return float(row["calories_target"])
