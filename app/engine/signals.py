"""Pure tool-usage signal functions — math only, never raises.

Each function normalizes one pillar snapshot into the facts the
generators branch on. Signals are derived fresh on every run.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.engine import thresholds as th
from app.engine.models import FinanceSnapshot, MentalSnapshot, NutritionSnapshot, PhysicalSnapshot


def percent_of(value: float, goal: float) -> float:
    """value / goal * 100. Zero or negative goal yields 0.0."""
    if goal <= 0:
        return 0.0
    return (value / goal) * 100.0


@dataclass(frozen=True, slots=True)
class FinanceSignals:
    emergency_fund_pct: float
    emergency_fund_remaining: float
    fund_complete: bool
    active_debt_count: int
    smallest_debt: float | None
    total_debt: float
    tracked_expenses_today: bool
    expenses_last_7_days: int
    has_active_budget: bool
    savings_rate_pct: float


@dataclass(frozen=True, slots=True)
class MentalSignals:
    meditation_sessions: int
    meditation_minutes: int
    screen_minutes: int
    exceeds_limit: bool
    routine_done: bool


@dataclass(frozen=True, slots=True)
class PhysicalSignals:
    logged_today: bool
    workouts_this_week: int
    sleep_hours: float | None
    has_weight: bool


@dataclass(frozen=True, slots=True)
class NutritionSignals:
    water_ml: int
    water_goal_ml: int
    water_pct: float
    meals_logged: int
    calories_consumed: float
    calorie_goal: float
    calorie_pct: float


def savings_rate(monthly_income: float, monthly_expenses: float) -> float:
    """(income - expenses) / income * 100; 0.0 without income."""
    if monthly_income <= 0:
        return 0.0
    return ((monthly_income - monthly_expenses) / monthly_income) * 100.0


def finance_signals(snap: FinanceSnapshot) -> FinanceSignals:
    goal = snap.emergency_fund_goal if snap.emergency_fund_goal > 0 else th.DEFAULT_EMERGENCY_FUND_GOAL
    active = [d.balance for d in snap.debts if d.balance > 0]
    return FinanceSignals(
        emergency_fund_pct=percent_of(snap.emergency_fund_current, goal),
        emergency_fund_remaining=max(goal - snap.emergency_fund_current, 0.0),
        fund_complete=snap.emergency_fund_current >= goal,
        active_debt_count=len(active),
        smallest_debt=min(active) if active else None,
        total_debt=sum(active),
        tracked_expenses_today=snap.expenses_today > 0,
        expenses_last_7_days=snap.expenses_last_7_days,
        has_active_budget=snap.monthly_income > 0,
        savings_rate_pct=savings_rate(snap.monthly_income, snap.monthly_expenses),
    )


def mental_signals(snap: MentalSnapshot) -> MentalSignals:
    return MentalSignals(
        meditation_sessions=max(snap.meditation_sessions_this_week, 0),
        meditation_minutes=max(snap.meditation_minutes_this_week, 0),
        screen_minutes=max(snap.screen_time_minutes_today, 0),
        exceeds_limit=snap.screen_time_minutes_today > th.SCREEN_TIME_LIMIT_MINUTES,
        routine_done=snap.morning_routine_completed_today,
    )


def physical_signals(snap: PhysicalSnapshot) -> PhysicalSignals:
    return PhysicalSignals(
        logged_today=snap.workout_logged_today,
        workouts_this_week=max(snap.workouts_this_week, 0),
        sleep_hours=snap.sleep_hours_last_night,
        has_weight=bool(snap.current_weight_kg),
    )


def nutrition_signals(snap: NutritionSnapshot) -> NutritionSignals:
    water_goal = snap.water_goal_ml if snap.water_goal_ml > 0 else th.DEFAULT_WATER_GOAL_ML
    return NutritionSignals(
        water_ml=snap.water_ml_today,
        water_goal_ml=water_goal,
        water_pct=percent_of(snap.water_ml_today, water_goal),
        meals_logged=max(snap.meals_logged_today, 0),
        calories_consumed=snap.calories_consumed,
        calorie_goal=snap.calorie_goal,
        calorie_pct=percent_of(snap.calories_consumed, snap.calorie_goal),
    )


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def fmt_whole(value: float) -> str:
    """Round half up to a whole number for display ("40", "1200")."""
    return str(int(value + 0.5)) if value >= 0 else str(-int(-value + 0.5))


def fmt_hours(value: float) -> str:
    """Hours without a trailing .0 ("5", "6.5")."""
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"
