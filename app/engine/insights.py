"""Actionable insights — short per-pillar notes shipped alongside the slate.

Urgent actions flag conditions that need attention today; suggestions are
softer nudges. They do not change task priorities.
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping

from app.engine import thresholds as th
from app.engine.models import (
    FinanceSnapshot,
    MentalSnapshot,
    NutritionSnapshot,
    PhysicalSnapshot,
    Pillar,
    PillarInsights,
    PillarSnapshot,
)
from app.engine.signals import finance_signals, mental_signals, nutrition_signals, physical_signals


def _finance(snap: FinanceSnapshot) -> PillarInsights:
    sig = finance_signals(snap)
    out = PillarInsights()
    if not sig.fund_complete and snap.emergency_fund_current < th.STARTER_FUND_CRITICAL:
        out.urgent_actions.append("Build emergency fund - critical priority")
    if sig.smallest_debt is not None and sig.smallest_debt < th.QUICK_WIN_DEBT_MAX:
        out.urgent_actions.append("Small debt detected - easy win available!")
    if not sig.tracked_expenses_today:
        out.suggestions.append("Track today's expenses")
    return out


def _mental(snap: MentalSnapshot) -> PillarInsights:
    sig = mental_signals(snap)
    out = PillarInsights()
    if sig.meditation_sessions == 0:
        out.suggestions.append("Start meditation practice")
    if sig.exceeds_limit:
        out.urgent_actions.append("Screen time exceeds healthy limit")
    return out


def _physical(snap: PhysicalSnapshot) -> PillarInsights:
    sig = physical_signals(snap)
    out = PillarInsights()
    if not sig.logged_today and sig.workouts_this_week < th.WORKOUT_WEEKLY_TARGET:
        out.suggestions.append("Log workout - stay active")
    if sig.sleep_hours is not None and sig.sleep_hours < th.LOW_SLEEP_HOURS:
        out.urgent_actions.append("Sleep quality needs attention")
    return out


def _nutrition(snap: NutritionSnapshot, now: datetime) -> PillarInsights:
    sig = nutrition_signals(snap)
    out = PillarInsights()
    if sig.water_pct < th.WATER_URGENT_PCT and now.hour > th.WATER_INSIGHT_HOUR:
        out.urgent_actions.append("Water intake below 50% - drink up!")
    if sig.meals_logged == 0 and now.hour > th.AFTERNOON_HOUR:
        out.suggestions.append("Log your meals for better tracking")
    return out


def build_insights(
    snapshots: Mapping[Pillar, PillarSnapshot],
    now: datetime,
) -> dict[Pillar, PillarInsights]:
    result: dict[Pillar, PillarInsights] = {}
    for pillar, snap in snapshots.items():
        if isinstance(snap, FinanceSnapshot):
            result[pillar] = _finance(snap)
        elif isinstance(snap, MentalSnapshot):
            result[pillar] = _mental(snap)
        elif isinstance(snap, PhysicalSnapshot):
            result[pillar] = _physical(snap)
        elif isinstance(snap, NutritionSnapshot):
            result[pillar] = _nutrition(snap, now)
    return result
