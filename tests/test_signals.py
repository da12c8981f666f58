"""Tests for the pure signal functions and display helpers."""

import pytest

from app.engine.models import Debt, FinanceSnapshot, MentalSnapshot, NutritionSnapshot, PhysicalSnapshot
from app.engine.signals import (
    finance_signals,
    fmt_hours,
    fmt_whole,
    mental_signals,
    nutrition_signals,
    percent_of,
    physical_signals,
    plural,
    savings_rate,
)


class TestPercentOf:
    def test_basic(self):
        assert percent_of(800, 2000) == pytest.approx(40.0)

    def test_zero_goal(self):
        assert percent_of(500, 0) == 0.0

    def test_over_goal(self):
        assert percent_of(2500, 2000) == pytest.approx(125.0)


class TestSavingsRate:
    def test_rate(self):
        assert savings_rate(4000, 3000) == pytest.approx(25.0)

    def test_no_income(self):
        assert savings_rate(0, 100) == 0.0

    def test_overspending_is_negative(self):
        assert savings_rate(1000, 1200) < 0


class TestFinanceSignals:
    def test_fund_progress(self):
        sig = finance_signals(FinanceSnapshot(emergency_fund_current=250, emergency_fund_goal=1000))
        assert sig.emergency_fund_pct == pytest.approx(25.0)
        assert sig.emergency_fund_remaining == pytest.approx(750.0)
        assert sig.fund_complete is False

    def test_overfunded(self):
        sig = finance_signals(FinanceSnapshot(emergency_fund_current=1200, emergency_fund_goal=1000))
        assert sig.fund_complete is True
        assert sig.emergency_fund_remaining == 0.0

    def test_zero_goal_falls_back_to_starter_goal(self):
        sig = finance_signals(FinanceSnapshot(emergency_fund_current=500, emergency_fund_goal=0))
        assert sig.emergency_fund_pct == pytest.approx(50.0)

    def test_debts_ignore_paid_off(self):
        snap = FinanceSnapshot(debts=[Debt(balance=0), Debt(balance=900), Debt(balance=320)])
        sig = finance_signals(snap)
        assert sig.active_debt_count == 2
        assert sig.smallest_debt == 320
        assert sig.total_debt == 1220

    def test_no_debts(self):
        sig = finance_signals(FinanceSnapshot())
        assert sig.smallest_debt is None
        assert sig.active_debt_count == 0

    def test_budget_from_income(self):
        assert finance_signals(FinanceSnapshot()).has_active_budget is False
        assert finance_signals(FinanceSnapshot(monthly_income=3000)).has_active_budget is True


class TestOtherSignals:
    def test_screen_limit_is_strict(self):
        assert mental_signals(MentalSnapshot(screen_time_minutes_today=180)).exceeds_limit is False
        assert mental_signals(MentalSnapshot(screen_time_minutes_today=181)).exceeds_limit is True

    def test_negative_counts_clamped(self):
        assert mental_signals(MentalSnapshot(meditation_sessions_this_week=-1)).meditation_sessions == 0
        assert physical_signals(PhysicalSnapshot(workouts_this_week=-2)).workouts_this_week == 0

    def test_weight_presence(self):
        assert physical_signals(PhysicalSnapshot()).has_weight is False
        assert physical_signals(PhysicalSnapshot(current_weight_kg=70.2)).has_weight is True

    def test_water_goal_fallback(self):
        sig = nutrition_signals(NutritionSnapshot(water_ml_today=1000, water_goal_ml=0))
        assert sig.water_goal_ml == 2000
        assert sig.water_pct == pytest.approx(50.0)

    def test_calorie_pct(self):
        sig = nutrition_signals(NutritionSnapshot(calories_consumed=2400, calorie_goal=2000))
        assert sig.calorie_pct == pytest.approx(120.0)


class TestDisplayHelpers:
    @pytest.mark.parametrize(
        "value,expected",
        [(40.0, "40"), (39.5, "40"), (320.0, "320"), (94.99, "95"), (0.0, "0")],
    )
    def test_fmt_whole(self, value, expected):
        assert fmt_whole(value) == expected

    def test_fmt_hours(self):
        assert fmt_hours(5.0) == "5"
        assert fmt_hours(6.5) == "6.5"

    def test_plural(self):
        assert plural(1, "session") == "1 session"
        assert plural(3, "session") == "3 sessions"
        assert plural(0, "debt") == "0 debts"
