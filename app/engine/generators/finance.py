"""Finance candidates — emergency fund, debt snowball, expenses, budget."""

from __future__ import annotations

import math
from datetime import datetime

from app.engine import thresholds as th
from app.engine.generators.common import next_lesson_task
from app.engine.models import ActionCategory, CandidateTask, Difficulty, FinanceSnapshot, Pillar
from app.engine.signals import FinanceSignals, finance_signals, fmt_whole, plural


def suggested_contribution(percent_complete: float, remaining: float) -> int:
    """Dollar amount to suggest for the next emergency-fund deposit.

    - below FUND_LOW_PCT: min(FUND_LOW_CAP, ceil(remaining / FUND_LOW_DIVISOR))
    - below FUND_MID_PCT: min(FUND_MID_CAP, ceil(remaining / FUND_MID_DIVISOR))
    - otherwise: ceil(remaining), the final push
    """
    if remaining <= 0:
        return 0
    if percent_complete < th.FUND_LOW_PCT:
        return min(th.FUND_LOW_CAP, math.ceil(remaining / th.FUND_LOW_DIVISOR))
    if percent_complete < th.FUND_MID_PCT:
        return min(th.FUND_MID_CAP, math.ceil(remaining / th.FUND_MID_DIVISOR))
    return math.ceil(remaining)


def _emergency_fund(snap: FinanceSnapshot, sig: FinanceSignals) -> CandidateTask | None:
    if snap.stage != th.EMERGENCY_FUND_STAGE:
        return None

    if sig.fund_complete:
        return CandidateTask(
            pillar=Pillar.finance,
            rule="finance.emergency_fund_complete",
            title="Emergency Fund Complete - Celebrate!",
            description="You did it! Now upgrade to 3-6 months of expenses",
            category=ActionCategory.tool,
            action_screen="EmergencyFundScreen",
            duration_minutes=5,
            reward_points=50,
            difficulty=Difficulty.easy,
            priority=7,
            streak_eligible=False,
        )

    pct = sig.emergency_fund_pct
    amount = suggested_contribution(pct, sig.emergency_fund_remaining)
    final_push = pct > th.FUND_FINAL_PUSH_PCT
    return CandidateTask(
        pillar=Pillar.finance,
        rule="finance.emergency_fund_contribution",
        title=f"Add ${amount} to Emergency Fund",
        description=(
            f"You're {fmt_whole(pct)}% there! ${fmt_whole(sig.emergency_fund_remaining)} "
            f"remaining to reach ${fmt_whole(snap.emergency_fund_goal)}"
        ),
        category=ActionCategory.tool,
        action_screen="EmergencyFundScreen",
        action_params={"suggestedAmount": amount},
        duration_minutes=5,
        reward_points=30 if final_push else 20,
        difficulty=Difficulty.easy if final_push else Difficulty.medium,
        priority=10 if pct < th.FUND_URGENT_PCT else 8,
        streak_eligible=True,
        suggested_amount=amount,
    )


def _debt(sig: FinanceSignals) -> CandidateTask | None:
    if sig.active_debt_count == 0 or sig.smallest_debt is None:
        return None

    if sig.smallest_debt < th.QUICK_WIN_DEBT_MAX:
        return CandidateTask(
            pillar=Pillar.finance,
            rule="finance.debt_quick_win",
            title="Attack Smallest Debt - Quick Win!",
            description=f"Only ${fmt_whole(sig.smallest_debt)} left! You can eliminate this debt fast!",
            category=ActionCategory.tool,
            action_screen="DebtTrackerScreen",
            action_params={"balance": sig.smallest_debt},
            duration_minutes=10,
            reward_points=30,
            difficulty=Difficulty.medium,
            priority=10,
            streak_eligible=True,
        )

    return CandidateTask(
        pillar=Pillar.finance,
        rule="finance.debt_payment",
        title="Make Extra Debt Payment",
        description=(
            f"{plural(sig.active_debt_count, 'debt')} remaining (${fmt_whole(sig.total_debt)} total). "
            "Keep the snowball rolling!"
        ),
        category=ActionCategory.tool,
        action_screen="DebtTrackerScreen",
        duration_minutes=10,
        reward_points=25,
        difficulty=Difficulty.medium,
        priority=9,
        streak_eligible=True,
    )


def _expenses(sig: FinanceSignals) -> CandidateTask | None:
    if sig.tracked_expenses_today:
        return None
    cold = sig.expenses_last_7_days == 0
    return CandidateTask(
        pillar=Pillar.finance,
        rule="finance.track_expenses",
        title="Start Tracking Expenses Today!" if cold else "Log Today's Expenses",
        description=(
            "You can't manage what you don't measure - start today!"
            if cold
            else "Stay in control by tracking every dollar"
        ),
        category=ActionCategory.tool,
        action_screen="ExpenseLoggerScreen",
        duration_minutes=5,
        reward_points=15,
        difficulty=Difficulty.easy,
        priority=9 if cold else 7,
        streak_eligible=True,
    )


def _budget(sig: FinanceSignals) -> CandidateTask | None:
    if not sig.has_active_budget:
        return CandidateTask(
            pillar=Pillar.finance,
            rule="finance.create_budget",
            title="Create Your First Budget",
            description="Give every dollar a job - take control of your money",
            category=ActionCategory.tool,
            action_screen="BudgetManagerScreen",
            duration_minutes=15,
            reward_points=25,
            difficulty=Difficulty.medium,
            priority=8,
            streak_eligible=True,
        )
    if sig.savings_rate_pct < th.LOW_SAVINGS_RATE_PCT:
        return CandidateTask(
            pillar=Pillar.finance,
            rule="finance.raise_savings_rate",
            title="Increase Your Savings Rate",
            description=(
                f"Currently saving {fmt_whole(sig.savings_rate_pct)}% - "
                f"aim for at least {fmt_whole(th.TARGET_SAVINGS_RATE_PCT)}%!"
            ),
            category=ActionCategory.tool,
            action_screen="BudgetManagerScreen",
            duration_minutes=10,
            reward_points=20,
            difficulty=Difficulty.medium,
            priority=7,
            streak_eligible=False,
        )
    return None


def _budget_review(now: datetime) -> CandidateTask | None:
    if now.weekday() != th.BUDGET_REVIEW_WEEKDAY:
        return None
    return CandidateTask(
        pillar=Pillar.finance,
        rule="finance.weekly_budget_review",
        title="Review & Plan Weekly Budget",
        description="Analyze last week, plan for the next",
        category=ActionCategory.tool,
        action_screen="BudgetManagerScreen",
        duration_minutes=15,
        reward_points=20,
        difficulty=Difficulty.medium,
        priority=8,
    )


def generate(snap: FinanceSnapshot, now: datetime) -> list[CandidateTask]:
    sig = finance_signals(snap)
    rules = [
        next_lesson_task(
            Pillar.finance,
            snap,
            title_fmt="Continue Finance Path - Step {number}",
            description_fmt="{lesson}: learn the next Baby Step principle",
            screen="FinancePathNew",
            priority=6,
        ),
        _emergency_fund(snap, sig),
        _debt(sig),
        _expenses(sig),
        _budget(sig),
        _budget_review(now),
    ]
    return [task for task in rules if task is not None]
