"""Static rule thresholds — config only, no DB.

Every tier boundary a candidate generator branches on lives here so the
rules read as "below WATER_URGENT_PCT after AFTERNOON_HOUR" rather than as
bare literals. THRESHOLDS mirrors the constants with human-readable
descriptions for the /engine/thresholds endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Finance
# ---------------------------------------------------------------------------

EMERGENCY_FUND_STAGE = 1  # Baby step that builds the starter emergency fund
DEFAULT_EMERGENCY_FUND_GOAL = 1000.0

FUND_LOW_PCT = 25.0  # Below: min(FUND_LOW_CAP, ceil(remaining / FUND_LOW_DIVISOR))
FUND_LOW_CAP = 100
FUND_LOW_DIVISOR = 10
FUND_MID_PCT = 75.0  # Below: min(FUND_MID_CAP, ceil(remaining / FUND_MID_DIVISOR))
FUND_MID_CAP = 50
FUND_MID_DIVISOR = 5
# At or above FUND_MID_PCT the suggestion is the exact remaining balance.
FUND_URGENT_PCT = 50.0  # Below: contribution task is top priority
FUND_FINAL_PUSH_PCT = 90.0  # Above: easy difficulty, bonus reward

QUICK_WIN_DEBT_MAX = 500.0  # Smallest debt strictly below this is a "quick win"
LOW_SAVINGS_RATE_PCT = 10.0  # Savings rate strictly below this prompts a raise
TARGET_SAVINGS_RATE_PCT = 20.0
BUDGET_REVIEW_WEEKDAY = 6  # datetime.weekday(): Sunday
STARTER_FUND_CRITICAL = 500.0  # Fund balance below this is an urgent insight

# ---------------------------------------------------------------------------
# Mental
# ---------------------------------------------------------------------------

MEDITATION_STREAK_SESSIONS = 3  # >= this many sessions this week = streak tier
MEDITATION_WEEKLY_TARGET = 5
SCREEN_TIME_LIMIT_MINUTES = 180  # Strictly above = reduction task
MORNING_CUTOFF_HOUR = 12  # Routine task only before this hour
DOPAMINE_DETOX_FOUNDATION = 1

# ---------------------------------------------------------------------------
# Physical
# ---------------------------------------------------------------------------

WORKOUT_WEEKLY_TARGET = 3  # Weekly count below this raises workout priority
LOW_SLEEP_HOURS = 6.0  # Strictly below = high-priority sleep task
HEALTHY_SLEEP_HOURS = 7.0  # At or above = affirmation task
SLEEP_LOG_START_HOUR = 6  # Morning window for "log last night's sleep"
SLEEP_LOG_END_HOUR = 12
WEIGH_IN_WEEKDAY = 0  # datetime.weekday(): Monday

# ---------------------------------------------------------------------------
# Nutrition
# ---------------------------------------------------------------------------

DEFAULT_WATER_GOAL_ML = 2000
DEFAULT_CALORIE_GOAL = 2000
WATER_URGENT_PCT = 50.0  # Strictly below, after AFTERNOON_HOUR = urgent
AFTERNOON_HOUR = 12  # "After midday" means now.hour > AFTERNOON_HOUR
MEALS_PER_DAY = 3
CALORIE_OVERAGE_PCT = 120.0  # Consumption strictly above this % of goal
MEAL_PREP_WEEKDAY = 6  # datetime.weekday(): Sunday
CALORIE_RECALC_WEEKDAY = 2  # datetime.weekday(): Wednesday
WATER_INSIGHT_HOUR = 15  # Low-water insight only when now.hour > WATER_INSIGHT_HOUR

# ---------------------------------------------------------------------------
# Priority bounds
# ---------------------------------------------------------------------------

PRIORITY_MIN = 1
PRIORITY_MAX = 10


@dataclass(frozen=True, slots=True)
class Threshold:
    name: str
    value: float
    pillar: str
    description: str = ""


THRESHOLDS: list[Threshold] = [
    Threshold("FUND_LOW_PCT", FUND_LOW_PCT, "finance", "Emergency fund % below which the large-increment tier applies"),
    Threshold("FUND_LOW_CAP", FUND_LOW_CAP, "finance", "Max suggested contribution in the low tier ($)"),
    Threshold("FUND_MID_PCT", FUND_MID_PCT, "finance", "Emergency fund % at which the final-push tier starts"),
    Threshold("FUND_MID_CAP", FUND_MID_CAP, "finance", "Max suggested contribution in the mid tier ($)"),
    Threshold("FUND_URGENT_PCT", FUND_URGENT_PCT, "finance", "Emergency fund % below which the task is priority 10"),
    Threshold("QUICK_WIN_DEBT_MAX", QUICK_WIN_DEBT_MAX, "finance", "Smallest-debt quick-win threshold ($)"),
    Threshold("LOW_SAVINGS_RATE_PCT", LOW_SAVINGS_RATE_PCT, "finance", "Savings rate % below which a raise is suggested"),
    Threshold("STARTER_FUND_CRITICAL", STARTER_FUND_CRITICAL, "finance", "Fund balance ($) below which the fund is flagged urgent"),
    Threshold("MEDITATION_STREAK_SESSIONS", MEDITATION_STREAK_SESSIONS, "mental", ">= sessions this week = streak tier"),
    Threshold("SCREEN_TIME_LIMIT_MINUTES", SCREEN_TIME_LIMIT_MINUTES, "mental", "Daily screen minutes above which to reduce"),
    Threshold("MORNING_CUTOFF_HOUR", MORNING_CUTOFF_HOUR, "mental", "Morning routine task only before this hour"),
    Threshold("WORKOUT_WEEKLY_TARGET", WORKOUT_WEEKLY_TARGET, "physical", "Weekly workouts below which priority rises"),
    Threshold("LOW_SLEEP_HOURS", LOW_SLEEP_HOURS, "physical", "Sleep hours below which to prioritize sleep"),
    Threshold("HEALTHY_SLEEP_HOURS", HEALTHY_SLEEP_HOURS, "physical", "Sleep hours at/above which to affirm"),
    Threshold("WEIGH_IN_WEEKDAY", WEIGH_IN_WEEKDAY, "physical", "Weekday (Mon=0) for the weigh-in reminder"),
    Threshold("WATER_URGENT_PCT", WATER_URGENT_PCT, "nutrition", "Water % of goal below which it is urgent after midday"),
    Threshold("AFTERNOON_HOUR", AFTERNOON_HOUR, "nutrition", "Hours strictly after this count as afternoon"),
    Threshold("MEALS_PER_DAY", MEALS_PER_DAY, "nutrition", "Meals expected per day"),
    Threshold("CALORIE_OVERAGE_PCT", CALORIE_OVERAGE_PCT, "nutrition", "Calorie % of goal above which to flag"),
    Threshold("WATER_INSIGHT_HOUR", WATER_INSIGHT_HOUR, "nutrition", "Low-water insight only after this hour"),
]


def list_thresholds() -> list[Threshold]:
    return list(THRESHOLDS)
