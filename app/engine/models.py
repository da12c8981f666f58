"""Engine data contract — Pydantic v2 models.

Snapshots are explicit per-pillar records with defaulted fields: a missing
progress row is simply the model built with no arguments.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.config import settings


class Pillar(str, Enum):
    finance = "finance"
    mental = "mental"
    physical = "physical"
    nutrition = "nutrition"


# Slate concatenation order
PILLAR_ORDER: tuple[Pillar, ...] = (Pillar.finance, Pillar.mental, Pillar.physical, Pillar.nutrition)


class ActionCategory(str, Enum):
    lesson = "lesson"
    tool = "tool"
    habit = "habit"
    challenge = "challenge"


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


# ---------------------------------------------------------------------------
# Progress snapshots
# ---------------------------------------------------------------------------


class PillarSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str = ""
    stage: int = 1
    completed_lessons: frozenset[str] = frozenset()
    days_since_last_lesson: int | None = None  # None = never completed one


class Debt(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    balance: float = 0.0
    interest_rate: float = 0.0


class FinanceSnapshot(PillarSnapshot):
    pillar: Literal[Pillar.finance] = Pillar.finance
    emergency_fund_current: float = 0.0
    emergency_fund_goal: float = 1000.0
    debts: list[Debt] = Field(default_factory=list)
    expenses_today: int = 0
    expenses_last_7_days: int = 0
    monthly_income: float = 0.0
    monthly_expenses: float = 0.0


class MentalSnapshot(PillarSnapshot):
    pillar: Literal[Pillar.mental] = Pillar.mental
    meditation_sessions_this_week: int = 0
    meditation_minutes_this_week: int = 0
    screen_time_minutes_today: int = 0
    morning_routine_completed_today: bool = False


class PhysicalSnapshot(PillarSnapshot):
    pillar: Literal[Pillar.physical] = Pillar.physical
    workout_logged_today: bool = False
    workouts_this_week: int = 0
    sleep_hours_last_night: float | None = None  # None = unknown
    current_weight_kg: float | None = None


class NutritionSnapshot(PillarSnapshot):
    pillar: Literal[Pillar.nutrition] = Pillar.nutrition
    water_ml_today: int = 0
    water_goal_ml: int = 2000
    meals_logged_today: int = 0
    calories_consumed: float = 0.0
    calorie_goal: float = 2000.0


AnySnapshot = FinanceSnapshot | MentalSnapshot | PhysicalSnapshot | NutritionSnapshot

SNAPSHOT_TYPES: dict[Pillar, type[PillarSnapshot]] = {
    Pillar.finance: FinanceSnapshot,
    Pillar.mental: MentalSnapshot,
    Pillar.physical: PhysicalSnapshot,
    Pillar.nutrition: NutritionSnapshot,
}


def default_snapshot(pillar: Pillar, user_id: str = "") -> AnySnapshot:
    """Documented default: stage 1, zeroed facts, empty completed set."""
    return SNAPSHOT_TYPES[pillar](user_id=user_id)  # type: ignore[return-value]


class PillarRead(BaseModel):
    """Outcome of one pillar read. ok=False means the snapshot is the default."""

    pillar: Pillar
    snapshot: AnySnapshot = Field(discriminator="pillar")
    ok: bool = True
    error: str | None = None


# ---------------------------------------------------------------------------
# Candidates & slate
# ---------------------------------------------------------------------------


class CandidateTask(BaseModel):
    model_config = ConfigDict(frozen=True)

    pillar: Pillar
    rule: str  # Stable id of the generator rule that produced it
    title: str
    description: str = ""
    category: ActionCategory
    action_screen: str | None = None
    action_params: dict[str, Any] | None = None
    duration_minutes: int = 5
    reward_points: int = 10
    difficulty: Difficulty = Difficulty.easy
    priority: int = Field(ge=1, le=10)
    streak_eligible: bool = True
    suggested_amount: float | None = None


class PillarInsights(BaseModel):
    urgent_actions: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class DailyTaskSlate(BaseModel):
    """Selected, ordered tasks for one (user, date); the persisted unit."""

    user_id: str
    slate_date: date
    generated_at: datetime
    tasks: list[CandidateTask] = Field(default_factory=list)
    insights: dict[Pillar, PillarInsights] = Field(default_factory=dict)
    degraded_pillars: list[Pillar] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_bounds(self) -> "DailyTaskSlate":
        if len(self.tasks) > settings.max_slate_size:
            raise ValueError(f"slate has {len(self.tasks)} tasks, max is {settings.max_slate_size}")
        per_pillar = Counter(t.pillar for t in self.tasks)
        over = [p.value for p, n in per_pillar.items() if n > settings.per_pillar_cap]
        if over:
            raise ValueError(f"per-pillar cap {settings.per_pillar_cap} exceeded for: {', '.join(over)}")
        return self

    @model_validator(mode="after")
    def _order_insights(self) -> "DailyTaskSlate":
        # JSONB does not keep object key order; pillar order is restored on every load
        self.insights = {p: self.insights[p] for p in PILLAR_ORDER if p in self.insights}
        return self

    def tasks_for(self, pillar: Pillar) -> list[CandidateTask]:
        return [t for t in self.tasks if t.pillar == pillar]
