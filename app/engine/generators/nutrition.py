"""Nutrition candidates — hydration, meal logging, calorie overage, weekly habits."""

from __future__ import annotations

from datetime import datetime

from app.engine import thresholds as th
from app.engine.generators.common import next_lesson_task
from app.engine.models import ActionCategory, CandidateTask, Difficulty, NutritionSnapshot, Pillar
from app.engine.signals import NutritionSignals, fmt_whole, nutrition_signals, plural


def _is_afternoon(now: datetime) -> bool:
    return now.hour > th.AFTERNOON_HOUR


def _water(sig: NutritionSignals, now: datetime) -> CandidateTask | None:
    if sig.water_pct < th.WATER_URGENT_PCT and _is_afternoon(now):
        return CandidateTask(
            pillar=Pillar.nutrition,
            rule="nutrition.water_urgent",
            title="Drink Water NOW!",
            description=f"Only {fmt_whole(sig.water_pct)}% of goal - you're falling behind!",
            category=ActionCategory.tool,
            action_screen="WaterTrackerScreen",
            duration_minutes=2,
            reward_points=15,
            difficulty=Difficulty.easy,
            priority=10,
        )
    if sig.water_pct < 100.0:
        return CandidateTask(
            pillar=Pillar.nutrition,
            rule="nutrition.water_nudge",
            title="Stay Hydrated",
            description=f"{sig.water_ml}ml / {sig.water_goal_ml}ml - keep drinking!",
            category=ActionCategory.tool,
            action_screen="WaterTrackerScreen",
            duration_minutes=2,
            reward_points=10,
            difficulty=Difficulty.easy,
            priority=7,
        )
    return None


def _meals(sig: NutritionSignals, now: datetime) -> CandidateTask | None:
    logged = sig.meals_logged
    if logged == 0 and _is_afternoon(now):
        return CandidateTask(
            pillar=Pillar.nutrition,
            rule="nutrition.log_meals",
            title="Log Your Meals Today",
            description="Track what you eat to reach your nutrition goals",
            category=ActionCategory.tool,
            action_screen="MealLoggerScreen",
            duration_minutes=5,
            reward_points=20,
            difficulty=Difficulty.easy,
            priority=9,
        )
    if 0 < logged < th.MEALS_PER_DAY:
        return CandidateTask(
            pillar=Pillar.nutrition,
            rule="nutrition.log_remaining_meals",
            title="Log Remaining Meals",
            description=f"{plural(logged, 'meal')} logged - track them all!",
            category=ActionCategory.tool,
            action_screen="MealLoggerScreen",
            duration_minutes=5,
            reward_points=15,
            difficulty=Difficulty.easy,
            priority=7,
        )
    return None


def _calories(sig: NutritionSignals) -> CandidateTask | None:
    if sig.calorie_goal <= 0 or sig.calorie_pct <= th.CALORIE_OVERAGE_PCT:
        return None
    return CandidateTask(
        pillar=Pillar.nutrition,
        rule="nutrition.calories_over",
        title="Calories Over Goal",
        description=(
            f"{fmt_whole(sig.calories_consumed)} / {fmt_whole(sig.calorie_goal)} cal - adjust tomorrow"
        ),
        category=ActionCategory.tool,
        action_screen="CalorieCalculatorScreen",
        duration_minutes=5,
        reward_points=10,
        difficulty=Difficulty.medium,
        priority=6,
        streak_eligible=False,
    )


def _calorie_recalc(now: datetime) -> CandidateTask | None:
    if now.weekday() != th.CALORIE_RECALC_WEEKDAY:
        return None
    return CandidateTask(
        pillar=Pillar.nutrition,
        rule="nutrition.recalculate_calories",
        title="Recalculate Your Calorie Needs",
        description="Update TDEE based on current weight and activity",
        category=ActionCategory.tool,
        action_screen="CalorieCalculatorScreen",
        duration_minutes=5,
        reward_points=15,
        difficulty=Difficulty.easy,
        priority=7,
        streak_eligible=False,
    )


def _protein_habit() -> CandidateTask:
    return CandidateTask(
        pillar=Pillar.nutrition,
        rule="nutrition.protein_every_meal",
        title="Eat Protein with Every Meal",
        description="Eggs, meat, fish, or legumes",
        category=ActionCategory.habit,
        duration_minutes=5,
        reward_points=15,
        difficulty=Difficulty.easy,
        priority=7,
    )


def _meal_prep(now: datetime) -> CandidateTask | None:
    if now.weekday() != th.MEAL_PREP_WEEKDAY:
        return None
    return CandidateTask(
        pillar=Pillar.nutrition,
        rule="nutrition.meal_prep",
        title="Meal Prep for the Week",
        description="Prepare healthy meals in advance",
        category=ActionCategory.habit,
        duration_minutes=60,
        reward_points=40,
        difficulty=Difficulty.hard,
        priority=9,
    )


def generate(snap: NutritionSnapshot, now: datetime) -> list[CandidateTask]:
    sig = nutrition_signals(snap)
    rules = [
        next_lesson_task(
            Pillar.nutrition,
            snap,
            title_fmt="Study: {lesson}",
            description_fmt="{stage} - Foundation {number}",
            screen="NutritionLessonIntro",
            priority=7,
        ),
        _water(sig, now),
        _meals(sig, now),
        _calories(sig),
        _calorie_recalc(now),
        _protein_habit(),
        _meal_prep(now),
    ]
    return [task for task in rules if task is not None]
