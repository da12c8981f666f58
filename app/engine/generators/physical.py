"""Physical candidates — workouts, sleep, weekly weigh-in."""

from __future__ import annotations

from datetime import datetime

from app.engine import thresholds as th
from app.engine.generators.common import next_lesson_task
from app.engine.models import ActionCategory, CandidateTask, Difficulty, PhysicalSnapshot, Pillar
from app.engine.signals import PhysicalSignals, fmt_hours, physical_signals, plural


def _workout(sig: PhysicalSignals) -> CandidateTask | None:
    if sig.logged_today:
        return None
    count = sig.workouts_this_week
    cold = count == 0
    return CandidateTask(
        pillar=Pillar.physical,
        rule="physical.workout",
        title="Start Moving Today!" if cold else "Log Today's Workout",
        description=(
            "Any movement counts - even a 10-minute walk!"
            if cold
            else f"{plural(count, 'workout')} this week - keep it up!"
        ),
        category=ActionCategory.tool,
        action_screen="WorkoutTrackerScreen",
        duration_minutes=20,
        reward_points=25,
        difficulty=Difficulty.medium,
        priority=9 if count < th.WORKOUT_WEEKLY_TARGET else 7,
    )


def _sleep(sig: PhysicalSignals, now: datetime) -> CandidateTask | None:
    hours = sig.sleep_hours
    if hours is None:
        if th.SLEEP_LOG_START_HOUR <= now.hour < th.SLEEP_LOG_END_HOUR:
            return CandidateTask(
                pillar=Pillar.physical,
                rule="physical.log_sleep",
                title="Log Last Night's Sleep",
                description="Track sleep quality and duration for better health",
                category=ActionCategory.tool,
                action_screen="SleepTrackerScreen",
                duration_minutes=3,
                reward_points=15,
                difficulty=Difficulty.easy,
                priority=7,
            )
        return None

    if hours < th.LOW_SLEEP_HOURS:
        return CandidateTask(
            pillar=Pillar.physical,
            rule="physical.low_sleep",
            title="Prioritize Sleep Tonight",
            description=f"Last night: {fmt_hours(hours)}h - aim for 7-9 hours!",
            category=ActionCategory.tool,
            action_screen="SleepTrackerScreen",
            duration_minutes=5,
            reward_points=20,
            difficulty=Difficulty.medium,
            priority=10,
        )
    if hours >= th.HEALTHY_SLEEP_HOURS:
        return CandidateTask(
            pillar=Pillar.physical,
            rule="physical.good_sleep",
            title="Track Last Night's Sleep",
            description=f"Great sleep ({fmt_hours(hours)}h)! Keep tracking",
            category=ActionCategory.tool,
            action_screen="SleepTrackerScreen",
            duration_minutes=3,
            reward_points=15,
            difficulty=Difficulty.easy,
            priority=6,
        )
    return None


def _weigh_in(sig: PhysicalSignals, now: datetime) -> CandidateTask | None:
    if now.weekday() != th.WEIGH_IN_WEEKDAY or sig.has_weight:
        return None
    return CandidateTask(
        pillar=Pillar.physical,
        rule="physical.weigh_in",
        title="Monday Weigh-In",
        description="Track your progress weekly for best results",
        category=ActionCategory.tool,
        action_screen="BodyMeasurementsScreen",
        duration_minutes=5,
        reward_points=15,
        difficulty=Difficulty.easy,
        priority=7,
    )


def generate(snap: PhysicalSnapshot, now: datetime) -> list[CandidateTask]:
    sig = physical_signals(snap)
    rules = [
        next_lesson_task(
            Pillar.physical,
            snap,
            title_fmt="Learn: {lesson}",
            description_fmt="{stage} - Foundation {number}",
            screen="PhysicalLessonIntro",
            priority=8,
        ),
        _workout(sig),
        _sleep(sig, now),
        _weigh_in(sig, now),
    ]
    return [task for task in rules if task is not None]
