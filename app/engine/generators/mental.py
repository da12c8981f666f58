"""Mental candidates — meditation tiers, screen time, morning routine."""

from __future__ import annotations

from datetime import datetime

from app.engine import thresholds as th
from app.engine.generators.common import next_lesson_task
from app.engine.models import ActionCategory, CandidateTask, Difficulty, MentalSnapshot, Pillar
from app.engine.signals import MentalSignals, mental_signals, plural


def _meditation(sig: MentalSignals) -> CandidateTask:
    sessions = sig.meditation_sessions
    if sessions == 0:
        return CandidateTask(
            pillar=Pillar.mental,
            rule="mental.meditation_start",
            title="Start Your First Meditation",
            description="Just 5 minutes can reduce stress and improve focus",
            category=ActionCategory.tool,
            action_screen="MeditationTimer",
            duration_minutes=5,
            reward_points=20,
            difficulty=Difficulty.easy,
            priority=8,
        )
    if sessions < th.MEDITATION_STREAK_SESSIONS:
        return CandidateTask(
            pillar=Pillar.mental,
            rule="mental.meditation_continue",
            title="Continue Meditation Practice",
            description=(
                f"{plural(sessions, 'session')} this week - aim for {th.MEDITATION_WEEKLY_TARGET}!"
                + (f" {sig.meditation_minutes} min so far" if sig.meditation_minutes else "")
            ),
            category=ActionCategory.tool,
            action_screen="MeditationTimer",
            duration_minutes=10,
            reward_points=15,
            difficulty=Difficulty.easy,
            priority=7,
        )
    return CandidateTask(
        pillar=Pillar.mental,
        rule="mental.meditation_streak",
        title="Meditation Streak Going!",
        description=f"{plural(sessions, 'session')} this week - you're crushing it!",
        category=ActionCategory.tool,
        action_screen="MeditationTimer",
        duration_minutes=10,
        reward_points=15,
        difficulty=Difficulty.easy,
        priority=6,
    )


def _screen_time(sig: MentalSignals) -> CandidateTask | None:
    if sig.exceeds_limit:
        return CandidateTask(
            pillar=Pillar.mental,
            rule="mental.reduce_screen_time",
            title="Reduce Screen Time",
            description=(
                f"{sig.screen_minutes} min today - try to stay under {th.SCREEN_TIME_LIMIT_MINUTES} min"
            ),
            category=ActionCategory.tool,
            action_screen="ScreenTimeTracker",
            duration_minutes=5,
            reward_points=20,
            difficulty=Difficulty.hard,
            priority=9,
        )
    if sig.screen_minutes > 0:
        return CandidateTask(
            pillar=Pillar.mental,
            rule="mental.track_screen_time",
            title="Track Screen Time",
            description="Monitor digital habits for better mental health",
            category=ActionCategory.tool,
            action_screen="ScreenTimeTracker",
            duration_minutes=3,
            reward_points=10,
            difficulty=Difficulty.easy,
            priority=6,
        )
    return None


def _morning_routine(sig: MentalSignals, now: datetime) -> CandidateTask | None:
    if sig.routine_done or now.hour >= th.MORNING_CUTOFF_HOUR:
        return None
    return CandidateTask(
        pillar=Pillar.mental,
        rule="mental.morning_routine",
        title="Complete Morning Routine",
        description="Start your day right with your morning ritual",
        category=ActionCategory.tool,
        action_screen="MorningRoutine",
        duration_minutes=15,
        reward_points=20,
        difficulty=Difficulty.easy,
        priority=8,
    )


def _dopamine_detox(snap: MentalSnapshot) -> CandidateTask | None:
    # Challenge belongs to the dopamine-regulation foundation only
    if snap.stage != th.DOPAMINE_DETOX_FOUNDATION:
        return None
    return CandidateTask(
        pillar=Pillar.mental,
        rule="mental.dopamine_detox",
        title="Start Dopamine Detox Challenge",
        description="24-hour reset for your reward system",
        category=ActionCategory.challenge,
        action_screen="DopamineDetox",
        duration_minutes=1440,
        reward_points=50,
        difficulty=Difficulty.hard,
        priority=7,
    )


def _gratitude() -> CandidateTask:
    return CandidateTask(
        pillar=Pillar.mental,
        rule="mental.gratitude",
        title="List 3 Things You're Grateful For",
        description="Cultivate a positive mindset",
        category=ActionCategory.habit,
        duration_minutes=3,
        reward_points=10,
        difficulty=Difficulty.easy,
        priority=6,
    )


def generate(snap: MentalSnapshot, now: datetime) -> list[CandidateTask]:
    sig = mental_signals(snap)
    rules = [
        next_lesson_task(
            Pillar.mental,
            snap,
            title_fmt="Complete: {lesson}",
            description_fmt="Foundation {number}: {stage}",
            screen="MentalLessonIntro",
            priority=9,
        ),
        _meditation(sig),
        _screen_time(sig),
        _morning_routine(sig, now),
        _dopamine_detox(snap),
        _gratitude(),
    ]
    return [task for task in rules if task is not None]
