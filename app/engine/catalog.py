"""Hardcoded learning-path catalog — configuration only.

Each pillar has an ordered list of stages (baby steps for finance,
foundations elsewhere). Only identifiers, titles and lesson timing live
here; lesson bodies and quizzes belong to the content layer.

Lesson ids are only unique within a pillar (mental and physical both use
"foundation1-lesson1"), so lookups always go through the pillar.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.engine.models import Pillar


@dataclass(frozen=True, slots=True)
class LessonRef:
    id: str
    title: str
    minutes: int = 10
    reward: int = 30


@dataclass(frozen=True, slots=True)
class Stage:
    id: str
    number: int
    title: str
    lessons: list[LessonRef] = field(default_factory=list)


def _lessons(prefix: str, titles: list[tuple[str, int]], reward: int) -> list[LessonRef]:
    return [
        LessonRef(id=f"{prefix}-lesson{i}", title=title, minutes=minutes, reward=reward)
        for i, (title, minutes) in enumerate(titles, start=1)
    ]


CATALOG: dict[Pillar, list[Stage]] = {
    Pillar.finance: [
        Stage("step1", 1, "Starter Emergency Fund", _lessons("step1", [
            ("Your Starting Point", 8), ("Why $1,000 First", 6), ("Finding Money to Save", 8),
        ], reward=30)),
        Stage("step2", 2, "Debt Snowball", _lessons("step2", [
            ("List Every Debt", 7), ("Smallest Balance First", 6), ("Staying Motivated", 6),
        ], reward=30)),
        Stage("step3", 3, "Full Emergency Fund", _lessons("step3", [
            ("Three to Six Months", 7), ("Where to Keep It", 6),
        ], reward=30)),
    ],
    Pillar.mental: [
        Stage("foundation1", 1, "Dopamine Regulation", _lessons("foundation1", [
            ("The Dopamine Crisis", 7), ("Dopamine Detox Protocol", 8),
            ("Managing Screen Time", 6), ("Sustainable Motivation", 7),
        ], reward=10)),
        Stage("foundation2", 2, "Stress Management", _lessons("foundation2", [
            ("Understanding Stress", 6), ("Box Breathing", 5),
            ("Physiological Sigh", 5), ("Daily Stress Check", 5),
        ], reward=10)),
        Stage("foundation3", 3, "Mindfulness & Gratitude", _lessons("foundation3", [
            ("Science of Gratitude", 6), ("Daily Gratitude Practice", 5),
            ("Present Moment Awareness", 6), ("Meditation Basics", 7),
        ], reward=10)),
    ],
    Pillar.physical: [
        Stage("foundation1", 1, "Understanding Your Body", _lessons("foundation1", [
            ("What is BMI?", 5), ("Calculate Your Needs", 5),
            ("Body Composition", 5), ("Setting SMART Goals", 7),
        ], reward=50)),
        Stage("foundation2", 2, "Movement Fundamentals", _lessons("foundation2", [
            ("Why We Move", 5), ("Cardio Basics", 5),
            ("Strength Training 101", 6), ("Mobility & Flexibility", 7),
        ], reward=50)),
        Stage("foundation3", 3, "Building Your Routine", _lessons("foundation3", [
            ("Weekly Planning", 6), ("Progressive Overload", 6),
            ("Rest and Recovery", 5), ("Track Your Progress", 5),
        ], reward=50)),
    ],
    Pillar.nutrition: [
        Stage("nutrition-foundation1", 1, "Nutrition Fundamentals", _lessons("nutrition-foundation1", [
            ("Calories In vs Calories Out", 7), ("The Three Macronutrients", 8),
            ("Micronutrients Matter", 6),
        ], reward=50)),
        Stage("nutrition-foundation2", 2, "Building a Balanced Plate", _lessons("nutrition-foundation2", [
            ("The Plate Method", 6), ("Protein at Every Meal", 7),
            ("Smart Carb Choices", 7), ("Healthy Fats Explained", 6),
        ], reward=50)),
        Stage("nutrition-foundation3", 3, "Meal Planning & Prep", _lessons("nutrition-foundation3", [
            ("Why Meal Planning Works", 6), ("Batch Cooking Basics", 8),
        ], reward=50)),
    ],
}


def get_stage(pillar: Pillar, number: int) -> Stage | None:
    for stage in CATALOG.get(pillar, []):
        if stage.number == number:
            return stage
    return None


def next_lesson(pillar: Pillar, number: int, completed: frozenset[str]) -> tuple[Stage, LessonRef] | None:
    """First lesson of stage `number` not in `completed`. None when the stage is done or unknown."""
    stage = get_stage(pillar, number)
    if stage is None:
        return None
    for lesson in stage.lessons:
        if lesson.id not in completed:
            return stage, lesson
    return None
