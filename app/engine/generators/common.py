"""Helpers shared by the per-pillar candidate generators."""

from __future__ import annotations

from app.engine import catalog
from app.engine.models import ActionCategory, CandidateTask, Difficulty, Pillar, PillarSnapshot


def next_lesson_task(
    pillar: Pillar,
    snap: PillarSnapshot,
    *,
    title_fmt: str,
    description_fmt: str,
    screen: str,
    priority: int,
) -> CandidateTask | None:
    """Candidate for the first uncompleted lesson in the current stage.

    `title_fmt` / `description_fmt` may use {lesson}, {stage}, {number}.
    Returns None when the stage is finished or not in the catalog.
    """
    found = catalog.next_lesson(pillar, snap.stage, snap.completed_lessons)
    if found is None:
        return None
    stage, lesson = found
    fields = {"lesson": lesson.title, "stage": stage.title, "number": stage.number}
    return CandidateTask(
        pillar=pillar,
        rule=f"{pillar.value}.next_lesson",
        title=title_fmt.format(**fields),
        description=description_fmt.format(**fields),
        category=ActionCategory.lesson,
        action_screen=screen,
        action_params={
            "lessonId": lesson.id,
            "lessonTitle": lesson.title,
            "stageId": stage.id,
        },
        duration_minutes=lesson.minutes,
        reward_points=lesson.reward,
        difficulty=Difficulty.medium,
        priority=priority,
        streak_eligible=False,
    )
