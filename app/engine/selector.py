"""Slate selection — diversity first within a pillar, then priority globally.

Two explicit phases:

1. `select_per_pillar`: per pillar, stable-sort by priority (desc) and take
   the first lesson/challenge plus the first tool/habit.
2. `merge_and_rank`: concatenate in pillar order and stable-sort by
   priority (desc).

A plain global top-K would let one high-scoring pillar crowd the others
out of the slate entirely.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from app.config import settings
from app.engine.models import PILLAR_ORDER, ActionCategory, CandidateTask, Pillar

LEARNING_CATEGORIES = frozenset({ActionCategory.lesson, ActionCategory.challenge})
PRACTICE_CATEGORIES = frozenset({ActionCategory.tool, ActionCategory.habit})

# One slot per category group, in pick order
SLOT_GROUPS: tuple[frozenset[ActionCategory], ...] = (LEARNING_CATEGORIES, PRACTICE_CATEGORIES)


def by_priority(tasks: Iterable[CandidateTask]) -> list[CandidateTask]:
    """Priority descending; ties keep their incoming order (sorted() is stable)."""
    return sorted(tasks, key=lambda t: -t.priority)


def partition(candidates: Iterable[CandidateTask]) -> dict[Pillar, list[CandidateTask]]:
    groups: dict[Pillar, list[CandidateTask]] = {p: [] for p in PILLAR_ORDER}
    for task in candidates:
        groups.setdefault(task.pillar, []).append(task)
    return groups


def pick_for_pillar(tasks: list[CandidateTask]) -> list[CandidateTask]:
    """At most one task per slot group, highest priority first within each group."""
    ranked = by_priority(tasks)
    picked: list[CandidateTask] = []
    for group in SLOT_GROUPS:
        match = next((t for t in ranked if t.category in group and t not in picked), None)
        if match is not None:
            picked.append(match)
    return picked[: settings.per_pillar_cap]


def select_per_pillar(candidates: Iterable[CandidateTask]) -> dict[Pillar, list[CandidateTask]]:
    """Phase 1. Pillars with no candidates map to an empty list."""
    return {pillar: pick_for_pillar(tasks) for pillar, tasks in partition(candidates).items()}


def merge_and_rank(per_pillar: Mapping[Pillar, list[CandidateTask]]) -> list[CandidateTask]:
    """Phase 2. Pillar order is the tie-break between equal priorities."""
    merged: list[CandidateTask] = []
    for pillar in PILLAR_ORDER:
        merged.extend(per_pillar.get(pillar, []))
    return by_priority(merged)[: settings.max_slate_size]


def select(candidates: Iterable[CandidateTask]) -> list[CandidateTask]:
    return merge_and_rank(select_per_pillar(candidates))
