"""Priority scorer — cross-pillar adjustments on top of generator priorities."""

from __future__ import annotations

import logging
from typing import Collection, Mapping

from app.config import settings
from app.engine import thresholds as th
from app.engine.models import CandidateTask, Pillar, PillarSnapshot

logger = logging.getLogger(__name__)


def clamp_priority(value: int) -> int:
    return max(th.PRIORITY_MIN, min(th.PRIORITY_MAX, value))


def stale_pillars(
    snapshots: Mapping[Pillar, PillarSnapshot],
    stale_days: int | None = None,
    degraded: Collection[Pillar] = (),
) -> set[Pillar]:
    """Pillars that have gone quiet on lessons.

    A pillar is stale when its last completed lesson is at least
    `stale_days` old, or when it has never completed one while some other
    pillar has. A brand-new user (no lessons anywhere) has no stale pillars.
    Degraded pillars hold default snapshots and are never stale.
    """
    days = settings.stale_pillar_days if stale_days is None else stale_days
    any_activity = any(s.days_since_last_lesson is not None for s in snapshots.values())
    stale: set[Pillar] = set()
    for pillar, snap in snapshots.items():
        if pillar in degraded:
            continue
        if snap.days_since_last_lesson is None:
            if any_activity:
                stale.add(pillar)
        elif snap.days_since_last_lesson >= days:
            stale.add(pillar)
    return stale


def pillar_adjustments(
    snapshots: Mapping[Pillar, PillarSnapshot],
    degraded: Collection[Pillar] = (),
) -> dict[Pillar, int]:
    """Per-pillar priority delta. Pillars absent from the result are unchanged."""
    return {p: settings.stale_pillar_boost for p in stale_pillars(snapshots, degraded=degraded)}


def score(
    candidates: list[CandidateTask],
    snapshots: Mapping[Pillar, PillarSnapshot],
    degraded: Collection[Pillar] = (),
) -> list[CandidateTask]:
    """Apply cross-pillar adjustments; order is preserved, output clamped to [1, 10]."""
    adjustments = pillar_adjustments(snapshots, degraded)
    if adjustments:
        logger.debug("Priority adjustments: %s", {p.value: d for p, d in adjustments.items()})

    scored: list[CandidateTask] = []
    for task in candidates:
        delta = adjustments.get(task.pillar, 0)
        if delta == 0:
            scored.append(task)
            continue
        scored.append(task.model_copy(update={"priority": clamp_priority(task.priority + delta)}))
    return scored
