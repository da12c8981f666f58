"""Daily task pipeline — the engine.

Reader -> generators -> scorer -> selector -> store. Everything after the
read is pure given (snapshots, now). The trigger functions never raise:
a slate that cannot be produced comes back as None and the UI shows its
empty state.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Callable, Mapping
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.engine import scorer, selector
from app.engine.generators import finance, mental, nutrition, physical
from app.engine.insights import build_insights
from app.engine.models import (
    PILLAR_ORDER,
    AnySnapshot,
    CandidateTask,
    DailyTaskSlate,
    Pillar,
    PillarRead,
)
from app.engine.reader import read_snapshots
from app.engine.store import SlateStore

logger = logging.getLogger(__name__)

Generator = Callable[..., list[CandidateTask]]

GENERATORS: dict[Pillar, Generator] = {
    Pillar.finance: finance.generate,
    Pillar.mental: mental.generate,
    Pillar.physical: physical.generate,
    Pillar.nutrition: nutrition.generate,
}


def local_now(tz_name: str | None = None) -> datetime:
    return datetime.now(ZoneInfo(tz_name or settings.default_tz))


def generate_candidates(snapshots: Mapping[Pillar, AnySnapshot], now: datetime) -> list[CandidateTask]:
    """All candidates in pillar order; within a pillar, generator rule order."""
    candidates: list[CandidateTask] = []
    for pillar in PILLAR_ORDER:
        snap = snapshots.get(pillar)
        if snap is None:
            continue
        candidates.extend(GENERATORS[pillar](snap, now))
    return candidates


def build_slate(
    user_id: str,
    slate_date: date,
    reads: Mapping[Pillar, PillarRead],
    now: datetime,
) -> DailyTaskSlate:
    """Pure part of the pipeline: snapshots in, bounded ordered slate out."""
    snapshots = {pillar: read.snapshot for pillar, read in reads.items()}
    degraded = [p for p in PILLAR_ORDER if p in reads and not reads[p].ok]
    candidates = generate_candidates(snapshots, now)
    scored = scorer.score(candidates, snapshots, degraded=degraded)
    tasks = selector.select(scored)
    return DailyTaskSlate(
        user_id=user_id,
        slate_date=slate_date,
        generated_at=now,
        tasks=tasks,
        insights=build_insights(snapshots, now),
        degraded_pillars=degraded,
    )


async def _generate_and_store(
    session_factory: async_sessionmaker[AsyncSession],
    store: SlateStore,
    user_id: str,
    slate_date: date,
    now: datetime,
) -> DailyTaskSlate | None:
    reads = await read_snapshots(session_factory, user_id, slate_date)
    if not any(read.ok for read in reads.values()):
        logger.error("All pillar reads failed for user %s on %s; no slate produced", user_id, slate_date)
        return None

    slate = build_slate(user_id, slate_date, reads, now)
    await store.put(user_id, slate_date, slate)
    logger.info(
        "Generated slate for user %s on %s: %d task(s), degraded=%s",
        user_id,
        slate_date,
        len(slate.tasks),
        [p.value for p in slate.degraded_pillars],
    )
    # Return the stored form; later reads of this day return the same bytes
    stored = await store.get(user_id, slate_date)
    if stored is None:
        logger.warning("Slate for user %s on %s not readable right after write", user_id, slate_date)
        return slate
    return stored


async def _guarded(coro, user_id: str, timeout: float | None) -> DailyTaskSlate | None:
    """Run a pipeline coroutine under the timeout; failures become None."""
    limit = settings.generation_timeout_seconds if timeout is None else timeout
    try:
        return await asyncio.wait_for(coro, timeout=limit)
    except asyncio.TimeoutError:
        logger.error("Slate generation for user %s timed out after %.1fs", user_id, limit)
        return None
    except Exception:
        logger.exception("Slate generation for user %s failed", user_id)
        return None


async def get_or_generate(
    session_factory: async_sessionmaker[AsyncSession],
    store: SlateStore,
    user_id: str,
    slate_date: date | None = None,
    now: datetime | None = None,
    timeout: float | None = None,
) -> DailyTaskSlate | None:
    """Stored slate for (user, date) if any, else run the pipeline and store it."""
    now = now or local_now()
    slate_date = slate_date or now.date()

    async def _run() -> DailyTaskSlate | None:
        existing = await store.get(user_id, slate_date)
        if existing is not None:
            return existing
        return await _generate_and_store(session_factory, store, user_id, slate_date, now)

    return await _guarded(_run(), user_id, timeout)


async def regenerate(
    session_factory: async_sessionmaker[AsyncSession],
    store: SlateStore,
    user_id: str,
    now: datetime | None = None,
    timeout: float | None = None,
) -> DailyTaskSlate | None:
    """Rebuild today's slate and overwrite the stored one (lesson done, tool used, new day)."""
    now = now or local_now()
    return await _guarded(
        _generate_and_store(session_factory, store, user_id, now.date(), now),
        user_id,
        timeout,
    )
