"""Engine HTTP router — daily slates & rule thresholds."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.auth import verify_api_key
from app.db import get_session_factory
from app.engine import pipeline
from app.engine.models import DailyTaskSlate
from app.engine.store import SlateStore, SqlSlateStore
from app.engine.thresholds import list_thresholds

router = APIRouter(prefix="/engine", tags=["engine"])


def get_slate_store(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SlateStore:
    return SqlSlateStore(session_factory)


def _parse_date(value: str, name: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date for '{name}': {value}")


def _slate_or_empty(slate: DailyTaskSlate | None) -> DailyTaskSlate | Response:
    # 204 = nothing could be produced; the client renders its empty state
    if slate is None:
        return Response(status_code=204)
    return slate


# ---------------------------------------------------------------------------
# /engine/slates/{user_id}
# ---------------------------------------------------------------------------


@router.get("/slates/{user_id}", response_model=DailyTaskSlate)
async def get_slate(
    user_id: str,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    store: SlateStore = Depends(get_slate_store),
    _: str = Depends(verify_api_key),
    slate_date: str | None = Query(default=None, alias="date", description="Slate date (YYYY-MM-DD), default today"),
):
    target = _parse_date(slate_date, "date") if slate_date else None
    slate = await pipeline.get_or_generate(session_factory, store, user_id, target)
    return _slate_or_empty(slate)


@router.post("/slates/{user_id}/regenerate", response_model=DailyTaskSlate)
async def regenerate_slate(
    user_id: str,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    store: SlateStore = Depends(get_slate_store),
    _: str = Depends(verify_api_key),
):
    slate = await pipeline.regenerate(session_factory, store, user_id)
    return _slate_or_empty(slate)


# ---------------------------------------------------------------------------
# /engine/thresholds
# ---------------------------------------------------------------------------


@router.get("/thresholds")
async def thresholds_list(
    _: str = Depends(verify_api_key),
) -> list[dict]:
    return [
        {"name": t.name, "value": t.value, "pillar": t.pillar, "description": t.description}
        for t in list_thresholds()
    ]
