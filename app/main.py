from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.db import async_session
from app.engine.router import router as engine_router
from app.engine.store import SqlSlateStore
from app.logging_config import configure_logging

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await SqlSlateStore(async_session).ensure_table()
    yield


app = FastAPI(title="Pillars Daily Task Engine", version="0.1.0", lifespan=lifespan)
app.include_router(engine_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "engine": {
            "slate": "/engine/slates/{user_id}",
            "regenerate": "/engine/slates/{user_id}/regenerate",
            "thresholds": "/engine/thresholds",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
