"""Application entry point for the FastAPI backend."""
from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import get_store, init_store
from .errors import register_error_handlers
from .routers import (
    auth_router,
    categories_router,
    comments_router,
    notifications_router,
    playlists_router,
    realtime_router,
    users_router,
    videos_router,
)
from .services import publish_due_videos, room_broadcaster

settings = get_settings()
APP_NAME = settings.app_name
API_VERSION = settings.api_version

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME, version=API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router)
app.include_router(videos_router)
app.include_router(comments_router)
app.include_router(users_router)
app.include_router(notifications_router)
app.include_router(playlists_router)
app.include_router(categories_router)
app.include_router(realtime_router)

_publish_task: asyncio.Task[None] | None = None
_publish_stop = asyncio.Event()


async def _run_publish_once() -> None:
    """Promote due scheduled videos in a worker thread."""

    try:
        published = await asyncio.to_thread(publish_due_videos, get_store())
        if published:
            logger.info("Scheduled publish pass released %d video(s)", len(published))
    except Exception:  # pragma: no cover - best effort logging
        logger.exception("Scheduled publish pass failed")


async def _publish_loop() -> None:
    """Background task that publishes scheduled videos on a fixed interval."""

    while not _publish_stop.is_set():
        await _run_publish_once()
        try:
            await asyncio.wait_for(_publish_stop.wait(), timeout=settings.publish_interval_seconds)
        except asyncio.TimeoutError:
            continue


@app.on_event("startup")
async def _startup() -> None:
    """Load the snapshot and start background tasks before serving."""

    store = init_store(settings.data_path)
    logger.info("Snapshot loaded from %s", store.path)
    room_broadcaster.send_timeout = settings.broadcast_send_timeout

    if settings.disable_scheduler:
        logger.info("Scheduled publishing disabled")
        return

    global _publish_task
    if _publish_task is None or _publish_task.done():
        _publish_stop.clear()
        _publish_task = asyncio.create_task(_publish_loop())


@app.on_event("shutdown")
async def _shutdown() -> None:
    """Stop background tasks cleanly during application shutdown."""

    _publish_stop.set()
    if _publish_task is not None:
        try:
            await _publish_task
        except asyncio.CancelledError:  # pragma: no cover - defensive
            pass


@app.get("/api", tags=["system"])
def api_info() -> dict[str, str]:
    return {"service": APP_NAME, "version": API_VERSION}


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, object]:
    return {"status": "ok", "rooms": len(room_broadcaster.room_ids)}
