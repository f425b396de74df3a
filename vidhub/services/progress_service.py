"""Playback progress and watch history."""
from __future__ import annotations

from ..database import EntityStore
from ..models import Snapshot, Video, VideoProgress
from .lookups import require_user, require_video


def update_progress(
    store: EntityStore,
    *,
    user_id: str,
    video_id: str,
    progress: int,
    completed: bool = False,
) -> VideoProgress:
    """Upsert the single progress row for ``user_id`` on ``video_id``."""

    def _apply(snapshot: Snapshot) -> VideoProgress:
        require_user(snapshot, user_id)
        video = require_video(snapshot, video_id)
        seconds = max(0, progress)
        if video.duration:
            seconds = min(seconds, video.duration)
        row = next(
            (item for item in snapshot.progress if item.user_id == user_id and item.video_id == video_id),
            None,
        )
        if row is None:
            row = VideoProgress(user_id=user_id, video_id=video_id)
            snapshot.progress.append(row)
        row.progress = seconds
        row.completed = completed
        row.touch()
        return row

    return store.mutate(_apply)


def get_progress(store: EntityStore, *, user_id: str, video_id: str) -> VideoProgress | None:
    rows = store.query("progress", lambda row: row.user_id == user_id and row.video_id == video_id)
    return rows[0] if rows else None


def watch_history(store: EntityStore, user_id: str, *, limit: int = 50) -> list[tuple[VideoProgress, Video]]:
    """Progress rows with their videos, most recently watched first."""

    def _read(snapshot: Snapshot) -> list[tuple[VideoProgress, Video]]:
        videos = {video.id: video for video in snapshot.videos}
        rows = [row for row in snapshot.progress if row.user_id == user_id and row.video_id in videos]
        rows.sort(key=lambda row: row.updated_at, reverse=True)
        return [(row, videos[row.video_id]) for row in rows[:limit]]

    return store.read(_read)


__all__ = ["get_progress", "update_progress", "watch_history"]
