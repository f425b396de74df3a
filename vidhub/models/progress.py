"""Per-user playback progress for a video."""
from __future__ import annotations

from pydantic import Field

from .base import Record


class VideoProgress(Record):
    user_id: str
    video_id: str
    progress: int = Field(default=0, ge=0)  # seconds
    completed: bool = False


__all__ = ["VideoProgress"]
