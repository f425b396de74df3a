"""Playlist record with ordered video entries."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .base import Record, utcnow
from .video import Privacy


class PlaylistEntry(BaseModel):
    video_id: str
    position: int = Field(ge=0)
    added_at: datetime = Field(default_factory=utcnow)


class Playlist(Record):
    owner_id: str
    title: str
    description: str | None = None
    thumbnail_url: str | None = None
    privacy: Privacy = Privacy.PUBLIC
    entries: list[PlaylistEntry] = Field(default_factory=list)

    @property
    def video_ids(self) -> list[str]:
        return [entry.video_id for entry in sorted(self.entries, key=lambda item: item.position)]


__all__ = ["Playlist", "PlaylistEntry"]
