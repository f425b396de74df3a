"""Schemas for playlists."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..models import Privacy


class PlaylistCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=1000)
    thumbnail_url: str | None = Field(default=None, max_length=1024)
    privacy: Privacy = Privacy.PUBLIC


class PlaylistAddVideo(BaseModel):
    video_id: str


class PlaylistResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    description: str | None = None
    thumbnail_url: str | None = None
    privacy: Privacy
    video_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class PlaylistListResponse(BaseModel):
    items: list[PlaylistResponse]
