"""Pydantic schemas for video resources."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..models import Privacy, ReactionType, VideoStatus


class VideoCreate(BaseModel):
    """Metadata for an upload; the binary itself is referenced by URL."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    video_url: str = Field(..., min_length=1, max_length=1024)
    thumbnail_url: str | None = Field(default=None, max_length=1024)
    duration: int | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, max_length=64)
    tags: list[str] = Field(default_factory=list, max_length=30)
    privacy: Privacy = Privacy.PUBLIC
    status: VideoStatus = VideoStatus.PUBLISHED
    scheduled_at: datetime | None = None


class VideoUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    thumbnail_url: str | None = Field(default=None, max_length=1024)
    category: str | None = Field(default=None, max_length=64)
    tags: list[str] | None = Field(default=None, max_length=30)
    privacy: Privacy | None = None
    status: VideoStatus | None = None
    scheduled_at: datetime | None = None


class VideoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    title: str
    description: str | None = None
    video_url: str
    thumbnail_url: str | None = None
    duration: int | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    privacy: Privacy
    status: VideoStatus
    scheduled_at: datetime | None = None
    published_at: datetime | None = None
    views: int = 0
    likes: int = 0
    dislikes: int = 0
    comments: int = 0
    algorithm_score: float
    engagement_rate: float
    created_at: datetime
    updated_at: datetime


class VideoListResponse(BaseModel):
    items: list[VideoResponse]


class ReactionRequest(BaseModel):
    type: ReactionType


class ReactionResponse(BaseModel):
    target_id: str
    likes: int
    dislikes: int
    state: Literal["none", "liked", "disliked"]


class ReactionStatusResponse(BaseModel):
    state: Literal["none", "liked", "disliked"]


class ProgressUpdate(BaseModel):
    progress: int = Field(..., ge=0)
    completed: bool = False


class ProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    video_id: str
    progress: int = 0
    completed: bool = False
    updated_at: datetime | None = None
