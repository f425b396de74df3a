"""Video record and its lifecycle enumerations."""
from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from .base import Record


class Privacy(StrEnum):
    PUBLIC = "public"
    UNLISTED = "unlisted"
    PRIVATE = "private"


class VideoStatus(StrEnum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PROCESSING = "processing"
    PUBLISHED = "published"


BASELINE_ALGORITHM_SCORE = 100.0


class Video(Record):
    owner_id: str
    title: str
    description: str | None = None
    video_url: str
    thumbnail_url: str | None = None
    duration: int | None = Field(default=None, ge=0)
    category: str | None = None
    tags: list[str] = Field(default_factory=list)

    privacy: Privacy = Privacy.PUBLIC
    status: VideoStatus = VideoStatus.PUBLISHED
    scheduled_at: datetime | None = None
    published_at: datetime | None = None

    # Derived counters
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    dislikes: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)

    algorithm_score: float = BASELINE_ALGORITHM_SCORE
    engagement_rate: float = 0.0

    @property
    def is_listed(self) -> bool:
        return self.privacy == Privacy.PUBLIC and self.status == VideoStatus.PUBLISHED


__all__ = ["BASELINE_ALGORITHM_SCORE", "Privacy", "Video", "VideoStatus"]
