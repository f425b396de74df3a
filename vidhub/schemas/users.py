"""Schemas for channel/profile resources."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    display_name: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    avatar_url: str | None = None
    banner_url: str | None = None
    subscriber_count: int = 0
    video_count: int = 0
    total_views: int = 0
    is_admin: bool = False
    is_banned: bool = False
    created_at: datetime


class ProfileUpdateRequest(BaseModel):
    display_name: str | None = Field(default=None, max_length=64)
    bio: str | None = Field(default=None, max_length=500)
    location: str | None = Field(default=None, max_length=120)
    website: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = Field(default=None, max_length=1024)
    banner_url: str | None = Field(default=None, max_length=1024)


class BanRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class UserListResponse(BaseModel):
    items: list[UserProfileResponse]
    total: int


class ChannelAnalyticsResponse(BaseModel):
    total_videos: int
    total_views: int
    total_likes: int
    total_comments: int
    engagement_rate: float
    subscriber_count: int
    top_videos: list[dict[str, object]]
