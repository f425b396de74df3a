"""User account record."""
from __future__ import annotations

from pydantic import Field

from .base import Record


class User(Record):
    username: str
    email: str
    hashed_password: str
    display_name: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    avatar_url: str | None = None
    banner_url: str | None = None

    # Derived counters, owned by the counter engine
    subscriber_count: int = Field(default=0, ge=0)
    video_count: int = Field(default=0, ge=0)
    total_views: int = Field(default=0, ge=0)

    is_admin: bool = False
    is_banned: bool = False
    ban_reason: str | None = None


__all__ = ["User"]
