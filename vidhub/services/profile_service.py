"""Channel/profile reads and edits, plus admin ban management."""
from __future__ import annotations

import logging
from typing import Any

from ..database import EntityStore
from ..errors import NotFoundError, UnauthorizedError, ValidationFailedError
from ..models import Snapshot, User
from ..schemas import ProfileUpdateRequest
from .lookups import find_user_by_username, require_user

logger = logging.getLogger(__name__)


def get_user(store: EntityStore, user_id: str) -> User:
    user = store.get("users", user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_username(store: EntityStore, username: str) -> User:
    user = store.read(lambda snapshot: find_user_by_username(snapshot, username))
    if user is None:
        raise NotFoundError("User not found")
    return user


def update_profile(store: EntityStore, *, user_id: str, requester: User, changes: ProfileUpdateRequest) -> User:
    if requester.id != user_id and not requester.is_admin:
        raise UnauthorizedError("Not allowed to edit this profile")

    updates = changes.model_dump(exclude_unset=True)
    if not updates:
        raise ValidationFailedError("No changes detected")

    def _apply(snapshot: Snapshot) -> User:
        user = require_user(snapshot, user_id)
        for field, value in updates.items():
            setattr(user, field, value.strip() if isinstance(value, str) else value)
        user.touch()
        return user

    return store.mutate(_apply)


def set_ban_state(
    store: EntityStore,
    *,
    user_id: str,
    admin: User,
    banned: bool,
    reason: str | None = None,
) -> User:
    if not admin.is_admin:
        raise UnauthorizedError("Insufficient permissions")
    if admin.id == user_id:
        raise ValidationFailedError("Admins cannot ban themselves")

    def _apply(snapshot: Snapshot) -> User:
        user = require_user(snapshot, user_id)
        user.is_banned = banned
        user.ban_reason = (reason or "").strip() or None if banned else None
        user.touch()
        return user

    user = store.mutate(_apply)
    logger.info("User %s %s by %s", user.username, "banned" if banned else "unbanned", admin.username)
    return user


def list_users(store: EntityStore, *, page: int = 1, limit: int = 50, search: str = "") -> tuple[list[User], int]:
    needle = search.strip().lower()

    def _matches(user: User) -> bool:
        if not needle:
            return True
        return (
            needle in user.username.lower()
            or needle in user.email.lower()
            or needle in (user.display_name or "").lower()
        )

    users = store.query("users", _matches)
    start = (max(1, page) - 1) * limit
    return users[start : start + limit], len(users)


def channel_analytics(store: EntityStore, user_id: str) -> dict[str, Any]:
    """Totals, engagement percentage and top videos for a creator."""

    def _read(snapshot: Snapshot) -> dict[str, Any]:
        user = require_user(snapshot, user_id)
        videos = [video for video in snapshot.videos if video.owner_id == user_id]
        total_views = sum(video.views for video in videos)
        total_likes = sum(video.likes for video in videos)
        total_comments = sum(video.comments for video in videos)
        engagement = ((total_likes + total_comments) / total_views * 100) if total_views else 0.0
        top_videos = sorted(videos, key=lambda video: video.views, reverse=True)[:5]
        return {
            "total_videos": len(videos),
            "total_views": total_views,
            "total_likes": total_likes,
            "total_comments": total_comments,
            "engagement_rate": round(engagement, 2),
            "subscriber_count": user.subscriber_count,
            "top_videos": [
                {
                    "id": video.id,
                    "title": video.title,
                    "views": video.views,
                    "likes": video.likes,
                    "comments": video.comments,
                    "engagement_rate": round(video.engagement_rate * 100, 2),
                }
                for video in top_videos
            ],
        }

    return store.read(_read)


__all__ = [
    "channel_analytics",
    "get_user",
    "get_user_by_username",
    "list_users",
    "set_ban_state",
    "update_profile",
]
