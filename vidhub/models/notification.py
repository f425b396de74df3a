"""In-app notification record."""
from __future__ import annotations

from enum import StrEnum
from typing import Any

from .base import Record


class NotificationType(StrEnum):
    GENERIC = "generic"
    NEW_SUBSCRIBER = "subscription.new"
    VIDEO_COMMENT = "video.comment"
    COMMENT_REPLY = "video.comment.reply"
    VIDEO_PUBLISHED = "video.published"


class Notification(Record):
    recipient_id: str
    sender_id: str | None = None
    type: NotificationType = NotificationType.GENERIC
    content: str
    payload: dict[str, Any] | None = None
    read: bool = False


__all__ = ["Notification", "NotificationType"]
