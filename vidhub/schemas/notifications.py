"""Schemas for notifications."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    recipient_id: str
    sender_id: str | None = None
    type: str
    content: str
    created_at: datetime
    read: bool
    payload: dict[str, Any] | None = None


class NotificationListResponse(BaseModel):
    items: list[NotificationResponse]


class NotificationSummaryResponse(BaseModel):
    unread_count: int = 0
