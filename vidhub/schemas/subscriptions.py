"""Schemas supporting subscription APIs."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict


class SubscriptionStatsResponse(BaseModel):
    channel_id: str
    subscriber_count: int
    is_subscribed: bool


class SubscriptionActionResponse(SubscriptionStatsResponse):
    status: Literal["subscribed", "unsubscribed", "noop"]


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    subscriber_id: str
    channel_id: str
    notifications_enabled: bool
    created_at: datetime


class SubscriptionListResponse(BaseModel):
    items: list[SubscriptionResponse]
