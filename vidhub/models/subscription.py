"""Channel subscription record."""
from __future__ import annotations

from .base import Record


class Subscription(Record):
    subscriber_id: str
    channel_id: str
    notifications_enabled: bool = True


__all__ = ["Subscription"]
