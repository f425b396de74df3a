"""Business logic for channel subscriptions."""
from __future__ import annotations

from dataclasses import dataclass

from ..database import EntityStore
from ..errors import ConflictError, ValidationFailedError
from ..models import NotificationType, Snapshot, Subscription
from .counters import adjust_subscriber_count
from .lookups import require_user
from .notification_service import queue_notification


@dataclass(slots=True)
class SubscriptionStats:
    channel_id: str
    subscriber_count: int
    is_subscribed: bool


def _find_subscription(snapshot: Snapshot, subscriber_id: str, channel_id: str) -> Subscription | None:
    return next(
        (
            row
            for row in snapshot.subscriptions
            if row.subscriber_id == subscriber_id and row.channel_id == channel_id
        ),
        None,
    )


def _stats(snapshot: Snapshot, channel_id: str, viewer_id: str | None) -> SubscriptionStats:
    channel = require_user(snapshot, channel_id)
    is_subscribed = viewer_id is not None and _find_subscription(snapshot, viewer_id, channel_id) is not None
    return SubscriptionStats(
        channel_id=channel_id,
        subscriber_count=channel.subscriber_count,
        is_subscribed=is_subscribed,
    )


def subscribe(store: EntityStore, *, subscriber_id: str, channel_id: str) -> SubscriptionStats:
    if subscriber_id == channel_id:
        raise ValidationFailedError("Cannot subscribe to your own channel")

    def _apply(snapshot: Snapshot) -> SubscriptionStats:
        subscriber = require_user(snapshot, subscriber_id)
        channel = require_user(snapshot, channel_id)
        if _find_subscription(snapshot, subscriber_id, channel_id) is not None:
            raise ConflictError("Already subscribed to this channel")

        snapshot.subscriptions.append(Subscription(subscriber_id=subscriber_id, channel_id=channel_id))
        adjust_subscriber_count(channel, 1)
        queue_notification(
            snapshot,
            recipient_id=channel_id,
            sender_id=subscriber_id,
            type_=NotificationType.NEW_SUBSCRIBER,
            content=f"{subscriber.display_name or subscriber.username} subscribed to your channel",
        )
        return _stats(snapshot, channel_id, subscriber_id)

    return store.mutate(_apply)


def unsubscribe(store: EntityStore, *, subscriber_id: str, channel_id: str) -> tuple[bool, SubscriptionStats]:
    """Remove the subscription row, if any. Returns whether a row was removed."""

    def _apply(snapshot: Snapshot) -> tuple[bool, SubscriptionStats]:
        channel = require_user(snapshot, channel_id)
        record = _find_subscription(snapshot, subscriber_id, channel_id)
        if record is None:
            return False, _stats(snapshot, channel_id, subscriber_id)
        snapshot.subscriptions.remove(record)
        adjust_subscriber_count(channel, -1)
        return True, _stats(snapshot, channel_id, subscriber_id)

    return store.mutate(_apply)


def get_subscription_stats(store: EntityStore, *, channel_id: str, viewer_id: str | None = None) -> SubscriptionStats:
    return store.read(lambda snapshot: _stats(snapshot, channel_id, viewer_id))


def is_subscribed(store: EntityStore, *, subscriber_id: str, channel_id: str) -> bool:
    return store.read(lambda snapshot: _find_subscription(snapshot, subscriber_id, channel_id) is not None)


def list_subscriptions(store: EntityStore, subscriber_id: str) -> list[Subscription]:
    items = store.query("subscriptions", lambda row: row.subscriber_id == subscriber_id)
    return sorted(items, key=lambda row: row.created_at, reverse=True)


__all__ = [
    "SubscriptionStats",
    "get_subscription_stats",
    "is_subscribed",
    "list_subscriptions",
    "subscribe",
    "unsubscribe",
]
