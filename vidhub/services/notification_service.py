"""Notification helper logic for the snapshot store."""
from __future__ import annotations

import logging
from typing import Any

from ..database import EntityStore
from ..errors import NotFoundError, UnauthorizedError
from ..models import Notification, NotificationType, Snapshot
from .lookups import require_user

logger = logging.getLogger(__name__)


def queue_notification(
    snapshot: Snapshot,
    *,
    recipient_id: str,
    content: str,
    sender_id: str | None = None,
    type_: NotificationType | str = NotificationType.GENERIC,
    payload: dict[str, Any] | None = None,
) -> Notification | None:
    """Append a notification inside an ongoing mutation.

    Users are never notified about their own actions; ``None`` is returned then.
    """

    if sender_id is not None and sender_id == recipient_id:
        return None
    require_user(snapshot, recipient_id)
    notification = Notification(
        recipient_id=recipient_id,
        sender_id=sender_id,
        type=NotificationType(type_),
        content=content,
        payload=payload,
    )
    snapshot.notifications.append(notification)
    return notification


def add_notification(
    store: EntityStore,
    *,
    recipient_id: str,
    content: str,
    sender_id: str | None = None,
    type_: NotificationType | str = NotificationType.GENERIC,
    payload: dict[str, Any] | None = None,
) -> Notification | None:
    """Persist a new notification for the given recipient."""

    return store.mutate(
        lambda snapshot: queue_notification(
            snapshot,
            recipient_id=recipient_id,
            content=content,
            sender_id=sender_id,
            type_=type_,
            payload=payload,
        )
    )


def list_notifications(store: EntityStore, user_id: str) -> list[Notification]:
    """Return notifications for the supplied recipient ordered newest first."""

    items = store.query("notifications", lambda row: row.recipient_id == user_id)
    return sorted(items, key=lambda row: row.created_at, reverse=True)


def count_unread_notifications(store: EntityStore, user_id: str) -> int:
    return len(store.query("notifications", lambda row: row.recipient_id == user_id and not row.read))


def _require_own_notification(snapshot: Snapshot, notification_id: str, user_id: str) -> Notification:
    notification = snapshot.find("notifications", notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.recipient_id != user_id:
        raise UnauthorizedError("Not allowed to modify this notification")
    return notification


def mark_read(store: EntityStore, *, notification_id: str, user_id: str) -> Notification:
    def _apply(snapshot: Snapshot) -> Notification:
        notification = _require_own_notification(snapshot, notification_id, user_id)
        if not notification.read:
            notification.read = True
            notification.touch()
        return notification

    return store.mutate(_apply)


def mark_all_read(store: EntityStore, user_id: str) -> int:
    """Mark all notifications for the given recipient as read."""

    def _apply(snapshot: Snapshot) -> int:
        changed = 0
        for notification in snapshot.notifications:
            if notification.recipient_id == user_id and not notification.read:
                notification.read = True
                notification.touch()
                changed += 1
        return changed

    changed = store.mutate(_apply)
    logger.debug("Marked %d notifications read for %s", changed, user_id)
    return changed


def delete_notification(store: EntityStore, *, notification_id: str, user_id: str) -> None:
    def _apply(snapshot: Snapshot) -> None:
        notification = _require_own_notification(snapshot, notification_id, user_id)
        snapshot.notifications.remove(notification)

    store.mutate(_apply)


__all__ = [
    "add_notification",
    "count_unread_notifications",
    "delete_notification",
    "list_notifications",
    "mark_all_read",
    "mark_read",
    "queue_notification",
]
