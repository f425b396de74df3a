"""Notification API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..database import EntityStore, get_store
from ..models import User
from ..schemas import NotificationListResponse, NotificationResponse, NotificationSummaryResponse
from ..services import (
    count_unread_notifications,
    delete_notification,
    get_current_user,
    list_notifications,
    mark_all_read,
    mark_read,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=NotificationListResponse)
async def list_my_notifications(
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> NotificationListResponse:
    records = list_notifications(store, current_user.id)
    return NotificationListResponse(items=[NotificationResponse.model_validate(item) for item in records])


@router.get("/summary", response_model=NotificationSummaryResponse)
async def notification_summary(
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> NotificationSummaryResponse:
    return NotificationSummaryResponse(unread_count=count_unread_notifications(store, current_user.id))


@router.post("/mark-read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_notifications_read(
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> None:
    mark_all_read(store, current_user.id)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> NotificationResponse:
    record = mark_read(store, notification_id=notification_id, user_id=current_user.id)
    return NotificationResponse.model_validate(record)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification_endpoint(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> None:
    delete_notification(store, notification_id=notification_id, user_id=current_user.id)


__all__ = ["router"]
