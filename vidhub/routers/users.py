"""Channel profiles, subscriptions, analytics and admin moderation."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..constants import MAX_PAGE_SIZE
from ..database import EntityStore, get_store
from ..errors import UnauthorizedError
from ..models import User
from ..schemas import (
    BanRequest,
    ChannelAnalyticsResponse,
    ProfileUpdateRequest,
    SubscriptionActionResponse,
    SubscriptionListResponse,
    SubscriptionResponse,
    SubscriptionStatsResponse,
    UserListResponse,
    UserProfileResponse,
    VideoListResponse,
    VideoResponse,
)
from ..services import (
    channel_analytics,
    get_current_user,
    get_optional_user,
    get_subscription_stats,
    get_user,
    get_user_by_username,
    list_subscriptions,
    list_users,
    list_videos,
    require_admin,
    set_ban_state,
    subscribe,
    unsubscribe,
    update_profile,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=UserListResponse)
async def list_users_endpoint(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=MAX_PAGE_SIZE),
    search: str = "",
    _admin: User = Depends(require_admin),
    store: EntityStore = Depends(get_store),
) -> UserListResponse:
    users, total = list_users(store, page=page, limit=limit, search=search)
    return UserListResponse(items=[UserProfileResponse.model_validate(user) for user in users], total=total)


@router.get("/by-username/{username}", response_model=UserProfileResponse)
async def get_user_by_username_endpoint(
    username: str,
    store: EntityStore = Depends(get_store),
) -> UserProfileResponse:
    return UserProfileResponse.model_validate(get_user_by_username(store, username))


@router.get("/me/subscriptions", response_model=SubscriptionListResponse)
async def my_subscriptions_endpoint(
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> SubscriptionListResponse:
    records = list_subscriptions(store, current_user.id)
    return SubscriptionListResponse(items=[SubscriptionResponse.model_validate(item) for item in records])


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user_endpoint(
    user_id: str,
    store: EntityStore = Depends(get_store),
) -> UserProfileResponse:
    return UserProfileResponse.model_validate(get_user(store, user_id))


@router.patch("/{user_id}", response_model=UserProfileResponse)
async def update_user_endpoint(
    user_id: str,
    payload: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> UserProfileResponse:
    user = update_profile(store, user_id=user_id, requester=current_user, changes=payload)
    return UserProfileResponse.model_validate(user)


@router.get("/{user_id}/videos", response_model=VideoListResponse)
async def channel_videos_endpoint(
    user_id: str,
    viewer: User | None = Depends(get_optional_user),
    store: EntityStore = Depends(get_store),
) -> VideoListResponse:
    include_unlisted = viewer is not None and (viewer.id == user_id or viewer.is_admin)
    videos = list_videos(store, owner_id=user_id, include_unlisted=include_unlisted)
    return VideoListResponse(items=[VideoResponse.model_validate(video) for video in videos])


@router.post("/{user_id}/subscribe", response_model=SubscriptionActionResponse)
async def subscribe_endpoint(
    user_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> SubscriptionActionResponse:
    stats = subscribe(store, subscriber_id=current_user.id, channel_id=user_id)
    return SubscriptionActionResponse(status="subscribed", **_stats_payload(stats))


@router.delete("/{user_id}/subscribe", response_model=SubscriptionActionResponse)
async def unsubscribe_endpoint(
    user_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> SubscriptionActionResponse:
    removed, stats = unsubscribe(store, subscriber_id=current_user.id, channel_id=user_id)
    return SubscriptionActionResponse(status="unsubscribed" if removed else "noop", **_stats_payload(stats))


@router.get("/{user_id}/subscription-status", response_model=SubscriptionStatsResponse)
async def subscription_status_endpoint(
    user_id: str,
    viewer: User | None = Depends(get_optional_user),
    store: EntityStore = Depends(get_store),
) -> SubscriptionStatsResponse:
    stats = get_subscription_stats(store, channel_id=user_id, viewer_id=viewer.id if viewer else None)
    return SubscriptionStatsResponse(**_stats_payload(stats))


@router.get("/{user_id}/analytics", response_model=ChannelAnalyticsResponse)
async def analytics_endpoint(
    user_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> ChannelAnalyticsResponse:
    if current_user.id != user_id and not current_user.is_admin:
        raise UnauthorizedError("Not allowed to view these analytics")
    return ChannelAnalyticsResponse(**channel_analytics(store, user_id))


@router.post("/{user_id}/ban", response_model=UserProfileResponse)
async def ban_user_endpoint(
    user_id: str,
    payload: BanRequest,
    admin: User = Depends(require_admin),
    store: EntityStore = Depends(get_store),
) -> UserProfileResponse:
    user = set_ban_state(store, user_id=user_id, admin=admin, banned=True, reason=payload.reason)
    return UserProfileResponse.model_validate(user)


@router.post("/{user_id}/unban", response_model=UserProfileResponse)
async def unban_user_endpoint(
    user_id: str,
    admin: User = Depends(require_admin),
    store: EntityStore = Depends(get_store),
) -> UserProfileResponse:
    user = set_ban_state(store, user_id=user_id, admin=admin, banned=False)
    return UserProfileResponse.model_validate(user)


def _stats_payload(stats) -> dict[str, object]:
    return {
        "channel_id": stats.channel_id,
        "subscriber_count": stats.subscriber_count,
        "is_subscribed": stats.is_subscribed,
    }


__all__ = ["router"]
