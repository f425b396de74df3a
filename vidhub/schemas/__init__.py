"""Convenience exports for schema layer."""
from .auth import AuthResponse, LoginRequest, RegisterRequest
from .categories import CategoryListResponse, CategoryResponse, CategoryStat, CategoryStatsResponse
from .comments import CommentCreate, CommentListResponse, CommentResponse, CommentUpdate
from .notifications import NotificationListResponse, NotificationResponse, NotificationSummaryResponse
from .playlists import PlaylistAddVideo, PlaylistCreate, PlaylistListResponse, PlaylistResponse
from .subscriptions import (
    SubscriptionActionResponse,
    SubscriptionListResponse,
    SubscriptionResponse,
    SubscriptionStatsResponse,
)
from .users import (
    BanRequest,
    ChannelAnalyticsResponse,
    ProfileUpdateRequest,
    UserListResponse,
    UserProfileResponse,
)
from .videos import (
    ProgressResponse,
    ProgressUpdate,
    ReactionRequest,
    ReactionResponse,
    ReactionStatusResponse,
    VideoCreate,
    VideoListResponse,
    VideoResponse,
    VideoUpdate,
)

__all__ = [
    "AuthResponse",
    "BanRequest",
    "CategoryListResponse",
    "CategoryResponse",
    "CategoryStat",
    "CategoryStatsResponse",
    "ChannelAnalyticsResponse",
    "CommentCreate",
    "CommentListResponse",
    "CommentResponse",
    "CommentUpdate",
    "LoginRequest",
    "NotificationListResponse",
    "NotificationResponse",
    "NotificationSummaryResponse",
    "PlaylistAddVideo",
    "PlaylistCreate",
    "PlaylistListResponse",
    "PlaylistResponse",
    "ProfileUpdateRequest",
    "ProgressResponse",
    "ProgressUpdate",
    "ReactionRequest",
    "ReactionResponse",
    "ReactionStatusResponse",
    "RegisterRequest",
    "SubscriptionActionResponse",
    "SubscriptionListResponse",
    "SubscriptionResponse",
    "SubscriptionStatsResponse",
    "UserListResponse",
    "UserProfileResponse",
    "VideoCreate",
    "VideoListResponse",
    "VideoResponse",
    "VideoUpdate",
]
