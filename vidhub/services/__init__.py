"""Convenience exports for service layer."""
from .auth_service import (
    authenticate_user,
    create_access_token,
    decode_access_token,
    get_current_user,
    get_optional_user,
    register_user,
    require_admin,
)
from .category_service import category_stats, list_categories
from .comment_service import create_comment, delete_comment, list_comments, update_comment
from .counters import CounterDrift, audit_counters
from .notification_service import (
    add_notification,
    count_unread_notifications,
    delete_notification,
    list_notifications,
    mark_all_read,
    mark_read,
)
from .playlist_service import (
    add_video_to_playlist,
    create_playlist,
    delete_playlist,
    get_playlist,
    list_playlists,
    remove_video_from_playlist,
)
from .profile_service import (
    channel_analytics,
    get_user,
    get_user_by_username,
    list_users,
    set_ban_state,
    update_profile,
)
from .progress_service import get_progress, update_progress, watch_history
from .ranking_service import FeedMode, load_feed, rank_feed
from .reaction_service import (
    ReactionCounts,
    ReactionState,
    ReactionTarget,
    get_reaction_state,
    next_state,
    toggle_reaction,
)
from .realtime import (
    RoomBroadcaster,
    join_room,
    leave_room,
    notify_new_comment,
    notify_reaction_updated,
    room_broadcaster,
)
from .subscription_service import (
    SubscriptionStats,
    get_subscription_stats,
    is_subscribed,
    list_subscriptions,
    subscribe,
    unsubscribe,
)
from .video_service import (
    create_video,
    delete_video,
    get_video,
    increment_views,
    list_videos,
    publish_due_videos,
    update_video,
)

__all__ = [
    "CounterDrift",
    "FeedMode",
    "ReactionCounts",
    "ReactionState",
    "ReactionTarget",
    "RoomBroadcaster",
    "SubscriptionStats",
    "add_notification",
    "add_video_to_playlist",
    "audit_counters",
    "authenticate_user",
    "category_stats",
    "channel_analytics",
    "count_unread_notifications",
    "create_access_token",
    "create_comment",
    "create_playlist",
    "create_video",
    "decode_access_token",
    "delete_comment",
    "delete_notification",
    "delete_playlist",
    "delete_video",
    "get_current_user",
    "get_optional_user",
    "get_playlist",
    "get_progress",
    "get_reaction_state",
    "get_subscription_stats",
    "get_user",
    "get_user_by_username",
    "get_video",
    "increment_views",
    "is_subscribed",
    "join_room",
    "leave_room",
    "list_categories",
    "list_comments",
    "list_notifications",
    "list_playlists",
    "list_subscriptions",
    "list_users",
    "list_videos",
    "load_feed",
    "mark_all_read",
    "mark_read",
    "next_state",
    "notify_new_comment",
    "notify_reaction_updated",
    "publish_due_videos",
    "rank_feed",
    "register_user",
    "remove_video_from_playlist",
    "require_admin",
    "room_broadcaster",
    "set_ban_state",
    "subscribe",
    "toggle_reaction",
    "unsubscribe",
    "update_comment",
    "update_profile",
    "update_video",
    "watch_history",
]
