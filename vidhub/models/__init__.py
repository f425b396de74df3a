"""Persisted record types."""
from .base import Record, new_id, utcnow
from .category import Category
from .comment import Comment
from .notification import Notification, NotificationType
from .playlist import Playlist, PlaylistEntry
from .progress import VideoProgress
from .reaction import Reaction, ReactionType
from .snapshot import COLLECTIONS, CollectionName, Snapshot
from .subscription import Subscription
from .user import User
from .video import BASELINE_ALGORITHM_SCORE, Privacy, Video, VideoStatus

__all__ = [
    "BASELINE_ALGORITHM_SCORE",
    "COLLECTIONS",
    "Category",
    "CollectionName",
    "Comment",
    "Notification",
    "NotificationType",
    "Playlist",
    "PlaylistEntry",
    "Privacy",
    "Reaction",
    "ReactionType",
    "Record",
    "Snapshot",
    "Subscription",
    "User",
    "Video",
    "VideoProgress",
    "VideoStatus",
    "new_id",
    "utcnow",
]
