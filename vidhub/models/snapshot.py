"""The persisted document: one list per collection."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .category import Category
from .comment import Comment
from .notification import Notification
from .playlist import Playlist
from .progress import VideoProgress
from .reaction import Reaction
from .subscription import Subscription
from .user import User
from .video import Video

CollectionName = Literal[
    "users",
    "videos",
    "comments",
    "reactions",
    "subscriptions",
    "notifications",
    "categories",
    "playlists",
    "progress",
]

COLLECTIONS: tuple[str, ...] = (
    "users",
    "videos",
    "comments",
    "reactions",
    "subscriptions",
    "notifications",
    "categories",
    "playlists",
    "progress",
)


class Snapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    users: list[User] = Field(default_factory=list)
    videos: list[Video] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    reactions: list[Reaction] = Field(default_factory=list)
    subscriptions: list[Subscription] = Field(default_factory=list)
    notifications: list[Notification] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    playlists: list[Playlist] = Field(default_factory=list)
    progress: list[VideoProgress] = Field(default_factory=list)

    def collection(self, name: CollectionName | str) -> list[Any]:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {name}")
        return getattr(self, name)

    def find(self, name: CollectionName | str, record_id: str) -> Any | None:
        for row in self.collection(name):
            if row.id == record_id:
                return row
        return None


__all__ = ["COLLECTIONS", "CollectionName", "Snapshot"]
