"""Comment record; ``parent_id`` links replies into threads."""
from __future__ import annotations

from pydantic import Field

from .base import Record


class Comment(Record):
    video_id: str
    author_id: str
    content: str
    parent_id: str | None = None
    likes: int = Field(default=0, ge=0)
    dislikes: int = Field(default=0, ge=0)


__all__ = ["Comment"]
