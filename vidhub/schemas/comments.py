"""Schemas for threaded video comments."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..constants import MAX_COMMENT_LENGTH


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=MAX_COMMENT_LENGTH)
    parent_id: str | None = None


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=MAX_COMMENT_LENGTH)


class CommentResponse(BaseModel):
    id: str
    video_id: str
    author_id: str
    username: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
    content: str
    parent_id: str | None = None
    likes: int = 0
    dislikes: int = 0
    created_at: datetime
    updated_at: datetime
    replies: list["CommentResponse"] = Field(default_factory=list)


class CommentListResponse(BaseModel):
    items: list[CommentResponse]


CommentResponse.model_rebuild()
