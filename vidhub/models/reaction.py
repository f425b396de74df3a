"""Like/dislike rows for videos and comments."""
from __future__ import annotations

from enum import StrEnum

from pydantic import model_validator

from .base import Record


class ReactionType(StrEnum):
    LIKE = "like"
    DISLIKE = "dislike"


class Reaction(Record):
    user_id: str
    video_id: str | None = None
    comment_id: str | None = None
    type: ReactionType

    @model_validator(mode="after")
    def _exactly_one_target(self) -> "Reaction":
        if (self.video_id is None) == (self.comment_id is None):
            raise ValueError("A reaction must reference exactly one of video_id or comment_id")
        return self


__all__ = ["Reaction", "ReactionType"]
