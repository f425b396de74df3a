"""Counter-update rules applied inside store mutations.

Every function here is called from within an :meth:`EntityStore.mutate` closure
alongside the detail-row change it accounts for, so a counter and the rows it
summarises are always written in the same step. Decrements floor at zero.
"""
from __future__ import annotations

from dataclasses import dataclass

from ..models import Comment, ReactionType, Snapshot, User, Video
from .scoring import refresh_video_metrics


@dataclass(slots=True)
class CounterDrift:
    collection: str
    record_id: str
    field: str
    stored: int
    actual: int


def _shift(current: int, delta: int) -> int:
    return max(0, current + delta)


def apply_reaction_delta(target: Video | Comment, reaction: ReactionType, delta: int) -> None:
    """Add ``delta`` to the like or dislike counter of ``target``."""

    if reaction == ReactionType.LIKE:
        target.likes = _shift(target.likes, delta)
    else:
        target.dislikes = _shift(target.dislikes, delta)
    if isinstance(target, Video):
        refresh_video_metrics(target)
    target.touch()


def adjust_comment_count(video: Video, delta: int) -> None:
    video.comments = _shift(video.comments, delta)
    refresh_video_metrics(video)
    video.touch()


def adjust_subscriber_count(channel: User, delta: int) -> None:
    channel.subscriber_count = _shift(channel.subscriber_count, delta)
    channel.touch()


def adjust_video_count(owner: User, delta: int) -> None:
    owner.video_count = _shift(owner.video_count, delta)
    owner.touch()


def record_views(video: Video, owner: User | None, count: int = 1) -> None:
    video.views = _shift(video.views, count)
    refresh_video_metrics(video)
    if owner is not None:
        owner.total_views = _shift(owner.total_views, count)


def audit_counters(snapshot: Snapshot) -> list[CounterDrift]:
    """Compare every stored counter with a recount of its detail rows."""

    drifts: list[CounterDrift] = []

    def _check(collection: str, record_id: str, field: str, stored: int, actual: int) -> None:
        if stored != actual:
            drifts.append(CounterDrift(collection, record_id, field, stored, actual))

    for video in snapshot.videos:
        likes = sum(1 for r in snapshot.reactions if r.video_id == video.id and r.type == ReactionType.LIKE)
        dislikes = sum(1 for r in snapshot.reactions if r.video_id == video.id and r.type == ReactionType.DISLIKE)
        comments = sum(1 for c in snapshot.comments if c.video_id == video.id)
        _check("videos", video.id, "likes", video.likes, likes)
        _check("videos", video.id, "dislikes", video.dislikes, dislikes)
        _check("videos", video.id, "comments", video.comments, comments)

    for comment in snapshot.comments:
        likes = sum(1 for r in snapshot.reactions if r.comment_id == comment.id and r.type == ReactionType.LIKE)
        dislikes = sum(1 for r in snapshot.reactions if r.comment_id == comment.id and r.type == ReactionType.DISLIKE)
        _check("comments", comment.id, "likes", comment.likes, likes)
        _check("comments", comment.id, "dislikes", comment.dislikes, dislikes)

    for user in snapshot.users:
        subscribers = sum(1 for s in snapshot.subscriptions if s.channel_id == user.id)
        owned = [v for v in snapshot.videos if v.owner_id == user.id]
        _check("users", user.id, "subscriber_count", user.subscriber_count, subscribers)
        _check("users", user.id, "video_count", user.video_count, len(owned))
        _check("users", user.id, "total_views", user.total_views, sum(v.views for v in owned))

    return drifts


__all__ = [
    "CounterDrift",
    "adjust_comment_count",
    "adjust_subscriber_count",
    "adjust_video_count",
    "apply_reaction_delta",
    "audit_counters",
    "record_views",
]
