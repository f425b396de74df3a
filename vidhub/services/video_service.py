"""Business logic for video uploads, edits, views and scheduled publishing."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from ..database import EntityStore
from ..errors import NotFoundError, UnauthorizedError, ValidationFailedError
from ..models import NotificationType, Privacy, Snapshot, User, Video, VideoStatus
from ..schemas import VideoCreate, VideoUpdate
from .counters import adjust_video_count, record_views
from .lookups import ensure_video_visible, require_user, require_video
from .notification_service import queue_notification
from .scoring import refresh_video_metrics

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _clean_tags(tags: list[str]) -> list[str]:
    seen: list[str] = []
    for tag in tags:
        normalized = tag.strip().lower()
        if normalized and normalized not in seen:
            seen.append(normalized)
    return seen


def _apply_lifecycle(video: Video, status: VideoStatus, scheduled_at: datetime | None, now: datetime) -> None:
    if status == VideoStatus.SCHEDULED:
        if scheduled_at is None or scheduled_at <= now:
            raise ValidationFailedError("Scheduled videos need a future scheduled_at")
        video.scheduled_at = scheduled_at
    elif status == VideoStatus.PUBLISHED:
        video.scheduled_at = None
        if video.published_at is None:
            video.published_at = now
    video.status = status


def _can_manage(video: Video, user: User) -> bool:
    return video.owner_id == user.id or user.is_admin


def create_video(store: EntityStore, *, owner_id: str, payload: VideoCreate, now: datetime | None = None) -> Video:
    """Create a video record for ``owner_id`` and bump their video count."""

    moment = _as_utc(now) or datetime.now(timezone.utc)
    scheduled_at = _as_utc(payload.scheduled_at)

    def _apply(snapshot: Snapshot) -> Video:
        owner = require_user(snapshot, owner_id)
        video = Video(
            owner_id=owner_id,
            title=payload.title.strip(),
            description=payload.description,
            video_url=payload.video_url,
            thumbnail_url=payload.thumbnail_url,
            duration=payload.duration,
            category=payload.category,
            tags=_clean_tags(payload.tags),
            privacy=payload.privacy,
        )
        _apply_lifecycle(video, payload.status, scheduled_at, moment)
        refresh_video_metrics(video)
        snapshot.videos.append(video)
        adjust_video_count(owner, 1)
        return video

    video = store.mutate(_apply)
    logger.info("Video %s created by %s (%s)", video.id, owner_id, video.status)
    return video


def get_video(store: EntityStore, video_id: str, *, viewer: User | None = None) -> Video:
    """Return a video; private ones are visible to their owner and admins only."""

    video = store.get("videos", video_id)
    if video is None:
        raise NotFoundError("Video not found")
    return ensure_video_visible(video, viewer)


def list_videos(
    store: EntityStore,
    *,
    owner_id: str | None = None,
    category: str | None = None,
    search: str | None = None,
    include_unlisted: bool = False,
) -> list[Video]:
    needle = (search or "").strip().lower()

    def _matches(video: Video) -> bool:
        if owner_id is not None and video.owner_id != owner_id:
            return False
        if not include_unlisted and not video.is_listed:
            return False
        if category and category.lower() != "all" and (video.category or "").lower() != category.lower():
            return False
        if needle:
            haystack = " ".join([video.title, video.description or "", *video.tags]).lower()
            if needle not in haystack:
                return False
        return True

    videos = store.query("videos", _matches)
    return sorted(videos, key=lambda video: video.created_at, reverse=True)


def update_video(store: EntityStore, *, video_id: str, user: User, changes: VideoUpdate) -> Video:
    updates = changes.model_dump(exclude_unset=True)
    if not updates:
        raise ValidationFailedError("No changes detected")
    moment = datetime.now(timezone.utc)

    def _apply(snapshot: Snapshot) -> Video:
        video = require_video(snapshot, video_id)
        if not _can_manage(video, user):
            raise UnauthorizedError("Not allowed to edit this video")

        status = updates.pop("status", None)
        scheduled_at = _as_utc(updates.pop("scheduled_at", None))
        if "tags" in updates and updates["tags"] is not None:
            updates["tags"] = _clean_tags(updates["tags"])
        for field, value in updates.items():
            if value is not None or field in {"description", "thumbnail_url", "category"}:
                setattr(video, field, value)
        if status is not None or scheduled_at is not None:
            _apply_lifecycle(video, status or video.status, scheduled_at or _as_utc(video.scheduled_at), moment)
        video.touch()
        return video

    return store.mutate(_apply)


def delete_video(store: EntityStore, *, video_id: str, user: User) -> None:
    """Delete a video together with everything that hangs off it.

    Comments, reactions on the video and on its comments, progress rows and
    playlist entries go with it; the owner's counters are reduced accordingly.
    """

    def _apply(snapshot: Snapshot) -> Video:
        video = require_video(snapshot, video_id)
        if not _can_manage(video, user):
            raise UnauthorizedError("Not allowed to delete this video")

        comment_ids = {comment.id for comment in snapshot.comments if comment.video_id == video_id}
        snapshot.comments = [comment for comment in snapshot.comments if comment.video_id != video_id]
        snapshot.reactions = [
            reaction
            for reaction in snapshot.reactions
            if reaction.video_id != video_id and reaction.comment_id not in comment_ids
        ]
        snapshot.progress = [row for row in snapshot.progress if row.video_id != video_id]
        for playlist in snapshot.playlists:
            kept = [entry for entry in playlist.entries if entry.video_id != video_id]
            if len(kept) != len(playlist.entries):
                for position, entry in enumerate(sorted(kept, key=lambda item: item.position)):
                    entry.position = position
                playlist.entries = kept
                playlist.touch()
        snapshot.videos.remove(video)

        owner = snapshot.find("users", video.owner_id)
        if owner is not None:
            adjust_video_count(owner, -1)
            owner.total_views = max(0, owner.total_views - video.views)
        return video

    video = store.mutate(_apply)
    logger.info("Video %s deleted by %s", video.id, user.username)


def increment_views(store: EntityStore, video_id: str, count: int = 1) -> Video:
    if count < 1:
        raise ValidationFailedError("View count increment must be positive")

    def _apply(snapshot: Snapshot) -> Video:
        video = require_video(snapshot, video_id)
        record_views(video, snapshot.find("users", video.owner_id), count)
        return video

    return store.mutate(_apply)


def publish_due_videos(store: EntityStore, now: datetime | None = None) -> list[Video]:
    """Publish every scheduled video whose time has come and notify subscribers."""

    moment = _as_utc(now) or datetime.now(timezone.utc)

    def _apply(snapshot: Snapshot) -> list[Video]:
        published: list[Video] = []
        for video in snapshot.videos:
            if video.status != VideoStatus.SCHEDULED or video.scheduled_at is None:
                continue
            if _as_utc(video.scheduled_at) > moment:
                continue
            video.status = VideoStatus.PUBLISHED
            video.published_at = moment
            video.scheduled_at = None
            video.touch()
            published.append(video)
            if video.privacy != Privacy.PUBLIC:
                continue
            for subscription in snapshot.subscriptions:
                if subscription.channel_id != video.owner_id or not subscription.notifications_enabled:
                    continue
                queue_notification(
                    snapshot,
                    recipient_id=subscription.subscriber_id,
                    sender_id=video.owner_id,
                    type_=NotificationType.VIDEO_PUBLISHED,
                    content=f"New video: {video.title}",
                    payload={"video_id": video.id},
                )
        return published

    # Skip the write entirely when nothing is due.
    due = store.read(
        lambda snapshot: any(
            video.status == VideoStatus.SCHEDULED
            and video.scheduled_at is not None
            and _as_utc(video.scheduled_at) <= moment
            for video in snapshot.videos
        )
    )
    if not due:
        return []

    published = store.mutate(_apply)
    for video in published:
        logger.info("Published scheduled video %s", video.id)
    return published


__all__ = [
    "create_video",
    "delete_video",
    "get_video",
    "increment_views",
    "list_videos",
    "publish_due_videos",
    "update_video",
]
