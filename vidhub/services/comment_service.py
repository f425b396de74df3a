"""Threaded comments on videos."""
from __future__ import annotations

import logging
from typing import Any

from ..database import EntityStore
from ..errors import UnauthorizedError, ValidationFailedError
from ..models import Comment, NotificationType, Snapshot, User
from .counters import adjust_comment_count
from .lookups import ensure_video_visible, require_comment, require_user, require_video
from .notification_service import queue_notification

logger = logging.getLogger(__name__)


def _clean_content(content: str) -> str:
    cleaned = content.strip()
    if not cleaned:
        raise ValidationFailedError("Comment content cannot be empty")
    return cleaned


def create_comment(
    store: EntityStore,
    *,
    video_id: str,
    author_id: str,
    content: str,
    parent_id: str | None = None,
) -> Comment:
    """Add a comment (or reply) and notify the video owner and parent author."""

    text = _clean_content(content)

    def _apply(snapshot: Snapshot) -> Comment:
        author = require_user(snapshot, author_id)
        video = ensure_video_visible(require_video(snapshot, video_id), author)
        parent: Comment | None = None
        if parent_id is not None:
            parent = require_comment(snapshot, parent_id)
            if parent.video_id != video_id:
                raise ValidationFailedError("Parent comment belongs to another video")

        comment = Comment(video_id=video_id, author_id=author_id, content=text, parent_id=parent_id)
        snapshot.comments.append(comment)
        adjust_comment_count(video, 1)

        payload = {"video_id": video_id, "comment_id": comment.id}
        queue_notification(
            snapshot,
            recipient_id=video.owner_id,
            sender_id=author_id,
            type_=NotificationType.VIDEO_COMMENT,
            content=f"{author.username} commented on {video.title}",
            payload=payload,
        )
        if parent is not None and parent.author_id != video.owner_id:
            queue_notification(
                snapshot,
                recipient_id=parent.author_id,
                sender_id=author_id,
                type_=NotificationType.COMMENT_REPLY,
                content=f"{author.username} replied to your comment",
                payload=payload,
            )
        return comment

    return store.mutate(_apply)


def _describe(comment: Comment, authors: dict[str, User]) -> dict[str, Any]:
    author = authors.get(comment.author_id)
    data = comment.model_dump()
    data["username"] = author.username if author else None
    data["display_name"] = author.display_name if author else None
    data["avatar_url"] = author.avatar_url if author else None
    data["replies"] = []
    return data


def list_comments(store: EntityStore, video_id: str, *, viewer: User | None = None) -> list[dict[str, Any]]:
    """Top-level comments newest first, each carrying its replies oldest first."""

    def _read(snapshot: Snapshot) -> list[dict[str, Any]]:
        ensure_video_visible(require_video(snapshot, video_id), viewer)
        authors = {user.id: user for user in snapshot.users}
        rows = [comment for comment in snapshot.comments if comment.video_id == video_id]
        described = {comment.id: _describe(comment, authors) for comment in rows}

        roots: list[dict[str, Any]] = []
        for comment in sorted(rows, key=lambda item: item.created_at):
            node = described[comment.id]
            parent = described.get(comment.parent_id) if comment.parent_id else None
            if parent is not None:
                parent["replies"].append(node)
            else:
                roots.append(node)
        roots.reverse()
        return roots

    return store.read(_read)


def update_comment(store: EntityStore, *, comment_id: str, user: User, content: str) -> Comment:
    text = _clean_content(content)

    def _apply(snapshot: Snapshot) -> Comment:
        comment = require_comment(snapshot, comment_id)
        if comment.author_id != user.id:
            raise UnauthorizedError("Not allowed to edit this comment")
        comment.content = text
        comment.touch()
        return comment

    return store.mutate(_apply)


def delete_comment(store: EntityStore, *, comment_id: str, user: User) -> int:
    """Remove a comment with its replies and their reactions.

    The author, the video owner and admins may delete. Returns the number of
    comment rows removed.
    """

    def _apply(snapshot: Snapshot) -> int:
        comment = require_comment(snapshot, comment_id)
        video = require_video(snapshot, comment.video_id)
        if user.id not in {comment.author_id, video.owner_id} and not user.is_admin:
            raise UnauthorizedError("Not allowed to delete this comment")

        doomed = {comment.id}
        frontier = [comment.id]
        while frontier:
            current = frontier.pop()
            for candidate in snapshot.comments:
                if candidate.parent_id == current and candidate.id not in doomed:
                    doomed.add(candidate.id)
                    frontier.append(candidate.id)

        snapshot.comments = [row for row in snapshot.comments if row.id not in doomed]
        snapshot.reactions = [row for row in snapshot.reactions if row.comment_id not in doomed]
        adjust_comment_count(video, -len(doomed))
        return len(doomed)

    removed = store.mutate(_apply)
    logger.info("Deleted %d comment(s) starting at %s", removed, comment_id)
    return removed


__all__ = ["create_comment", "delete_comment", "list_comments", "update_comment"]
