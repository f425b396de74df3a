"""Row lookups used inside store closures."""
from __future__ import annotations

from ..errors import NotFoundError
from ..models import Comment, Playlist, Privacy, Snapshot, User, Video


def require_user(snapshot: Snapshot, user_id: str) -> User:
    user = snapshot.find("users", user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def require_video(snapshot: Snapshot, video_id: str) -> Video:
    video = snapshot.find("videos", video_id)
    if video is None:
        raise NotFoundError("Video not found")
    return video


def ensure_video_visible(video: Video, viewer: User | None) -> Video:
    """Private videos exist only for their owner and admins."""

    if video.privacy != Privacy.PRIVATE:
        return video
    if viewer is None or (viewer.id != video.owner_id and not viewer.is_admin):
        raise NotFoundError("Video not found")
    return video


def require_comment(snapshot: Snapshot, comment_id: str) -> Comment:
    comment = snapshot.find("comments", comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def require_playlist(snapshot: Snapshot, playlist_id: str) -> Playlist:
    playlist = snapshot.find("playlists", playlist_id)
    if playlist is None:
        raise NotFoundError("Playlist not found")
    return playlist


def find_user_by_username(snapshot: Snapshot, username: str) -> User | None:
    needle = username.strip().lower()
    return next((user for user in snapshot.users if user.username.lower() == needle), None)


def find_user_by_email(snapshot: Snapshot, email: str) -> User | None:
    needle = email.strip().lower()
    return next((user for user in snapshot.users if user.email.lower() == needle), None)


__all__ = [
    "ensure_video_visible",
    "find_user_by_email",
    "find_user_by_username",
    "require_comment",
    "require_playlist",
    "require_user",
    "require_video",
]
