"""Playlist management."""
from __future__ import annotations

from ..database import EntityStore
from ..errors import ConflictError, NotFoundError, UnauthorizedError
from ..models import Playlist, PlaylistEntry, Privacy, Snapshot, User
from ..schemas import PlaylistCreate
from .lookups import require_playlist, require_user, require_video


def _require_owned(snapshot: Snapshot, playlist_id: str, user: User) -> Playlist:
    playlist = require_playlist(snapshot, playlist_id)
    if playlist.owner_id != user.id:
        raise UnauthorizedError("Not allowed to modify this playlist")
    return playlist


def create_playlist(store: EntityStore, *, owner_id: str, payload: PlaylistCreate) -> Playlist:
    def _apply(snapshot: Snapshot) -> Playlist:
        require_user(snapshot, owner_id)
        playlist = Playlist(
            owner_id=owner_id,
            title=payload.title.strip(),
            description=payload.description,
            thumbnail_url=payload.thumbnail_url,
            privacy=payload.privacy,
        )
        snapshot.playlists.append(playlist)
        return playlist

    return store.mutate(_apply)


def list_playlists(store: EntityStore, *, owner_id: str, viewer: User | None = None) -> list[Playlist]:
    """Playlists of ``owner_id``; private ones only when the owner is asking."""

    is_owner = viewer is not None and viewer.id == owner_id
    items = store.query(
        "playlists",
        lambda row: row.owner_id == owner_id and (is_owner or row.privacy != Privacy.PRIVATE),
    )
    return sorted(items, key=lambda row: row.created_at, reverse=True)


def get_playlist(store: EntityStore, playlist_id: str, *, viewer: User | None = None) -> Playlist:
    playlist = store.get("playlists", playlist_id)
    if playlist is None:
        raise NotFoundError("Playlist not found")
    if playlist.privacy == Privacy.PRIVATE and (viewer is None or viewer.id != playlist.owner_id):
        raise NotFoundError("Playlist not found")
    return playlist


def add_video_to_playlist(store: EntityStore, *, playlist_id: str, video_id: str, user: User) -> Playlist:
    def _apply(snapshot: Snapshot) -> Playlist:
        playlist = _require_owned(snapshot, playlist_id, user)
        require_video(snapshot, video_id)
        if any(entry.video_id == video_id for entry in playlist.entries):
            raise ConflictError("Video already in playlist")
        position = max((entry.position for entry in playlist.entries), default=-1) + 1
        playlist.entries.append(PlaylistEntry(video_id=video_id, position=position))
        playlist.touch()
        return playlist

    return store.mutate(_apply)


def remove_video_from_playlist(store: EntityStore, *, playlist_id: str, video_id: str, user: User) -> Playlist:
    def _apply(snapshot: Snapshot) -> Playlist:
        playlist = _require_owned(snapshot, playlist_id, user)
        kept = [entry for entry in playlist.entries if entry.video_id != video_id]
        if len(kept) == len(playlist.entries):
            raise NotFoundError("Video not in playlist")
        for position, entry in enumerate(sorted(kept, key=lambda item: item.position)):
            entry.position = position
        playlist.entries = kept
        playlist.touch()
        return playlist

    return store.mutate(_apply)


def delete_playlist(store: EntityStore, *, playlist_id: str, user: User) -> None:
    def _apply(snapshot: Snapshot) -> None:
        playlist = _require_owned(snapshot, playlist_id, user)
        snapshot.playlists.remove(playlist)

    store.mutate(_apply)


__all__ = [
    "add_video_to_playlist",
    "create_playlist",
    "delete_playlist",
    "get_playlist",
    "list_playlists",
    "remove_video_from_playlist",
]
