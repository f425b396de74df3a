"""Playlist API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..database import EntityStore, get_store
from ..models import Playlist, User
from ..schemas import PlaylistAddVideo, PlaylistCreate, PlaylistListResponse, PlaylistResponse
from ..services import (
    add_video_to_playlist,
    create_playlist,
    delete_playlist,
    get_current_user,
    get_optional_user,
    get_playlist,
    list_playlists,
    remove_video_from_playlist,
)

router = APIRouter(prefix="/playlists", tags=["playlists"])


def _to_playlist_response(playlist: Playlist) -> PlaylistResponse:
    return PlaylistResponse(
        id=playlist.id,
        owner_id=playlist.owner_id,
        title=playlist.title,
        description=playlist.description,
        thumbnail_url=playlist.thumbnail_url,
        privacy=playlist.privacy,
        video_ids=playlist.video_ids,
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
    )


@router.post("/", response_model=PlaylistResponse, status_code=status.HTTP_201_CREATED)
async def create_playlist_endpoint(
    payload: PlaylistCreate,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> PlaylistResponse:
    return _to_playlist_response(create_playlist(store, owner_id=current_user.id, payload=payload))


@router.get("/user/{user_id}", response_model=PlaylistListResponse)
async def list_user_playlists(
    user_id: str,
    viewer: User | None = Depends(get_optional_user),
    store: EntityStore = Depends(get_store),
) -> PlaylistListResponse:
    records = list_playlists(store, owner_id=user_id, viewer=viewer)
    return PlaylistListResponse(items=[_to_playlist_response(item) for item in records])


@router.get("/{playlist_id}", response_model=PlaylistResponse)
async def get_playlist_endpoint(
    playlist_id: str,
    viewer: User | None = Depends(get_optional_user),
    store: EntityStore = Depends(get_store),
) -> PlaylistResponse:
    return _to_playlist_response(get_playlist(store, playlist_id, viewer=viewer))


@router.post("/{playlist_id}/videos", response_model=PlaylistResponse)
async def add_playlist_video(
    playlist_id: str,
    payload: PlaylistAddVideo,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> PlaylistResponse:
    playlist = add_video_to_playlist(store, playlist_id=playlist_id, video_id=payload.video_id, user=current_user)
    return _to_playlist_response(playlist)


@router.delete("/{playlist_id}/videos/{video_id}", response_model=PlaylistResponse)
async def remove_playlist_video(
    playlist_id: str,
    video_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> PlaylistResponse:
    playlist = remove_video_from_playlist(store, playlist_id=playlist_id, video_id=video_id, user=current_user)
    return _to_playlist_response(playlist)


@router.delete("/{playlist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_playlist_endpoint(
    playlist_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> None:
    delete_playlist(store, playlist_id=playlist_id, user=current_user)


__all__ = ["router"]
