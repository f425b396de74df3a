"""Video related API routes: feed, CRUD, reactions, comments, views and progress."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, status

from ..config import get_settings
from ..constants import MAX_PAGE_SIZE
from ..database import EntityStore, get_store
from ..models import User
from ..schemas import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    ProgressResponse,
    ProgressUpdate,
    ReactionRequest,
    ReactionResponse,
    ReactionStatusResponse,
    VideoCreate,
    VideoListResponse,
    VideoResponse,
    VideoUpdate,
)
from ..services import (
    FeedMode,
    ReactionCounts,
    ReactionTarget,
    create_comment,
    create_video,
    delete_video,
    get_current_user,
    get_optional_user,
    get_progress,
    get_reaction_state,
    get_video,
    increment_views,
    list_comments,
    list_videos,
    load_feed,
    notify_new_comment,
    notify_reaction_updated,
    toggle_reaction,
    update_progress,
    update_video,
    watch_history,
)

router = APIRouter(prefix="/videos", tags=["videos"])

logger = logging.getLogger(__name__)


def _to_reaction_response(counts: ReactionCounts) -> ReactionResponse:
    return ReactionResponse(
        target_id=counts.target_id,
        likes=counts.likes,
        dislikes=counts.dislikes,
        state=counts.state.value,
    )


def _to_comment_response(comment: Any, author: User) -> CommentResponse:
    return CommentResponse(
        **comment.model_dump(),
        username=author.username,
        display_name=author.display_name,
        avatar_url=author.avatar_url,
    )


async def _safe_room_broadcast(coro: Any) -> None:
    try:
        await coro
    except Exception:  # pragma: no cover - best effort logging
        logger.exception("Failed to broadcast room update")


@router.get("/", response_model=VideoListResponse)
async def list_videos_endpoint(
    owner_id: str | None = None,
    category: str | None = None,
    search: str | None = Query(default=None, max_length=200),
    store: EntityStore = Depends(get_store),
) -> VideoListResponse:
    videos = list_videos(store, owner_id=owner_id, category=category, search=search)
    return VideoListResponse(items=[VideoResponse.model_validate(video) for video in videos])


@router.get("/feed", response_model=VideoListResponse)
async def feed_endpoint(
    mode: FeedMode = FeedMode.FAIR,
    category: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=MAX_PAGE_SIZE),
    store: EntityStore = Depends(get_store),
) -> VideoListResponse:
    videos = load_feed(store, mode, limit=limit or get_settings().feed_limit, category=category)
    return VideoListResponse(items=[VideoResponse.model_validate(video) for video in videos])


@router.get("/trending", response_model=VideoListResponse)
async def trending_endpoint(
    limit: int | None = Query(default=None, ge=1, le=MAX_PAGE_SIZE),
    store: EntityStore = Depends(get_store),
) -> VideoListResponse:
    videos = load_feed(store, FeedMode.TRENDING, limit=limit or get_settings().feed_limit)
    return VideoListResponse(items=[VideoResponse.model_validate(video) for video in videos])


@router.get("/history", response_model=list[ProgressResponse])
async def history_endpoint(
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> list[ProgressResponse]:
    return [ProgressResponse.model_validate(row) for row, _video in watch_history(store, current_user.id)]


@router.post("/", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def create_video_endpoint(
    payload: VideoCreate,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> VideoResponse:
    video = create_video(store, owner_id=current_user.id, payload=payload)
    return VideoResponse.model_validate(video)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video_endpoint(
    video_id: str,
    viewer: User | None = Depends(get_optional_user),
    store: EntityStore = Depends(get_store),
) -> VideoResponse:
    return VideoResponse.model_validate(get_video(store, video_id, viewer=viewer))


@router.patch("/{video_id}", response_model=VideoResponse)
async def update_video_endpoint(
    video_id: str,
    payload: VideoUpdate,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> VideoResponse:
    video = update_video(store, video_id=video_id, user=current_user, changes=payload)
    return VideoResponse.model_validate(video)


@router.delete("/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_video_endpoint(
    video_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> None:
    delete_video(store, video_id=video_id, user=current_user)


@router.post("/{video_id}/view", response_model=VideoResponse)
async def view_video_endpoint(
    video_id: str,
    store: EntityStore = Depends(get_store),
) -> VideoResponse:
    return VideoResponse.model_validate(increment_views(store, video_id))


@router.post("/{video_id}/like", response_model=ReactionResponse)
async def react_to_video_endpoint(
    video_id: str,
    payload: ReactionRequest,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> ReactionResponse:
    counts = toggle_reaction(
        store,
        user_id=current_user.id,
        target=ReactionTarget.video(video_id),
        reaction=payload.type,
    )
    response = _to_reaction_response(counts)
    await _safe_room_broadcast(
        notify_reaction_updated(
            video_id,
            {"target": "video", "target_id": video_id, "likes": counts.likes, "dislikes": counts.dislikes},
        )
    )
    return response


@router.get("/{video_id}/like-status", response_model=ReactionStatusResponse)
async def video_reaction_status_endpoint(
    video_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> ReactionStatusResponse:
    state = get_reaction_state(store, user_id=current_user.id, target=ReactionTarget.video(video_id))
    return ReactionStatusResponse(state=state.value)


@router.get("/{video_id}/comments", response_model=CommentListResponse)
async def list_comments_endpoint(
    video_id: str,
    store: EntityStore = Depends(get_store),
    viewer: User | None = Depends(get_optional_user),
) -> CommentListResponse:
    threads = list_comments(store, video_id, viewer=viewer)
    return CommentListResponse(items=[CommentResponse.model_validate(item) for item in threads])


@router.post("/{video_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment_endpoint(
    video_id: str,
    payload: CommentCreate,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> CommentResponse:
    comment = create_comment(
        store,
        video_id=video_id,
        author_id=current_user.id,
        content=payload.content,
        parent_id=payload.parent_id,
    )
    response = _to_comment_response(comment, current_user)
    await _safe_room_broadcast(notify_new_comment(video_id, response.model_dump(mode="json")))
    return response


@router.get("/{video_id}/progress", response_model=ProgressResponse)
async def get_progress_endpoint(
    video_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> ProgressResponse:
    get_video(store, video_id, viewer=current_user)
    row = get_progress(store, user_id=current_user.id, video_id=video_id)
    if row is None:
        return ProgressResponse(video_id=video_id)
    return ProgressResponse.model_validate(row)


@router.put("/{video_id}/progress", response_model=ProgressResponse)
async def update_progress_endpoint(
    video_id: str,
    payload: ProgressUpdate,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> ProgressResponse:
    row = update_progress(
        store,
        user_id=current_user.id,
        video_id=video_id,
        progress=payload.progress,
        completed=payload.completed,
    )
    return ProgressResponse.model_validate(row)


__all__ = ["router"]
