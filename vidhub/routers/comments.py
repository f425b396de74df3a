"""Comment editing, deletion and reactions."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..database import EntityStore, get_store
from ..models import User
from ..schemas import CommentResponse, CommentUpdate, ReactionRequest, ReactionResponse, ReactionStatusResponse
from ..services import (
    ReactionTarget,
    delete_comment,
    get_current_user,
    get_reaction_state,
    toggle_reaction,
    update_comment,
)

router = APIRouter(prefix="/comments", tags=["comments"])


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment_endpoint(
    comment_id: str,
    payload: CommentUpdate,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> CommentResponse:
    comment = update_comment(store, comment_id=comment_id, user=current_user, content=payload.content)
    return CommentResponse(
        **comment.model_dump(),
        username=current_user.username,
        display_name=current_user.display_name,
        avatar_url=current_user.avatar_url,
    )


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment_endpoint(
    comment_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> None:
    delete_comment(store, comment_id=comment_id, user=current_user)


@router.post("/{comment_id}/like", response_model=ReactionResponse)
async def react_to_comment_endpoint(
    comment_id: str,
    payload: ReactionRequest,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> ReactionResponse:
    counts = toggle_reaction(
        store,
        user_id=current_user.id,
        target=ReactionTarget.comment(comment_id),
        reaction=payload.type,
    )
    return ReactionResponse(
        target_id=counts.target_id,
        likes=counts.likes,
        dislikes=counts.dislikes,
        state=counts.state.value,
    )


@router.get("/{comment_id}/like-status", response_model=ReactionStatusResponse)
async def comment_reaction_status_endpoint(
    comment_id: str,
    current_user: User = Depends(get_current_user),
    store: EntityStore = Depends(get_store),
) -> ReactionStatusResponse:
    state = get_reaction_state(store, user_id=current_user.id, target=ReactionTarget.comment(comment_id))
    return ReactionStatusResponse(state=state.value)


__all__ = ["router"]
