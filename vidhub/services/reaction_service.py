"""Like/dislike toggling for videos and comments.

Per (user, target) there is at most one reaction row, so a user is always in
one of three states. Pressing the reaction that is already active clears it;
pressing the other one switches it:

    none     + like    -> liked       none     + dislike -> disliked
    liked    + like    -> none        liked    + dislike -> disliked
    disliked + dislike -> none        disliked + like    -> liked

The read, the transition and both counter adjustments run inside one store
mutation.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..database import EntityStore
from ..models import Comment, Reaction, ReactionType, Snapshot, User, Video
from .counters import apply_reaction_delta
from .lookups import ensure_video_visible, require_comment, require_user, require_video


class ReactionState(StrEnum):
    NONE = "none"
    LIKED = "liked"
    DISLIKED = "disliked"


class TargetKind(StrEnum):
    VIDEO = "video"
    COMMENT = "comment"


@dataclass(frozen=True, slots=True)
class ReactionTarget:
    kind: TargetKind
    id: str

    @classmethod
    def video(cls, video_id: str) -> "ReactionTarget":
        return cls(TargetKind.VIDEO, video_id)

    @classmethod
    def comment(cls, comment_id: str) -> "ReactionTarget":
        return cls(TargetKind.COMMENT, comment_id)


@dataclass(slots=True)
class ReactionCounts:
    target_kind: TargetKind
    target_id: str
    likes: int
    dislikes: int
    state: ReactionState


_ACTIVE_STATE = {
    ReactionType.LIKE: ReactionState.LIKED,
    ReactionType.DISLIKE: ReactionState.DISLIKED,
}


def next_state(current: ReactionState, action: ReactionType) -> ReactionState:
    """Pure transition function of the toggle state machine."""

    wanted = _ACTIVE_STATE[ReactionType(action)]
    return ReactionState.NONE if current == wanted else wanted


def _state_of(reaction: Reaction | None) -> ReactionState:
    if reaction is None:
        return ReactionState.NONE
    return _ACTIVE_STATE[reaction.type]


def _resolve_target(snapshot: Snapshot, target: ReactionTarget, viewer: User | None) -> Video | Comment:
    if target.kind == TargetKind.VIDEO:
        return ensure_video_visible(require_video(snapshot, target.id), viewer)
    comment = require_comment(snapshot, target.id)
    ensure_video_visible(require_video(snapshot, comment.video_id), viewer)
    return comment


def _find_reaction(snapshot: Snapshot, user_id: str, target: ReactionTarget) -> Reaction | None:
    for reaction in snapshot.reactions:
        if reaction.user_id != user_id:
            continue
        if target.kind == TargetKind.VIDEO and reaction.video_id == target.id:
            return reaction
        if target.kind == TargetKind.COMMENT and reaction.comment_id == target.id:
            return reaction
    return None


def toggle_reaction(
    store: EntityStore,
    *,
    user_id: str,
    target: ReactionTarget,
    reaction: ReactionType | str,
) -> ReactionCounts:
    """Apply one like/dislike press and return the target's fresh counters."""

    action = ReactionType(reaction)

    def _apply(snapshot: Snapshot) -> ReactionCounts:
        user = require_user(snapshot, user_id)
        row = _resolve_target(snapshot, target, user)
        existing = _find_reaction(snapshot, user_id, target)
        new_state = next_state(_state_of(existing), action)

        if existing is not None:
            apply_reaction_delta(row, existing.type, -1)

        if new_state == ReactionState.NONE:
            if existing is not None:
                snapshot.reactions.remove(existing)
        elif existing is None:
            snapshot.reactions.append(
                Reaction(
                    user_id=user_id,
                    video_id=target.id if target.kind == TargetKind.VIDEO else None,
                    comment_id=target.id if target.kind == TargetKind.COMMENT else None,
                    type=action,
                )
            )
        else:
            existing.type = action
            existing.touch()

        if new_state != ReactionState.NONE:
            apply_reaction_delta(row, action, 1)

        return ReactionCounts(
            target_kind=target.kind,
            target_id=target.id,
            likes=row.likes,
            dislikes=row.dislikes,
            state=new_state,
        )

    return store.mutate(_apply)


def get_reaction_state(store: EntityStore, *, user_id: str, target: ReactionTarget) -> ReactionState:
    def _read(snapshot: Snapshot) -> ReactionState:
        _resolve_target(snapshot, target, snapshot.find("users", user_id))
        return _state_of(_find_reaction(snapshot, user_id, target))

    return store.read(_read)


__all__ = [
    "ReactionCounts",
    "ReactionState",
    "ReactionTarget",
    "TargetKind",
    "get_reaction_state",
    "next_state",
    "toggle_reaction",
]
