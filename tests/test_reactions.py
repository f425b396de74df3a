"""Like/dislike toggle behaviour for videos and comments."""
from __future__ import annotations

import pytest

from vidhub.errors import NotFoundError
from vidhub.models import Privacy, ReactionType
from vidhub.services import audit_counters, create_comment
from vidhub.services.reaction_service import (
    ReactionState,
    ReactionTarget,
    get_reaction_state,
    next_state,
    toggle_reaction,
)

LIKE = ReactionType.LIKE
DISLIKE = ReactionType.DISLIKE


@pytest.mark.parametrize(
    "current, action, expected",
    [
        (ReactionState.NONE, LIKE, ReactionState.LIKED),
        (ReactionState.NONE, DISLIKE, ReactionState.DISLIKED),
        (ReactionState.LIKED, LIKE, ReactionState.NONE),
        (ReactionState.LIKED, DISLIKE, ReactionState.DISLIKED),
        (ReactionState.DISLIKED, DISLIKE, ReactionState.NONE),
        (ReactionState.DISLIKED, LIKE, ReactionState.LIKED),
    ],
)
def test_transition_table(current, action, expected) -> None:
    assert next_state(current, action) == expected


def test_like_switch_and_clear_sequence(store, make_user, make_video) -> None:
    owner = make_user("owner")
    viewer = make_user("viewer")
    video = make_video(owner)
    target = ReactionTarget.video(video.id)

    first = toggle_reaction(store, user_id=viewer.id, target=target, reaction=LIKE)
    assert (first.likes, first.dislikes, first.state) == (1, 0, ReactionState.LIKED)

    second = toggle_reaction(store, user_id=viewer.id, target=target, reaction=DISLIKE)
    assert (second.likes, second.dislikes, second.state) == (0, 1, ReactionState.DISLIKED)

    third = toggle_reaction(store, user_id=viewer.id, target=target, reaction=DISLIKE)
    assert (third.likes, third.dislikes, third.state) == (0, 0, ReactionState.NONE)

    assert store.query("reactions") == []
    assert get_reaction_state(store, user_id=viewer.id, target=target) == ReactionState.NONE
    assert audit_counters(store.snapshot()) == []


def test_pressing_twice_returns_to_start(store, make_user, make_video) -> None:
    owner = make_user("owner")
    viewer = make_user("viewer")
    video = make_video(owner)
    target = ReactionTarget.video(video.id)

    toggle_reaction(store, user_id=viewer.id, target=target, reaction=LIKE)
    toggle_reaction(store, user_id=viewer.id, target=target, reaction=LIKE)

    stored = store.get("videos", video.id)
    assert (stored.likes, stored.dislikes) == (0, 0)


def test_one_row_per_user_and_target(store, make_user, make_video) -> None:
    owner = make_user("owner")
    viewers = [make_user(f"viewer{i}") for i in range(3)]
    video = make_video(owner)
    target = ReactionTarget.video(video.id)

    for viewer in viewers:
        toggle_reaction(store, user_id=viewer.id, target=target, reaction=LIKE)
        toggle_reaction(store, user_id=viewer.id, target=target, reaction=DISLIKE)
    toggle_reaction(store, user_id=viewers[0].id, target=target, reaction=LIKE)

    rows = store.query("reactions")
    assert len(rows) == 3
    assert len({row.user_id for row in rows}) == 3
    stored = store.get("videos", video.id)
    assert (stored.likes, stored.dislikes) == (1, 2)
    assert audit_counters(store.snapshot()) == []


def test_reactions_move_algorithm_score(store, make_user, make_video) -> None:
    owner = make_user("owner")
    viewer = make_user("viewer")
    video = make_video(owner)

    toggle_reaction(store, user_id=viewer.id, target=ReactionTarget.video(video.id), reaction=LIKE)
    liked = store.get("videos", video.id)
    toggle_reaction(store, user_id=viewer.id, target=ReactionTarget.video(video.id), reaction=DISLIKE)
    disliked = store.get("videos", video.id)

    assert liked.algorithm_score > video.algorithm_score > disliked.algorithm_score


def test_comment_reactions_use_comment_counters(store, make_user, make_video) -> None:
    owner = make_user("owner")
    viewer = make_user("viewer")
    video = make_video(owner)
    comment = create_comment(store, video_id=video.id, author_id=owner.id, content="First!")

    counts = toggle_reaction(store, user_id=viewer.id, target=ReactionTarget.comment(comment.id), reaction=LIKE)

    assert (counts.likes, counts.dislikes, counts.state) == (1, 0, ReactionState.LIKED)
    assert store.get("comments", comment.id).likes == 1
    assert store.get("videos", video.id).likes == 0
    assert audit_counters(store.snapshot()) == []


def test_unknown_target_is_rejected_without_writing(store, make_user) -> None:
    viewer = make_user("viewer")

    with pytest.raises(NotFoundError):
        toggle_reaction(store, user_id=viewer.id, target=ReactionTarget.video("missing"), reaction=LIKE)

    assert store.query("reactions") == []


def test_private_video_reactions_are_limited_to_owner_and_admins(store, make_user, make_video) -> None:
    owner = make_user("owner")
    stranger = make_user("stranger")
    admin = make_user("admin", is_admin=True)
    video = make_video(owner, privacy=Privacy.PRIVATE)
    comment = create_comment(store, video_id=video.id, author_id=owner.id, content="Draft notes")

    for target in (ReactionTarget.video(video.id), ReactionTarget.comment(comment.id)):
        with pytest.raises(NotFoundError):
            toggle_reaction(store, user_id=stranger.id, target=target, reaction=LIKE)
        with pytest.raises(NotFoundError):
            get_reaction_state(store, user_id=stranger.id, target=target)
    assert store.query("reactions") == []

    assert toggle_reaction(store, user_id=owner.id, target=ReactionTarget.video(video.id), reaction=LIKE).likes == 1
    counts = toggle_reaction(store, user_id=admin.id, target=ReactionTarget.comment(comment.id), reaction=DISLIKE)
    assert counts.dislikes == 1
    assert audit_counters(store.snapshot()) == []
