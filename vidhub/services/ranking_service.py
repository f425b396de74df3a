"""Feed ordering for discovery surfaces.

Three modes are supported:

* ``fair`` mixes the bounded algorithm score and engagement with a fresh
  uniform draw per video on every call, so lower-traction uploads regularly
  surface near the top. Order is descending by score within a call and is not
  stable across calls.
* ``trending`` ranks by ``views + 2 * likes + 3 * comments`` with deterministic
  tie-breaks; a fixed input always yields the same order.
* ``latest`` is newest first.

Only public, published videos are candidates. Ranking never mutates state.
"""
from __future__ import annotations

import random
from datetime import datetime
from enum import StrEnum
from itertools import islice
from typing import Callable, Iterable, Iterator

from ..database import EntityStore
from ..models import Video
from .scoring import ALGORITHM_SCORE_MAX, compute_engagement_rate


class FeedMode(StrEnum):
    FAIR = "fair"
    TRENDING = "trending"
    LATEST = "latest"


FAIR_ALGORITHM_WEIGHT = 0.3
FAIR_ENGAGEMENT_WEIGHT = 0.2
FAIR_RANDOM_WEIGHT = 0.5

TRENDING_VIEW_WEIGHT = 1
TRENDING_LIKE_WEIGHT = 2
TRENDING_COMMENT_WEIGHT = 3


def fair_score(video: Video, draw: float) -> float:
    normalized_algorithm = max(0.0, min(1.0, video.algorithm_score / ALGORITHM_SCORE_MAX))
    engagement = compute_engagement_rate(video.views, video.likes, video.comments)
    return (
        FAIR_ALGORITHM_WEIGHT * normalized_algorithm
        + FAIR_ENGAGEMENT_WEIGHT * engagement
        + FAIR_RANDOM_WEIGHT * draw
    )


def trending_score(video: Video) -> int:
    return (
        TRENDING_VIEW_WEIGHT * video.views
        + TRENDING_LIKE_WEIGHT * video.likes
        + TRENDING_COMMENT_WEIGHT * video.comments
    )


def _recency(video: Video) -> datetime:
    return video.published_at or video.created_at


def rank_feed(
    videos: Iterable[Video],
    mode: FeedMode | str = FeedMode.FAIR,
    *,
    limit: int | None = None,
    rng: random.Random | None = None,
) -> Iterator[Video]:
    """Return a lazily consumed, ordered iterator over the listed videos."""

    feed_mode = FeedMode(mode)
    candidates = [video for video in videos if video.is_listed]

    if feed_mode == FeedMode.FAIR:
        draw: Callable[[], float] = rng.random if rng is not None else random.random
        scored = [(fair_score(video, draw()), video) for video in candidates]
        scored.sort(key=lambda item: item[0], reverse=True)
        ordered: Iterator[Video] = (video for _, video in scored)
    elif feed_mode == FeedMode.TRENDING:
        ordered = iter(
            sorted(
                candidates,
                key=lambda video: (-trending_score(video), -_recency(video).timestamp(), video.id),
            )
        )
    else:
        ordered = iter(sorted(candidates, key=lambda video: (-_recency(video).timestamp(), video.id)))

    if limit is not None:
        return islice(ordered, max(0, limit))
    return ordered


def load_feed(
    store: EntityStore,
    mode: FeedMode | str = FeedMode.FAIR,
    *,
    limit: int | None = None,
    category: str | None = None,
    owner_id: str | None = None,
) -> list[Video]:
    """Read the video collection and rank it."""

    def _matches(video: Video) -> bool:
        if category and category.lower() != "all" and (video.category or "").lower() != category.lower():
            return False
        if owner_id is not None and video.owner_id != owner_id:
            return False
        return True

    return list(rank_feed(store.query("videos", _matches), mode, limit=limit))


__all__ = [
    "FAIR_ALGORITHM_WEIGHT",
    "FAIR_ENGAGEMENT_WEIGHT",
    "FAIR_RANDOM_WEIGHT",
    "FeedMode",
    "fair_score",
    "load_feed",
    "rank_feed",
    "trending_score",
]
