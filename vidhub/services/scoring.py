"""Per-video engagement signals shared by the counter engine and the feed.

``algorithm_score`` starts at the neutral baseline and moves with engagement,
bounded to ``(ALGORITHM_SCORE_MIN, ALGORITHM_SCORE_MAX)``:

    signal = 0.1 * views + 2 * likes + 3 * comments - 2 * dislikes
    algorithm_score = 100 + 100 * tanh(signal / 50)

``engagement_rate`` is ``(likes + comments) / views`` capped at 1, and 0 when a
video has no views yet.
"""
from __future__ import annotations

import math

from ..models import BASELINE_ALGORITHM_SCORE, Video

ALGORITHM_SCORE_MIN = 0.0
ALGORITHM_SCORE_MAX = 2 * BASELINE_ALGORITHM_SCORE

VIEW_WEIGHT = 0.1
LIKE_WEIGHT = 2.0
COMMENT_WEIGHT = 3.0
DISLIKE_WEIGHT = 2.0
SIGNAL_SCALE = 50.0


def engagement_signal(views: int, likes: int, comments: int, dislikes: int) -> float:
    return VIEW_WEIGHT * views + LIKE_WEIGHT * likes + COMMENT_WEIGHT * comments - DISLIKE_WEIGHT * dislikes


def compute_algorithm_score(views: int, likes: int, comments: int, dislikes: int) -> float:
    signal = engagement_signal(views, likes, comments, dislikes)
    score = BASELINE_ALGORITHM_SCORE + BASELINE_ALGORITHM_SCORE * math.tanh(signal / SIGNAL_SCALE)
    return min(ALGORITHM_SCORE_MAX, max(ALGORITHM_SCORE_MIN, score))


def compute_engagement_rate(views: int, likes: int, comments: int) -> float:
    if views <= 0:
        return 0.0
    return min(1.0, (likes + comments) / views)


def refresh_video_metrics(video: Video) -> None:
    """Recompute the derived ranking inputs after any counter change."""

    video.engagement_rate = compute_engagement_rate(video.views, video.likes, video.comments)
    video.algorithm_score = compute_algorithm_score(video.views, video.likes, video.comments, video.dislikes)


__all__ = [
    "ALGORITHM_SCORE_MAX",
    "ALGORITHM_SCORE_MIN",
    "compute_algorithm_score",
    "compute_engagement_rate",
    "engagement_signal",
    "refresh_video_metrics",
]
