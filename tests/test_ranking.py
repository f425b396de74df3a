"""Feed ordering in fair, trending and latest modes."""
from __future__ import annotations

import random
from collections import Counter
from datetime import datetime, timedelta, timezone

from vidhub.models import Privacy, Video, VideoStatus
from vidhub.services.ranking_service import FeedMode, fair_score, load_feed, rank_feed, trending_score
from vidhub.services.scoring import (
    ALGORITHM_SCORE_MAX,
    ALGORITHM_SCORE_MIN,
    compute_algorithm_score,
    compute_engagement_rate,
    refresh_video_metrics,
)

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _video(video_id: str, *, views: int = 0, likes: int = 0, comments: int = 0, age_minutes: int = 0, **fields) -> Video:
    video = Video(
        id=video_id,
        owner_id="owner",
        title=video_id,
        video_url=f"https://cdn.vidhub.io/{video_id}.mp4",
        views=views,
        likes=likes,
        comments=comments,
        created_at=BASE_TIME - timedelta(minutes=age_minutes),
        **fields,
    )
    refresh_video_metrics(video)
    return video


def test_trending_orders_by_weighted_engagement() -> None:
    videos = [
        _video("a", views=100),
        _video("b", views=10, likes=50),
        _video("c", views=10, comments=40),
    ]
    ordered = [video.id for video in rank_feed(videos, FeedMode.TRENDING)]
    assert ordered == ["c", "b", "a"]
    assert trending_score(videos[2]) == 130


def test_trending_is_deterministic_with_tie_breaks() -> None:
    videos = [
        _video("old", views=50, age_minutes=30),
        _video("new", views=50, age_minutes=1),
        _video("twin-b", views=50, age_minutes=10),
        _video("twin-a", views=50, age_minutes=10),
    ]
    first = [video.id for video in rank_feed(videos, FeedMode.TRENDING)]
    second = [video.id for video in rank_feed(list(reversed(videos)), FeedMode.TRENDING)]
    assert first == second == ["new", "twin-a", "twin-b", "old"]


def test_fair_feed_is_descending_by_score_for_a_given_draw() -> None:
    videos = [_video(f"v{i}", views=i * 10, likes=i) for i in range(8)]

    draws = random.Random(7)
    expected_draws = [draws.random() for _ in videos]
    expected = sorted(
        zip((fair_score(video, draw) for video, draw in zip(videos, expected_draws)), (video.id for video in videos)),
        key=lambda item: item[0],
        reverse=True,
    )

    ordered = [video.id for video in rank_feed(videos, FeedMode.FAIR, rng=random.Random(7))]
    assert ordered == [video_id for _, video_id in expected]


def test_fair_feed_gives_low_traction_videos_a_chance() -> None:
    popular = [_video(f"hit{i}", views=5000, likes=900, comments=300) for i in range(5)]
    fresh = [_video(f"new{i}") for i in range(5)]
    rng = random.Random(42)

    top_slots: Counter[str] = Counter()
    for _ in range(300):
        for video in rank_feed(popular + fresh, FeedMode.FAIR, limit=5, rng=rng):
            top_slots[video.id] += 1

    assert sum(top_slots[f"new{i}"] for i in range(5)) > 0
    assert all(top_slots[f"hit{i}"] > 0 for i in range(5))


def test_only_public_published_videos_are_ranked() -> None:
    videos = [
        _video("public"),
        _video("private", privacy=Privacy.PRIVATE),
        _video("unlisted", privacy=Privacy.UNLISTED),
        _video("draft", status=VideoStatus.DRAFT),
        _video("scheduled", status=VideoStatus.SCHEDULED),
    ]
    for mode in FeedMode:
        assert [video.id for video in rank_feed(videos, mode)] == ["public"]


def test_limit_and_empty_input() -> None:
    videos = [_video(f"v{i}", views=i) for i in range(10)]
    assert len(list(rank_feed(videos, FeedMode.TRENDING, limit=3))) == 3
    assert list(rank_feed(videos, FeedMode.TRENDING, limit=0)) == []
    assert list(rank_feed([], FeedMode.FAIR)) == []


def test_latest_is_newest_first() -> None:
    videos = [_video("old", age_minutes=60), _video("mid", age_minutes=5), _video("new")]
    assert [video.id for video in rank_feed(videos, FeedMode.LATEST)] == ["new", "mid", "old"]


def test_ranking_does_not_mutate_inputs() -> None:
    videos = [_video("a", views=3), _video("b", views=9)]
    before = [video.model_dump() for video in videos]
    list(rank_feed(videos, FeedMode.FAIR))
    list(rank_feed(videos, FeedMode.TRENDING))
    assert [video.model_dump() for video in videos] == before


def test_zero_views_has_zero_engagement() -> None:
    assert compute_engagement_rate(0, 5, 5) == 0.0
    assert compute_engagement_rate(10, 30, 0) == 1.0
    assert fair_score(_video("idle"), 0.0) == 0.3 * 0.5


def test_algorithm_score_is_bounded_and_monotonic() -> None:
    assert compute_algorithm_score(0, 0, 0, 0) == 100.0
    assert ALGORITHM_SCORE_MIN <= compute_algorithm_score(0, 0, 0, 10_000) < 100.0
    assert 100.0 < compute_algorithm_score(10**9, 10**9, 10**9, 0) <= ALGORITHM_SCORE_MAX
    scores = [compute_algorithm_score(0, likes, 0, 0) for likes in range(0, 50, 5)]
    assert scores == sorted(scores)


def test_load_feed_filters_category(store, make_user, make_video) -> None:
    owner = make_user("owner")
    make_video(owner, title="Speedrun", category="Gaming")
    make_video(owner, title="Lasagna", category="Cooking")

    videos = load_feed(store, FeedMode.TRENDING, category="gaming")
    assert [video.title for video in videos] == ["Speedrun"]
    assert len(load_feed(store, FeedMode.FAIR, category="all")) == 2
