"""Video lifecycle, playlists, progress and channel reads."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from vidhub.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationFailedError
from vidhub.models import NotificationType, Privacy, VideoStatus
from vidhub.schemas import PlaylistCreate, ProfileUpdateRequest, VideoCreate, VideoUpdate
from vidhub.services import (
    add_video_to_playlist,
    audit_counters,
    category_stats,
    channel_analytics,
    count_unread_notifications,
    create_comment,
    create_playlist,
    create_video,
    get_playlist,
    get_progress,
    get_video,
    increment_views,
    list_categories,
    list_comments,
    list_notifications,
    list_playlists,
    list_users,
    list_videos,
    mark_all_read,
    mark_read,
    publish_due_videos,
    set_ban_state,
    subscribe,
    update_profile,
    update_progress,
    update_video,
    watch_history,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_scheduled_video_is_published_when_due(store, make_user) -> None:
    creator = make_user("creator")
    fan = make_user("fan")
    subscribe(store, subscriber_id=fan.id, channel_id=creator.id)
    payload = VideoCreate(
        title="Premiere",
        video_url="https://cdn.vidhub.io/premiere.mp4",
        status=VideoStatus.SCHEDULED,
        scheduled_at=NOW + timedelta(hours=1),
    )

    video = create_video(store, owner_id=creator.id, payload=payload, now=NOW)
    assert video.status == VideoStatus.SCHEDULED
    assert video.published_at is None
    assert list_videos(store) == []

    assert publish_due_videos(store, now=NOW + timedelta(minutes=30)) == []

    published = publish_due_videos(store, now=NOW + timedelta(hours=2))
    assert [item.id for item in published] == [video.id]
    stored = store.get("videos", video.id)
    assert stored.status == VideoStatus.PUBLISHED
    assert stored.published_at == NOW + timedelta(hours=2)
    assert [item.type for item in list_notifications(store, fan.id)] == [NotificationType.VIDEO_PUBLISHED]


def test_scheduled_video_needs_a_future_time(store, make_user) -> None:
    creator = make_user("creator")
    payload = VideoCreate(
        title="Late",
        video_url="https://cdn.vidhub.io/late.mp4",
        status=VideoStatus.SCHEDULED,
        scheduled_at=datetime(2020, 1, 1),
    )
    with pytest.raises(ValidationFailedError):
        create_video(store, owner_id=creator.id, payload=payload, now=NOW)
    assert store.get("users", creator.id).video_count == 0


def test_only_owner_or_admin_may_edit(store, make_user, make_video) -> None:
    owner = make_user("owner")
    stranger = make_user("stranger")
    admin = make_user("admin", is_admin=True)
    video = make_video(owner, title="Original")

    with pytest.raises(UnauthorizedError):
        update_video(store, video_id=video.id, user=stranger, changes=VideoUpdate(title="Hijacked"))

    updated = update_video(store, video_id=video.id, user=admin, changes=VideoUpdate(title="Moderated", tags=["Fun", "fun "]))
    assert updated.title == "Moderated"
    assert updated.tags == ["fun"]


def test_private_videos_are_hidden_from_others(store, make_user, make_video) -> None:
    owner = make_user("owner")
    other = make_user("other")
    video = make_video(owner, privacy=Privacy.PRIVATE)

    with pytest.raises(NotFoundError):
        get_video(store, video.id, viewer=other)
    assert get_video(store, video.id, viewer=owner).id == video.id
    assert list_videos(store, owner_id=owner.id) == []
    assert len(list_videos(store, owner_id=owner.id, include_unlisted=True)) == 1


def test_private_video_comments_are_limited_to_owner_and_admins(store, make_user, make_video) -> None:
    owner = make_user("owner")
    stranger = make_user("stranger")
    admin = make_user("admin", is_admin=True)
    video = make_video(owner, privacy=Privacy.PRIVATE)

    with pytest.raises(NotFoundError):
        create_comment(store, video_id=video.id, author_id=stranger.id, content="Found it")
    assert store.get("videos", video.id).comments == 0

    create_comment(store, video_id=video.id, author_id=owner.id, content="Cut 2")
    create_comment(store, video_id=video.id, author_id=admin.id, content="Looks fine")

    with pytest.raises(NotFoundError):
        list_comments(store, video.id)
    with pytest.raises(NotFoundError):
        list_comments(store, video.id, viewer=stranger)
    assert len(list_comments(store, video.id, viewer=owner)) == 2
    assert len(list_comments(store, video.id, viewer=admin)) == 2


def test_search_matches_title_description_and_tags(store, make_user, make_video) -> None:
    owner = make_user("owner")
    make_video(owner, title="Bread basics", tags=["baking"])
    make_video(owner, title="Speedrun", description="Any% world record")

    assert [video.title for video in list_videos(store, search="BAKING")] == ["Bread basics"]
    assert [video.title for video in list_videos(store, search="record")] == ["Speedrun"]


def test_playlists_keep_order_and_reject_duplicates(store, make_user, make_video) -> None:
    owner = make_user("owner")
    other = make_user("other")
    first = make_video(owner, title="One")
    second = make_video(owner, title="Two")
    playlist = create_playlist(store, owner_id=owner.id, payload=PlaylistCreate(title="Mix", privacy=Privacy.PRIVATE))

    add_video_to_playlist(store, playlist_id=playlist.id, video_id=second.id, user=owner)
    updated = add_video_to_playlist(store, playlist_id=playlist.id, video_id=first.id, user=owner)
    assert updated.video_ids == [second.id, first.id]

    with pytest.raises(ConflictError):
        add_video_to_playlist(store, playlist_id=playlist.id, video_id=first.id, user=owner)
    with pytest.raises(UnauthorizedError):
        add_video_to_playlist(store, playlist_id=playlist.id, video_id=first.id, user=other)
    with pytest.raises(NotFoundError):
        get_playlist(store, playlist.id, viewer=other)
    assert list_playlists(store, owner_id=owner.id, viewer=other) == []
    assert len(list_playlists(store, owner_id=owner.id, viewer=owner)) == 1


def test_progress_is_upserted_and_listed(store, make_user, make_video) -> None:
    viewer = make_user("viewer")
    owner = make_user("owner")
    first = make_video(owner, title="One", duration=120)
    second = make_video(owner, title="Two")

    update_progress(store, user_id=viewer.id, video_id=first.id, progress=30)
    update_progress(store, user_id=viewer.id, video_id=second.id, progress=5)
    row = update_progress(store, user_id=viewer.id, video_id=first.id, progress=500, completed=True)

    assert row.progress == 120
    assert len(store.query("progress")) == 2
    assert get_progress(store, user_id=viewer.id, video_id=first.id).completed is True
    assert [video.id for _, video in watch_history(store, viewer.id)] == [first.id, second.id]


def test_categories_and_stats(store, make_user, make_video) -> None:
    owner = make_user("owner")
    gaming = make_video(owner, title="Speedrun", category="Gaming")
    make_video(owner, title="Unlisted", category="Gaming", privacy=Privacy.UNLISTED)
    increment_views(store, gaming.id, 10)

    assert [category.name for category in list_categories(store)][:2] == ["Cooking", "Education"]
    stats = {item["name"]: item for item in category_stats(store)}
    assert stats["Gaming"] == {"name": "Gaming", "videos": 1, "views": 10}
    assert stats["Music"]["videos"] == 0


def test_channel_analytics_totals(store, make_user, make_video) -> None:
    owner = make_user("owner")
    first = make_video(owner, title="One")
    make_video(owner, title="Two")
    increment_views(store, first.id, 20)

    analytics = channel_analytics(store, owner.id)
    assert analytics["total_videos"] == 2
    assert analytics["total_views"] == 20
    assert analytics["top_videos"][0]["id"] == first.id
    assert audit_counters(store.snapshot()) == []


def test_notifications_read_state(store, make_user) -> None:
    creator = make_user("creator")
    fans = [make_user(f"fan{i}") for i in range(3)]
    for fan in fans:
        subscribe(store, subscriber_id=fan.id, channel_id=creator.id)

    assert count_unread_notifications(store, creator.id) == 3
    newest = list_notifications(store, creator.id)[0]
    with pytest.raises(UnauthorizedError):
        mark_read(store, notification_id=newest.id, user_id=fans[0].id)
    mark_read(store, notification_id=newest.id, user_id=creator.id)
    assert count_unread_notifications(store, creator.id) == 2
    assert mark_all_read(store, creator.id) == 2
    assert count_unread_notifications(store, creator.id) == 0


def test_profile_edits_and_bans(store, make_user) -> None:
    member = make_user("member")
    other = make_user("other")
    admin = make_user("admin", is_admin=True)

    updated = update_profile(store, user_id=member.id, requester=member, changes=ProfileUpdateRequest(bio="  hi  "))
    assert updated.bio == "hi"
    with pytest.raises(UnauthorizedError):
        update_profile(store, user_id=member.id, requester=other, changes=ProfileUpdateRequest(bio="x"))

    banned = set_ban_state(store, user_id=member.id, admin=admin, banned=True, reason="spam")
    assert (banned.is_banned, banned.ban_reason) == (True, "spam")
    with pytest.raises(UnauthorizedError):
        set_ban_state(store, user_id=other.id, admin=member, banned=True)

    users, total = list_users(store, search="ADM")
    assert total == 1
    assert users[0].id == admin.id
