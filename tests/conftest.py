"""Shared test fixtures."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from vidhub.database import EntityStore
from vidhub.models import Privacy, Snapshot, User, Video, VideoStatus
from vidhub.services.scoring import refresh_video_metrics


@pytest.fixture()
def store(tmp_path: Path) -> EntityStore:
    entity_store = EntityStore(tmp_path / "database.json")
    entity_store.load()
    return entity_store


@pytest.fixture()
def make_user(store: EntityStore) -> Callable[..., User]:
    def _make(username: str, **fields: Any) -> User:
        user = User(
            username=username,
            email=f"{username}@vidhub.io",
            hashed_password="not-a-real-hash",
            display_name=fields.pop("display_name", username.title()),
            **fields,
        )

        def _apply(snapshot: Snapshot) -> User:
            snapshot.users.append(user)
            return user

        return store.mutate(_apply)

    return _make


@pytest.fixture()
def make_video(store: EntityStore) -> Callable[..., Video]:
    """Insert a published public video, keeping the owner's counters honest."""

    def _make(owner: User, title: str = "Clip", **fields: Any) -> Video:
        video = Video(
            owner_id=owner.id,
            title=title,
            video_url=f"https://cdn.vidhub.io/{title.lower().replace(' ', '-')}.mp4",
            privacy=fields.pop("privacy", Privacy.PUBLIC),
            status=fields.pop("status", VideoStatus.PUBLISHED),
            **fields,
        )
        refresh_video_metrics(video)

        def _apply(snapshot: Snapshot) -> Video:
            snapshot.videos.append(video)
            row = snapshot.find("users", owner.id)
            row.video_count += 1
            row.total_views += video.views
            return video

        return store.mutate(_apply)

    return _make
