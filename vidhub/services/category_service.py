"""Category catalog reads."""
from __future__ import annotations

from ..database import EntityStore
from ..models import Category, Snapshot


def list_categories(store: EntityStore) -> list[Category]:
    items = store.query("categories", lambda row: row.is_active)
    return sorted(items, key=lambda row: row.name.lower())


def category_stats(store: EntityStore) -> list[dict[str, int | str]]:
    """Listed video count and total views per active category, busiest first."""

    def _read(snapshot: Snapshot) -> list[dict[str, int | str]]:
        stats: dict[str, dict[str, int | str]] = {
            category.name.lower(): {"name": category.name, "videos": 0, "views": 0}
            for category in snapshot.categories
            if category.is_active
        }
        for video in snapshot.videos:
            if not video.is_listed or not video.category:
                continue
            entry = stats.get(video.category.lower())
            if entry is None:
                continue
            entry["videos"] = int(entry["videos"]) + 1
            entry["views"] = int(entry["views"]) + video.views
        return sorted(stats.values(), key=lambda item: (-int(item["videos"]), str(item["name"])))

    return store.read(_read)


__all__ = ["category_stats", "list_categories"]
