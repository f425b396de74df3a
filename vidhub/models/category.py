"""Category catalog entry."""
from __future__ import annotations

from .base import Record


class Category(Record):
    name: str
    description: str | None = None
    color: str | None = None
    icon: str | None = None
    is_active: bool = True


__all__ = ["Category"]
