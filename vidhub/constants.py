"""Project-wide constant values."""
from __future__ import annotations

# Seed catalog written into every fresh snapshot.
STARTER_CATEGORIES: tuple[dict[str, str], ...] = (
    {"name": "Gaming", "description": "Gaming content", "color": "#8b5cf6", "icon": "gamepad-2"},
    {"name": "Music", "description": "Music and audio content", "color": "#ec4899", "icon": "music"},
    {"name": "Education", "description": "Educational content", "color": "#3b82f6", "icon": "graduation-cap"},
    {"name": "Technology", "description": "Tech and programming", "color": "#10b981", "icon": "laptop"},
    {"name": "Travel", "description": "Travel and adventure", "color": "#06b6d4", "icon": "plane"},
    {"name": "Cooking", "description": "Cooking and food", "color": "#f97316", "icon": "chef-hat"},
)

ROOM_PREFIX = "video-"

MAX_COMMENT_LENGTH = 1000
MAX_PAGE_SIZE = 100

__all__ = ["MAX_COMMENT_LENGTH", "MAX_PAGE_SIZE", "ROOM_PREFIX", "STARTER_CATEGORIES"]
