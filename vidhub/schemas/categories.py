"""Schemas for the category catalog."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    color: str | None = None
    icon: str | None = None


class CategoryStat(BaseModel):
    name: str
    videos: int
    views: int


class CategoryListResponse(BaseModel):
    items: list[CategoryResponse]


class CategoryStatsResponse(BaseModel):
    items: list[CategoryStat]
