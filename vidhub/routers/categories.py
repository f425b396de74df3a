"""Category catalog routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..database import EntityStore, get_store
from ..schemas import CategoryListResponse, CategoryResponse, CategoryStat, CategoryStatsResponse
from ..services import category_stats, list_categories

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=CategoryListResponse)
async def list_categories_endpoint(store: EntityStore = Depends(get_store)) -> CategoryListResponse:
    return CategoryListResponse(items=[CategoryResponse.model_validate(item) for item in list_categories(store)])


@router.get("/stats", response_model=CategoryStatsResponse)
async def category_stats_endpoint(store: EntityStore = Depends(get_store)) -> CategoryStatsResponse:
    return CategoryStatsResponse(items=[CategoryStat(**item) for item in category_stats(store)])


__all__ = ["router"]
