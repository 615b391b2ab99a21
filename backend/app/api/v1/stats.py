"""Cache statistics endpoint."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_news_service
from app.config import settings
from app.news.service import NewsSearchService

router = APIRouter()


@router.get("")
async def cache_stats(
    limit: int = Query(settings.news_top_searches_limit, ge=1, le=100),
    service: NewsSearchService = Depends(get_news_service),
) -> dict:
    """Cache size, memory estimate, hit rate and the most searched terms."""
    snapshot = await service.stats(limit)
    return asdict(snapshot)
