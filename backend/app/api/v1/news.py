"""News search endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Query

from app.api.deps import get_news_service
from app.news.service import NewsSearchService
from app.schemas.news import search_result_to_dict

router = APIRouter()


@router.get("/search")
async def search_news(
    q: str = Query("", description="Search term, e.g. btc, ethereum news"),
    service: NewsSearchService = Depends(get_news_service),
) -> dict:
    """Return recent news for a query, newest first, with a sentiment label per item."""
    result = await service.resolve(q)
    return search_result_to_dict(result)


@router.post("/search")
async def search_news_form(
    q: str = Form(""),
    service: NewsSearchService = Depends(get_news_service),
) -> dict:
    """Form-post variant of the search endpoint."""
    result = await service.resolve(q)
    return search_result_to_dict(result)


@router.get("/top")
async def top_searches(
    limit: int = Query(10, ge=1, le=100),
    service: NewsSearchService = Depends(get_news_service),
) -> list[dict]:
    """Most searched canonical terms."""
    return [{"term": t.term, "count": t.count} for t in await service.top_searches(limit)]
