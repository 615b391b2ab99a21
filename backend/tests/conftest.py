from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_news_service, get_ws_news_service
from app.main import app
from app.news.cache import NewsCache
from app.news.parser import parse_newsdata_response
from app.news.service import NewsSearchService
from app.schemas.news import NewsItem, Sentiment


def make_article(
    title: str = "Bitcoin climbs past resistance",
    link: str = "https://example.com/a",
    pub_date: str = "2024-01-02T10:00:00Z",
    source_id: str = "coindesk",
    description: str | None = "Analysts see a bullish surge",
) -> dict:
    article = {"title": title, "link": link, "pubDate": pub_date, "source_id": source_id}
    if description is not None:
        article["description"] = description
    return article


def make_payload(*articles: dict, status: str = "success") -> str:
    return json.dumps({"status": status, "totalResults": len(articles), "results": list(articles)})


def make_item(
    title: str = "item",
    published_at: datetime | None = None,
    sentiment: Sentiment = Sentiment.NEUTRAL,
) -> NewsItem:
    return NewsItem(
        title=title,
        source="coindesk",
        url=f"https://example.com/{title}",
        published_at=published_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
        summary="",
        sentiment=sentiment,
        provider_name="NewsData.io",
    )


class FakeProvider:
    """In-memory NewsProvider: parses a canned body, or raises a canned error."""

    name = "NewsData.io"

    def __init__(self, body: str | None = None, error: Exception | None = None) -> None:
        self.body = body if body is not None else make_payload()
        self.error = error
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def search(self, term: str) -> list[NewsItem]:
        self.calls.append(term)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return parse_newsdata_response(self.body, provider_name=self.name)

    async def aclose(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(make_payload(make_article()))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(provider: FakeProvider, clock: FakeClock) -> NewsSearchService:
    return NewsSearchService(provider, NewsCache(ttl_seconds=600, clock=clock))


@pytest_asyncio.fixture
async def client(service: NewsSearchService) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_news_service] = lambda: service
    app.dependency_overrides[get_ws_news_service] = lambda: service
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
