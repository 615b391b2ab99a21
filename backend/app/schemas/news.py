"""News search schemas"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


@dataclass(frozen=True)
class NewsItem:
    """A single provider article with its sentiment label."""

    title: str
    source: str
    url: str
    published_at: datetime
    summary: str
    sentiment: Sentiment
    provider_name: str


@dataclass(frozen=True)
class SearchResult:
    """Items for one canonical term, newest first.

    An empty ``items`` tuple means the provider had nothing for the term.
    """

    term: str
    display_name: str
    items: tuple[NewsItem, ...] = ()
    fetched_at: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class TermCount:
    term: str
    count: int


@dataclass(frozen=True)
class StatsSnapshot:
    """Read-only view of the cache and search counters."""

    total_keys: int = 0
    memory_used_bytes: int = 0
    hits: int = 0
    misses: int = 0
    hit_rate: float = 0.0
    top_searches: list[TermCount] = field(default_factory=list)


def news_item_to_dict(item: NewsItem) -> dict:
    return {
        "title": item.title,
        "source": item.source,
        "url": item.url,
        "published_at": item.published_at.isoformat(),
        "summary": item.summary,
        "sentiment": item.sentiment.value,
        "provider_name": item.provider_name,
    }


def search_result_to_dict(result: SearchResult) -> dict:
    """Convert a SearchResult to a JSON-serializable dict."""
    data: dict = {
        "term": result.term,
        "display_name": result.display_name,
        "count": len(result.items),
        "fetched_at": result.fetched_at.isoformat() if result.fetched_at else None,
        "items": [news_item_to_dict(item) for item in result.items],
    }
    if result.is_empty:
        data["message"] = "No news found"
    return data
