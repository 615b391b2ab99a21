"""Cache-aside news search service.

Flow per ``resolve`` call:

1. normalize the raw query to a canonical term (``InvalidQuery`` propagates)
2. look up ``news:<term>``; a live entry counts as a hit and is returned
3. on a miss, search the provider, sort, store with a fresh ttl
4. count one search for the term and return

Provider and parser errors propagate unchanged; an expired entry is never
served in their place.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from app.config import Settings
from app.errors import DateParseError, MalformedPayload, PipelineError
from app.news.assembler import assemble_results
from app.news.cache import NewsCache
from app.news.normalizer import cache_key, display_name, normalize_query
from app.news.provider import NewsDataProvider, NewsProvider
from app.schemas.news import SearchResult, StatsSnapshot, TermCount

logger = logging.getLogger(__name__)


class NewsSearchService:
    """Single entry point shared by the HTTP routes and the websocket channel.

    Args:
        provider: fetch-and-parse capability for one news source.
        cache: shared result cache and counters.
        coalesce_inflight: when True, concurrent misses for the same term share
            one provider call instead of each fetching.
    """

    def __init__(
        self,
        provider: NewsProvider,
        cache: NewsCache,
        *,
        coalesce_inflight: bool = True,
    ) -> None:
        self.provider = provider
        self.cache = cache
        self.coalesce_inflight = coalesce_inflight
        self._inflight: dict[str, asyncio.Task[SearchResult]] = {}

    async def resolve(self, raw_query: str) -> SearchResult:
        query = normalize_query(raw_query)
        term = query.term
        key = cache_key(term)

        cached = await self.cache.lookup(key, term)
        if cached is not None:
            logger.debug("cache hit: %s", key)
            return cached

        logger.debug("cache miss: %s", key)
        if self.coalesce_inflight:
            result = await self._fetch_shared(term, key)
        else:
            result = await self._fetch_and_store(term, key)

        await self.cache.record_search(term)
        return result

    async def _fetch_shared(self, term: str, key: str) -> SearchResult:
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(term, key))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget_inflight(key, done))
        else:
            logger.debug("joining in-flight fetch: %s", key)
        # shield: one caller cancelling must not cancel the fetch for the others
        return await asyncio.shield(task)

    def _forget_inflight(self, key: str, task: asyncio.Task[SearchResult]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        if task.cancelled():
            return
        # mark retrieved; every waiter may have been cancelled
        task.exception()

    async def _fetch_and_store(self, term: str, key: str) -> SearchResult:
        try:
            items = await self.provider.search(term)
        except (MalformedPayload, DateParseError) as exc:
            logger.error("news response rejected (%s) for '%s': %s", exc.kind, term, exc, exc_info=True)
            raise
        except PipelineError as exc:
            logger.warning("news fetch failed (%s) for '%s': %s", exc.kind, term, exc)
            raise

        result = SearchResult(
            term=term,
            display_name=display_name(term),
            items=tuple(assemble_results(items)),
            fetched_at=datetime.now(timezone.utc),
        )
        if result.is_empty:
            logger.info("no news found for '%s'", term)
        await self.cache.store(key, result)
        return result

    async def stats(self, limit: int = 10) -> StatsSnapshot:
        return await self.cache.snapshot(limit)

    async def top_searches(self, limit: int = 10) -> list[TermCount]:
        return await self.cache.top_searches(limit)

    async def aclose(self) -> None:
        for task in list(self._inflight.values()):
            task.cancel()
        await self.provider.aclose()


def build_news_service(settings: Settings) -> NewsSearchService:
    """Construct the process-wide service from configuration."""
    provider = NewsDataProvider.from_settings(settings)
    cache = NewsCache(ttl_seconds=settings.news_cache_ttl_seconds)
    if not settings.newsdata_api_key:
        logger.warning("NEWSDATA_API_KEY is not set; searches will fail until it is configured")
    return NewsSearchService(
        provider,
        cache,
        coalesce_inflight=settings.news_coalesce_inflight,
    )
