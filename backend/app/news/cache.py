"""In-process TTL cache and search statistics"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable

from app.schemas.news import SearchResult, StatsSnapshot, TermCount, search_result_to_dict

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: SearchResult
    inserted_at: float
    ttl: float
    size_bytes: int

    def is_expired(self, now: float) -> bool:
        return now - self.inserted_at > self.ttl


@dataclass
class SearchStats:
    hits: int = 0
    misses: int = 0
    memory_used_bytes: int = 0
    term_counts: Counter = field(default_factory=Counter)

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    def top_searches(self, limit: int) -> list[TermCount]:
        return [TermCount(term=term, count=count) for term, count in self.term_counts.most_common(limit)]


def estimate_size(key: str, value: SearchResult) -> int:
    """Approximate footprint: key plus the JSON encoding of the result."""
    payload = json.dumps(search_result_to_dict(value), ensure_ascii=False)
    return len(key.encode("utf-8")) + len(payload.encode("utf-8"))


class NewsCache:
    """Search results keyed by cache key, plus the counters derived from lookups.

    Entries and counters share one lock so a lookup and its hit/miss count, or
    a write and its footprint update, are never observed half-applied.
    """

    def __init__(self, ttl_seconds: float, *, clock: Clock = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._stats = SearchStats()
        self._lock = asyncio.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def _evict_locked(self, key: str) -> None:
        entry = self._entries.pop(key, None)
        if entry is not None:
            self._stats.memory_used_bytes -= entry.size_bytes

    def _purge_expired_locked(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if e.is_expired(now)]
        for key in expired:
            self._evict_locked(key)
        if expired:
            logger.debug("cache purged %d expired entries", len(expired))

    def _live_entry_locked(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            logger.debug("cache expired: %s", key)
            self._evict_locked(key)
            return None
        return entry

    async def lookup(self, key: str, term: str) -> SearchResult | None:
        """Return the live entry for ``key`` and count the hit or miss.

        A hit also counts one search for ``term``.
        """
        async with self._lock:
            entry = self._live_entry_locked(key)
            if entry is None:
                self._stats.misses += 1
                return None
            self._stats.hits += 1
            self._stats.term_counts[term] += 1
            return entry.value

    async def store(self, key: str, value: SearchResult) -> None:
        entry = CacheEntry(
            key=key,
            value=value,
            inserted_at=self._clock(),
            ttl=self._ttl,
            size_bytes=estimate_size(key, value),
        )
        async with self._lock:
            self._purge_expired_locked(entry.inserted_at)
            self._evict_locked(key)
            self._entries[key] = entry
            self._stats.memory_used_bytes += entry.size_bytes
        logger.debug("cache set: %s (%d items, %d bytes)", key, len(value.items), entry.size_bytes)

    async def record_search(self, term: str) -> None:
        async with self._lock:
            self._stats.term_counts[term] += 1

    async def top_searches(self, limit: int = 10) -> list[TermCount]:
        async with self._lock:
            return self._stats.top_searches(limit)

    async def snapshot(self, limit: int = 10) -> StatsSnapshot:
        async with self._lock:
            self._purge_expired_locked(self._clock())
            return StatsSnapshot(
                total_keys=len(self._entries),
                memory_used_bytes=self._stats.memory_used_bytes,
                hits=self._stats.hits,
                misses=self._stats.misses,
                hit_rate=self._stats.hit_rate,
                top_searches=self._stats.top_searches(limit),
            )
