"""Result ordering"""

from __future__ import annotations

from collections.abc import Iterable

from app.schemas.news import NewsItem


def assemble_results(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Sort newest first. Ties keep their input order."""
    return sorted(items, key=lambda item: item.published_at, reverse=True)
