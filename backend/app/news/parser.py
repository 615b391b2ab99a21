"""NewsData.io response parser"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable

from app.errors import DateParseError, MalformedPayload, ProviderReportedError
from app.news.sentiment import classify_sentiment
from app.schemas.news import NewsItem

logger = logging.getLogger(__name__)

NEWSDATA_PROVIDER_NAME = "NewsData.io"

# title, link, pubDate, source_id must all be present and strings
REQUIRED_FIELDS: tuple[str, ...] = ("title", "link", "pubDate", "source_id")

_RFC3339_RE = re.compile(
    r"^(?P<head>\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:)(?P<second>\d{2})"
    r"(?P<tail>(\.\d+)?([Zz]|[+-]\d{2}:\d{2}))$"
)


# ---------------------------------------------------------------------------
# Date parsing strategies
# ---------------------------------------------------------------------------


def _parse_rfc3339(raw: str) -> datetime | None:
    match = _RFC3339_RE.match(raw)
    if match is None:
        return None
    second = match["second"]
    if second == "60":
        # leap second, held at :59
        second = "59"
    text = match["head"] + second + match["tail"]
    text = text.replace("t", "T").replace("z", "+00:00").replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_rfc2822(raw: str) -> datetime | None:
    try:
        parsed = parsedate_to_datetime(raw)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        # "-0000" zone: UTC with no source offset
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_naive_utc(raw: str) -> datetime | None:
    try:
        return datetime.strptime(raw, "%Y-%m-%d %H:%M:%S").replace(tzinfo=timezone.utc)
    except ValueError:
        return None


DateParser = Callable[[str], datetime | None]

# Tried in order; the first parser that returns a datetime wins.
DATE_PARSERS: tuple[tuple[str, DateParser], ...] = (
    ("rfc3339", _parse_rfc3339),
    ("rfc2822", _parse_rfc2822),
    ("naive_utc", _parse_naive_utc),
)


def parse_published_at(raw: str) -> datetime:
    """Parse a provider date string to an aware UTC datetime.

    Raises:
        DateParseError: no strategy in ``DATE_PARSERS`` accepted ``raw``.
    """
    value = raw.strip()
    for name, parser in DATE_PARSERS:
        parsed = parser(value)
        if parsed is not None:
            logger.debug("pubDate %r parsed as %s", raw, name)
            return parsed.astimezone(timezone.utc)
    raise DateParseError(raw)


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------


def _load_document(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise MalformedPayload(f"Response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedPayload(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _has_required_fields(article: Any) -> bool:
    if not isinstance(article, dict):
        return False
    return all(isinstance(article.get(key), str) for key in REQUIRED_FIELDS)


def parse_newsdata_response(
    text: str,
    provider_name: str = NEWSDATA_PROVIDER_NAME,
) -> list[NewsItem]:
    """Turn a NewsData.io body into NewsItems, in provider order.

    Articles missing a required field are skipped. A single unparseable
    ``pubDate`` fails the whole batch.

    Raises:
        MalformedPayload: body is not a JSON object.
        ProviderReportedError: ``{"status": "error", ...}`` envelope.
        DateParseError: a kept article has an unrecognized date.
    """
    data = _load_document(text)

    if data.get("status") == "error":
        message = data.get("message")
        results = data.get("results")
        if not message and isinstance(results, dict):
            # newer API versions nest the error under "results"
            message = results.get("message")
        if not isinstance(message, str) or not message:
            message = "unknown error"
        raise ProviderReportedError(message)

    results = data.get("results")
    if not isinstance(results, list):
        results = []

    items: list[NewsItem] = []
    skipped = 0
    for article in results:
        if not _has_required_fields(article):
            skipped += 1
            continue

        description = article.get("description")
        summary = description if isinstance(description, str) else ""

        items.append(
            NewsItem(
                title=article["title"],
                source=article["source_id"],
                url=article["link"],
                published_at=parse_published_at(article["pubDate"]),
                summary=summary,
                sentiment=classify_sentiment(summary),
                provider_name=provider_name,
            )
        )

    if skipped:
        logger.debug("skipped %d incomplete articles", skipped)
    logger.info("Found %d news items from %s", len(items), provider_name)
    return items
