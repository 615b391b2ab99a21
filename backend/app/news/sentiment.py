"""Keyword-based sentiment classification"""

from __future__ import annotations

from app.schemas.news import Sentiment

POSITIVE_KEYWORDS: frozenset[str] = frozenset({
    "bullish", "surge", "gain", "rise", "growth", "positive", "up", "high",
})
NEGATIVE_KEYWORDS: frozenset[str] = frozenset({
    "bearish", "crash", "drop", "fall", "decline", "negative", "down", "low",
})


def _count_matches(text: str, keywords: frozenset[str]) -> int:
    # substring containment: "uptrend" counts for "up"
    return sum(1 for word in keywords if word in text)


def classify_sentiment(text: str) -> Sentiment:
    """Count how many positive/negative keywords appear and pick the larger side."""
    lowered = (text or "").lower()
    positive = _count_matches(lowered, POSITIVE_KEYWORDS)
    negative = _count_matches(lowered, NEGATIVE_KEYWORDS)

    if positive > negative:
        return Sentiment.POSITIVE
    if negative > positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL
