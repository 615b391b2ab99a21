"""Task-02: keyword sentiment classifier"""

from __future__ import annotations

from app.news.sentiment import NEGATIVE_KEYWORDS, POSITIVE_KEYWORDS, classify_sentiment
from app.schemas.news import Sentiment


def test_positive():
    assert classify_sentiment("bullish surge") == Sentiment.POSITIVE


def test_negative():
    assert classify_sentiment("bearish crash") == Sentiment.NEGATIVE


def test_neutral_without_keywords():
    assert classify_sentiment("Markets were quiet today") == Sentiment.NEUTRAL
    assert classify_sentiment("") == Sentiment.NEUTRAL


def test_tie_is_neutral():
    """One positive and one negative keyword cancel out."""
    assert classify_sentiment("bullish then bearish") == Sentiment.NEUTRAL


def test_case_insensitive():
    assert classify_sentiment("BULLISH SURGE") == Sentiment.POSITIVE


def test_substring_matching():
    """Keywords match inside longer words."""
    assert classify_sentiment("Crashing") == Sentiment.NEGATIVE
    assert classify_sentiment("Ethereum gains amid bullish surge") == Sentiment.POSITIVE


def test_keyword_sets_disjoint():
    assert not POSITIVE_KEYWORDS & NEGATIVE_KEYWORDS
