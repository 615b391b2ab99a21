"""Query normalization and cache-key derivation"""

from __future__ import annotations

from dataclasses import dataclass

from app.errors import InvalidQuery
from app.news.aliases import KNOWN_ASSETS, lookup_alias

# Appended to the provider query only; never part of the cache key.
DOMAIN_QUALIFIER = "cryptocurrency"

CACHE_KEY_PREFIX = "news:"


@dataclass(frozen=True)
class NormalizedQuery:
    term: str
    provider_query: str


def canonical_term(raw: str) -> str:
    """Trim, lowercase and resolve aliases.

    Examples:
        >>> canonical_term("  BTC ")
        'bitcoin'
        >>> canonical_term("Ethereum news")
        'ethereum news'
    """
    text = (raw or "").strip().lower()
    if not text:
        raise InvalidQuery()
    return lookup_alias(text) or text


def provider_query(term: str) -> str:
    return f"{term} {DOMAIN_QUALIFIER}"


def normalize_query(raw: str) -> NormalizedQuery:
    term = canonical_term(raw)
    return NormalizedQuery(term=term, provider_query=provider_query(term))


def cache_key(term: str) -> str:
    return f"{CACHE_KEY_PREFIX}{term}"


def display_name(term: str) -> str:
    """Heading shown for a canonical term, e.g. ``BITCOIN``."""
    resolved = term if term in KNOWN_ASSETS else (lookup_alias(term) or term)
    return resolved.upper()
