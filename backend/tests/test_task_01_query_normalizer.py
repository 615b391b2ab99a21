"""Task-01: query normalization and cache-key derivation"""

from __future__ import annotations

import pytest

from app.errors import InvalidQuery
from app.news.aliases import ASSET_ALIASES
from app.news.normalizer import (
    cache_key,
    canonical_term,
    display_name,
    normalize_query,
    provider_query,
)


# ---------------------------------------------------------------------------
# T-1: alias resolution
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("raw", ["BTC", " btc ", "Btc", "\tbtc\n", "bitcoin", "BITCOIN"])
def test_bitcoin_variants(raw):
    """Case and whitespace variants of a ticker resolve to one term."""
    assert canonical_term(raw) == "bitcoin"


def test_every_alias_resolves_case_insensitively():
    for alias, asset in ASSET_ALIASES.items():
        assert canonical_term(alias.upper()) == asset
        assert canonical_term(f"  {alias.title()}  ") == asset


def test_ether_and_eth_share_term():
    assert canonical_term("ether") == canonical_term("ETH") == "ethereum"


def test_alias_with_internal_whitespace():
    """Tickers typed with spaces match after whitespace removal."""
    assert canonical_term("b t c") == "bitcoin"
    assert canonical_term("DO GE") == "dogecoin"


def test_unknown_term_kept_lowercased():
    assert canonical_term("  Ethereum News ") == "ethereum news"
    assert canonical_term("Avalanche") == "avalanche"


# ---------------------------------------------------------------------------
# T-2: provider query vs cache key
# ---------------------------------------------------------------------------


def test_provider_query_has_qualifier():
    query = normalize_query("  ETH  ")
    assert query.term == "ethereum"
    assert query.provider_query == "ethereum cryptocurrency"
    assert provider_query("bitcoin") == "bitcoin cryptocurrency"


def test_cache_key_uses_canonical_term():
    """Raw inputs with the same canonical term share one key, without the qualifier."""
    keys = {cache_key(normalize_query(raw).term) for raw in ("btc", "BTC ", "Bitcoin", "b tc")}
    assert keys == {"news:bitcoin"}
    assert "cryptocurrency" not in cache_key("bitcoin")


# ---------------------------------------------------------------------------
# T-3: empty input
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("raw", ["", "   ", "\n\t"])
def test_empty_query_rejected(raw):
    with pytest.raises(InvalidQuery):
        normalize_query(raw)


# ---------------------------------------------------------------------------
# T-4: display name from the same alias table
# ---------------------------------------------------------------------------


def test_display_name():
    assert display_name("bitcoin") == "BITCOIN"
    assert display_name("eth") == "ETHEREUM"
    assert display_name("ethereum news") == "ETHEREUM NEWS"
