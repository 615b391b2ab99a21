"""Ticker / abbreviation → asset name table.

Shared by query normalization (cache keys) and display-name formatting.
"""

from __future__ import annotations

ASSET_ALIASES: dict[str, str] = {
    "btc": "bitcoin",
    "eth": "ethereum",
    "ether": "ethereum",
    "xrp": "ripple",
    "ltc": "litecoin",
    "doge": "dogecoin",
    "ada": "cardano",
    "dot": "polkadot",
    "sol": "solana",
    "link": "chainlink",
    "uni": "uniswap",
}

KNOWN_ASSETS: frozenset[str] = frozenset(ASSET_ALIASES.values())


def lookup_alias(text: str) -> str | None:
    """Return the asset name for ``text``, retrying with whitespace removed."""
    if text in ASSET_ALIASES:
        return ASSET_ALIASES[text]
    compact = "".join(text.split())
    return ASSET_ALIASES.get(compact)
