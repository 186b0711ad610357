"""Shared fixtures: DexScreener pair payloads and fake sources"""

from typing import Any, Dict, List, Optional

import pytest

from defai.schemas.dexscreener import DexScreenerPair, DexScreenerSearchResult


def pair_payload(
    address: str = "0xpair",
    name: str = "Serv",
    symbol: str = "SERV",
    quote_name: str = "Wrapped Ether",
    quote_symbol: str = "WETH",
    liquidity: Optional[float] = 50_000,
    volume_24h: Optional[float] = 20_000,
    market_cap: Optional[float] = 1_000,
    info: Optional[Dict[str, Any]] = None,
    chain_id: str = "ethereum",
    dex_id: str = "uniswap",
) -> Dict[str, Any]:
    """Build a search result pair the way DexScreener sends it."""
    payload: Dict[str, Any] = {
        "chainId": chain_id,
        "dexId": dex_id,
        "url": f"https://dexscreener.com/{chain_id}/{address}",
        "pairAddress": address,
        "baseToken": {"address": f"0xbase{symbol}", "name": name, "symbol": symbol},
        "quoteToken": {"address": "0xquote", "name": quote_name, "symbol": quote_symbol},
        "priceNative": "0.0001",
        "priceUsd": "0.25",
        "txns": {"h24": {"buys": 10, "sells": 7}},
        "volume": {"h24": volume_24h, "h6": 100, "h1": 10, "m5": 1},
        "priceChange": {"h24": 5.5, "h6": 1.2},
        "liquidity": {"usd": liquidity, "base": 1000, "quote": 10} if liquidity is not None else None,
        "fdv": market_cap,
        "marketCap": market_cap,
        "pairCreatedAt": 1_700_000_000_000,
    }
    if info is not None:
        payload["info"] = info
    return payload


def make_pair(**kwargs) -> DexScreenerPair:
    return DexScreenerPair.model_validate(pair_payload(**kwargs))


RICH_INFO = {
    "imageUrl": "https://cdn.example/serv.png",
    "header": "https://cdn.example/serv-header.png",
    "openGraph": "https://cdn.example/serv-og.png",
    "websites": [{"label": "Website", "url": "https://serv.example"}],
    "socials": [{"type": "twitter", "url": "https://x.com/serv"}],
}


class FakeDexScreenerSource:
    """Returns canned pairs per query and records every search"""

    def __init__(self, pairs_by_query: Optional[Dict[str, List[Dict[str, Any]]]] = None, error: Optional[Exception] = None):
        self.pairs_by_query = pairs_by_query or {}
        self.error = error
        self.queries: List[str] = []

    async def search(self, query: str) -> DexScreenerSearchResult:
        self.queries.append(query)
        if self.error:
            raise self.error
        return DexScreenerSearchResult.model_validate({"pairs": self.pairs_by_query.get(query, [])})


@pytest.fixture
def rich_info():
    return dict(RICH_INFO)


@pytest.fixture
def serv_pairs():
    """Two liquid SERV pairs of the same token, one enriched"""
    return [
        pair_payload(address="0xsmall", market_cap=500, liquidity=80_000, quote_symbol="USDC", quote_name="USD Coin"),
        pair_payload(address="0xbig", market_cap=1_200, liquidity=40_000, info=dict(RICH_INFO)),
    ]
