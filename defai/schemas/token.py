"""Resolved token schemas"""

from typing import List, Optional

from pydantic import BaseModel, Field

from defai.schemas.base import CamelModel
from defai.schemas.dexscreener import (
    DexScreenerPair,
    PriceChange,
    Transactions,
    Volume,
)


class TokenGroup(BaseModel):
    """Pairs sharing a normalized base token name, with running totals."""

    name: str
    symbol: Optional[str] = None
    pairs: List[DexScreenerPair] = Field(default_factory=list)
    total_market_cap: float = 0
    total_volume_24h: float = 0


class TokenLink(CamelModel):
    label: str  # e.g. "Website", "twitter", "DexScreener"
    url: str


class SimplifiedPair(CamelModel):
    label: str  # "BaseName/QuoteName"
    symbol: str  # "BASE/QUOTE"
    chain_id: str
    dex_id: str
    url: Optional[str] = None
    pair_address: str
    price_usd: Optional[str] = None
    liquidity_usd: float = 0
    transactions: Optional[Transactions] = None
    volumes: Optional[Volume] = None
    price_changes: Optional[PriceChange] = None
    fdv: Optional[float] = None
    market_cap: Optional[float] = None
    pair_created_at: Optional[int] = None


class TokenData(CamelModel):
    """Canonical view of a token merged from all of its pairs."""

    name: str
    symbol: Optional[str] = None
    logo: Optional[str] = None
    header: Optional[str] = None
    open_graph: Optional[str] = None
    links: List[TokenLink] = Field(default_factory=list)
    pair_address: str
    price_usd: Optional[str] = None
    market_cap_usd: Optional[float] = None
    pairs: List[SimplifiedPair] = Field(default_factory=list)
    volumes: Optional[Volume] = None
    price_changes: Optional[PriceChange] = None

    @property
    def website(self) -> Optional[str]:
        """First link url, which is a website whenever the token has one."""
        return self.links[0].url if self.links else None
