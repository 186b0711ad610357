"""DexScreener search payload schemas"""

from typing import List, Optional

from pydantic import Field, field_validator

from defai.schemas.base import CamelModel


class Token(CamelModel):
    address: Optional[str] = None
    name: Optional[str] = None
    symbol: Optional[str] = None


class TransactionCount(CamelModel):
    buys: Optional[int] = None
    sells: Optional[int] = None


class Transactions(CamelModel):
    m5: Optional[TransactionCount] = None
    h1: Optional[TransactionCount] = None
    h6: Optional[TransactionCount] = None
    h24: Optional[TransactionCount] = None


class Volume(CamelModel):
    m5: Optional[float] = None
    h1: Optional[float] = None
    h6: Optional[float] = None
    h24: Optional[float] = None


class PriceChange(CamelModel):
    m5: Optional[float] = None
    h1: Optional[float] = None
    h6: Optional[float] = None
    h24: Optional[float] = None


class Liquidity(CamelModel):
    usd: Optional[float] = None
    base: Optional[float] = None
    quote: Optional[float] = None


class Website(CamelModel):
    label: str = "Website"
    url: Optional[str] = None

    @field_validator("label", mode="before")
    @classmethod
    def _default_label(cls, value):
        return value or "Website"


class Social(CamelModel):
    type: Optional[str] = None
    url: Optional[str] = None


class PairInfo(CamelModel):
    """Rich metadata DexScreener attaches to enriched pairs."""

    image_url: Optional[str] = None
    header: Optional[str] = None
    open_graph: Optional[str] = None
    websites: List[Website] = Field(default_factory=list)
    socials: List[Social] = Field(default_factory=list)

    @field_validator("websites", "socials", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []


class DexScreenerPair(CamelModel):
    """One trading pair as returned by the search endpoint."""

    chain_id: str
    dex_id: str
    url: Optional[str] = None
    pair_address: str
    labels: Optional[List[str]] = None
    base_token: Token
    quote_token: Token
    price_native: Optional[str] = None
    price_usd: Optional[str] = None
    txns: Optional[Transactions] = None
    volume: Optional[Volume] = None
    price_change: Optional[PriceChange] = None
    liquidity: Optional[Liquidity] = None
    fdv: Optional[float] = None
    market_cap: Optional[float] = None
    pair_created_at: Optional[int] = None
    info: Optional[PairInfo] = None

    @property
    def liquidity_usd(self) -> Optional[float]:
        return self.liquidity.usd if self.liquidity else None

    @property
    def volume_24h(self) -> Optional[float]:
        return self.volume.h24 if self.volume else None


class DexScreenerSearchResult(CamelModel):
    schema_version: Optional[str] = None
    pairs: List[DexScreenerPair] = Field(default_factory=list)

    @field_validator("pairs", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []
