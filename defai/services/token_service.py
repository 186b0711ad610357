"""Token resolution - merges competing DexScreener pairs into one token view.

A search for a ticker returns many pairs: the same asset listed on several
chains and DEXes, wrapped variants, and unrelated tokens reusing the symbol.
Resolution runs in four pure steps:
1. Filter pairs by symbol, liquidity and 24h volume, then group them by base
   token name (parenthesized annotations such as "(Wormhole)" ignored)
2. Pick the group with the largest summed market cap
3. Pick the group's representative pair: largest market cap among pairs with
   rich metadata, or among all pairs when none has metadata
4. Build the canonical view from the group and its representative pair

Ties in steps 2 and 3 go to the first candidate in upstream order.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence

from defai.core.config import settings
from defai.core.errors import NotFoundError
from defai.core.logging import get_logger
from defai.ingestion.dexscreener import DexScreenerSource
from defai.schemas.dexscreener import DexScreenerPair
from defai.schemas.token import SimplifiedPair, TokenData, TokenGroup, TokenLink

log = get_logger("token_service")

DATA_SOURCE_LABEL = "DexScreener"

_PARENTHESIZED = re.compile(r"\s*\(.*?\)\s*")


# -----------------------------------------------------------------------------
# Grouping
# -----------------------------------------------------------------------------
def normalize_name(name: Optional[str]) -> str:
    """Strip parenthesized annotations and surrounding whitespace from a token name."""
    return _PARENTHESIZED.sub("", name or "").strip()


def filter_pairs(
    pairs: Sequence[DexScreenerPair],
    symbol: str,
    min_liquidity_usd: float = 10_000,
    min_volume_24h_usd: float = 10_000,
) -> List[DexScreenerPair]:
    """Keep liquid, active pairs whose base token carries the queried symbol."""
    wanted = symbol.upper()
    return [
        pair
        for pair in pairs
        if (pair.base_token.symbol or "").upper() == wanted
        and (pair.liquidity_usd or 0) > min_liquidity_usd
        and pair.volume_24h is not None
        and pair.volume_24h > min_volume_24h_usd
    ]


def group_pairs(pairs: Sequence[DexScreenerPair]) -> List[TokenGroup]:
    """Group pairs by normalized base token name, in first-seen order."""
    groups: Dict[str, TokenGroup] = {}
    for pair in pairs:
        key = normalize_name(pair.base_token.name)
        group = groups.get(key)
        if group is None:
            group = groups[key] = TokenGroup(name=key, symbol=pair.base_token.symbol)

        group.pairs.append(pair)
        group.total_market_cap += pair.market_cap or 0
        group.total_volume_24h += pair.volume_24h or 0
    return list(groups.values())


# -----------------------------------------------------------------------------
# Selection
# -----------------------------------------------------------------------------
def select_dominant_group(groups: Sequence[TokenGroup]) -> TokenGroup:
    best: Optional[TokenGroup] = None
    for group in groups:
        if best is None or group.total_market_cap > best.total_market_cap:
            best = group

    if best is None or not best.pairs:
        raise NotFoundError("No valid token groups found")
    return best


def _max_market_cap_pair(
    pairs: Sequence[DexScreenerPair], require_info: bool
) -> Optional[DexScreenerPair]:
    best: Optional[DexScreenerPair] = None
    for pair in pairs:
        if require_info and pair.info is None:
            continue
        if best is None or (pair.market_cap or 0) > (best.market_cap or 0):
            best = pair
    return best


def select_representative_pair(pairs: Sequence[DexScreenerPair]) -> DexScreenerPair:
    """Pick the pair that best represents a token.

    Pairs with rich metadata (logo, websites, socials) win; when none has
    any, the highest market cap pair is used and the view's logo/header
    fields end up null.
    """
    pair = _max_market_cap_pair(pairs, require_info=True)
    if pair is None:
        pair = _max_market_cap_pair(pairs, require_info=False)
    if pair is None:
        raise NotFoundError("No valid pairs found")
    return pair


# -----------------------------------------------------------------------------
# View building
# -----------------------------------------------------------------------------
def build_links(pair: DexScreenerPair) -> List[TokenLink]:
    links: List[TokenLink] = []
    if pair.info:
        links.extend(TokenLink(label=site.label, url=site.url) for site in pair.info.websites if site.url)
        links.extend(
            TokenLink(label=social.type, url=social.url)
            for social in pair.info.socials
            if social.type and social.url
        )

    # The trailing DexScreener link only makes sense next to real ones
    if links and pair.url:
        links.append(TokenLink(label=DATA_SOURCE_LABEL, url=pair.url))
    return links


def simplify_pair(pair: DexScreenerPair) -> SimplifiedPair:
    return SimplifiedPair(
        label=f"{pair.base_token.name}/{pair.quote_token.name}",
        symbol=f"{pair.base_token.symbol}/{pair.quote_token.symbol}",
        chain_id=pair.chain_id,
        dex_id=pair.dex_id,
        url=pair.url,
        pair_address=pair.pair_address,
        price_usd=pair.price_usd,
        liquidity_usd=pair.liquidity_usd or 0,
        transactions=pair.txns,
        volumes=pair.volume,
        price_changes=pair.price_change,
        fdv=pair.fdv,
        market_cap=pair.market_cap,
        pair_created_at=pair.pair_created_at,
    )


def build_simplified_pairs(pairs: Sequence[DexScreenerPair]) -> List[SimplifiedPair]:
    """Project pairs, most liquid first, one entry per pair symbol."""
    ranked = sorted((simplify_pair(pair) for pair in pairs), key=lambda p: p.liquidity_usd, reverse=True)

    unique: List[SimplifiedPair] = []
    seen = set()
    for pair in ranked:
        if pair.symbol in seen:
            continue
        seen.add(pair.symbol)
        unique.append(pair)
    return unique


def build_token_view(group: TokenGroup, pair: DexScreenerPair) -> TokenData:
    info = pair.info
    return TokenData(
        name=group.name,
        symbol=group.symbol,
        logo=info.image_url if info else None,
        header=info.header if info else None,
        open_graph=info.open_graph if info else None,
        links=build_links(pair),
        pair_address=pair.pair_address,
        price_usd=pair.price_usd,
        market_cap_usd=pair.market_cap,
        pairs=build_simplified_pairs(group.pairs),
        volumes=pair.volume,
        price_changes=pair.price_change,
    )


class TokenService:
    """Resolves a ticker symbol to a single canonical token record."""

    def __init__(
        self,
        source: Optional[DexScreenerSource] = None,
        min_liquidity_usd: Optional[float] = None,
        min_volume_24h_usd: Optional[float] = None,
    ):
        self.source = source or DexScreenerSource()
        self.min_liquidity_usd = (
            settings.MIN_LIQUIDITY_USD if min_liquidity_usd is None else min_liquidity_usd
        )
        self.min_volume_24h_usd = (
            settings.MIN_VOLUME_24H_USD if min_volume_24h_usd is None else min_volume_24h_usd
        )

    async def find_token_by_symbol(self, symbol: str) -> Optional[TokenData]:
        """Resolve a symbol, or return None when no liquid pair matches it."""
        try:
            result = await self.source.search(symbol)
            if not result.pairs:
                log.info(f"No pairs returned for {symbol}")
                return None

            filtered = filter_pairs(
                result.pairs,
                symbol,
                min_liquidity_usd=self.min_liquidity_usd,
                min_volume_24h_usd=self.min_volume_24h_usd,
            )
            groups = group_pairs(filtered)
            if not groups:
                log.info(f"No liquid pairs for {symbol} ({len(result.pairs)} pairs before filtering)")
                return None

            main_group = select_dominant_group(groups)
            main_pair = select_representative_pair(main_group.pairs)
            log.debug(
                f"Resolved {symbol}: groups={len(groups)} group={main_group.name!r} "
                f"pairs={len(main_group.pairs)} representative={main_pair.pair_address}"
            )
            return build_token_view(main_group, main_pair)
        except Exception as exc:
            log.error(f"Failed to find token by symbol {symbol}: {exc}")
            raise

    async def resolve(self, symbol: str) -> TokenData:
        """Like find_token_by_symbol, but a missing token raises NotFoundError."""
        data = await self.find_token_by_symbol(symbol)
        if data is None:
            raise NotFoundError(
                f'No data was found for the cryptocurrency token "{symbol}". '
                "Please verify that the token is correct and try again."
            )
        return data
