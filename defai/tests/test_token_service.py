"""Token resolution tests"""

import pytest

from conftest import FakeDexScreenerSource, make_pair, pair_payload
from defai.core.errors import NotFoundError, UpstreamError
from defai.schemas.token import TokenGroup
from defai.services.token_service import (
    TokenService,
    build_links,
    build_simplified_pairs,
    build_token_view,
    filter_pairs,
    group_pairs,
    normalize_name,
    select_dominant_group,
    select_representative_pair,
)


class TestFilterAndGroup:
    """Test pair filtering and grouping"""

    def test_normalize_name_drops_parenthesized_suffix(self):
        assert normalize_name("Serv (Wormhole)") == "Serv"
        assert normalize_name("  Serv  ") == "Serv"
        assert normalize_name(None) == ""

    def test_filter_thresholds_are_strict(self):
        pairs = [
            make_pair(address="ok"),
            make_pair(address="low-liq", liquidity=10_000),
            make_pair(address="no-liq", liquidity=None),
            make_pair(address="low-vol", volume_24h=10_000),
            make_pair(address="no-vol", volume_24h=None),
            make_pair(address="other", symbol="SERVX"),
            make_pair(address="lower", symbol="serv"),
        ]
        kept = filter_pairs(pairs, "Serv")
        assert [p.pair_address for p in kept] == ["ok", "lower"]

    def test_every_pair_lands_in_exactly_one_group(self):
        pairs = [
            make_pair(address="a", name="Serv"),
            make_pair(address="b", name="Serv (Wormhole)"),
            make_pair(address="c", name="Other Serv"),
            make_pair(address="d", name="Other Serv", market_cap=None),
        ]
        groups = group_pairs(pairs)

        assert sum(len(g.pairs) for g in groups) == len(pairs)
        assert [g.name for g in groups] == ["Serv", "Other Serv"]

    def test_group_totals_treat_missing_values_as_zero(self):
        pairs = [
            make_pair(address="a", market_cap=100, volume_24h=50_000),
            make_pair(address="b", market_cap=None, volume_24h=None),
        ]
        (group,) = group_pairs(pairs)

        assert group.total_market_cap == 100
        assert group.total_volume_24h == 50_000
        assert len(group.pairs) == 2

    def test_empty_input_gives_no_groups(self):
        assert group_pairs([]) == []


class TestSelection:
    """Test dominant group and representative pair selection"""

    def test_largest_market_cap_group_wins(self):
        small = TokenGroup(name="small", total_market_cap=100, pairs=[make_pair()])
        large = TokenGroup(name="large", total_market_cap=250, pairs=[make_pair()])
        assert select_dominant_group([small, large]).name == "large"

    def test_tie_goes_to_first_group(self):
        first = TokenGroup(name="first", total_market_cap=100, pairs=[make_pair()])
        second = TokenGroup(name="second", total_market_cap=100, pairs=[make_pair()])
        assert select_dominant_group([first, second]).name == "first"

    def test_no_groups_raises_not_found(self):
        with pytest.raises(NotFoundError):
            select_dominant_group([])

    def test_empty_group_raises_not_found(self):
        with pytest.raises(NotFoundError):
            select_dominant_group([TokenGroup(name="empty", total_market_cap=10)])

    def test_enriched_pair_beats_larger_bare_pair(self, rich_info):
        pairs = [
            make_pair(address="bare", market_cap=9_000),
            make_pair(address="rich", market_cap=1_000, info=rich_info),
        ]
        assert select_representative_pair(pairs).pair_address == "rich"

    def test_falls_back_to_all_pairs_without_metadata(self):
        pairs = [
            make_pair(address="a", market_cap=100),
            make_pair(address="b", market_cap=300),
            make_pair(address="c", market_cap=None),
        ]
        assert select_representative_pair(pairs).pair_address == "b"

    def test_representative_tie_goes_to_first(self, rich_info):
        pairs = [
            make_pair(address="a", market_cap=100, info=rich_info),
            make_pair(address="b", market_cap=100, info=rich_info),
        ]
        assert select_representative_pair(pairs).pair_address == "a"

    def test_pairs_without_market_cap_still_resolve(self):
        pairs = [make_pair(address="a", market_cap=None), make_pair(address="b", market_cap=None)]
        assert select_representative_pair(pairs).pair_address == "a"

    def test_no_pairs_raises_not_found(self):
        with pytest.raises(NotFoundError):
            select_representative_pair([])


class TestViewBuilding:
    """Test canonical token view assembly"""

    def test_no_websites_or_socials_gives_no_links(self):
        assert build_links(make_pair()) == []
        assert build_links(make_pair(info={"imageUrl": "https://cdn.example/x.png"})) == []

    def test_one_website_adds_trailing_dexscreener_link(self):
        pair = make_pair(address="0xabc", info={"websites": [{"label": "Website", "url": "https://serv.example"}]})
        links = build_links(pair)

        assert [(l.label, l.url) for l in links] == [
            ("Website", "https://serv.example"),
            ("DexScreener", "https://dexscreener.com/ethereum/0xabc"),
        ]

    def test_entries_without_url_or_type_are_skipped(self):
        info = {
            "websites": [{"url": None}],
            "socials": [{"type": None, "url": "https://t.me/serv"}, {"type": "telegram", "url": None}],
        }
        assert build_links(make_pair(info=info)) == []

    def test_websites_come_before_socials(self, rich_info):
        labels = [link.label for link in build_links(make_pair(info=rich_info))]
        assert labels == ["Website", "twitter", "DexScreener"]

    def test_duplicate_pair_symbols_keep_most_liquid(self):
        pairs = [
            make_pair(address="thin", liquidity=20_000),
            make_pair(address="deep", liquidity=90_000),
            make_pair(address="usdc", liquidity=50_000, quote_symbol="USDC", quote_name="USD Coin"),
        ]
        simplified = build_simplified_pairs(pairs)

        assert [p.pair_address for p in simplified] == ["deep", "usdc"]
        assert simplified[0].symbol == "SERV/WETH"
        assert simplified[0].label == "Serv/Wrapped Ether"

    def test_missing_liquidity_is_zero(self):
        (simplified,) = build_simplified_pairs([make_pair(liquidity=None)])
        assert simplified.liquidity_usd == 0

    def test_view_without_metadata_has_null_images(self):
        pair = make_pair(market_cap=700)
        group = TokenGroup(name="Serv", symbol="SERV", pairs=[pair], total_market_cap=700)
        view = build_token_view(group, pair)

        assert view.logo is None
        assert view.header is None
        assert view.open_graph is None
        assert view.links == []
        assert view.market_cap_usd == 700

    def test_view_serializes_with_camel_case_keys(self, rich_info):
        pair = make_pair(info=rich_info)
        group = TokenGroup(name="Serv", symbol="SERV", pairs=[pair])
        dumped = build_token_view(group, pair).model_dump(by_alias=True)

        assert dumped["openGraph"] == rich_info["openGraph"]
        assert dumped["marketCapUsd"] == 1_000
        assert dumped["pairs"][0]["liquidityUsd"] == 50_000
        assert dumped["priceChanges"]["h24"] == 5.5


class TestTokenService:
    """Test end-to-end resolution against a fake DexScreener"""

    @pytest.mark.asyncio
    async def test_resolves_largest_pair_of_dominant_group(self, serv_pairs):
        source = FakeDexScreenerSource({"SERV": serv_pairs})
        data = await TokenService(source).find_token_by_symbol("SERV")

        assert source.queries == ["SERV"]
        assert data.market_cap_usd == 1_200
        assert data.pair_address == "0xbig"
        assert len(data.pairs) == 2
        assert [p.liquidity_usd for p in data.pairs] == [80_000, 40_000]
        assert data.website == "https://serv.example"

    @pytest.mark.asyncio
    async def test_dominant_group_wins_over_impostor(self, serv_pairs):
        impostor = pair_payload(address="0xfake", name="Serv Inu", market_cap=1_500)
        source = FakeDexScreenerSource({"SERV": serv_pairs + [impostor]})
        data = await TokenService(source).find_token_by_symbol("SERV")

        assert data.name == "Serv"
        assert {p.pair_address for p in data.pairs} == {"0xsmall", "0xbig"}

    @pytest.mark.asyncio
    async def test_no_pairs_is_no_data(self):
        source = FakeDexScreenerSource({})
        assert await TokenService(source).find_token_by_symbol("GHOST") is None

    @pytest.mark.asyncio
    async def test_only_illiquid_pairs_is_no_data(self):
        source = FakeDexScreenerSource({"GHOST": [pair_payload(symbol="GHOST", liquidity=5)]})
        assert await TokenService(source).find_token_by_symbol("GHOST") is None

    @pytest.mark.asyncio
    async def test_resolve_raises_not_found(self):
        source = FakeDexScreenerSource({})
        with pytest.raises(NotFoundError, match="GHOST"):
            await TokenService(source).resolve("GHOST")

    @pytest.mark.asyncio
    async def test_upstream_errors_propagate(self):
        source = FakeDexScreenerSource(error=UpstreamError("DexScreener", "boom"))
        with pytest.raises(UpstreamError):
            await TokenService(source).find_token_by_symbol("SERV")

    @pytest.mark.asyncio
    async def test_thresholds_are_configurable(self):
        source = FakeDexScreenerSource({"SERV": [pair_payload(liquidity=500, volume_24h=500)]})
        service = TokenService(source, min_liquidity_usd=100, min_volume_24h_usd=100)
        data = await service.find_token_by_symbol("SERV")
        assert data is not None
