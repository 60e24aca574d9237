"""
Tests for AssetResolver: candidate fallback, placeholders and caching.
"""

from unittest.mock import Mock

import httpx
import pytest
import pytest_asyncio

from rift_profile.core.enums import AssetKind
from rift_profile.core.exceptions import ValidationError
from rift_profile.features.assets.cache import AssetCache
from rift_profile.features.assets import service as asset_service
from rift_profile.features.assets.models import PLACEHOLDER_PNG
from rift_profile.features.assets.service import AssetResolver, parse_asset_request

PNG = b"\x89PNG\r\n\x1a\nfake-image"


class CDN:
    """Serves PNG bytes for known URLs, 404 for everything else."""

    def __init__(self, available=(), failing=()):
        self.available = set(available)
        self.failing = set(failing)
        self.requested = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        if url in self.failing:
            raise httpx.ConnectTimeout("timed out", request=request)
        if url in self.available:
            return httpx.Response(200, content=PNG, headers={"Content-Type": "image/png"})
        return httpx.Response(404)


CHAMPION_SQUARE = "https://cdn.communitydragon.org/latest/champion/103/square"
CHAMPION_RAW = (
    "https://raw.communitydragon.org/latest/plugins/rcp-be-lol-game-data"
    "/global/default/v1/champion-icons/103.png"
)


@pytest_asyncio.fixture
async def make_resolver():
    clients = []

    def build(cdn, cache=None):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(cdn))
        clients.append(http_client)
        return AssetResolver(http_client, ddragon_version="15.20.1", cache=cache or AssetCache())

    yield build
    for http_client in clients:
        await http_client.aclose()


async def test_first_candidate_wins(make_resolver):
    cdn = CDN(available={CHAMPION_SQUARE, CHAMPION_RAW})
    resolver = make_resolver(cdn)

    asset = await resolver.resolve(AssetKind.CHAMPION, "103")

    assert asset.degraded is False
    assert asset.content == PNG
    assert asset.source == "cdragon_square"
    assert asset.url == CHAMPION_SQUARE
    assert cdn.requested == [CHAMPION_SQUARE]
    assert asset.cache_control == (
        "public, max-age=3600, s-maxage=86400, stale-while-revalidate=604800"
    )


async def test_falls_back_to_next_candidate(make_resolver):
    cdn = CDN(available={CHAMPION_RAW})
    resolver = make_resolver(cdn)

    asset = await resolver.resolve(AssetKind.CHAMPION, "103")

    assert asset.degraded is False
    assert asset.source == "cdragon_raw"
    assert cdn.requested == [CHAMPION_SQUARE, CHAMPION_RAW]


async def test_transport_error_moves_to_next_candidate(make_resolver):
    cdn = CDN(available={CHAMPION_RAW}, failing={CHAMPION_SQUARE})
    resolver = make_resolver(cdn)

    asset = await resolver.resolve(AssetKind.CHAMPION, "103")

    assert asset.url == CHAMPION_RAW


async def test_item_candidate_order(make_resolver):
    cdn = CDN()
    resolver = make_resolver(cdn)

    asset = await resolver.resolve(AssetKind.ITEM, "3157")

    assert asset.degraded is True
    assert cdn.requested == [
        "https://ddragon.leagueoflegends.com/cdn/15.20.1/img/item/3157.png",
        "https://cdn.communitydragon.org/15.20.1/item/3157",
        "https://raw.communitydragon.org/pbe/plugins/rcp-be-lol-game-data"
        "/global/default/assets/items/icons2d/3157.png",
    ]


async def test_unresolvable_id_returns_placeholder(make_resolver):
    cdn = CDN()
    resolver = make_resolver(cdn)

    asset = await resolver.resolve(AssetKind.CHAMPION, "999999")

    assert asset.degraded is True
    assert asset.content == PLACEHOLDER_PNG
    assert asset.content_type == "image/png"
    assert asset.cache_control == "public, max-age=3600"


async def test_non_numeric_id_makes_no_requests(make_resolver):
    cdn = CDN()
    resolver = make_resolver(cdn)

    asset = await resolver.resolve(AssetKind.ITEM, "abc")

    assert asset.degraded is True
    assert cdn.requested == []


async def test_superscript_digit_degrades_without_requests(make_resolver, monkeypatch):
    logger = Mock()
    monkeypatch.setattr(asset_service, "logger", logger)
    cdn = CDN()
    resolver = make_resolver(cdn)

    asset = await resolver.resolve(AssetKind.CHAMPION, "\u00b2")

    assert asset.degraded is True
    assert cdn.requested == []
    logger.exception.assert_not_called()
    logger.info.assert_called_once()


async def test_unknown_spell_makes_no_requests(make_resolver):
    cdn = CDN()
    resolver = make_resolver(cdn)

    asset = await resolver.resolve(AssetKind.SPELL, "9999")

    assert asset.degraded is True
    assert cdn.requested == []


async def test_spell_only_known_to_community_dragon(make_resolver):
    url = (
        "https://raw.communitydragon.org/pbe/plugins/rcp-be-lol-game-data"
        "/global/default/data/spells/icons2d/summonermana.png"
    )
    cdn = CDN(available={url})
    resolver = make_resolver(cdn)

    asset = await resolver.resolve(AssetKind.SPELL, "13")

    assert asset.url == url
    assert cdn.requested == [url]


async def test_resolved_asset_is_cached(make_resolver):
    cdn = CDN(available={CHAMPION_SQUARE})
    resolver = make_resolver(cdn)

    first = await resolver.resolve(AssetKind.CHAMPION, "103")
    second = await resolver.resolve(AssetKind.CHAMPION, "103")

    assert second is first
    assert cdn.requested == [CHAMPION_SQUARE]


async def test_placeholder_is_not_cached(make_resolver):
    cdn = CDN()
    resolver = make_resolver(cdn)

    await resolver.resolve(AssetKind.CHAMPION, "103")
    cdn.available.add(CHAMPION_SQUARE)
    asset = await resolver.resolve(AssetKind.CHAMPION, "103")

    assert asset.degraded is False


async def test_unexpected_error_still_returns_placeholder(make_resolver):
    def broken(request):
        raise RuntimeError("bug in transport")

    resolver = make_resolver(broken)

    asset = await resolver.resolve(AssetKind.CHAMPION, "103")

    assert asset.degraded is True


class TestParseAssetRequest:
    def test_kind_is_case_insensitive(self):
        assert parse_asset_request("Champion", " 103 ") == (AssetKind.CHAMPION, "103")

    def test_rank_tier_uppercased(self):
        assert parse_asset_request("rank", "gold") == (AssetKind.RANK, "GOLD")

    @pytest.mark.parametrize("kind,resource_id", [("skin", "1"), ("item", ""), ("item", None)])
    def test_invalid(self, kind, resource_id):
        with pytest.raises(ValidationError):
            parse_asset_request(kind, resource_id)
