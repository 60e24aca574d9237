"""
Tests for ProfileAggregator: hard and soft failure handling, ordering and deadline.
"""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from rift_profile.core.enums import MasterySource
from rift_profile.core.exceptions import (
    PlayerNotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)
from rift_profile.core.riot_api import (
    AccountDTO,
    ChampionMasteryDTO,
    ConcurrencyLimiter,
    LeagueEntryDTO,
    MatchDTO,
    NetworkError,
    NotFoundError,
    RiotAPIClient,
    SummonerDTO,
    UpstreamError,
)
from rift_profile.features.profiles.service import ProfileAggregator
from rift_profile.features.profiles.transformers import profile_to_response

PUUID = "puuid-1"


def league_entry(queue_type, tier="GOLD"):
    return LeagueEntryDTO.model_validate(
        {
            "queueType": queue_type,
            "tier": tier,
            "rank": "II",
            "leaguePoints": 42,
            "wins": 30,
            "losses": 20,
        }
    )


@pytest.fixture
def mock_riot_client(match_payload):
    client = AsyncMock(spec=RiotAPIClient)
    client.get_account_by_riot_id.return_value = AccountDTO.model_validate(
        {"puuid": PUUID, "gameName": "Faker", "tagLine": "KR1"}
    )
    client.get_summoner_by_puuid.return_value = SummonerDTO.model_validate(
        {"id": "summoner-1", "puuid": PUUID, "profileIconId": 6, "summonerLevel": 512}
    )
    client.get_league_entries_by_puuid.return_value = [
        league_entry("RANKED_FLEX_SR", "SILVER"),
        league_entry("RANKED_SOLO_5x5", "CHALLENGER"),
    ]
    client.get_top_masteries_by_puuid.return_value = [
        ChampionMasteryDTO.model_validate(
            {"championId": 7, "championPoints": 900000, "championLevel": 7}
        )
    ]
    client.get_match_ids.return_value = ["KR_3", "KR_2", "KR_1"]

    async def get_match(match_id, region=None):
        return MatchDTO.model_validate(match_payload(match_id, PUUID))

    client.get_match.side_effect = get_match
    return client


@pytest.fixture
def aggregator(mock_riot_client):
    return ProfileAggregator(
        mock_riot_client, match_count=20, mastery_count=40, deadline_seconds=5
    )


async def test_full_profile(aggregator, mock_riot_client):
    profile = await aggregator.get_profile("Faker", "KR1")

    assert profile.puuid == PUUID
    assert profile.summoner.summoner_level == 512
    assert profile.ranked_entry.tier == "CHALLENGER"
    assert len(profile.ranked_entries) == 2
    assert profile.mastery[0].champion_points == 900000
    assert [m.match_id for m in profile.matches] == ["KR_3", "KR_2", "KR_1"]
    assert profile.has_more_matches is False
    assert profile.next_match_start == 3
    mock_riot_client.get_match_ids.assert_awaited_once_with(PUUID, start=0, count=20)
    mock_riot_client.get_top_masteries_by_puuid.assert_awaited_once_with(
        PUUID, 40, None
    )


async def test_riot_id_is_normalized(aggregator, mock_riot_client):
    await aggregator.get_profile("  Faker ", "#KR1")

    mock_riot_client.get_account_by_riot_id.assert_awaited_once_with("Faker", "KR1")


async def test_full_window_reports_more(aggregator, mock_riot_client):
    mock_riot_client.get_match_ids.return_value = [f"KR_{i}" for i in range(20)]

    profile = await aggregator.get_profile("Faker", "KR1")

    assert profile.has_more_matches is True
    assert profile.next_match_start == 20


async def test_unknown_account_stops_aggregation(aggregator, mock_riot_client):
    mock_riot_client.get_account_by_riot_id.side_effect = NotFoundError(
        "Resource not found", status_code=404
    )

    with pytest.raises(PlayerNotFoundError):
        await aggregator.get_profile("Nobody", "NA1")

    mock_riot_client.get_summoner_by_puuid.assert_not_awaited()
    mock_riot_client.get_league_entries_by_puuid.assert_not_awaited()
    mock_riot_client.get_match_ids.assert_not_awaited()


async def test_unknown_summoner_is_player_not_found(aggregator, mock_riot_client):
    mock_riot_client.get_summoner_by_puuid.side_effect = NotFoundError(
        "Resource not found", status_code=404
    )

    with pytest.raises(PlayerNotFoundError):
        await aggregator.get_profile("Faker", "KR1")

    mock_riot_client.get_match_ids.assert_not_awaited()


async def test_account_lookup_failure_is_upstream_unavailable(
    aggregator, mock_riot_client
):
    mock_riot_client.get_account_by_riot_id.side_effect = UpstreamError(
        "Upstream returned 503", status_code=503
    )

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await aggregator.get_profile("Faker", "KR1")

    assert exc_info.value.context["status_code"] == 503


async def test_missing_riot_id_is_rejected_before_any_call(
    aggregator, mock_riot_client
):
    with pytest.raises(ValidationError):
        await aggregator.get_profile("", "KR1")

    mock_riot_client.get_account_by_riot_id.assert_not_awaited()


async def test_ranked_falls_back_to_summoner_id(aggregator, mock_riot_client):
    mock_riot_client.get_league_entries_by_puuid.side_effect = UpstreamError(
        "Upstream returned 500", status_code=500
    )
    mock_riot_client.get_league_entries_by_summoner.return_value = [
        league_entry("RANKED_FLEX_SR", "DIAMOND")
    ]

    profile = await aggregator.get_profile("Faker", "KR1")

    assert profile.ranked_entry.tier == "DIAMOND"
    mock_riot_client.get_league_entries_by_summoner.assert_awaited_once_with(
        "summoner-1"
    )


async def test_ranked_unavailable_is_not_an_error(aggregator, mock_riot_client):
    mock_riot_client.get_league_entries_by_puuid.side_effect = UpstreamError(
        "Upstream returned 500", status_code=500
    )
    mock_riot_client.get_league_entries_by_summoner.side_effect = NetworkError(
        "Request failed"
    )

    profile = await aggregator.get_profile("Faker", "KR1")

    assert profile.ranked_entry is None
    assert profile.ranked_entries == []
    assert len(profile.matches) == 3


async def test_ranked_summoner_fallback_skipped_without_summoner_id(
    aggregator, mock_riot_client
):
    mock_riot_client.get_summoner_by_puuid.return_value = SummonerDTO.model_validate(
        {"puuid": PUUID, "summonerLevel": 30}
    )
    mock_riot_client.get_league_entries_by_puuid.side_effect = UpstreamError(
        "Upstream returned 500", status_code=500
    )

    profile = await aggregator.get_profile("Faker", "KR1")

    assert profile.ranked_entry is None
    mock_riot_client.get_league_entries_by_summoner.assert_not_awaited()


async def test_mastery_unavailable_uses_match_history_in_response(
    aggregator, mock_riot_client
):
    mock_riot_client.get_top_masteries_by_puuid.side_effect = UpstreamError(
        "Upstream returned 500", status_code=500
    )
    mock_riot_client.get_top_masteries_by_summoner.side_effect = UpstreamError(
        "Upstream returned 500", status_code=500
    )

    profile = await aggregator.get_profile("Faker", "KR1")
    response = profile_to_response(profile)

    assert profile.mastery == []
    assert response.mastery_source == MasterySource.MATCH_HISTORY
    assert response.mastery[0].champion_id == 103
    assert response.mastery[0].games == 3


async def test_match_ids_failure_yields_empty_history(aggregator, mock_riot_client):
    mock_riot_client.get_match_ids.side_effect = UpstreamError(
        "Upstream returned 500", status_code=500
    )

    profile = await aggregator.get_profile("Faker", "KR1")

    assert profile.matches == []
    assert profile.has_more_matches is False
    mock_riot_client.get_match.assert_not_awaited()


async def test_failed_match_detail_is_dropped(
    aggregator, mock_riot_client, match_payload
):
    async def get_match(match_id, region=None):
        if match_id == "KR_2":
            raise UpstreamError("Upstream returned 500", status_code=500)
        return MatchDTO.model_validate(match_payload(match_id, PUUID))

    mock_riot_client.get_match.side_effect = get_match

    profile = await aggregator.get_profile("Faker", "KR1")

    assert [m.match_id for m in profile.matches] == ["KR_3", "KR_1"]


async def test_match_order_independent_of_completion_order(
    aggregator, mock_riot_client, match_payload
):
    match_ids = [f"KR_{i}" for i in range(6)]
    mock_riot_client.get_match_ids.return_value = match_ids
    completed = []

    async def get_match(match_id, region=None):
        # Earlier ids finish last
        await asyncio.sleep(0.002 * (len(match_ids) - match_ids.index(match_id)))
        completed.append(match_id)
        return MatchDTO.model_validate(match_payload(match_id, PUUID))

    mock_riot_client.get_match.side_effect = get_match

    profile = await aggregator.get_profile("Faker", "KR1")

    assert completed == list(reversed(match_ids))
    assert [m.match_id for m in profile.matches] == match_ids


async def test_duplicate_match_ids_fetched_once(aggregator, mock_riot_client):
    mock_riot_client.get_match_ids.return_value = ["KR_1", "KR_1", "KR_2"]

    profile = await aggregator.get_profile("Faker", "KR1")

    assert [m.match_id for m in profile.matches] == ["KR_1", "KR_2"]
    assert mock_riot_client.get_match.await_count == 2
    assert profile.has_more_matches is False
    assert profile.next_match_start == 3


async def test_full_page_with_duplicate_keeps_raw_cursor(aggregator, mock_riot_client):
    page = [f"KR_{i}" for i in range(19)] + ["KR_0"]
    mock_riot_client.get_match_ids.return_value = page

    profile = await aggregator.get_profile("Faker", "KR1")

    assert len(profile.matches) == 19
    assert profile.has_more_matches is True
    assert profile.next_match_start == 20


async def test_deadline_exceeded(mock_riot_client):
    async def hang(*args, **kwargs):
        await asyncio.sleep(3600)

    mock_riot_client.get_account_by_riot_id.side_effect = hang
    aggregator = ProfileAggregator(mock_riot_client, deadline_seconds=0.05)

    with pytest.raises(UpstreamUnavailableError):
        await aggregator.get_profile("Faker", "KR1")


async def test_concurrent_aggregations_share_the_cap(match_payload):
    """Two profiles at once through one client stay within K upstream calls."""
    limiter = ConcurrencyLimiter(capacity=3)
    observed = []

    async def handler(request: httpx.Request) -> httpx.Response:
        observed.append(limiter.in_flight)
        await asyncio.sleep(0.002)
        path = request.url.path
        if "/accounts/by-riot-id/" in path:
            name = path.split("/")[-2]
            puuid = "puuid-a" if name == "A" else "puuid-b"
            return httpx.Response(
                200, json={"puuid": puuid, "gameName": name, "tagLine": "NA1"}
            )
        if "/summoners/by-puuid/" in path:
            return httpx.Response(
                200, json={"puuid": path.split("/")[-1], "summonerLevel": 100}
            )
        if "/entries/by-puuid/" in path or "/champion-masteries/" in path:
            return httpx.Response(200, json=[])
        if path.endswith("/ids"):
            owner = path.split("/")[-2]
            return httpx.Response(200, json=[f"{owner}_{i}" for i in range(10)])
        match_id = path.split("/")[-1]
        owner = match_id.rsplit("_", 1)[0]
        return httpx.Response(200, json=match_payload(match_id, owner))

    client = RiotAPIClient(
        api_key="test_api_key",
        limiter=limiter,
        transport=httpx.MockTransport(handler),
    )
    aggregator = ProfileAggregator(client, match_count=10, deadline_seconds=5)
    try:
        first, second = await asyncio.gather(
            aggregator.get_profile("A", "NA1"),
            aggregator.get_profile("B", "NA1"),
        )
    finally:
        await client.close()

    assert max(observed) <= 3
    assert limiter.peak_in_flight <= 3
    assert limiter.in_flight == 0
    assert [m.match_id for m in first.matches] == [f"puuid-a_{i}" for i in range(10)]
    assert [m.match_id for m in second.matches] == [f"puuid-b_{i}" for i in range(10)]
