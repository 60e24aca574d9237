"""
Tests for champion mastery lookup and the match-history estimate.
"""

from unittest.mock import AsyncMock

import pytest

from rift_profile.core.exceptions import ValidationError
from rift_profile.core.riot_api import (
    ChampionMasteryDTO,
    NotFoundError,
    RiotAPIClient,
    SummonerDTO,
    UpstreamError,
)
from rift_profile.core.riot_api.constants import Platform
from rift_profile.features.profiles.mastery import (
    FALLBACK_MASTERY_LIMIT,
    MasteryLookup,
    compute_fallback_mastery,
)

PUUID = "puuid-1"


def mastery_dtos(*champion_ids):
    return [
        ChampionMasteryDTO.model_validate(
            {"championId": cid, "championPoints": 1000 * cid, "championLevel": 5}
        )
        for cid in champion_ids
    ]


class TestComputeFallbackMastery:
    def test_counts_and_sorts_descending(self, make_match):
        matches = [
            make_match("M1", PUUID, 1),
            make_match("M2", PUUID, 2),
            make_match("M3", PUUID, 2),
            make_match("M4", PUUID, 3),
            make_match("M5", PUUID, 2),
            make_match("M6", PUUID, 3),
        ]

        result = compute_fallback_mastery(matches, PUUID)

        assert [(e.champion_id, e.games) for e in result] == [(2, 3), (3, 2), (1, 1)]
        assert all(e.is_synthetic for e in result)

    def test_ties_keep_first_seen_order(self, make_match):
        matches = [
            make_match("M1", PUUID, 9),
            make_match("M2", PUUID, 4),
            make_match("M3", PUUID, 4),
            make_match("M4", PUUID, 9),
            make_match("M5", PUUID, 7),
        ]

        result = compute_fallback_mastery(matches, PUUID)

        assert [e.champion_id for e in result] == [9, 4, 7]

    def test_only_counts_the_requested_player(self, make_match):
        matches = [make_match("M1", "someone-else", 5), make_match("M2", PUUID, 6)]

        result = compute_fallback_mastery(matches, PUUID)

        assert [e.champion_id for e in result] == [6]

    def test_capped(self, make_match):
        matches = [make_match(f"M{i}", PUUID, 1000 + i) for i in range(60)]

        result = compute_fallback_mastery(matches, PUUID)

        assert len(result) == FALLBACK_MASTERY_LIMIT == 40
        assert result[0].champion_id == 1000

    def test_no_matches(self):
        assert compute_fallback_mastery([], PUUID) == []


@pytest.fixture
def mock_riot_client():
    return AsyncMock(spec=RiotAPIClient)


@pytest.fixture
def lookup(mock_riot_client):
    return MasteryLookup(mock_riot_client)


class TestMasteryLookup:
    async def test_by_puuid(self, lookup, mock_riot_client):
        mock_riot_client.get_top_masteries_by_puuid.return_value = mastery_dtos(1, 2)

        result = await lookup.get_top_masteries(puuid=PUUID, count=2, platform="euw1")

        assert [e.champion_id for e in result] == [1, 2]
        mock_riot_client.get_top_masteries_by_puuid.assert_awaited_once_with(
            PUUID, 2, Platform.EUW1
        )
        mock_riot_client.get_top_masteries_by_summoner.assert_not_awaited()

    async def test_falls_back_to_summoner_id(self, lookup, mock_riot_client):
        mock_riot_client.get_top_masteries_by_puuid.side_effect = UpstreamError(
            "Upstream returned 500", status_code=500
        )
        mock_riot_client.get_top_masteries_by_summoner.return_value = mastery_dtos(3)

        result = await lookup.get_top_masteries(
            summoner_id="summoner-1", puuid=PUUID, count=5
        )

        assert [e.champion_id for e in result] == [3]
        mock_riot_client.get_top_masteries_by_summoner.assert_awaited_once_with(
            "summoner-1", 5, Platform.NA1
        )

    async def test_summoner_id_only(self, lookup, mock_riot_client):
        mock_riot_client.get_top_masteries_by_summoner.return_value = mastery_dtos(4)

        result = await lookup.get_top_masteries(summoner_id="summoner-1")

        assert [e.champion_id for e in result] == [4]
        mock_riot_client.get_top_masteries_by_puuid.assert_not_awaited()

    async def test_resolves_summoner_id_from_puuid(self, lookup, mock_riot_client):
        mock_riot_client.get_top_masteries_by_puuid.side_effect = NotFoundError(
            "Resource not found", status_code=404
        )
        mock_riot_client.get_summoner_by_puuid.return_value = SummonerDTO.model_validate(
            {"id": "resolved-id", "puuid": PUUID, "summonerLevel": 100}
        )
        mock_riot_client.get_top_masteries_by_summoner.return_value = mastery_dtos(5)

        result = await lookup.get_top_masteries(puuid=PUUID)

        assert [e.champion_id for e in result] == [5]
        mock_riot_client.get_top_masteries_by_summoner.assert_awaited_once_with(
            "resolved-id", 5, Platform.NA1
        )

    async def test_every_strategy_failing_returns_empty(self, lookup, mock_riot_client):
        error = UpstreamError("Upstream returned 500", status_code=500)
        mock_riot_client.get_top_masteries_by_puuid.side_effect = error
        mock_riot_client.get_summoner_by_puuid.side_effect = error

        result = await lookup.get_top_masteries(puuid=PUUID)

        assert result == []

    async def test_resolved_summoner_without_id_returns_empty(
        self, lookup, mock_riot_client
    ):
        mock_riot_client.get_top_masteries_by_puuid.side_effect = UpstreamError(
            "Upstream returned 500", status_code=500
        )
        mock_riot_client.get_summoner_by_puuid.return_value = SummonerDTO.model_validate(
            {"puuid": PUUID, "summonerLevel": 100}
        )

        result = await lookup.get_top_masteries(puuid=PUUID)

        assert result == []
        mock_riot_client.get_top_masteries_by_summoner.assert_not_awaited()

    async def test_requires_an_identifier(self, lookup, mock_riot_client):
        with pytest.raises(ValidationError):
            await lookup.get_top_masteries(summoner_id=" ", puuid=None)

        mock_riot_client.get_top_masteries_by_puuid.assert_not_awaited()

    async def test_rejects_non_positive_count(self, lookup):
        with pytest.raises(ValidationError):
            await lookup.get_top_masteries(puuid=PUUID, count=0)
