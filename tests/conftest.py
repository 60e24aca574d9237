"""Shared fixtures: payload builders and domain object factories."""

import pytest

from rift_profile.core.rate_limiter import limiter
from rift_profile.features.matches.models import MatchSummary, Participant


@pytest.fixture(autouse=True)
def disable_inbound_rate_limit():
    """Keep slowapi from throttling the test client across tests."""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def participant_payload():
    """Build one participant entry as returned by match-v5."""

    def build(puuid: str, champion_id: int = 103, **overrides):
        payload = {
            "puuid": puuid,
            "riotIdGameName": f"player-{puuid}",
            "riotIdTagline": "NA1",
            "teamId": 100,
            "win": True,
            "championId": champion_id,
            "championName": f"Champion{champion_id}",
            "kills": 5,
            "deaths": 2,
            "assists": 7,
            "champLevel": 16,
            "goldEarned": 12000,
            "totalMinionsKilled": 180,
            "neutralMinionsKilled": 12,
            "totalDamageDealtToChampions": 21000,
            "visionScore": 24,
            "teamPosition": "MIDDLE",
            "summoner1Id": 4,
            "summoner2Id": 14,
            "item0": 3157,
            "item1": 3020,
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def match_payload(participant_payload):
    """Build a full match-v5 payload."""

    def build(match_id: str, puuid: str = "puuid-1", champion_id: int = 103):
        return {
            "metadata": {
                "matchId": match_id,
                "dataVersion": "2",
                "participants": [puuid, "other-puuid"],
            },
            "info": {
                "gameCreation": 1710000000000,
                "gameDuration": 1800,
                "gameEndTimestamp": 1710001800000,
                "queueId": 420,
                "gameMode": "CLASSIC",
                "gameVersion": "15.20.1",
                "participants": [
                    participant_payload(puuid, champion_id),
                    participant_payload("other-puuid", 1, teamId=200, win=False),
                ],
            },
        }

    return build


@pytest.fixture
def make_match():
    """Build a MatchSummary in which ``puuid`` played ``champion_id``."""

    def build(match_id: str, puuid: str = "puuid-1", champion_id: int = 103):
        return MatchSummary(
            match_id=match_id,
            participants=[
                Participant(
                    puuid=puuid,
                    team_id=100,
                    win=True,
                    champion_id=champion_id,
                    champion_name=f"Champion{champion_id}",
                ),
                Participant(
                    puuid="other-puuid",
                    team_id=200,
                    win=False,
                    champion_id=1,
                    champion_name="Champion1",
                ),
            ],
            duration_seconds=1800,
            queue_id=420,
        )

    return build
