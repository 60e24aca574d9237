"""Pydantic models for Riot API response data."""

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class AccountDTO(BaseModel):
    """Riot Account information."""

    puuid: str
    game_name: str = Field(..., alias="gameName")
    tag_line: str = Field(..., alias="tagLine")

    model_config = ConfigDict(populate_by_name=True)


class SummonerDTO(BaseModel):
    """League of Legends Summoner information.

    ``id`` (the encrypted summoner id) is missing from puuid-only responses.
    """

    id: Optional[str] = None
    puuid: str
    profile_icon_id: Optional[int] = Field(None, alias="profileIconId")
    summoner_level: int = Field(..., alias="summonerLevel")

    model_config = ConfigDict(populate_by_name=True)


class LeagueEntryDTO(BaseModel):
    """League entry information."""

    league_id: Optional[str] = Field(None, alias="leagueId")
    summoner_id: Optional[str] = Field(None, alias="summonerId")
    puuid: Optional[str] = None
    queue_type: str = Field(..., alias="queueType")
    tier: str
    rank: str
    league_points: int = Field(..., alias="leaguePoints")
    wins: int
    losses: int
    hot_streak: bool = Field(False, alias="hotStreak")

    model_config = ConfigDict(populate_by_name=True)


class ChampionMasteryDTO(BaseModel):
    """Champion mastery entry."""

    champion_id: int = Field(..., alias="championId")
    champion_points: int = Field(..., alias="championPoints")
    champion_level: int = Field(..., alias="championLevel")
    chest_granted: bool = Field(False, alias="chestGranted")

    model_config = ConfigDict(populate_by_name=True)


class ParticipantDTO(BaseModel):
    """Match participant information."""

    puuid: str
    riot_id_game_name: Optional[str] = Field(None, alias="riotIdGameName")
    riot_id_tagline: Optional[str] = Field(None, alias="riotIdTagline")
    summoner_name: Optional[str] = Field(None, alias="summonerName")
    team_id: int = Field(..., alias="teamId")
    win: bool
    champion_id: int = Field(..., alias="championId")
    champion_name: str = Field(..., alias="championName")
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    champ_level: int = Field(0, alias="champLevel")
    gold_earned: int = Field(0, alias="goldEarned")
    total_minions_killed: int = Field(0, alias="totalMinionsKilled")
    neutral_minions_killed: int = Field(0, alias="neutralMinionsKilled")
    total_damage_dealt_to_champions: int = Field(
        0, alias="totalDamageDealtToChampions"
    )
    vision_score: Optional[float] = Field(None, alias="visionScore")
    team_position: Optional[str] = Field(None, alias="teamPosition")
    summoner1_id: Optional[int] = Field(None, alias="summoner1Id")
    summoner2_id: Optional[int] = Field(None, alias="summoner2Id")
    item0: int = 0
    item1: int = 0
    item2: int = 0
    item3: int = 0
    item4: int = 0
    item5: int = 0
    item6: int = 0

    model_config = ConfigDict(populate_by_name=True)


class MatchInfoDTO(BaseModel):
    """Match information."""

    game_creation: Optional[int] = Field(None, alias="gameCreation")
    game_duration: int = Field(..., alias="gameDuration")
    game_end_timestamp: Optional[int] = Field(None, alias="gameEndTimestamp")
    queue_id: Optional[int] = Field(None, alias="queueId")
    game_mode: Optional[str] = Field(None, alias="gameMode")
    game_version: Optional[str] = Field(None, alias="gameVersion")
    participants: List[ParticipantDTO]

    model_config = ConfigDict(populate_by_name=True)


class MatchMetadataDTO(BaseModel):
    """Match metadata."""

    match_id: str = Field(..., alias="matchId")
    participants: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class MatchDTO(BaseModel):
    """Complete match data."""

    metadata: MatchMetadataDTO
    info: MatchInfoDTO

    @property
    def match_id(self) -> str:
        """Get match ID from metadata."""
        return self.metadata.match_id

    model_config = ConfigDict(populate_by_name=True)
