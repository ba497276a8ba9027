from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from billiards.domain import Player, PrizeRuleSet, RoundScore, SettlementRecord, TeamOutcome, TeamSelection


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Any | None = None


class ErrorEnvelope(BaseModel):
    detail: ErrorResponse


class PlayerCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["Alice"])


class PlayerResponse(BaseModel):
    id: str
    name: str
    cumulative_earnings: float

    @classmethod
    def from_domain(cls, player: Player) -> "PlayerResponse":
        return cls(id=player.id, name=player.name, cumulative_earnings=player.cumulative_earnings)


class ConfigResponse(BaseModel):
    win_prize: float
    bonus_ball_prize: float
    knock_in_prize: float
    balls_per_team: float

    @classmethod
    def from_domain(cls, rules: PrizeRuleSet) -> "ConfigResponse":
        return cls(
            win_prize=rules.win_prize,
            bonus_ball_prize=rules.bonus_ball_prize,
            knock_in_prize=rules.knock_in_prize,
            balls_per_team=rules.balls_per_team,
        )


class ConfigUpdateRequest(BaseModel):
    """Partial update; any number is accepted, negatives included."""

    win_prize: float | None = None
    bonus_ball_prize: float | None = None
    knock_in_prize: float | None = None
    balls_per_team: float | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [{"win_prize": 100, "bonus_ball_prize": 50, "knock_in_prize": 20, "balls_per_team": 5}]
        }
    }


class MembershipRequest(BaseModel):
    player_id: str


class BonusBallsRequest(BaseModel):
    count: int = Field(..., ge=0, le=2)


class KnockInsRequest(BaseModel):
    count: int


class KnockInsAdjustRequest(BaseModel):
    delta: int = Field(..., examples=[1, -1])


class ScoreResponse(BaseModel):
    bonus_balls_in: int
    opponent_balls_knocked_in: int
    is_main_winner: bool
    projected_earnings: float | None = None

    @classmethod
    def from_domain(cls, score: RoundScore, projected: float | None = None) -> "ScoreResponse":
        return cls(
            bonus_balls_in=score.bonus_balls_in,
            opponent_balls_knocked_in=score.opponent_balls_knocked_in,
            is_main_winner=score.is_main_winner,
            projected_earnings=projected,
        )


class TeamResponse(BaseModel):
    name: str
    player_ids: list[str]
    members: list[str | None]

    @classmethod
    def from_domain(cls, team: TeamSelection, names: dict[str, str]) -> "TeamResponse":
        return cls(
            name=team.name,
            player_ids=list(team.player_ids),
            members=[names.get(pid) for pid in team.player_ids],
        )


class RoundTeamResponse(BaseModel):
    team: TeamResponse
    score: ScoreResponse
    selectable_player_ids: list[str]


class RoundResponse(BaseModel):
    team_a: RoundTeamResponse
    team_b: RoundTeamResponse


class TeamOutcomeResponse(BaseModel):
    players: list[str]
    names: list[str | None]
    score: ScoreResponse
    earnings: float

    @classmethod
    def from_domain(cls, outcome: TeamOutcome, names: dict[str, str]) -> "TeamOutcomeResponse":
        return cls(
            players=list(outcome.players),
            names=[names.get(pid) for pid in outcome.players],
            score=ScoreResponse.from_domain(outcome.score),
            earnings=outcome.earnings,
        )


class SettlementRecordResponse(BaseModel):
    timestamp: int
    config: ConfigResponse
    team_a: TeamOutcomeResponse
    team_b: TeamOutcomeResponse

    @classmethod
    def from_domain(cls, record: SettlementRecord, names: dict[str, str]) -> "SettlementRecordResponse":
        return cls(
            timestamp=record.timestamp,
            config=ConfigResponse.from_domain(record.config),
            team_a=TeamOutcomeResponse.from_domain(record.team_a, names),
            team_b=TeamOutcomeResponse.from_domain(record.team_b, names),
        )


class SettlementResponse(BaseModel):
    earnings_a: float
    earnings_b: float
    record: SettlementRecordResponse
    players: list[PlayerResponse]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "earnings_a": 310,
                    "earnings_b": 0,
                    "record": {"timestamp": 1700000000000},
                    "players": [{"id": "p1", "name": "Alice", "cumulative_earnings": 155.0}],
                }
            ]
        }
    }


class LedgerEntryResponse(BaseModel):
    player_id: str
    name: str
    stored: float
    derived: float
    consistent: bool


class StateResponse(BaseModel):
    players: list[PlayerResponse]
    history: list[SettlementRecordResponse]
    config: ConfigResponse
    round: RoundResponse
