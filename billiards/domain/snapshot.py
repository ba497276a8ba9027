"""Wire format of the persisted game snapshot.

The stored document keeps the camelCase layout of the original storage
record: ``{"players": [...], "history": [...], "config": {...}}``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .game import (
    DEFAULT_RULES,
    Player,
    PrizeRuleSet,
    RoundScore,
    SettlementRecord,
    TeamOutcome,
)

logger = logging.getLogger(__name__)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ConfigPayload(_WireModel):
    win_prize: float = Field(alias="winPrize")
    bonus_ball_prize: float = Field(alias="bonusBallPrize")
    knock_in_prize: float = Field(alias="knockInPrize")
    balls_per_team: float = Field(alias="ballsPerTeam")

    @classmethod
    def from_domain(cls, rules: PrizeRuleSet) -> "ConfigPayload":
        return cls(
            win_prize=rules.win_prize,
            bonus_ball_prize=rules.bonus_ball_prize,
            knock_in_prize=rules.knock_in_prize,
            balls_per_team=rules.balls_per_team,
        )

    def to_domain(self) -> PrizeRuleSet:
        return PrizeRuleSet(
            win_prize=self.win_prize,
            bonus_ball_prize=self.bonus_ball_prize,
            knock_in_prize=self.knock_in_prize,
            balls_per_team=self.balls_per_team,
        )


class PlayerPayload(_WireModel):
    id: str
    name: str
    cumulative_earnings: float = Field(default=0.0, alias="cumulativeEarnings")


class ScorePayload(_WireModel):
    bonus_balls_in: int = Field(default=0, alias="bonusBallsIn")
    opponent_balls_knocked_in: int = Field(default=0, alias="opponentBallsKnockedIn")
    is_main_winner: bool = Field(default=False, alias="isMainWinner")


class TeamOutcomePayload(_WireModel):
    players: list[str]
    score: ScorePayload
    earnings: float

    @classmethod
    def from_domain(cls, outcome: TeamOutcome) -> "TeamOutcomePayload":
        score = outcome.score
        return cls(
            players=list(outcome.players),
            score=ScorePayload(
                bonus_balls_in=score.bonus_balls_in,
                opponent_balls_knocked_in=score.opponent_balls_knocked_in,
                is_main_winner=score.is_main_winner,
            ),
            earnings=outcome.earnings,
        )

    def to_domain(self) -> TeamOutcome:
        return TeamOutcome(
            players=tuple(self.players),
            score=RoundScore(
                bonus_balls_in=self.score.bonus_balls_in,
                opponent_balls_knocked_in=self.score.opponent_balls_knocked_in,
                is_main_winner=self.score.is_main_winner,
            ),
            earnings=self.earnings,
        )


class RecordPayload(_WireModel):
    timestamp: int
    config: ConfigPayload
    team_a: TeamOutcomePayload = Field(alias="teamA")
    team_b: TeamOutcomePayload = Field(alias="teamB")

    @classmethod
    def from_domain(cls, record: SettlementRecord) -> "RecordPayload":
        return cls(
            timestamp=record.timestamp,
            config=ConfigPayload.from_domain(record.config),
            team_a=TeamOutcomePayload.from_domain(record.team_a),
            team_b=TeamOutcomePayload.from_domain(record.team_b),
        )

    def to_domain(self) -> SettlementRecord:
        return SettlementRecord(
            timestamp=self.timestamp,
            config=self.config.to_domain(),
            team_a=self.team_a.to_domain(),
            team_b=self.team_b.to_domain(),
        )


@dataclass(frozen=True)
class Snapshot:
    players: tuple[Player, ...] = field(default_factory=tuple)
    history: tuple[SettlementRecord, ...] = field(default_factory=tuple)
    config: PrizeRuleSet = DEFAULT_RULES


def dump_snapshot(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "players": [
            PlayerPayload(id=p.id, name=p.name, cumulative_earnings=p.cumulative_earnings).model_dump(by_alias=True)
            for p in snapshot.players
        ],
        "history": [RecordPayload.from_domain(record).model_dump(by_alias=True) for record in snapshot.history],
        "config": ConfigPayload.from_domain(snapshot.config).model_dump(by_alias=True),
    }


def encode_snapshot(snapshot: Snapshot) -> str:
    return json.dumps(dump_snapshot(snapshot), ensure_ascii=False)


def decode_snapshot(raw: str | None) -> Snapshot:
    """Parse a stored document, falling back to defaults instead of raising.

    Each section is decoded on its own, so a damaged ``history`` does not
    discard a readable ``players`` list.
    """
    if raw is None:
        return Snapshot()

    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("stored snapshot is not valid JSON, starting empty")
        return Snapshot()
    if not isinstance(data, dict):
        logger.warning("stored snapshot is not an object, starting empty")
        return Snapshot()

    players: tuple[Player, ...] = ()
    history: tuple[SettlementRecord, ...] = ()
    config = DEFAULT_RULES

    if data.get("players") is not None:
        try:
            players = tuple(
                Player(id=item.id, name=item.name, cumulative_earnings=item.cumulative_earnings)
                for item in (PlayerPayload.model_validate(entry) for entry in data["players"])
            )
        except (ValidationError, TypeError) as exc:
            logger.warning("discarding malformed players section: %s", exc)

    if data.get("history") is not None:
        try:
            history = tuple(RecordPayload.model_validate(entry).to_domain() for entry in data["history"])
        except (ValidationError, TypeError) as exc:
            logger.warning("discarding malformed history section: %s", exc)

    if data.get("config") is not None:
        try:
            config = ConfigPayload.model_validate(data["config"]).to_domain()
        except ValidationError as exc:
            logger.warning("discarding malformed config section: %s", exc)

    return Snapshot(players=players, history=history, config=config)
