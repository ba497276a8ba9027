from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class DomainValidationError(ValueError):
    """Raised when a game rule is violated."""


class Team(str, Enum):
    A = "A"
    B = "B"


@dataclass(frozen=True)
class PrizeRuleSet:
    """Payout parameters for a round.

    Values are never validated: zero or negative prizes are legal and flow
    through the earnings arithmetic unchanged.
    """

    win_prize: float = 100
    bonus_ball_prize: float = 50
    knock_in_prize: float = 20
    balls_per_team: float = 5


DEFAULT_RULES = PrizeRuleSet()


@dataclass(frozen=True)
class RoundScore:
    bonus_balls_in: int = 0
    opponent_balls_knocked_in: int = 0
    is_main_winner: bool = False


ZERO_SCORE = RoundScore()


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    cumulative_earnings: float = 0.0


@dataclass(frozen=True)
class TeamSelection:
    name: str
    player_ids: Tuple[str, ...] = field(default_factory=tuple)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self.player_ids

    def __len__(self) -> int:
        return len(self.player_ids)


@dataclass(frozen=True)
class TeamOutcome:
    players: Tuple[str, ...]
    score: RoundScore
    earnings: float


@dataclass(frozen=True)
class SettlementRecord:
    timestamp: int
    config: PrizeRuleSet
    team_a: TeamOutcome
    team_b: TeamOutcome


def normalize_player(name: str) -> str:
    value = name.strip()
    if not value:
        raise DomainValidationError("player name must be non-empty")
    return value

