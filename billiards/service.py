from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, replace
from uuid import uuid4

from billiards.domain import (
    ZERO_SCORE,
    DomainValidationError,
    Player,
    PrizeRuleSet,
    RoundScore,
    SettlementRecord,
    SettlementResult,
    Snapshot,
    Team,
    TeamSelection,
    compute_earnings,
    derive_cumulative_earnings,
    normalize_player,
    selectable_for,
    set_main_winner,
    settle_round,
    toggle_membership,
)
from billiards.storage.repository import SnapshotRepository

logger = logging.getLogger(__name__)

BONUS_BALL_COUNTS = (0, 1, 2)


class PlayerNotFoundError(DomainValidationError):
    """Raised when an operation names a player id missing from the roster."""


@dataclass(frozen=True)
class TeamRoundState:
    selection: TeamSelection
    score: RoundScore
    projected_earnings: float
    selectable_player_ids: tuple[str, ...]


class BilliardsService:
    """Owns the working state between calls and persists it after each change.

    Round scores and team selections are transient and never written to
    storage; players, history and config are. Route handlers run in a
    threadpool, so every read and write of the working state holds
    ``_lock``.
    """

    def __init__(self, repo: SnapshotRepository) -> None:
        self.repo = repo
        self._lock = threading.RLock()
        self.players: tuple[Player, ...] = ()
        self.history: tuple[SettlementRecord, ...] = ()
        self.config = PrizeRuleSet()
        self.team_a = TeamSelection(name="Team A")
        self.team_b = TeamSelection(name="Team B")
        self.score_a = ZERO_SCORE
        self.score_b = ZERO_SCORE

    def load(self) -> None:
        with self._lock:
            snapshot = self.repo.load()
            self.players = snapshot.players
            self.history = snapshot.history
            self.config = snapshot.config
        logger.info("loaded %d players and %d settled rounds", len(snapshot.players), len(snapshot.history))

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(players=self.players, history=self.history, config=self.config)

    def _persist(self) -> None:
        self.repo.save(self.snapshot())

    # Roster

    def add_player(self, name: str) -> Player:
        player = Player(id=str(uuid4()), name=normalize_player(name))
        with self._lock:
            self.players = (*self.players, player)
            self._persist()
        logger.info("player added: %s (%s)", player.name, player.id)
        return player

    def delete_player(self, player_id: str) -> None:
        with self._lock:
            # History and team selections keep the id; lookups on it return None.
            remaining = tuple(p for p in self.players if p.id != player_id)
            if len(remaining) == len(self.players):
                raise PlayerNotFoundError(f"unknown player: {player_id}")
            self.players = remaining
            self._persist()
        logger.info("player removed: %s", player_id)

    def get_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def player_name(self, player_id: str) -> str | None:
        player = self.get_player(player_id)
        return player.name if player is not None else None

    # Config

    def update_config(self, **changes: float) -> PrizeRuleSet:
        unknown = set(changes) - set(PrizeRuleSet.__dataclass_fields__)
        if unknown:
            raise DomainValidationError(f"unknown config fields: {', '.join(sorted(unknown))}")
        with self._lock:
            self.config = replace(self.config, **changes)
            self._persist()
            return self.config

    # Round in progress

    def team(self, team: Team) -> TeamSelection:
        return self.team_a if team is Team.A else self.team_b

    def score(self, team: Team) -> RoundScore:
        return self.score_a if team is Team.A else self.score_b

    def _set_score(self, team: Team, score: RoundScore) -> RoundScore:
        if team is Team.A:
            self.score_a = score
        else:
            self.score_b = score
        return score

    def round_state(self) -> dict[Team, TeamRoundState]:
        with self._lock:
            return {
                team: TeamRoundState(
                    selection=self.team(team),
                    score=self.score(team),
                    projected_earnings=compute_earnings(self.score(team), self.config),
                    selectable_player_ids=tuple(
                        player.id
                        for player in self.players
                        if selectable_for(team, player.id, self.team_a, self.team_b)
                    ),
                )
                for team in Team
            }

    def toggle_membership(self, player_id: str, team: Team) -> tuple[TeamSelection, TeamSelection]:
        with self._lock:
            if self.get_player(player_id) is None and player_id not in self.team(team):
                raise PlayerNotFoundError(f"unknown player: {player_id}")
            self.team_a, self.team_b = toggle_membership(player_id, team, self.team_a, self.team_b)
            return self.team_a, self.team_b

    def set_main_winner(self, team: Team) -> tuple[RoundScore, RoundScore]:
        with self._lock:
            self.score_a, self.score_b = set_main_winner(team, self.score_a, self.score_b)
            return self.score_a, self.score_b

    def set_bonus_balls(self, team: Team, count: int) -> RoundScore:
        if count not in BONUS_BALL_COUNTS:
            raise DomainValidationError("bonus balls must be 0, 1 or 2")
        with self._lock:
            return self._set_score(team, replace(self.score(team), bonus_balls_in=count))

    def set_knock_ins(self, team: Team, count: int) -> RoundScore:
        with self._lock:
            # A fractional ball count still caps at whole balls.
            count = min(math.floor(self.config.balls_per_team), max(0, count))
            return self._set_score(team, replace(self.score(team), opponent_balls_knocked_in=count))

    def adjust_knock_ins(self, team: Team, delta: int) -> RoundScore:
        with self._lock:
            return self.set_knock_ins(team, self.score(team).opponent_balls_knocked_in + delta)

    def submit_round(self) -> SettlementResult:
        with self._lock:
            result = settle_round(
                self.team_a,
                self.team_b,
                self.score_a,
                self.score_b,
                self.config,
                self.players,
                self.history,
            )
            self.players = result.players
            self.history = result.history
            self._persist()

            self.score_a = ZERO_SCORE
            self.score_b = ZERO_SCORE
            team_sizes = len(self.team_a), len(self.team_b)

        logger.info(
            "round settled: team A %.2f over %d, team B %.2f over %d",
            result.earnings_a,
            team_sizes[0],
            result.earnings_b,
            team_sizes[1],
        )
        return result

    # Maintenance

    def reset_all(self) -> None:
        """Erase players and history. The rule set stays in memory untouched."""
        with self._lock:
            self.players = ()
            self.history = ()
            self.repo.clear()
        logger.info("all players and history erased")

    def ledger_report(self) -> list[dict[str, object]]:
        with self._lock:
            players, history = self.players, self.history
        derived = derive_cumulative_earnings(history)
        return [
            {
                "player_id": player.id,
                "name": player.name,
                "stored": player.cumulative_earnings,
                "derived": derived.get(player.id, 0.0),
                "consistent": abs(player.cumulative_earnings - derived.get(player.id, 0.0)) < 1e-9,
            }
            for player in players
        ]
