"""Round close-out: earnings, equal-split allocation and history."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from .earnings import compute_earnings
from .game import (
    DomainValidationError,
    Player,
    PrizeRuleSet,
    RoundScore,
    SettlementRecord,
    TeamOutcome,
    TeamSelection,
)
from .roster import members_overlap


@dataclass(frozen=True)
class SettlementResult:
    players: tuple[Player, ...]
    history: tuple[SettlementRecord, ...]
    record: SettlementRecord

    @property
    def earnings_a(self) -> float:
        return self.record.team_a.earnings

    @property
    def earnings_b(self) -> float:
        return self.record.team_b.earnings


def validate_round(
    team_a: TeamSelection,
    team_b: TeamSelection,
    score_a: RoundScore,
    score_b: RoundScore,
) -> None:
    if not team_a.player_ids or not team_b.player_ids:
        raise DomainValidationError("both teams must have members")
    if score_a.is_main_winner and score_b.is_main_winner:
        raise DomainValidationError("only one team can be the main winner")
    shared = members_overlap(team_a, team_b)
    if shared:
        raise DomainValidationError(f"players on both teams: {', '.join(sorted(shared))}")


def settle_round(
    team_a: TeamSelection,
    team_b: TeamSelection,
    score_a: RoundScore,
    score_b: RoundScore,
    rules: PrizeRuleSet,
    players: Sequence[Player],
    history: Sequence[SettlementRecord],
    *,
    now: datetime | None = None,
) -> SettlementResult:
    """Close out a round and return the new roster and history.

    Nothing passed in is mutated; on rejection the caller's state is left
    exactly as it was. Knock-in counts are taken as given, even above
    ``rules.balls_per_team``.
    """
    validate_round(team_a, team_b, score_a, score_b)

    earnings_a = compute_earnings(score_a, rules)
    earnings_b = compute_earnings(score_b, rules)

    share_a = earnings_a / len(team_a.player_ids)
    share_b = earnings_b / len(team_b.player_ids)

    updated_players: list[Player] = []
    for player in players:
        if player.id in team_a:
            player = replace(player, cumulative_earnings=player.cumulative_earnings + share_a)
        elif player.id in team_b:
            player = replace(player, cumulative_earnings=player.cumulative_earnings + share_b)
        updated_players.append(player)

    settled_at = now or datetime.now(timezone.utc)
    record = SettlementRecord(
        timestamp=int(settled_at.timestamp() * 1000),
        config=replace(rules),
        team_a=TeamOutcome(players=tuple(team_a.player_ids), score=score_a, earnings=earnings_a),
        team_b=TeamOutcome(players=tuple(team_b.player_ids), score=score_b, earnings=earnings_b),
    )

    return SettlementResult(
        players=tuple(updated_players),
        history=(record, *history),
        record=record,
    )


def allocations(record: SettlementRecord) -> dict[str, float]:
    """Per-player amounts a record credited, recomputed from its frozen data."""
    shares: dict[str, float] = {}
    for outcome in (record.team_a, record.team_b):
        if not outcome.players:
            continue
        share = outcome.earnings / len(outcome.players)
        for player_id in outcome.players:
            shares[player_id] = shares.get(player_id, 0.0) + share
    return shares


def derive_cumulative_earnings(history: Iterable[SettlementRecord]) -> dict[str, float]:
    """Replay history into running totals.

    Records are replayed oldest first so float sums accumulate in the same
    order the live ledger did.
    """
    totals: dict[str, float] = {}
    for record in reversed(list(history)):
        for player_id, amount in allocations(record).items():
            totals[player_id] = totals.get(player_id, 0.0) + amount
    return totals
