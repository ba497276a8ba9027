"""Team membership and winner-flag mutators.

Both operations keep their invariant by writing through to the opposing
team instead of rejecting the request: a player joining one team leaves the
other, and a team claiming the win clears the other's flag.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Tuple

from .game import RoundScore, Team, TeamSelection


def toggle_membership(
    player_id: str,
    team: Team,
    team_a: TeamSelection,
    team_b: TeamSelection,
) -> Tuple[TeamSelection, TeamSelection]:
    target, other = (team_a, team_b) if team is Team.A else (team_b, team_a)

    if player_id in target:
        target = replace(target, player_ids=tuple(pid for pid in target.player_ids if pid != player_id))
    else:
        target = replace(target, player_ids=target.player_ids + (player_id,))
        other = replace(other, player_ids=tuple(pid for pid in other.player_ids if pid != player_id))

    if team is Team.A:
        return target, other
    return other, target


def set_main_winner(team: Team, score_a: RoundScore, score_b: RoundScore) -> Tuple[RoundScore, RoundScore]:
    return (
        replace(score_a, is_main_winner=team is Team.A),
        replace(score_b, is_main_winner=team is Team.B),
    )


def selectable_for(team: Team, player_id: str, team_a: TeamSelection, team_b: TeamSelection) -> bool:
    """A player seated on the opposing team is shown as a disabled candidate."""
    opposing = team_b if team is Team.A else team_a
    return player_id not in opposing


def members_overlap(team_a: TeamSelection, team_b: TeamSelection) -> set[str]:
    return set(team_a.player_ids).intersection(team_b.player_ids)
