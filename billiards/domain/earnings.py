"""Prize computation for a single team's round outcome."""

from __future__ import annotations

from .game import PrizeRuleSet, RoundScore

# Two bonus balls pay three times the single-ball prize.
BONUS_TIER_MULTIPLIERS = {0: 0, 1: 1, 2: 3}


def bonus_term(bonus_balls_in: int, rules: PrizeRuleSet) -> float:
    multiplier = BONUS_TIER_MULTIPLIERS.get(bonus_balls_in, 0)
    return rules.bonus_ball_prize * multiplier


def compute_earnings(score: RoundScore, rules: PrizeRuleSet) -> float:
    """Return the team's total prize for the round.

    Pure and total: any input produces a number, including negative totals
    when the rule set carries negative prizes.
    """
    total = 0.0
    if score.is_main_winner:
        total += rules.win_prize
    total += bonus_term(score.bonus_balls_in, rules)
    total += score.opponent_balls_knocked_in * rules.knock_in_prize
    return total
