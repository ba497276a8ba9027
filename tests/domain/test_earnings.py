import pytest

from billiards.domain import PrizeRuleSet, RoundScore, bonus_term, compute_earnings

RULES = PrizeRuleSet(win_prize=100, bonus_ball_prize=50, knock_in_prize=20, balls_per_team=5)


@pytest.mark.parametrize("knocked_in", [0, 3, 5])
@pytest.mark.parametrize("winner", [True, False])
def test_zero_bonus_balls_contribute_nothing(knocked_in: int, winner: bool) -> None:
    score = RoundScore(bonus_balls_in=0, opponent_balls_knocked_in=knocked_in, is_main_winner=winner)

    expected = (100 if winner else 0) + knocked_in * 20
    assert compute_earnings(score, RULES) == expected
    assert bonus_term(0, RULES) == 0


@pytest.mark.parametrize("bonus_prize", [50, 7.5, -10])
def test_two_bonus_balls_pay_triple_not_double(bonus_prize: float) -> None:
    rules = PrizeRuleSet(win_prize=0, bonus_ball_prize=bonus_prize, knock_in_prize=0, balls_per_team=5)

    one = compute_earnings(RoundScore(bonus_balls_in=1), rules)
    two = compute_earnings(RoundScore(bonus_balls_in=2), rules)

    assert one == bonus_prize
    assert two == 3 * one


def test_full_outcome_sums_all_terms() -> None:
    score = RoundScore(bonus_balls_in=2, opponent_balls_knocked_in=3, is_main_winner=True)

    assert compute_earnings(score, RULES) == 310


def test_unknown_bonus_count_adds_nothing() -> None:
    assert compute_earnings(RoundScore(bonus_balls_in=3), RULES) == 0
    assert compute_earnings(RoundScore(bonus_balls_in=-1), RULES) == 0


def test_negative_rules_are_not_clamped() -> None:
    rules = PrizeRuleSet(win_prize=-100, bonus_ball_prize=-5, knock_in_prize=-1, balls_per_team=0)
    score = RoundScore(bonus_balls_in=1, opponent_balls_knocked_in=4, is_main_winner=True)

    assert compute_earnings(score, rules) == -109


def test_knock_ins_above_range_are_paid_linearly() -> None:
    assert compute_earnings(RoundScore(opponent_balls_knocked_in=9), RULES) == 180
