from .earnings import bonus_term, compute_earnings
from .game import (
    DEFAULT_RULES,
    ZERO_SCORE,
    DomainValidationError,
    Player,
    PrizeRuleSet,
    RoundScore,
    SettlementRecord,
    Team,
    TeamOutcome,
    TeamSelection,
    normalize_player,
)
from .roster import members_overlap, selectable_for, set_main_winner, toggle_membership
from .settlement import (
    SettlementResult,
    allocations,
    derive_cumulative_earnings,
    settle_round,
    validate_round,
)
from .snapshot import Snapshot, decode_snapshot, dump_snapshot, encode_snapshot

__all__ = [
    "DEFAULT_RULES",
    "DomainValidationError",
    "Player",
    "PrizeRuleSet",
    "RoundScore",
    "SettlementRecord",
    "SettlementResult",
    "Snapshot",
    "Team",
    "TeamOutcome",
    "TeamSelection",
    "ZERO_SCORE",
    "allocations",
    "bonus_term",
    "compute_earnings",
    "decode_snapshot",
    "derive_cumulative_earnings",
    "dump_snapshot",
    "encode_snapshot",
    "members_overlap",
    "normalize_player",
    "selectable_for",
    "set_main_winner",
    "settle_round",
    "toggle_membership",
    "validate_round",
]
