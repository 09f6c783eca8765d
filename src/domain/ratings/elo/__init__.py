"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    EloParameters,
    PlayerEloCalculator,
    calculate_expected_score,
    compute_updated_ratings,
)
from domain.ratings.elo.config import (
    EloSystemConfig,
    load_elo_system_config,
    load_elo_system_configs,
)
from domain.ratings.elo.decay import DecayParameters, apply_inactivity_decay
from domain.ratings.elo.k_factor import KFactorPolicy
from domain.ratings.elo.match_format import (
    MatchFormat,
    infer_format_from_score,
    margin_modifier,
    parse_match_format,
    parse_score_for_games,
)
from domain.ratings.elo.modifiers import (
    ModifierDetail,
    ModifierParameters,
    ModifierType,
    ModifiersResult,
    calculate_modifiers,
)

__all__ = [
    "DecayParameters",
    "EloParameters",
    "EloSystemConfig",
    "KFactorPolicy",
    "MatchFormat",
    "ModifierDetail",
    "ModifierParameters",
    "ModifierType",
    "ModifiersResult",
    "PlayerEloCalculator",
    "apply_inactivity_decay",
    "calculate_expected_score",
    "calculate_modifiers",
    "compute_updated_ratings",
    "infer_format_from_score",
    "load_elo_system_config",
    "load_elo_system_configs",
    "margin_modifier",
    "parse_match_format",
    "parse_score_for_games",
]
