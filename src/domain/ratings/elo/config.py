"""Load Elo system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.ratings.config_base import BaseSystemConfig, load_system_config, load_system_configs
from domain.ratings.elo.calculator import EloParameters
from domain.ratings.elo.decay import DecayParameters
from domain.ratings.elo.k_factor import KFactorPolicy
from domain.ratings.elo.modifiers import ModifierParameters
from domain.ratings.trend import DEFAULT_TREND_THRESHOLD


@dataclass(frozen=True)
class EloSystemConfig(BaseSystemConfig):
    """Configuration for one club Elo system."""

    parameters: EloParameters
    trend_threshold: float = DEFAULT_TREND_THRESHOLD
    trend_window: int = 10

    def as_config_json(self) -> dict[str, Any]:
        k_factor = self.parameters.k_factor
        modifiers = self.parameters.modifiers
        decay = self.parameters.decay
        return {
            "initial_elo": self.parameters.initial_elo,
            "scale_factor": self.parameters.scale_factor,
            "min_rating": self.parameters.min_rating,
            "max_rating": self.parameters.max_rating,
            "apply_modifiers": self.parameters.apply_modifiers,
            "apply_inactivity_decay": self.parameters.apply_inactivity_decay,
            "k_new": k_factor.k_new,
            "k_intermediate": k_factor.k_intermediate,
            "k_established": k_factor.k_established,
            "k_high": k_factor.k_high,
            "new_player_matches": k_factor.new_player_matches,
            "intermediate_player_matches": k_factor.intermediate_player_matches,
            "high_rating_threshold": k_factor.high_rating_threshold,
            "new_opponent_bonus": modifiers.new_opponent_bonus,
            "repetition_penalty_per_match": modifiers.repetition_penalty_per_match,
            "repetition_min_modifier": modifiers.repetition_min_modifier,
            "repetition_window_days": modifiers.repetition_window_days,
            "upset_bonus": modifiers.upset_bonus,
            "upset_elo_threshold": modifiers.upset_elo_threshold,
            "weekly_diversity_bonus": modifiers.weekly_diversity_bonus,
            "weekly_diversity_min_opponents": modifiers.weekly_diversity_min_opponents,
            "weekly_window_days": modifiers.weekly_window_days,
            "decay_threshold_days": decay.threshold_days,
            "decay_points_per_day": decay.points_per_day,
            "decay_max": decay.max_decay,
            "trend_threshold": self.trend_threshold,
            "trend_window": self.trend_window,
        }


def load_elo_system_configs(config_dir: Path) -> list[EloSystemConfig]:
    """Load and validate all Elo system TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_elo_system_config,
        duplicate_name_label="elo",
    )


def load_elo_system_config(file_path: Path) -> EloSystemConfig:
    """Load and validate a single Elo system TOML config file."""
    return load_system_config(file_path, _parse_elo_system_config)


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)


def _parse_elo_system_config(raw: dict[str, Any], file_path: Path) -> EloSystemConfig:
    system_raw = raw.get("system", {})
    elo_raw = raw.get("elo", {})
    k_raw = raw.get("k_factor", {})
    modifiers_raw = raw.get("modifiers", {})
    decay_raw = raw.get("decay", {})
    trend_raw = raw.get("trend", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    k_factor = KFactorPolicy(
        k_new=float(k_raw.get("k_new", 40.0)),
        k_intermediate=float(k_raw.get("k_intermediate", 32.0)),
        k_established=float(k_raw.get("k_established", 24.0)),
        k_high=float(k_raw.get("k_high", 16.0)),
        new_player_matches=int(k_raw.get("new_player_matches", 10)),
        intermediate_player_matches=int(k_raw.get("intermediate_player_matches", 30)),
        high_rating_threshold=float(k_raw.get("high_rating_threshold", 1800.0)),
    )
    modifiers = ModifierParameters(
        new_opponent_bonus=float(modifiers_raw.get("new_opponent_bonus", 1.15)),
        repetition_penalty_per_match=float(modifiers_raw.get("repetition_penalty_per_match", 0.05)),
        repetition_min_modifier=float(modifiers_raw.get("repetition_min_modifier", 0.70)),
        repetition_window_days=int(modifiers_raw.get("repetition_window_days", 30)),
        upset_bonus=float(modifiers_raw.get("upset_bonus", 1.20)),
        upset_elo_threshold=float(modifiers_raw.get("upset_elo_threshold", 100.0)),
        weekly_diversity_bonus=float(modifiers_raw.get("weekly_diversity_bonus", 1.10)),
        weekly_diversity_min_opponents=int(modifiers_raw.get("weekly_diversity_min_opponents", 3)),
        weekly_window_days=int(modifiers_raw.get("weekly_window_days", 7)),
    )
    decay = DecayParameters(
        threshold_days=int(decay_raw.get("threshold_days", 14)),
        points_per_day=float(decay_raw.get("points_per_day", 5.0)),
        max_decay=float(decay_raw.get("max_decay", 100.0)),
    )
    parameters = EloParameters(
        initial_elo=float(elo_raw.get("initial_elo", 1200.0)),
        scale_factor=float(elo_raw.get("scale_factor", 400.0)),
        min_rating=_optional_float(elo_raw.get("min_rating")),
        max_rating=_optional_float(elo_raw.get("max_rating")),
        apply_modifiers=bool(elo_raw.get("apply_modifiers", True)),
        apply_inactivity_decay=bool(elo_raw.get("apply_inactivity_decay", False)),
        k_factor=k_factor,
        modifiers=modifiers,
        decay=decay,
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    trend_threshold = float(trend_raw.get("threshold", DEFAULT_TREND_THRESHOLD))
    if trend_threshold < 0.0:
        raise ValueError(f"{file_path}: [trend].threshold must be >= 0")
    trend_window = int(trend_raw.get("window", 10))
    if trend_window <= 0:
        raise ValueError(f"{file_path}: [trend].window must be > 0")

    return EloSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
        trend_threshold=trend_threshold,
        trend_window=trend_window,
    )


def _validate_parameters(*, file_path: Path, parameters: EloParameters) -> None:
    if parameters.initial_elo <= 0.0:
        raise ValueError(f"{file_path}: [elo].initial_elo must be > 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].scale_factor must be > 0")
    if (
        parameters.min_rating is not None
        and parameters.max_rating is not None
        and parameters.min_rating > parameters.max_rating
    ):
        raise ValueError(f"{file_path}: [elo].min_rating must be <= max_rating")
    if parameters.min_rating is not None and parameters.initial_elo < parameters.min_rating:
        raise ValueError(f"{file_path}: [elo].initial_elo must be >= min_rating")
    if parameters.max_rating is not None and parameters.initial_elo > parameters.max_rating:
        raise ValueError(f"{file_path}: [elo].initial_elo must be <= max_rating")

    k_factor = parameters.k_factor
    if k_factor.k_new <= 0.0:
        raise ValueError(f"{file_path}: [k_factor].k_new must be > 0")
    if k_factor.k_intermediate <= 0.0:
        raise ValueError(f"{file_path}: [k_factor].k_intermediate must be > 0")
    if k_factor.k_established <= 0.0:
        raise ValueError(f"{file_path}: [k_factor].k_established must be > 0")
    if k_factor.k_high <= 0.0:
        raise ValueError(f"{file_path}: [k_factor].k_high must be > 0")
    if k_factor.new_player_matches < 0:
        raise ValueError(f"{file_path}: [k_factor].new_player_matches must be >= 0")
    if k_factor.intermediate_player_matches < k_factor.new_player_matches:
        raise ValueError(
            f"{file_path}: [k_factor].intermediate_player_matches must be >= new_player_matches"
        )

    modifiers = parameters.modifiers
    if modifiers.new_opponent_bonus <= 0.0:
        raise ValueError(f"{file_path}: [modifiers].new_opponent_bonus must be > 0")
    if modifiers.repetition_penalty_per_match < 0.0:
        raise ValueError(f"{file_path}: [modifiers].repetition_penalty_per_match must be >= 0")
    if modifiers.repetition_min_modifier <= 0.0 or modifiers.repetition_min_modifier > 1.0:
        raise ValueError(f"{file_path}: [modifiers].repetition_min_modifier must be in (0, 1]")
    if modifiers.repetition_window_days < 0:
        raise ValueError(f"{file_path}: [modifiers].repetition_window_days must be >= 0")
    if modifiers.upset_bonus <= 0.0:
        raise ValueError(f"{file_path}: [modifiers].upset_bonus must be > 0")
    if modifiers.weekly_diversity_bonus <= 0.0:
        raise ValueError(f"{file_path}: [modifiers].weekly_diversity_bonus must be > 0")
    if modifiers.weekly_window_days < 0:
        raise ValueError(f"{file_path}: [modifiers].weekly_window_days must be >= 0")

    decay = parameters.decay
    if decay.threshold_days < 0:
        raise ValueError(f"{file_path}: [decay].threshold_days must be >= 0")
    if decay.points_per_day < 0.0:
        raise ValueError(f"{file_path}: [decay].points_per_day must be >= 0")
    if decay.max_decay < 0.0:
        raise ValueError(f"{file_path}: [decay].max_decay must be >= 0")
