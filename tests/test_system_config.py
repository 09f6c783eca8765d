"""Tests for TOML-based Elo system config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.ratings.elo.config import load_elo_system_config, load_elo_system_configs

ROOT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "ratings" / "elo"


def test_load_elo_system_configs_from_directory(tmp_path: Path) -> None:
    config_path = tmp_path / "default.toml"
    config_path.write_text(
        """
[system]
name = "club_a"
description = "A test system"

[elo]
initial_elo = 1300.0
scale_factor = 420.0
min_rating = 100.0
max_rating = 3000.0
apply_modifiers = false
apply_inactivity_decay = true

[k_factor]
k_new = 48.0
k_intermediate = 30.0
k_established = 20.0
k_high = 12.0
new_player_matches = 5
intermediate_player_matches = 20
high_rating_threshold = 1900.0

[modifiers]
new_opponent_bonus = 1.1
upset_bonus = 1.3
weekly_diversity_min_opponents = 4

[decay]
threshold_days = 21
points_per_day = 2.5
max_decay = 50.0

[trend]
threshold = 5.0
window = 6
""".strip()
    )

    configs = load_elo_system_configs(tmp_path)
    assert len(configs) == 1

    system = configs[0]
    assert system.name == "club_a"
    assert system.description == "A test system"
    assert system.file_path == config_path
    assert system.parameters.initial_elo == pytest.approx(1300.0)
    assert system.parameters.scale_factor == pytest.approx(420.0)
    assert system.parameters.min_rating == pytest.approx(100.0)
    assert system.parameters.max_rating == pytest.approx(3000.0)
    assert system.parameters.apply_modifiers is False
    assert system.parameters.apply_inactivity_decay is True
    assert system.parameters.k_factor.k_new == pytest.approx(48.0)
    assert system.parameters.k_factor.new_player_matches == 5
    assert system.parameters.k_factor.high_rating_threshold == pytest.approx(1900.0)
    assert system.parameters.modifiers.new_opponent_bonus == pytest.approx(1.1)
    assert system.parameters.modifiers.upset_bonus == pytest.approx(1.3)
    assert system.parameters.modifiers.weekly_diversity_min_opponents == 4
    assert system.parameters.modifiers.repetition_min_modifier == pytest.approx(0.70)
    assert system.parameters.decay.threshold_days == 21
    assert system.parameters.decay.points_per_day == pytest.approx(2.5)
    assert system.parameters.decay.max_decay == pytest.approx(50.0)
    assert system.trend_threshold == pytest.approx(5.0)
    assert system.trend_window == 6


def test_defaults_apply_when_sections_omitted(tmp_path: Path) -> None:
    config_path = tmp_path / "minimal.toml"
    config_path.write_text('[system]\nname = "minimal"\n')

    system = load_elo_system_config(config_path)
    assert system.description is None
    assert system.parameters.initial_elo == pytest.approx(1200.0)
    assert system.parameters.min_rating is None
    assert system.parameters.k_factor.k_new == pytest.approx(40.0)
    assert system.trend_threshold == pytest.approx(10.0)
    assert system.trend_window == 10


def test_as_config_json_is_flat() -> None:
    system = load_elo_system_configs(DEFAULT_CONFIG_DIR)[0]
    config_json = system.as_config_json()
    assert config_json["initial_elo"] == pytest.approx(1200.0)
    assert config_json["k_new"] == pytest.approx(40.0)
    assert config_json["decay_max"] == pytest.approx(100.0)
    assert all(not isinstance(value, dict) for value in config_json.values())


def test_bundled_config_loads() -> None:
    names = [system.name for system in load_elo_system_configs(DEFAULT_CONFIG_DIR)]
    assert "club_elo_default" in names


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    template = '[system]\nname = "dup"\n'
    (tmp_path / "a.toml").write_text(template)
    (tmp_path / "b.toml").write_text(template)

    with pytest.raises(ValueError, match="Duplicate elo system names"):
        load_elo_system_configs(tmp_path)


def test_missing_name_raises_error(tmp_path: Path) -> None:
    (tmp_path / "nameless.toml").write_text("[elo]\ninitial_elo = 1200.0\n")

    with pytest.raises(ValueError, match=r"\[system\].name is required"):
        load_elo_system_configs(tmp_path)


@pytest.mark.parametrize(
    ("section", "body", "message"),
    [
        ("k_factor", "k_new = 0.0", r"\[k_factor\].k_new must be > 0"),
        ("elo", "scale_factor = -1.0", r"\[elo\].scale_factor must be > 0"),
        ("elo", "min_rating = 2000.0", r"\[elo\].initial_elo must be >= min_rating"),
        ("elo", "min_rating = 500.0\nmax_rating = 400.0", r"\[elo\].min_rating must be <= max_rating"),
        ("modifiers", "repetition_min_modifier = 1.5", r"repetition_min_modifier must be in \(0, 1\]"),
        ("decay", "points_per_day = -1.0", r"\[decay\].points_per_day must be >= 0"),
        ("trend", "window = 0", r"\[trend\].window must be > 0"),
    ],
)
def test_invalid_parameters_raise_validation_error(
    tmp_path: Path, section: str, body: str, message: str
) -> None:
    (tmp_path / "invalid.toml").write_text(f'[system]\nname = "bad"\n\n[{section}]\n{body}\n')

    with pytest.raises(ValueError, match=message):
        load_elo_system_configs(tmp_path)


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_elo_system_configs(tmp_path / "missing")


def test_empty_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No .toml config files"):
        load_elo_system_configs(tmp_path)
