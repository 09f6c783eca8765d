"""Per-player K-factor modifiers that reward varied, ambitious play."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from domain.ratings.common import EloHistoryEntry


class ModifierType(str, Enum):
    NEW_OPPONENT = "new_opponent"
    REPETITION = "repetition"
    UPSET = "upset"
    WEEKLY_DIVERSITY = "weekly_diversity"


@dataclass(frozen=True)
class ModifierParameters:
    new_opponent_bonus: float = 1.15
    repetition_penalty_per_match: float = 0.05
    repetition_min_modifier: float = 0.70
    repetition_window_days: int = 30
    upset_bonus: float = 1.20
    upset_elo_threshold: float = 100.0
    weekly_diversity_bonus: float = 1.10
    weekly_diversity_min_opponents: int = 3
    weekly_window_days: int = 7


@dataclass(frozen=True)
class ModifierDetail:
    type: ModifierType
    value: float
    description: str


@dataclass(frozen=True)
class ModifiersResult:
    total: float
    details: tuple[ModifierDetail, ...]


def _within(entry: EloHistoryEntry, *, as_of: datetime, days: int) -> bool:
    return entry.event_time >= as_of - timedelta(days=days)


def new_opponent_bonus(
    opponent_id: int,
    history: Sequence[EloHistoryEntry],
    params: ModifierParameters,
) -> ModifierDetail | None:
    if any(entry.opponent_id == opponent_id for entry in history):
        return None
    return ModifierDetail(
        type=ModifierType.NEW_OPPONENT,
        value=params.new_opponent_bonus,
        description=f"new opponent (x{params.new_opponent_bonus:.2f})",
    )


def repetition_penalty(
    opponent_id: int,
    history: Sequence[EloHistoryEntry],
    *,
    as_of: datetime,
    params: ModifierParameters,
) -> ModifierDetail | None:
    recent = [
        entry
        for entry in history
        if entry.opponent_id == opponent_id
        and _within(entry, as_of=as_of, days=params.repetition_window_days)
    ]
    if not recent:
        return None

    value = max(
        params.repetition_min_modifier,
        1.0 - len(recent) * params.repetition_penalty_per_match,
    )
    if value >= 1.0:
        return None
    return ModifierDetail(
        type=ModifierType.REPETITION,
        value=value,
        description=f"repeated opponent, {len(recent)} recent match(es) (x{value:.2f})",
    )


def upset_bonus(
    player_rating: float,
    opponent_rating: float,
    *,
    won: bool,
    params: ModifierParameters,
) -> ModifierDetail | None:
    if not won:
        return None
    rating_gap = opponent_rating - player_rating
    if rating_gap < params.upset_elo_threshold:
        return None
    return ModifierDetail(
        type=ModifierType.UPSET,
        value=params.upset_bonus,
        description=f"upset win against +{rating_gap:.0f} Elo (x{params.upset_bonus:.2f})",
    )


def weekly_diversity_bonus(
    history: Sequence[EloHistoryEntry],
    *,
    as_of: datetime,
    params: ModifierParameters,
) -> ModifierDetail | None:
    weekly_opponents = {
        entry.opponent_id
        for entry in history
        if _within(entry, as_of=as_of, days=params.weekly_window_days)
    }
    if len(weekly_opponents) < params.weekly_diversity_min_opponents:
        return None
    return ModifierDetail(
        type=ModifierType.WEEKLY_DIVERSITY,
        value=params.weekly_diversity_bonus,
        description=(
            f"{len(weekly_opponents)} opponents this week (x{params.weekly_diversity_bonus:.2f})"
        ),
    )


def calculate_modifiers(
    *,
    player_rating: float,
    opponent_id: int,
    opponent_rating: float,
    history: Sequence[EloHistoryEntry],
    won: bool,
    as_of: datetime,
    params: ModifierParameters,
) -> ModifiersResult:
    """Combine every modifier that applies to one player for one match.

    ``history`` is the player's own prior entries; only entries strictly
    before the match are expected. The repetition penalty is only considered
    when the opponent is not new.
    """
    details: list[ModifierDetail] = []

    new_opponent = new_opponent_bonus(opponent_id, history, params)
    if new_opponent is not None:
        details.append(new_opponent)
    else:
        repetition = repetition_penalty(opponent_id, history, as_of=as_of, params=params)
        if repetition is not None:
            details.append(repetition)

    upset = upset_bonus(player_rating, opponent_rating, won=won, params=params)
    if upset is not None:
        details.append(upset)

    diversity = weekly_diversity_bonus(history, as_of=as_of, params=params)
    if diversity is not None:
        details.append(diversity)

    total = 1.0
    for detail in details:
        total *= detail.value

    return ModifiersResult(total=round(total, 2), details=tuple(details))


__all__ = [
    "ModifierDetail",
    "ModifierParameters",
    "ModifierType",
    "ModifiersResult",
    "calculate_modifiers",
    "new_opponent_bonus",
    "repetition_penalty",
    "upset_bonus",
    "weekly_diversity_bonus",
]
