"""Linear rating decay for idle players."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DecayParameters:
    threshold_days: int = 14
    points_per_day: float = 5.0
    max_decay: float = 100.0


def apply_inactivity_decay(
    rating: float,
    *,
    last_played_at: datetime | None,
    as_of: datetime,
    params: DecayParameters,
) -> float:
    """Return ``rating`` reduced for every idle day past the threshold."""
    if last_played_at is None or params.points_per_day <= 0.0:
        return rating

    idle_days = (as_of - last_played_at).days
    overdue_days = idle_days - params.threshold_days
    if overdue_days <= 0:
        return rating

    return rating - min(overdue_days * params.points_per_day, params.max_decay)


__all__ = ["DecayParameters", "apply_inactivity_decay"]
