"""Short-window rating trend classification."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from domain.ratings.common import EloHistoryEntry

DEFAULT_TREND_THRESHOLD = 10.0


class TrendDirection(str, Enum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


@dataclass(frozen=True)
class Trend:
    direction: TrendDirection
    magnitude: float


def _classify(magnitude: float, threshold: float) -> TrendDirection:
    # Within the dead zone on either side counts as stable to avoid flip-flopping.
    if magnitude > threshold:
        return TrendDirection.RISING
    if magnitude < -threshold:
        return TrendDirection.FALLING
    return TrendDirection.STABLE


def calculate_trend(
    deltas: Sequence[float],
    *,
    threshold: float = DEFAULT_TREND_THRESHOLD,
    window: int | None = None,
) -> Trend:
    """Classify the net movement of recent deltas (most recent first).

    ``window`` keeps only the most recent deltas. Empty input is stable with
    magnitude 0; the function never raises.
    """
    if window is not None:
        deltas = deltas[: max(window, 0)]
    magnitude = float(sum(deltas))
    return Trend(direction=_classify(magnitude, abs(threshold)), magnitude=magnitude)


def calculate_trend_from_history(
    entries: Sequence[EloHistoryEntry],
    *,
    as_of: datetime,
    days: int = 30,
    threshold: float = DEFAULT_TREND_THRESHOLD,
) -> Trend:
    """Compare the first and last post-match rating inside a trailing window."""
    cutoff = as_of - timedelta(days=days)
    recent = sorted(
        (entry for entry in entries if entry.event_time >= cutoff),
        key=lambda entry: entry.event_time,
    )
    if len(recent) < 2:
        return Trend(direction=TrendDirection.STABLE, magnitude=0.0)

    magnitude = recent[-1].post_elo - recent[0].post_elo
    return Trend(direction=_classify(magnitude, abs(threshold)), magnitude=magnitude)


__all__ = [
    "DEFAULT_TREND_THRESHOLD",
    "Trend",
    "TrendDirection",
    "calculate_trend",
    "calculate_trend_from_history",
]
