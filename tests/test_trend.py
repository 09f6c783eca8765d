"""Unit tests for rating trend classification."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from domain.ratings.common import EloHistoryEntry
from domain.ratings.trend import (
    Trend,
    TrendDirection,
    calculate_trend,
    calculate_trend_from_history,
)

AS_OF = datetime(2026, 3, 1, 12, 0, 0)


def _entry(days_ago: int, post_elo: float) -> EloHistoryEntry:
    return EloHistoryEntry(
        player_id=1,
        opponent_id=2,
        match_id=days_ago,
        event_time=AS_OF - timedelta(days=days_ago),
        won=True,
        expected_score=0.5,
        k_factor=32.0,
        pre_elo=post_elo,
        elo_delta=0.0,
        post_elo=post_elo,
    )


def test_empty_deltas_are_stable() -> None:
    assert calculate_trend([]) == Trend(direction=TrendDirection.STABLE, magnitude=0.0)


def test_positive_deltas_are_rising() -> None:
    trend = calculate_trend([10, 8, 5])
    assert trend.direction is TrendDirection.RISING
    assert trend.direction.value == "rising"
    assert trend.magnitude == pytest.approx(23.0)


def test_negative_deltas_are_falling() -> None:
    trend = calculate_trend([-10, -8, -5])
    assert trend.direction is TrendDirection.FALLING
    assert trend.magnitude == pytest.approx(-23.0)


@pytest.mark.parametrize("deltas", [[5.0, -3.0], [10.0], [-10.0], [4.0, 4.0, -8.0]])
def test_dead_zone_is_stable(deltas: list[float]) -> None:
    assert calculate_trend(deltas).direction is TrendDirection.STABLE


def test_threshold_is_configurable() -> None:
    assert calculate_trend([5.0], threshold=2.0).direction is TrendDirection.RISING
    assert calculate_trend([5.0], threshold=0.0).direction is TrendDirection.RISING
    assert calculate_trend([0.0], threshold=0.0).direction is TrendDirection.STABLE


def test_window_keeps_most_recent_deltas() -> None:
    trend = calculate_trend([-20.0, -15.0, 30.0, 30.0], window=2)
    assert trend.direction is TrendDirection.FALLING
    assert trend.magnitude == pytest.approx(-35.0)


def test_zero_window_is_stable() -> None:
    assert calculate_trend([30.0], window=0) == Trend(TrendDirection.STABLE, 0.0)


def test_history_trend_compares_first_and_last_in_window() -> None:
    entries = [_entry(40, 1000.0), _entry(20, 1200.0), _entry(10, 1250.0), _entry(1, 1230.0)]
    trend = calculate_trend_from_history(entries, as_of=AS_OF, days=30)
    assert trend.direction is TrendDirection.RISING
    assert trend.magnitude == pytest.approx(30.0)


def test_history_trend_needs_two_recent_entries() -> None:
    entries = [_entry(90, 1000.0), _entry(3, 1400.0)]
    trend = calculate_trend_from_history(entries, as_of=AS_OF, days=30)
    assert trend == Trend(direction=TrendDirection.STABLE, magnitude=0.0)


def test_history_trend_falling() -> None:
    entries = [_entry(1, 1180.0), _entry(5, 1210.0)]
    trend = calculate_trend_from_history(entries, as_of=AS_OF)
    assert trend.direction is TrendDirection.FALLING
    assert trend.magnitude == pytest.approx(-30.0)
