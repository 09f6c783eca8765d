"""Unit tests for rating record bookkeeping and rank tiers."""

from __future__ import annotations

from datetime import datetime

import pytest

from domain.ratings.common import RatingRecord
from domain.ratings.records import apply_match_to_record
from domain.ratings.tiers import get_rank_tier

PLAYED_AT = datetime(2026, 4, 2, 20, 30, 0)


def test_win_extends_streak_and_best_rating() -> None:
    record = RatingRecord(player_id=1, rating=1200.0, win_streak=2, best_win_streak=2)
    updated = apply_match_to_record(
        record,
        won=True,
        new_rating=1215.0,
        is_new_opponent=True,
        event_time=PLAYED_AT,
    )

    assert updated.rating == pytest.approx(1215.0)
    assert updated.matches_played == 1
    assert updated.wins == 1
    assert updated.losses == 0
    assert updated.win_streak == 3
    assert updated.best_win_streak == 3
    assert updated.unique_opponents == 1
    assert updated.best_rating == pytest.approx(1215.0)
    assert updated.last_played_at == PLAYED_AT
    assert record.matches_played == 0


def test_loss_resets_streak_and_keeps_best() -> None:
    record = RatingRecord(
        player_id=1,
        rating=1300.0,
        matches_played=12,
        wins=8,
        losses=4,
        win_streak=4,
        best_win_streak=6,
        unique_opponents=5,
        best_rating=1320.0,
    )
    updated = apply_match_to_record(
        record,
        won=False,
        new_rating=1285.0,
        is_new_opponent=False,
        event_time=PLAYED_AT,
    )

    assert updated.matches_played == 13
    assert updated.wins == 8
    assert updated.losses == 5
    assert updated.win_streak == 0
    assert updated.best_win_streak == 6
    assert updated.unique_opponents == 5
    assert updated.best_rating == pytest.approx(1320.0)


@pytest.mark.parametrize(
    ("rating", "title"),
    [
        (2450.0, "Grand Master"),
        (2000.0, "Grand Master"),
        (1999.9, "Expert"),
        (1650.0, "Advanced"),
        (1400.0, "Intermediate+"),
        (1200.0, "Intermediate"),
        (1000.0, "Beginner+"),
        (640.0, "Beginner"),
        (-50.0, "Beginner"),
    ],
)
def test_rank_tiers(rating: float, title: str) -> None:
    assert get_rank_tier(rating).title == title
