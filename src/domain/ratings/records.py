"""Bookkeeping of a player's rating record after a match."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from domain.ratings.common import RatingRecord


def apply_match_to_record(
    record: RatingRecord,
    *,
    won: bool,
    new_rating: float,
    is_new_opponent: bool,
    event_time: datetime,
) -> RatingRecord:
    """Return ``record`` advanced by one finished match."""
    win_streak = record.win_streak + 1 if won else 0
    best_rating = new_rating if record.best_rating is None else max(record.best_rating, new_rating)
    return replace(
        record,
        rating=new_rating,
        matches_played=record.matches_played + 1,
        wins=record.wins + (1 if won else 0),
        losses=record.losses + (0 if won else 1),
        win_streak=win_streak,
        best_win_streak=max(record.best_win_streak, win_streak),
        unique_opponents=record.unique_opponents + (1 if is_new_opponent else 0),
        best_rating=best_rating,
        last_played_at=event_time,
    )


__all__ = ["apply_match_to_record"]
