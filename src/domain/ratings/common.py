"""Shared types for the club rating engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.ratings.elo.match_format import MatchFormat
    from domain.ratings.elo.modifiers import ModifierDetail


@dataclass(frozen=True)
class MatchResult:
    """Canonical singles match outcome payload used by the rating calculator."""

    match_id: int
    event_time: datetime
    winner_id: int
    loser_id: int
    match_format: MatchFormat | None = None
    score: str | None = None
    winner_games: int | None = None
    loser_games: int | None = None


@dataclass(frozen=True)
class RatingRecord:
    """A player's current rating state."""

    player_id: int
    rating: float
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    win_streak: int = 0
    best_win_streak: int = 0
    unique_opponents: int = 0
    best_rating: float | None = None
    last_played_at: datetime | None = None


@dataclass(frozen=True)
class EloHistoryEntry:
    """One rating change for one player in one match (append-only)."""

    player_id: int
    opponent_id: int
    match_id: int
    event_time: datetime
    won: bool
    expected_score: float
    k_factor: float
    pre_elo: float
    elo_delta: float
    post_elo: float
    modifiers: tuple[ModifierDetail, ...] = ()


@dataclass(frozen=True)
class RatingUpdate:
    new_rating_winner: float
    new_rating_loser: float


__all__ = ["EloHistoryEntry", "MatchResult", "RatingRecord", "RatingUpdate"]
