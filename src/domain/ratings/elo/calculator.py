"""Player-level Elo logic for club singles matches."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime

from domain.ratings.common import EloHistoryEntry, MatchResult, RatingRecord, RatingUpdate
from domain.ratings.elo.decay import DecayParameters, apply_inactivity_decay
from domain.ratings.elo.k_factor import KFactorPolicy
from domain.ratings.elo.match_format import (
    format_coefficient,
    margin_modifier,
    parse_score_for_games,
)
from domain.ratings.elo.modifiers import ModifierParameters, ModifiersResult, calculate_modifiers
from domain.ratings.errors import InvalidInputError
from domain.ratings.records import apply_match_to_record
from domain.ratings.trend import DEFAULT_TREND_THRESHOLD, Trend, calculate_trend

DEFAULT_SCALE_FACTOR = 400.0


@dataclass(frozen=True)
class EloParameters:
    initial_elo: float = 1200.0
    scale_factor: float = DEFAULT_SCALE_FACTOR
    min_rating: float | None = None
    max_rating: float | None = None
    apply_modifiers: bool = True
    apply_inactivity_decay: bool = False
    k_factor: KFactorPolicy = field(default_factory=KFactorPolicy)
    modifiers: ModifierParameters = field(default_factory=ModifierParameters)
    decay: DecayParameters = field(default_factory=DecayParameters)


def calculate_expected_score(
    rating: float,
    opponent_rating: float,
    scale_factor: float = DEFAULT_SCALE_FACTOR,
) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def compute_updated_ratings(
    rating_winner: float,
    rating_loser: float,
    k_factor_winner: float,
    k_factor_loser: float,
    *,
    winner_id: object | None = None,
    loser_id: object | None = None,
    scale_factor: float = DEFAULT_SCALE_FACTOR,
) -> RatingUpdate:
    """Apply one decided match to a pair of ratings.

    The winner scores 1 and the loser 0; each side moves by its own K-factor
    times the gap between actual and expected score, so the winner never loses
    points and the loser never gains any. Ratings are not bounded here.

    Raises:
        InvalidInputError: if both ids are given and identical, or if a
            K-factor or the scale factor is not strictly positive.
    """
    if winner_id is not None and loser_id is not None and winner_id == loser_id:
        raise InvalidInputError(f"winner and loser are the same player ({winner_id})")
    if not k_factor_winner > 0.0:
        raise InvalidInputError(f"k_factor_winner must be > 0, got {k_factor_winner}")
    if not k_factor_loser > 0.0:
        raise InvalidInputError(f"k_factor_loser must be > 0, got {k_factor_loser}")
    if not scale_factor > 0.0:
        raise InvalidInputError(f"scale_factor must be > 0, got {scale_factor}")

    winner_expected = calculate_expected_score(rating_winner, rating_loser, scale_factor)
    loser_expected = 1.0 - winner_expected

    return RatingUpdate(
        new_rating_winner=rating_winner + k_factor_winner * (1.0 - winner_expected),
        new_rating_loser=rating_loser + k_factor_loser * (0.0 - loser_expected),
    )


class PlayerEloCalculator:
    """Stateful match-by-match player Elo calculator.

    Matches must be fed in chronological order. The calculator owns its
    records and history in memory; persisting them is left to the caller.
    """

    def __init__(self, params: EloParameters) -> None:
        self.params = params
        self._records: dict[int, RatingRecord] = {}
        self._history: dict[int, list[EloHistoryEntry]] = defaultdict(list)
        self._opponents: dict[int, set[int]] = defaultdict(set)

    def get_rating(self, player_id: int) -> float:
        record = self._records.get(player_id)
        return record.rating if record is not None else self.params.initial_elo

    def get_record(self, player_id: int) -> RatingRecord:
        record = self._records.get(player_id)
        if record is None:
            return RatingRecord(player_id=player_id, rating=self.params.initial_elo)
        return record

    def tracked_player_count(self) -> int:
        return len(self._records)

    def ratings(self) -> dict[int, float]:
        """Return a snapshot of current player ratings."""
        return {player_id: record.rating for player_id, record in self._records.items()}

    def records(self) -> dict[int, RatingRecord]:
        return dict(self._records)

    def history_for(self, player_id: int) -> list[EloHistoryEntry]:
        """Return a player's history, most recent first."""
        return list(reversed(self._history.get(player_id, [])))

    def leaderboard(self, top_n: int | None = None) -> list[RatingRecord]:
        ranked = sorted(
            self._records.values(),
            key=lambda record: (-record.rating, record.player_id),
        )
        return ranked if top_n is None else ranked[:top_n]

    def trend_for(
        self,
        player_id: int,
        *,
        window: int | None = None,
        threshold: float = DEFAULT_TREND_THRESHOLD,
    ) -> Trend:
        deltas = [entry.elo_delta for entry in self.history_for(player_id)]
        return calculate_trend(deltas, threshold=threshold, window=window)

    def _pre_rating(self, player_id: int, event_time: datetime) -> float:
        record = self.get_record(player_id)
        rating = record.rating
        if self.params.apply_inactivity_decay:
            rating = apply_inactivity_decay(
                rating,
                last_played_at=record.last_played_at,
                as_of=event_time,
                params=self.params.decay,
            )
        # Keep pre-ratings inside the bounds so clamping never flips a delta's sign.
        return self._bound(rating)

    def _bound(self, rating: float) -> float:
        if self.params.min_rating is not None:
            rating = max(self.params.min_rating, rating)
        if self.params.max_rating is not None:
            rating = min(self.params.max_rating, rating)
        return rating

    def _format_multiplier(self, match_result: MatchResult) -> float:
        if match_result.match_format is None:
            return 1.0
        return format_coefficient(match_result.match_format)

    def _margin_multiplier(self, match_result: MatchResult) -> float:
        winner_games = match_result.winner_games
        loser_games = match_result.loser_games
        if (winner_games is None or loser_games is None) and match_result.score:
            winner_games, loser_games = parse_score_for_games(
                match_result.score,
                winner_is_first=True,
            )
            if winner_games == 0 and loser_games == 0:
                return 1.0
        if winner_games is None or loser_games is None:
            return 1.0
        return margin_modifier(winner_games, loser_games)

    def _player_modifiers(
        self,
        *,
        player_id: int,
        player_rating: float,
        opponent_id: int,
        opponent_rating: float,
        won: bool,
        event_time: datetime,
    ) -> ModifiersResult:
        if not self.params.apply_modifiers:
            return ModifiersResult(total=1.0, details=())
        return calculate_modifiers(
            player_rating=player_rating,
            opponent_id=opponent_id,
            opponent_rating=opponent_rating,
            history=self._history.get(player_id, []),
            won=won,
            as_of=event_time,
            params=self.params.modifiers,
        )

    def process_match(self, match_result: MatchResult) -> tuple[EloHistoryEntry, EloHistoryEntry]:
        """Rate one match and return the (winner, loser) history entries."""
        winner_id = match_result.winner_id
        loser_id = match_result.loser_id
        if winner_id == loser_id:
            raise InvalidInputError(
                f"match_id={match_result.match_id} has identical players ({winner_id})"
            )

        winner_record = self.get_record(winner_id)
        loser_record = self.get_record(loser_id)
        winner_pre = self._pre_rating(winner_id, match_result.event_time)
        loser_pre = self._pre_rating(loser_id, match_result.event_time)

        winner_mods = self._player_modifiers(
            player_id=winner_id,
            player_rating=winner_pre,
            opponent_id=loser_id,
            opponent_rating=loser_pre,
            won=True,
            event_time=match_result.event_time,
        )
        loser_mods = self._player_modifiers(
            player_id=loser_id,
            player_rating=loser_pre,
            opponent_id=winner_id,
            opponent_rating=winner_pre,
            won=False,
            event_time=match_result.event_time,
        )

        shared_multiplier = (
            self._format_multiplier(match_result) * self._margin_multiplier(match_result)
        )
        winner_k = (
            self.params.k_factor.k_factor_for(winner_record.matches_played, winner_pre)
            * shared_multiplier
            * winner_mods.total
        )
        loser_k = (
            self.params.k_factor.k_factor_for(loser_record.matches_played, loser_pre)
            * shared_multiplier
            * loser_mods.total
        )

        update = compute_updated_ratings(
            winner_pre,
            loser_pre,
            winner_k,
            loser_k,
            winner_id=winner_id,
            loser_id=loser_id,
            scale_factor=self.params.scale_factor,
        )
        winner_post = self._bound(update.new_rating_winner)
        loser_post = self._bound(update.new_rating_loser)
        winner_expected = calculate_expected_score(winner_pre, loser_pre, self.params.scale_factor)

        winner_entry = EloHistoryEntry(
            player_id=winner_id,
            opponent_id=loser_id,
            match_id=match_result.match_id,
            event_time=match_result.event_time,
            won=True,
            expected_score=winner_expected,
            k_factor=winner_k,
            pre_elo=winner_pre,
            elo_delta=winner_post - winner_pre,
            post_elo=winner_post,
            modifiers=winner_mods.details,
        )
        loser_entry = EloHistoryEntry(
            player_id=loser_id,
            opponent_id=winner_id,
            match_id=match_result.match_id,
            event_time=match_result.event_time,
            won=False,
            expected_score=1.0 - winner_expected,
            k_factor=loser_k,
            pre_elo=loser_pre,
            elo_delta=loser_post - loser_pre,
            post_elo=loser_post,
            modifiers=loser_mods.details,
        )

        self._records[winner_id] = apply_match_to_record(
            winner_record,
            won=True,
            new_rating=winner_post,
            is_new_opponent=loser_id not in self._opponents[winner_id],
            event_time=match_result.event_time,
        )
        self._records[loser_id] = apply_match_to_record(
            loser_record,
            won=False,
            new_rating=loser_post,
            is_new_opponent=winner_id not in self._opponents[loser_id],
            event_time=match_result.event_time,
        )
        self._opponents[winner_id].add(loser_id)
        self._opponents[loser_id].add(winner_id)
        self._history[winner_id].append(winner_entry)
        self._history[loser_id].append(loser_entry)

        return winner_entry, loser_entry
