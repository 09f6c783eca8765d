"""Match formats, margin-of-victory weighting and score-string parsing."""

from __future__ import annotations

import re
from enum import Enum

from domain.ratings.errors import InvalidInputError


class MatchFormat(str, Enum):
    """How many sets a match was played over."""

    ONE_SET = "one_set"
    TWO_SETS = "two_sets"
    THREE_SETS = "three_sets"
    SUPER_TIEBREAK = "super_tiebreak"


# Short formats are noisier, so they move ratings less.
FORMAT_COEFFICIENTS: dict[MatchFormat, float] = {
    MatchFormat.ONE_SET: 0.5,
    MatchFormat.TWO_SETS: 0.8,
    MatchFormat.THREE_SETS: 1.0,
    MatchFormat.SUPER_TIEBREAK: 0.3,
}

SUPER_TIEBREAK_POINTS = 10

_SET_SEPARATOR = re.compile(r"[\s,]+")
_SET_SCORE = re.compile(r"(\d+)-(\d+)")


def parse_match_format(value: str) -> MatchFormat:
    try:
        return MatchFormat(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(match_format.value for match_format in MatchFormat)
        raise InvalidInputError(
            f"unknown match format {value!r} (expected one of: {allowed})"
        ) from exc


def format_coefficient(match_format: MatchFormat) -> float:
    return FORMAT_COEFFICIENTS[match_format]


def margin_modifier(winner_games: int, loser_games: int) -> float:
    """Weight a result by its games margin: 6-0 counts more than 7-6."""
    margin = winner_games - loser_games
    if margin >= 5:
        return 1.15
    if margin >= 3:
        return 1.05
    if margin <= 1:
        return 0.90
    return 1.0


def _set_tokens(score: str) -> list[str]:
    return [token for token in _SET_SEPARATOR.split(score.strip()) if "-" in token]


def _parse_set(token: str) -> tuple[int, int] | None:
    match = _SET_SCORE.fullmatch(token)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def parse_score_for_games(score: str, *, winner_is_first: bool) -> tuple[int, int]:
    """Sum games per side from a score such as ``"6-4 3-6 6-2"``.

    Returns ``(winner_games, loser_games)``. Malformed sets, including signed
    game counts such as ``"6--2"``, are skipped.
    """
    first_games = 0
    second_games = 0
    for token in _set_tokens(score):
        parsed = _parse_set(token)
        if parsed is None:
            continue
        first, second = parsed
        first_games += first
        second_games += second
    if winner_is_first:
        return first_games, second_games
    return second_games, first_games


def infer_format_from_score(score: str) -> MatchFormat:
    """Guess the format from the number of sets written in ``score``.

    Every token containing ``-`` counts as a set, even when its games cannot
    be read; only a readable last set can mark a super tie-break.
    """
    sets = _set_tokens(score)
    last_set = _parse_set(sets[-1]) if sets else None
    if last_set is not None:
        last_first, last_second = last_set
        if last_first >= SUPER_TIEBREAK_POINTS or last_second >= SUPER_TIEBREAK_POINTS:
            return MatchFormat.SUPER_TIEBREAK
    if len(sets) == 1:
        return MatchFormat.ONE_SET
    if len(sets) >= 3:
        return MatchFormat.THREE_SETS
    return MatchFormat.TWO_SETS


__all__ = [
    "FORMAT_COEFFICIENTS",
    "MatchFormat",
    "format_coefficient",
    "infer_format_from_score",
    "margin_modifier",
    "parse_match_format",
    "parse_score_for_games",
]
