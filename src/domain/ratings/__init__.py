"""Rating-system domain modules."""

from domain.ratings.common import EloHistoryEntry, MatchResult, RatingRecord, RatingUpdate
from domain.ratings.errors import InvalidInputError
from domain.ratings.records import apply_match_to_record
from domain.ratings.tiers import RankTier, get_rank_tier
from domain.ratings.trend import (
    Trend,
    TrendDirection,
    calculate_trend,
    calculate_trend_from_history,
)

__all__ = [
    "EloHistoryEntry",
    "InvalidInputError",
    "MatchResult",
    "RankTier",
    "RatingRecord",
    "RatingUpdate",
    "Trend",
    "TrendDirection",
    "apply_match_to_record",
    "calculate_trend",
    "calculate_trend_from_history",
    "get_rank_tier",
]
