"""Rank titles shown next to a rating."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RankTier:
    min_rating: float
    title: str


RANK_TIERS: tuple[RankTier, ...] = (
    RankTier(2000.0, "Grand Master"),
    RankTier(1800.0, "Expert"),
    RankTier(1600.0, "Advanced"),
    RankTier(1400.0, "Intermediate+"),
    RankTier(1200.0, "Intermediate"),
    RankTier(1000.0, "Beginner+"),
)
BASE_TIER = RankTier(float("-inf"), "Beginner")


def get_rank_tier(rating: float) -> RankTier:
    for tier in RANK_TIERS:
        if rating >= tier.min_rating:
            return tier
    return BASE_TIER


__all__ = ["BASE_TIER", "RANK_TIERS", "RankTier", "get_rank_tier"]
