"""Experience-based K-factor selection."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KFactorPolicy:
    """Step-function K-factor: provisional players move fastest, strong veterans slowest."""

    k_new: float = 40.0
    k_intermediate: float = 32.0
    k_established: float = 24.0
    k_high: float = 16.0
    new_player_matches: int = 10
    intermediate_player_matches: int = 30
    high_rating_threshold: float = 1800.0

    def k_factor_for(self, matches_played: int, rating: float) -> float:
        if matches_played < self.new_player_matches:
            return self.k_new
        if matches_played < self.intermediate_player_matches:
            return self.k_intermediate
        if rating >= self.high_rating_threshold:
            return self.k_high
        return self.k_established

    def label_for(self, matches_played: int) -> str:
        if matches_played < self.new_player_matches:
            return "new"
        if matches_played < self.intermediate_player_matches:
            return "intermediate"
        return "established"


__all__ = ["KFactorPolicy"]
