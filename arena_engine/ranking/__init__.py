"""Expected value blending and source leaderboards."""

from arena_engine.ranking.combiner import (
    ExpectedValueBreakdown,
    ExpectedValueCombiner,
    compute_expected_value,
    normalize_win_rate,
)
from arena_engine.ranking.leaderboard import SourceRanker
from arena_engine.ranking.models import Leaderboard, LeaderboardEntry


__all__ = [
    "ExpectedValueBreakdown",
    "ExpectedValueCombiner",
    "Leaderboard",
    "LeaderboardEntry",
    "SourceRanker",
    "compute_expected_value",
    "normalize_win_rate",
]
