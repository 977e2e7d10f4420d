"""Expected value blend of quality, rating and win rate."""

import math
from dataclasses import dataclass

from arena_engine.config.schemas.ranking import RankingConfig
from arena_engine.errors import InvalidStandingError
from arena_engine.quality.scorer import clamp01


def _check_unit(name: str, value: float) -> None:
    """Reject a blend component outside [0, 1]."""
    if not math.isfinite(value) or not 0.0 <= value <= 1.0:
        msg = f"{name} must be within [0, 1], got {value!r}"
        raise ValueError(msg)


def normalize_win_rate(wins: int, total_matches: int) -> float:
    """Wins over matches played, 0.0 before the first match.

    Args:
        wins: Matches won.
        total_matches: Matches played.

    Returns:
        Win rate in [0, 1].

    Raises:
        InvalidStandingError: If counters are negative or wins exceed total.
    """
    if wins < 0 or total_matches < 0 or wins > total_matches:
        msg = f"Invalid counters: wins={wins}, total_matches={total_matches}"
        raise InvalidStandingError(msg)
    return wins / max(total_matches, 1)


@dataclass(frozen=True)
class ExpectedValueBreakdown:
    """Expected value with the normalized components it came from.

    Attributes:
        quality: Overall quality score.
        normalized_rating: Rating mapped into [0, 1].
        normalized_win_rate: Win rate in [0, 1].
        expected_value: Weighted blend.
    """

    quality: float
    normalized_rating: float
    normalized_win_rate: float
    expected_value: float

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for serialization."""
        return {
            "quality": self.quality,
            "normalized_rating": self.normalized_rating,
            "normalized_win_rate": self.normalized_win_rate,
            "expected_value": self.expected_value,
        }


class ExpectedValueCombiner:
    """Blends quality, rating and win rate into a ranking scalar.

    expected_value = w_q * quality + w_r * normalized_rating
                   + w_w * normalized_win_rate
    """

    def __init__(self, config: RankingConfig | None = None) -> None:
        """Initialize the combiner.

        Args:
            config: Ranking configuration with blend weights and rating range.
        """
        self._config = config or RankingConfig()

    @property
    def config(self) -> RankingConfig:
        """Get the ranking configuration."""
        return self._config

    def normalize_rating(self, mu: float) -> float:
        """Map a display rating into [0, 1] over the configured range."""
        if not math.isfinite(mu):
            msg = f"Rating must be finite, got {mu!r}"
            raise ValueError(msg)
        floor = self._config.rating_floor
        ceiling = self._config.rating_ceiling
        return clamp01((mu - floor) / (ceiling - floor))

    def compute_expected_value(
        self,
        quality: float,
        normalized_rating: float,
        normalized_win_rate: float,
    ) -> float:
        """Blend three normalized components.

        Args:
            quality: Overall quality score in [0, 1].
            normalized_rating: Rating normalized into [0, 1].
            normalized_win_rate: Win rate in [0, 1].

        Returns:
            Expected value in [0, 1].

        Raises:
            ValueError: If a component is outside [0, 1].
        """
        _check_unit("quality", quality)
        _check_unit("normalized_rating", normalized_rating)
        _check_unit("normalized_win_rate", normalized_win_rate)

        weights = self._config.weights
        return (
            weights.quality * quality
            + weights.rating * normalized_rating
            + weights.win_rate * normalized_win_rate
        )

    def breakdown(
        self, quality: float, mu: float, wins: int, total_matches: int
    ) -> ExpectedValueBreakdown:
        """Normalize raw inputs and blend them.

        Args:
            quality: Overall quality score.
            mu: Display rating.
            wins: Matches won.
            total_matches: Matches played.

        Returns:
            ExpectedValueBreakdown.
        """
        normalized_rating = self.normalize_rating(mu)
        normalized_win_rate = normalize_win_rate(wins, total_matches)
        return ExpectedValueBreakdown(
            quality=quality,
            normalized_rating=normalized_rating,
            normalized_win_rate=normalized_win_rate,
            expected_value=self.compute_expected_value(
                quality, normalized_rating, normalized_win_rate
            ),
        )


def compute_expected_value(
    quality: float,
    normalized_rating: float,
    normalized_win_rate: float,
    config: RankingConfig | None = None,
) -> float:
    """Pure function API for the expected value blend."""
    return ExpectedValueCombiner(config).compute_expected_value(
        quality, normalized_rating, normalized_win_rate
    )
