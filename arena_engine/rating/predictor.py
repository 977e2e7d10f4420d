"""Win probability and confidence intervals for rated sources."""

import math

from arena_engine.config.constants import DISPLAY_RATING_CENTER
from arena_engine.config.schemas.rating import RatingConfig
from arena_engine.errors import InvalidRatingError
from arena_engine.rating.glicko import win_probability
from arena_engine.rating.models import (
    RatingInterval,
    RatingState,
    validate_rating_state,
)


class OutcomePredictor:
    """Predicts matchup outcomes from display-scale ratings."""

    def __init__(self, config: RatingConfig | None = None) -> None:
        """Initialize the predictor.

        Args:
            config: Glicko-2 parameters (scale and interval multiplier).
        """
        self._config = config or RatingConfig()

    def expected_score(self, mu_a: float, mu_b: float, phi_b: float) -> float:
        """Probability that A beats B, with B's deviation dampening the gap.

        Args:
            mu_a: Rating of A (display scale).
            mu_b: Rating of B (display scale).
            phi_b: Deviation of B (display scale). Zero is allowed.

        Returns:
            Probability in [0, 1].

        Raises:
            InvalidRatingError: If any input is non-finite or phi_b < 0.
        """
        for value in (mu_a, mu_b):
            if not math.isfinite(value):
                raise InvalidRatingError("expected_score", "mu", value)
        if not math.isfinite(phi_b) or phi_b < 0:
            raise InvalidRatingError("expected_score", "phi", phi_b)

        scale = self._config.scale
        return win_probability(
            (mu_a - DISPLAY_RATING_CENTER) / scale,
            (mu_b - DISPLAY_RATING_CENTER) / scale,
            phi_b / scale,
        )

    def predict_outcome(self, rating_a: RatingState, rating_b: RatingState) -> float:
        """Probability that A beats B, treating B as the fixed opponent.

        Args:
            rating_a: State of A.
            rating_b: State of B.

        Returns:
            Probability in [0, 1].
        """
        validate_rating_state(rating_a, "rating_a")
        validate_rating_state(rating_b, "rating_b")
        return self.expected_score(rating_a.mu, rating_b.mu, rating_b.phi)

    def get_rating_interval(self, rating: RatingState) -> RatingInterval:
        """Confidence band mu +/- k*phi.

        Args:
            rating: State to bound.

        Returns:
            RatingInterval.
        """
        validate_rating_state(rating, "rating")
        margin = self._config.interval_multiplier * rating.phi
        return RatingInterval(low=rating.mu - margin, high=rating.mu + margin)
