"""Unit tests for outcome prediction and rating intervals."""

import pytest

from arena_engine.config.schemas.rating import RatingConfig
from arena_engine.errors import InvalidRatingError
from arena_engine.rating.models import RatingState
from arena_engine.rating.predictor import OutcomePredictor


class TestExpectedScore:
    """Tests for expected_score."""

    def test_equal_ratings_give_even_odds(self) -> None:
        """expected_score(mu, mu, phi) == 0.5."""
        predictor = OutcomePredictor()
        for phi in (0.0, 30.0, 350.0):
            assert predictor.expected_score(1720.0, 1720.0, phi) == 0.5

    @pytest.mark.parametrize("phi", [50.0, 65.0, 80.0])
    def test_two_hundred_point_gap(self, phi: float) -> None:
        """A 200-point edge at moderate deviation is roughly 3 to 1."""
        predictor = OutcomePredictor()
        assert predictor.expected_score(1700.0, 1500.0, phi) == pytest.approx(
            0.75, abs=0.02
        )

    def test_uncertain_opponent_pulls_towards_even(self) -> None:
        """A more uncertain opponent makes the favourite less certain."""
        predictor = OutcomePredictor()
        certain = predictor.expected_score(1700.0, 1500.0, 30.0)
        uncertain = predictor.expected_score(1700.0, 1500.0, 300.0)
        assert 0.5 < uncertain < certain

    def test_negative_deviation_rejected(self) -> None:
        """phi_b must not be negative."""
        with pytest.raises(InvalidRatingError):
            OutcomePredictor().expected_score(1500.0, 1500.0, -1.0)

    def test_non_finite_rating_rejected(self) -> None:
        """mu must be finite."""
        with pytest.raises(InvalidRatingError):
            OutcomePredictor().expected_score(float("nan"), 1500.0, 50.0)


class TestPredictOutcome:
    """Tests for predict_outcome."""

    def test_predict_uses_opponent_deviation(self) -> None:
        """predict_outcome is expected_score with B as the fixed opponent."""
        predictor = OutcomePredictor()
        a = RatingState(mu=1620.0, phi=40.0, sigma=0.06)
        b = RatingState(mu=1480.0, phi=120.0, sigma=0.06)

        assert predictor.predict_outcome(a, b) == predictor.expected_score(
            1620.0, 1480.0, 120.0
        )

    def test_predict_is_idempotent(self) -> None:
        """Repeated calls give identical answers."""
        predictor = OutcomePredictor()
        a = RatingState(mu=1533.3, phi=71.0, sigma=0.06)
        b = RatingState(mu=1499.9, phi=88.0, sigma=0.06)

        assert predictor.predict_outcome(a, b) == predictor.predict_outcome(a, b)

    def test_invalid_state_rejected(self) -> None:
        """Zero deviation in a stored state is invalid."""
        predictor = OutcomePredictor()
        with pytest.raises(InvalidRatingError, match="rating_b.phi"):
            predictor.predict_outcome(
                RatingState(mu=1500.0, phi=50.0, sigma=0.06),
                RatingState(mu=1500.0, phi=0.0, sigma=0.06),
            )


class TestRatingInterval:
    """Tests for get_rating_interval."""

    def test_default_interval_is_two_deviations(self) -> None:
        """mu +/- 2 phi by default."""
        band = OutcomePredictor().get_rating_interval(
            RatingState(mu=1500.0, phi=100.0, sigma=0.06)
        )

        assert band.low == 1300.0
        assert band.high == 1700.0
        assert band.width == 400.0

    def test_multiplier_is_configurable(self) -> None:
        """The band multiplier comes from configuration."""
        predictor = OutcomePredictor(RatingConfig(interval_multiplier=1.0))
        band = predictor.get_rating_interval(
            RatingState(mu=1600.0, phi=50.0, sigma=0.06)
        )

        assert (band.low, band.high) == (1550.0, 1650.0)
