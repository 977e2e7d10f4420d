"""Glicko-2 rating configuration schema."""

from typing import Annotated

from pydantic import Field

from arena_engine.config.constants import (
    DEFAULT_CONVERGENCE_EPSILON,
    DEFAULT_DEVIATION,
    DEFAULT_INTERVAL_MULTIPLIER,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_RATING,
    DEFAULT_TAU,
    DEFAULT_VOLATILITY,
    GLICKO2_SCALE,
    MAX_TAU,
    MIN_TAU,
)
from arena_engine.data_model import StrictBaseModel


class RatingConfig(StrictBaseModel):
    """Glicko-2 parameters.

    Attributes:
        initial_rating: Display-scale rating for a new source.
        initial_deviation: Display-scale rating deviation for a new source.
            Also caps deviation growth during inactivity.
        initial_volatility: Volatility for a new source.
        tau: System constant constraining volatility change.
        convergence_epsilon: Bracket width at which the volatility solver stops.
        max_iterations: Iteration budget for the volatility solver.
        scale: Conversion factor between display and Glicko-2 scales.
        interval_multiplier: k in the mu +/- k*phi confidence band.
    """

    initial_rating: float = DEFAULT_RATING
    initial_deviation: Annotated[float, Field(gt=0.0, le=1000.0)] = DEFAULT_DEVIATION
    initial_volatility: Annotated[float, Field(gt=0.0, le=1.0)] = DEFAULT_VOLATILITY
    tau: Annotated[float, Field(ge=MIN_TAU, le=MAX_TAU)] = DEFAULT_TAU
    convergence_epsilon: Annotated[float, Field(gt=0.0, le=0.01)] = (
        DEFAULT_CONVERGENCE_EPSILON
    )
    max_iterations: Annotated[int, Field(ge=1, le=10000)] = DEFAULT_MAX_ITERATIONS
    scale: Annotated[float, Field(gt=0.0)] = GLICKO2_SCALE
    interval_multiplier: Annotated[float, Field(gt=0.0, le=5.0)] = (
        DEFAULT_INTERVAL_MULTIPLIER
    )
