"""Expected value and leaderboard configuration schema."""

from typing import Annotated

from pydantic import Field, model_validator

from arena_engine.config.constants import (
    DEFAULT_EXPECTED_VALUE_WEIGHTS,
    DEFAULT_RATING_CEILING,
    DEFAULT_RATING_FLOOR,
)
from arena_engine.config.schemas.base import check_weight_sum
from arena_engine.data_model import StrictBaseModel


class ExpectedValueWeights(StrictBaseModel):
    """Blend weights for the expected value scalar.

    Attributes:
        quality: Weight of the overall quality score.
        rating: Weight of the normalized rating.
        win_rate: Weight of the historical win rate.
    """

    quality: Annotated[float, Field(ge=0.0, le=1.0)] = (
        DEFAULT_EXPECTED_VALUE_WEIGHTS["quality"]
    )
    rating: Annotated[float, Field(ge=0.0, le=1.0)] = (
        DEFAULT_EXPECTED_VALUE_WEIGHTS["rating"]
    )
    win_rate: Annotated[float, Field(ge=0.0, le=1.0)] = (
        DEFAULT_EXPECTED_VALUE_WEIGHTS["win_rate"]
    )

    @model_validator(mode="after")
    def validate_sum(self) -> "ExpectedValueWeights":
        """Ensure the blend is a convex combination."""
        check_weight_sum(
            {"quality": self.quality, "rating": self.rating, "win_rate": self.win_rate},
            "expected value weights",
        )
        return self


class RankingConfig(StrictBaseModel):
    """Ranking configuration.

    Attributes:
        weights: Expected value blend weights.
        rating_floor: Display rating mapped to 0.0.
        rating_ceiling: Display rating mapped to 1.0.
    """

    weights: ExpectedValueWeights = Field(default_factory=ExpectedValueWeights)
    rating_floor: float = DEFAULT_RATING_FLOOR
    rating_ceiling: float = DEFAULT_RATING_CEILING

    @model_validator(mode="after")
    def validate_rating_range(self) -> "RankingConfig":
        """Ensure the normalization range is non-empty."""
        if self.rating_ceiling <= self.rating_floor:
            msg = "rating_ceiling must be greater than rating_floor"
            raise ValueError(msg)
        return self
