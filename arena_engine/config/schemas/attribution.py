"""Shapley attribution configuration schema."""

from typing import Annotated

from pydantic import Field

from arena_engine.config.constants import (
    DEFAULT_MAX_SHAPLEY_SOURCES,
    HARD_MAX_SHAPLEY_SOURCES,
)
from arena_engine.config.schemas.base import BlendMode
from arena_engine.data_model import StrictBaseModel


class AttributionConfig(StrictBaseModel):
    """Attribution configuration.

    Attributes:
        max_sources: Largest coalition enumerated exhaustively (2^n subsets).
        blend_mode: How member quality scores form a coalition value.
        blend_weights: Per-source weight in a blended coalition (default 1.0).
    """

    max_sources: Annotated[int, Field(ge=1, le=HARD_MAX_SHAPLEY_SOURCES)] = (
        DEFAULT_MAX_SHAPLEY_SOURCES
    )
    blend_mode: BlendMode = BlendMode.MEAN
    blend_weights: dict[str, Annotated[float, Field(ge=0.0)]] = Field(
        default_factory=dict
    )
