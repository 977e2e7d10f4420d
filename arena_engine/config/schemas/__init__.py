"""Pydantic schemas for engine configuration."""

from arena_engine.config.schemas.attribution import AttributionConfig
from arena_engine.config.schemas.base import AccuracyMatchMode, BlendMode
from arena_engine.config.schemas.engine import EngineConfig
from arena_engine.config.schemas.quality import (
    AccuracyConfig,
    MetricWeights,
    QualityConfig,
)
from arena_engine.config.schemas.rating import RatingConfig
from arena_engine.config.schemas.ranking import ExpectedValueWeights, RankingConfig


__all__ = [
    "AccuracyConfig",
    "AccuracyMatchMode",
    "AttributionConfig",
    "BlendMode",
    "EngineConfig",
    "ExpectedValueWeights",
    "MetricWeights",
    "QualityConfig",
    "RankingConfig",
    "RatingConfig",
]
