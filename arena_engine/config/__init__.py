"""Configuration loading and validation module."""

from arena_engine.config.loader import (
    ConfigLoader,
    ConfigState,
    ConfigStateError,
    load_engine_config,
)
from arena_engine.config.schemas import (
    AccuracyConfig,
    AccuracyMatchMode,
    AttributionConfig,
    BlendMode,
    EngineConfig,
    ExpectedValueWeights,
    MetricWeights,
    QualityConfig,
    RankingConfig,
    RatingConfig,
)


__all__ = [
    "AccuracyConfig",
    "AccuracyMatchMode",
    "AttributionConfig",
    "BlendMode",
    "ConfigLoader",
    "ConfigState",
    "ConfigStateError",
    "EngineConfig",
    "ExpectedValueWeights",
    "MetricWeights",
    "QualityConfig",
    "RankingConfig",
    "RatingConfig",
    "load_engine_config",
]
