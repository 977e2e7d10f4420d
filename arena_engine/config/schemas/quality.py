"""Content quality scoring configuration schema."""

from typing import Annotated

from pydantic import Field, model_validator

from arena_engine.config.constants import (
    DEFAULT_DEPTH_LENGTH_WEIGHT,
    DEFAULT_METRIC_WEIGHTS,
    DEFAULT_OPINION_MARKERS,
    DEFAULT_OPINION_PENALTY,
    DEFAULT_SENTENCE_LENGTH_SPAN,
    DEFAULT_SOURCE_ACCURACY,
    DEFAULT_TARGET_HEADING_COUNT,
    DEFAULT_TARGET_REFERENCE_DENSITY,
    DEFAULT_TARGET_SENTENCE_LENGTH,
    DEFAULT_TARGET_WORD_COUNT,
    DEFAULT_UNKNOWN_ACCURACY,
)
from arena_engine.config.schemas.base import AccuracyMatchMode, check_weight_sum
from arena_engine.data_model import StrictBaseModel


UnitFloat = Annotated[float, Field(ge=0.0, le=1.0)]


class MetricWeights(StrictBaseModel):
    """Weights of each quality metric in the overall score.

    Attributes:
        accuracy: Weight of source accuracy.
        readability: Weight of readability.
        depth: Weight of structural depth.
        objectivity: Weight of objectivity.
        citations: Weight of citation density.
    """

    accuracy: UnitFloat = DEFAULT_METRIC_WEIGHTS["accuracy"]
    readability: UnitFloat = DEFAULT_METRIC_WEIGHTS["readability"]
    depth: UnitFloat = DEFAULT_METRIC_WEIGHTS["depth"]
    objectivity: UnitFloat = DEFAULT_METRIC_WEIGHTS["objectivity"]
    citations: UnitFloat = DEFAULT_METRIC_WEIGHTS["citations"]

    @model_validator(mode="after")
    def validate_sum(self) -> "MetricWeights":
        """Ensure the weights form a convex combination."""
        check_weight_sum(self.as_dict(), "metric weights")
        return self

    def as_dict(self) -> dict[str, float]:
        """Return weights keyed by metric name."""
        return {
            "accuracy": self.accuracy,
            "readability": self.readability,
            "depth": self.depth,
            "objectivity": self.objectivity,
            "citations": self.citations,
        }


class AccuracyConfig(StrictBaseModel):
    """Base accuracy table keyed by stable source identifier.

    Attributes:
        sources: Source identifier to base accuracy.
        default: Accuracy for identities not in the table.
        match_mode: How identities are matched against table keys.
    """

    sources: dict[str, UnitFloat] = Field(
        default_factory=lambda: dict(DEFAULT_SOURCE_ACCURACY)
    )
    default: UnitFloat = DEFAULT_UNKNOWN_ACCURACY
    match_mode: AccuracyMatchMode = AccuracyMatchMode.EXACT

    @model_validator(mode="after")
    def validate_keys(self) -> "AccuracyConfig":
        """Ensure table keys are non-empty identifiers."""
        for key in self.sources:
            if not key.strip():
                msg = "Accuracy table keys must be non-empty strings"
                raise ValueError(msg)
        return self


class QualityConfig(StrictBaseModel):
    """Quality scoring configuration.

    Attributes:
        weights: Metric weights for the overall score.
        accuracy: Base accuracy table.
        target_sentence_length: Average sentence length scoring 1.0 readability.
        sentence_length_span: Words above target at which readability hits 0.
        opinion_markers: Lexicon of opinion words and phrases.
        opinion_penalty: Objectivity lost per opinion marker match.
        target_word_count: Word count at which the length half of depth saturates.
        target_heading_count: Heading count at which the structure half saturates.
        depth_length_weight: Share of depth driven by length (rest by headings).
        target_reference_density: References per 1000 words scoring 1.0 citations.
    """

    weights: MetricWeights = Field(default_factory=MetricWeights)
    accuracy: AccuracyConfig = Field(default_factory=AccuracyConfig)
    target_sentence_length: Annotated[float, Field(gt=0.0, le=200.0)] = (
        DEFAULT_TARGET_SENTENCE_LENGTH
    )
    sentence_length_span: Annotated[float, Field(gt=0.0, le=200.0)] = (
        DEFAULT_SENTENCE_LENGTH_SPAN
    )
    opinion_markers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_OPINION_MARKERS)
    )
    opinion_penalty: UnitFloat = DEFAULT_OPINION_PENALTY
    target_word_count: Annotated[int, Field(ge=1)] = DEFAULT_TARGET_WORD_COUNT
    target_heading_count: Annotated[int, Field(ge=1)] = DEFAULT_TARGET_HEADING_COUNT
    depth_length_weight: UnitFloat = DEFAULT_DEPTH_LENGTH_WEIGHT
    target_reference_density: Annotated[float, Field(gt=0.0)] = (
        DEFAULT_TARGET_REFERENCE_DENSITY
    )

    @model_validator(mode="after")
    def validate_opinion_markers(self) -> "QualityConfig":
        """Ensure the opinion lexicon contains non-empty strings."""
        for marker in self.opinion_markers:
            if not marker.strip():
                msg = "Opinion markers must be non-empty strings"
                raise ValueError(msg)
        return self
