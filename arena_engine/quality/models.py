"""Data models for content quality scoring."""

from dataclasses import dataclass
from typing import Annotated

from pydantic import Field

from arena_engine.data_model import StrictBaseModel


UnitScore = Annotated[float, Field(ge=0.0, le=1.0)]


class QualityMetrics(StrictBaseModel):
    """Five quality metrics for one content snapshot, each in [0, 1].

    Attributes:
        accuracy: Base accuracy of the source.
        readability: Sentence-length readability.
        depth: Structural depth (length and sectioning).
        objectivity: Absence of opinion markers.
        citations: Reference density.
    """

    accuracy: UnitScore
    readability: UnitScore
    depth: UnitScore
    objectivity: UnitScore
    citations: UnitScore

    def as_dict(self) -> dict[str, float]:
        """Return metrics keyed by name."""
        return {
            "accuracy": self.accuracy,
            "readability": self.readability,
            "depth": self.depth,
            "objectivity": self.objectivity,
            "citations": self.citations,
        }


@dataclass(frozen=True)
class TextSignals:
    """Raw structural counts extracted from content text.

    Attributes:
        word_count: Number of word tokens.
        sentence_count: Number of sentences.
        heading_count: Number of markdown headings.
        reference_count: Links, bare URLs and bracketed numeric citations.
        opinion_marker_count: Opinion lexicon matches.
    """

    word_count: int
    sentence_count: int
    heading_count: int
    reference_count: int
    opinion_marker_count: int

    @property
    def avg_words_per_sentence(self) -> float:
        """Words divided by sentences, with at least one sentence."""
        return self.word_count / max(self.sentence_count, 1)

    @property
    def reference_density(self) -> float:
        """References per 1000 words (0.0 for empty text)."""
        if self.word_count == 0:
            return 0.0
        return self.reference_count * 1000.0 / self.word_count

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for serialization."""
        return {
            "word_count": self.word_count,
            "sentence_count": self.sentence_count,
            "heading_count": self.heading_count,
            "reference_count": self.reference_count,
            "opinion_marker_count": self.opinion_marker_count,
        }


@dataclass(frozen=True)
class QualityReport:
    """Scored content for one source.

    Attributes:
        source_id: Source the content belongs to.
        metrics: Per-metric scores.
        overall_score: Weighted combination of the metrics.
        signals: Counts the metrics were derived from.
    """

    source_id: str
    metrics: QualityMetrics
    overall_score: float
    signals: TextSignals

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        return {
            "source_id": self.source_id,
            "metrics": self.metrics.as_dict(),
            "overall_score": self.overall_score,
            "signals": self.signals.to_dict(),
        }
