"""Content quality scoring."""

from arena_engine.quality.accuracy import AccuracyTable
from arena_engine.quality.models import QualityMetrics, QualityReport, TextSignals
from arena_engine.quality.scorer import (
    QualityScorer,
    StructuralMetric,
    clamp01,
    default_citations,
    default_depth,
    overall_score,
    score_content_pure,
)
from arena_engine.quality.text_signals import OpinionLexicon, extract_signals


__all__ = [
    "AccuracyTable",
    "OpinionLexicon",
    "QualityMetrics",
    "QualityReport",
    "QualityScorer",
    "StructuralMetric",
    "TextSignals",
    "clamp01",
    "default_citations",
    "default_depth",
    "extract_signals",
    "overall_score",
    "score_content_pure",
]
