"""Scoring engine for content quality."""

from collections.abc import Callable, Mapping

import structlog

from arena_engine.config.constants import COMPONENT_QUALITY
from arena_engine.config.schemas.quality import MetricWeights, QualityConfig
from arena_engine.observability.metrics import EngineMetrics
from arena_engine.quality.accuracy import AccuracyTable
from arena_engine.quality.models import QualityMetrics, QualityReport, TextSignals
from arena_engine.quality.text_signals import OpinionLexicon, extract_signals


logger = structlog.get_logger()

# Maps extracted signals to a [0, 1] score; outputs are clamped by the scorer
StructuralMetric = Callable[[TextSignals, QualityConfig], float]


def clamp01(value: float) -> float:
    """Clamp a value into [0, 1]."""
    return max(0.0, min(1.0, value))


def default_depth(signals: TextSignals, config: QualityConfig) -> float:
    """Depth from length and sectioning.

    depth = w * min(words / target_words, 1)
          + (1 - w) * min(headings / target_headings, 1)

    Args:
        signals: Extracted counts.
        config: Quality configuration with the targets.

    Returns:
        Depth score in [0, 1].
    """
    length = min(signals.word_count / config.target_word_count, 1.0)
    structure = min(signals.heading_count / config.target_heading_count, 1.0)
    weight = config.depth_length_weight
    return weight * length + (1.0 - weight) * structure


def default_citations(signals: TextSignals, config: QualityConfig) -> float:
    """Citations from references per 1000 words, saturating at the target."""
    return min(signals.reference_density / config.target_reference_density, 1.0)


def overall_score(metrics: QualityMetrics, weights: MetricWeights) -> float:
    """Weighted sum of the metrics.

    Weights are validated to sum to 1.0, so the result is a convex
    combination; it is clamped into [min, max] of the metrics to absorb
    floating point drift.

    Args:
        metrics: Per-metric scores.
        weights: Metric weights.

    Returns:
        Overall score in [0, 1].
    """
    values = metrics.as_dict()
    weighted = sum(weights.as_dict()[name] * value for name, value in values.items())
    return max(min(values.values()), min(max(values.values()), weighted))


class QualityScorer:
    """Computes quality metrics for content snapshots.

    Metrics:
        - accuracy: configured base accuracy of the source identity
        - readability: clamp01(1 - (avg_words_per_sentence - target) / span)
        - objectivity: clamp01(1 - opinion_markers * penalty)
        - depth: pluggable structural metric (default_depth)
        - citations: pluggable structural metric (default_citations)
    """

    def __init__(
        self,
        config: QualityConfig | None = None,
        *,
        depth_metric: StructuralMetric = default_depth,
        citations_metric: StructuralMetric = default_citations,
        run_id: str = "quality",
        metrics: EngineMetrics | None = None,
    ) -> None:
        """Initialize the scorer.

        Args:
            config: Quality scoring configuration.
            depth_metric: Function computing depth from text signals.
            citations_metric: Function computing citations from text signals.
            run_id: Run identifier for logging.
            metrics: Optional metrics instance.
        """
        self._config = config or QualityConfig()
        self._depth_metric = depth_metric
        self._citations_metric = citations_metric
        self._accuracy = AccuracyTable(self._config.accuracy)
        self._lexicon = OpinionLexicon(self._config.opinion_markers)
        self._metrics = metrics or EngineMetrics.get_instance()
        self._log = logger.bind(
            component=COMPONENT_QUALITY,
            subcomponent="scorer",
            run_id=run_id,
        )

    @property
    def config(self) -> QualityConfig:
        """Get the quality configuration."""
        return self._config

    def score(self, content: str, source_identity: str) -> QualityMetrics:
        """Compute the five quality metrics for one content snapshot.

        Args:
            content: Content text.
            source_identity: Source id (or display name in substring mode).

        Returns:
            QualityMetrics.
        """
        return self._score_signals(
            extract_signals(content, self._lexicon), source_identity
        )

    def score_report(
        self,
        content: str,
        source_id: str,
        source_identity: str | None = None,
    ) -> QualityReport:
        """Score content and wrap it with its overall score and signals.

        Args:
            content: Content text.
            source_id: Source the content belongs to.
            source_identity: Identity for the accuracy table (default: source_id).

        Returns:
            QualityReport.
        """
        signals = extract_signals(content, self._lexicon)
        metrics = self._score_signals(signals, source_identity or source_id)
        report = QualityReport(
            source_id=source_id,
            metrics=metrics,
            overall_score=overall_score(metrics, self._config.weights),
            signals=signals,
        )
        self._metrics.record_content_scored()
        self._log.debug(
            "content_scored",
            source_id=source_id,
            overall_score=report.overall_score,
            word_count=signals.word_count,
        )
        return report

    def score_content_set(
        self, contents: Mapping[str, str]
    ) -> dict[str, QualityReport]:
        """Score every source's content in a content set.

        Args:
            contents: Source id to content text.

        Returns:
            Source id to QualityReport, in input order.
        """
        reports = {
            source_id: self.score_report(content, source_id)
            for source_id, content in contents.items()
        }

        self._log.info(
            "scoring_complete",
            contents_scored=len(reports),
            min_score=min((r.overall_score for r in reports.values()), default=0.0),
            max_score=max((r.overall_score for r in reports.values()), default=0.0),
        )

        return reports

    def _score_signals(
        self, signals: TextSignals, source_identity: str
    ) -> QualityMetrics:
        """Compute metrics from already extracted signals."""
        return QualityMetrics(
            accuracy=self._compute_accuracy(source_identity),
            readability=self._compute_readability(signals),
            depth=clamp01(self._depth_metric(signals, self._config)),
            objectivity=self._compute_objectivity(signals),
            citations=clamp01(self._citations_metric(signals, self._config)),
        )

    def _compute_accuracy(self, source_identity: str) -> float:
        """Look up the base accuracy for a source identity.

        Args:
            source_identity: Source id or display name.

        Returns:
            Accuracy in [0, 1].
        """
        return self._accuracy.lookup(source_identity)

    def _compute_readability(self, signals: TextSignals) -> float:
        """Penalize average sentence length above the target.

        Sentences at or below the target score 1.0; the score falls linearly
        to 0.0 at target + span words per sentence.

        Args:
            signals: Extracted counts.

        Returns:
            Readability in [0, 1].
        """
        excess = signals.avg_words_per_sentence - self._config.target_sentence_length
        return clamp01(1.0 - excess / self._config.sentence_length_span)

    def _compute_objectivity(self, signals: TextSignals) -> float:
        """Subtract a fixed penalty per opinion marker."""
        return clamp01(
            1.0 - signals.opinion_marker_count * self._config.opinion_penalty
        )


def score_content_pure(
    content: str,
    source_identity: str,
    config: QualityConfig | None = None,
) -> QualityMetrics:
    """Pure function API for scoring one content snapshot.

    Args:
        content: Content text.
        source_identity: Source id for the accuracy table.
        config: Quality scoring configuration.

    Returns:
        QualityMetrics.
    """
    return QualityScorer(config=config).score(content, source_identity)
