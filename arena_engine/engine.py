"""Engine facade threading one configuration through every component."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from arena_engine.attribution.coalition import (
    BlendValueFunction,
    CoalitionValueFunction,
)
from arena_engine.attribution.models import AttributionReport
from arena_engine.attribution.shapley import ShapleyAttributor
from arena_engine.config.loader import load_engine_config
from arena_engine.config.schemas.engine import EngineConfig
from arena_engine.observability.metrics import EngineMetrics
from arena_engine.quality.models import QualityMetrics, QualityReport
from arena_engine.quality.scorer import (
    QualityScorer,
    StructuralMetric,
    default_citations,
    default_depth,
)
from arena_engine.ranking.combiner import ExpectedValueCombiner
from arena_engine.ranking.leaderboard import SourceRanker
from arena_engine.ranking.models import Leaderboard
from arena_engine.rating.glicko import GlickoUpdater
from arena_engine.rating.models import (
    MatchOutcome,
    MatchResult,
    RatingInterval,
    RatingState,
    RatingUpdate,
)
from arena_engine.rating.predictor import OutcomePredictor
from arena_engine.rating.standings import SourceStanding, VoteResolution, resolve_vote


@dataclass(frozen=True)
class ContentAttribution:
    """Quality reports for a content set and the Shapley split of its blend.

    Attributes:
        reports: Source id to quality report.
        attribution: Shapley values of the blended coalition.
    """

    reports: dict[str, QualityReport]
    attribution: AttributionReport

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        return {
            "reports": {sid: r.to_dict() for sid, r in self.reports.items()},
            "attribution": self.attribution.to_dict(),
        }


class ArenaEngine:
    """Rating and attribution engine.

    Holds no state beyond its configuration and component instances; every
    operation is a pure function of its arguments.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        depth_metric: StructuralMetric = default_depth,
        citations_metric: StructuralMetric = default_citations,
        metrics: EngineMetrics | None = None,
        run_id: str = "engine",
    ) -> None:
        """Initialize the engine.

        Args:
            config: Engine configuration (defaults if omitted).
            depth_metric: Structural depth metric for the quality scorer.
            citations_metric: Citation metric for the quality scorer.
            metrics: Optional metrics instance.
            run_id: Run identifier for logging.
        """
        self._config = config or EngineConfig()
        metrics = metrics or EngineMetrics.get_instance()
        self._updater = GlickoUpdater(self._config.rating, metrics=metrics)
        self._predictor = OutcomePredictor(self._config.rating)
        self._scorer = QualityScorer(
            self._config.quality,
            depth_metric=depth_metric,
            citations_metric=citations_metric,
            run_id=run_id,
            metrics=metrics,
        )
        self._attributor = ShapleyAttributor(
            self._config.attribution, metrics=metrics, run_id=run_id
        )
        self._combiner = ExpectedValueCombiner(self._config.ranking)
        self._ranker = SourceRanker(
            self._config.ranking,
            rating_config=self._config.rating,
            metrics=metrics,
            run_id=run_id,
        )

    @classmethod
    def from_file(cls, config_path: Path, run_id: str = "engine") -> "ArenaEngine":
        """Build an engine from an engine.yaml file."""
        return cls(load_engine_config(config_path, run_id=run_id), run_id=run_id)

    @property
    def config(self) -> EngineConfig:
        """Get the engine configuration."""
        return self._config

    def new_rating(self) -> RatingState:
        """Initial rating state for a new source."""
        return RatingState.initial(self._config.rating)

    def new_standing(self, source_id: str) -> SourceStanding:
        """Initial standing for a new source."""
        return SourceStanding.new(source_id, self._config.rating)

    def update(
        self,
        rating_a: RatingState,
        rating_b: RatingState,
        outcome: MatchOutcome | MatchResult,
    ) -> RatingUpdate:
        """Apply one pairwise outcome to both ratings."""
        return self._updater.update(rating_a, rating_b, outcome)

    def predict_outcome(self, rating_a: RatingState, rating_b: RatingState) -> float:
        """Probability that A beats B."""
        return self._predictor.predict_outcome(rating_a, rating_b)

    def get_rating_interval(self, rating: RatingState) -> RatingInterval:
        """Confidence band around a rating."""
        return self._predictor.get_rating_interval(rating)

    def score(self, content: str, source_identity: str) -> QualityMetrics:
        """Quality metrics for one content snapshot."""
        return self._scorer.score(content, source_identity)

    def score_report(self, content: str, source_id: str) -> QualityReport:
        """Quality report for one content snapshot."""
        return self._scorer.score_report(content, source_id)

    def calculate_shapley_values(
        self, value_fn: CoalitionValueFunction, source_ids: Sequence[str]
    ) -> dict[str, float]:
        """Shapley values of a coalition value function."""
        return self._attributor.calculate(value_fn, source_ids)

    def attribute_content_set(self, contents: Mapping[str, str]) -> ContentAttribution:
        """Score a content set and split its blended value across sources.

        Args:
            contents: Source id to content text.

        Returns:
            ContentAttribution.
        """
        reports = self._scorer.score_content_set(contents)
        value_fn = BlendValueFunction.from_reports(reports, self._config.attribution)
        attribution = self._attributor.attribute(value_fn, list(reports))
        return ContentAttribution(reports=reports, attribution=attribution)

    def compute_expected_value(
        self,
        quality: float,
        normalized_rating: float,
        normalized_win_rate: float,
    ) -> float:
        """Blend normalized quality, rating and win rate."""
        return self._combiner.compute_expected_value(
            quality, normalized_rating, normalized_win_rate
        )

    def resolve_vote(
        self,
        outcome: MatchOutcome,
        standing_a: SourceStanding,
        standing_b: SourceStanding,
    ) -> VoteResolution:
        """Apply a vote to both standings."""
        return resolve_vote(outcome, standing_a, standing_b, self._updater)

    def rank(
        self,
        standings: Iterable[SourceStanding],
        quality_reports: Mapping[str, QualityReport] | None = None,
    ) -> Leaderboard:
        """Order sources by expected value."""
        return self._ranker.rank(standings, quality_reports)
