"""Source leaderboard ordered by expected value."""

import hashlib
import json
from collections.abc import Iterable, Mapping

import structlog

from arena_engine.config.constants import COMPONENT_RANKING
from arena_engine.config.schemas.ranking import RankingConfig
from arena_engine.config.schemas.rating import RatingConfig
from arena_engine.observability.metrics import EngineMetrics
from arena_engine.quality.models import QualityReport
from arena_engine.ranking.combiner import ExpectedValueCombiner
from arena_engine.ranking.models import Leaderboard, LeaderboardEntry
from arena_engine.rating.predictor import OutcomePredictor
from arena_engine.rating.standings import SourceStanding


logger = structlog.get_logger()


class SourceRanker:
    """Ranks sources by blending quality, rating and win rate.

    Sources without a quality report rank with quality 0. Ties on expected
    value are broken by source id so the output is deterministic.
    """

    def __init__(
        self,
        config: RankingConfig | None = None,
        rating_config: RatingConfig | None = None,
        metrics: EngineMetrics | None = None,
        run_id: str = "ranking",
    ) -> None:
        """Initialize the ranker.

        Args:
            config: Ranking configuration.
            rating_config: Rating configuration for the confidence intervals.
            metrics: Optional metrics instance.
            run_id: Run identifier for logging.
        """
        self._combiner = ExpectedValueCombiner(config)
        self._predictor = OutcomePredictor(rating_config)
        self._metrics = metrics or EngineMetrics.get_instance()
        self._log = logger.bind(
            component=COMPONENT_RANKING,
            subcomponent="leaderboard",
            run_id=run_id,
        )

    def rank(
        self,
        standings: Iterable[SourceStanding],
        quality_reports: Mapping[str, QualityReport] | None = None,
    ) -> Leaderboard:
        """Produce a leaderboard.

        Args:
            standings: Current standings, one per source.
            quality_reports: Optional source id to quality report.

        Returns:
            Leaderboard with checksum.
        """
        quality_reports = quality_reports or {}
        scored = []
        for standing in standings:
            report = quality_reports.get(standing.source_id)
            components = self._combiner.breakdown(
                quality=report.overall_score if report else 0.0,
                mu=standing.rating.mu,
                wins=standing.wins,
                total_matches=standing.total_matches,
            )
            scored.append((standing, components))

        scored.sort(key=lambda pair: (-pair[1].expected_value, pair[0].source_id))

        entries = [
            LeaderboardEntry(
                rank=rank,
                source_id=standing.source_id,
                rating=standing.rating,
                interval=self._predictor.get_rating_interval(standing.rating),
                total_matches=standing.total_matches,
                components=components,
            )
            for rank, (standing, components) in enumerate(scored, start=1)
        ]
        leaderboard = Leaderboard(
            entries=entries, checksum=self._compute_checksum(entries)
        )

        self._metrics.record_leaderboard()
        self._log.info(
            "leaderboard_ranked",
            sources=len(entries),
            leader=entries[0].source_id if entries else None,
            checksum=leaderboard.checksum,
        )
        return leaderboard

    def _compute_checksum(self, entries: list[LeaderboardEntry]) -> str:
        """Compute SHA-256 checksum of ordered output.

        Args:
            entries: Entries in rank order.

        Returns:
            SHA-256 hex digest.
        """
        data = [entry.to_json_dict() for entry in entries]
        json_str = json.dumps(data, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(json_str.encode("utf-8")).hexdigest()
