"""Metrics collection for the rating and attribution engine."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class EngineMetrics:
    """Counters for engine operations.

    The engine's computations are pure; these counters are the only
    process-wide state and exist purely for observability.

    Attributes:
        rating_updates: Number of update() or rate_period() calls.
        volatility_failures: Sides whose volatility solver did not converge.
        update_duration_ms: Cumulative time spent in rating updates.
        contents_scored: Number of content snapshots scored.
        shapley_runs: Number of attribution runs.
        coalitions_evaluated: Cumulative coalition value function calls.
        shapley_duration_ms: Cumulative time spent in attribution.
        leaderboards_ranked: Number of leaderboards produced.
    """

    rating_updates: int = 0
    volatility_failures: int = 0
    update_duration_ms: float = 0.0
    contents_scored: int = 0
    shapley_runs: int = 0
    coalitions_evaluated: int = 0
    shapley_duration_ms: float = 0.0
    leaderboards_ranked: int = 0

    _instance: ClassVar["EngineMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "EngineMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_rating_update(self, duration_ms: float) -> None:
        """Record a rating update.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.rating_updates += 1
        self.update_duration_ms += duration_ms

    def record_volatility_failure(self) -> None:
        """Record a volatility solver that exhausted its iteration budget."""
        self.volatility_failures += 1

    def record_content_scored(self) -> None:
        """Record a scored content snapshot."""
        self.contents_scored += 1

    def record_shapley_run(self, coalitions: int, duration_ms: float) -> None:
        """Record an attribution run.

        Args:
            coalitions: Number of coalitions evaluated.
            duration_ms: Duration in milliseconds.
        """
        self.shapley_runs += 1
        self.coalitions_evaluated += coalitions
        self.shapley_duration_ms += duration_ms

    def record_leaderboard(self) -> None:
        """Record a produced leaderboard."""
        self.leaderboards_ranked += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "rating_updates": self.rating_updates,
            "volatility_failures": self.volatility_failures,
            "update_duration_ms": self.update_duration_ms,
            "contents_scored": self.contents_scored,
            "shapley_runs": self.shapley_runs,
            "coalitions_evaluated": self.coalitions_evaluated,
            "shapley_duration_ms": self.shapley_duration_ms,
            "leaderboards_ranked": self.leaderboards_ranked,
        }
