"""Exact Shapley value attribution across content sources.

phi_i = sum over S in N without i of |S|! (n - |S| - 1)! / n! * (v(S + i) - v(S))

Every non-empty coalition is evaluated exactly once; v(empty) is 0 and never
evaluated. Enumeration is O(2^n * n), so the number of sources is capped.
"""

import math
import time
from collections import Counter
from collections.abc import Sequence
from itertools import combinations

import structlog

from arena_engine.attribution.coalition import CoalitionValueFunction
from arena_engine.attribution.models import AttributionReport
from arena_engine.config.constants import (
    COMPONENT_ATTRIBUTION,
    DEFAULT_MAX_SHAPLEY_SOURCES,
)
from arena_engine.config.schemas.attribution import AttributionConfig
from arena_engine.errors import CoalitionTooLargeError, InvalidCoalitionError
from arena_engine.observability.metrics import EngineMetrics


logger = structlog.get_logger()


def _validate_sources(source_ids: Sequence[str], max_sources: int) -> None:
    """Check attribution preconditions.

    Raises:
        InvalidCoalitionError: On duplicate ids.
        CoalitionTooLargeError: If there are more than max_sources ids.
    """
    duplicates = sorted(s for s, count in Counter(source_ids).items() if count > 1)
    if duplicates:
        msg = f"Duplicate source ids in coalition: {duplicates}"
        raise InvalidCoalitionError(msg)
    if len(source_ids) > max_sources:
        raise CoalitionTooLargeError(len(source_ids), max_sources)


def _evaluate_coalitions(
    value_fn: CoalitionValueFunction, source_ids: Sequence[str]
) -> dict[frozenset[str], float]:
    """Evaluate every coalition once, the empty one included as 0."""
    values: dict[frozenset[str], float] = {frozenset(): 0.0}
    for size in range(1, len(source_ids) + 1):
        for members in combinations(source_ids, size):
            coalition = frozenset(members)
            value = float(value_fn(coalition))
            if not math.isfinite(value):
                msg = f"Coalition {sorted(coalition)} has non-finite value {value}"
                raise InvalidCoalitionError(msg)
            values[coalition] = value
    return values


def _shapley_from_values(
    values: dict[frozenset[str], float], source_ids: Sequence[str]
) -> dict[str, float]:
    """Weight every marginal contribution by its join-order share."""
    n = len(source_ids)
    n_factorial = math.factorial(n)
    weights = [
        math.factorial(size) * math.factorial(n - size - 1) / n_factorial
        for size in range(n)
    ]

    shapley: dict[str, float] = {}
    for source_id in source_ids:
        others = [s for s in source_ids if s != source_id]
        total = 0.0
        for size in range(n):
            for members in combinations(others, size):
                coalition = frozenset(members)
                marginal = values[coalition | {source_id}] - values[coalition]
                total += weights[size] * marginal
        shapley[source_id] = total
    return shapley


def calculate_shapley_values(
    value_fn: CoalitionValueFunction,
    source_ids: Sequence[str],
    *,
    max_sources: int = DEFAULT_MAX_SHAPLEY_SOURCES,
) -> dict[str, float]:
    """Pure function API for exact Shapley values.

    Args:
        value_fn: Coalition value function.
        source_ids: Distinct source ids.
        max_sources: Enumeration ceiling.

    Returns:
        Source id to Shapley value, in input order ({} for no sources).

    Raises:
        InvalidCoalitionError: On duplicate ids or a non-finite value.
        CoalitionTooLargeError: If there are more than max_sources ids.
    """
    source_ids = list(source_ids)
    _validate_sources(source_ids, max_sources)
    if not source_ids:
        return {}
    return _shapley_from_values(_evaluate_coalitions(value_fn, source_ids), source_ids)


class ShapleyAttributor:
    """Attributes a coalition's value to its member sources."""

    def __init__(
        self,
        config: AttributionConfig | None = None,
        metrics: EngineMetrics | None = None,
        run_id: str = "attribution",
    ) -> None:
        """Initialize the attributor.

        Args:
            config: Attribution configuration.
            metrics: Optional metrics instance.
            run_id: Run identifier for logging.
        """
        self._config = config or AttributionConfig()
        self._metrics = metrics or EngineMetrics.get_instance()
        self._log = logger.bind(
            component=COMPONENT_ATTRIBUTION,
            subcomponent="shapley",
            run_id=run_id,
        )

    @property
    def config(self) -> AttributionConfig:
        """Get the attribution configuration."""
        return self._config

    def calculate(
        self, value_fn: CoalitionValueFunction, source_ids: Sequence[str]
    ) -> dict[str, float]:
        """Compute Shapley values.

        Args:
            value_fn: Coalition value function.
            source_ids: Distinct source ids.

        Returns:
            Source id to Shapley value.
        """
        return self.attribute(value_fn, source_ids).values

    def attribute(
        self, value_fn: CoalitionValueFunction, source_ids: Sequence[str]
    ) -> AttributionReport:
        """Compute Shapley values together with the efficiency check.

        Args:
            value_fn: Coalition value function.
            source_ids: Distinct source ids.

        Returns:
            AttributionReport.

        Raises:
            InvalidCoalitionError: On duplicate ids or a non-finite value.
            CoalitionTooLargeError: If there are more than max_sources ids.
        """
        source_ids = list(source_ids)
        _validate_sources(source_ids, self._config.max_sources)
        if not source_ids:
            return AttributionReport()

        start = time.perf_counter()
        values = _evaluate_coalitions(value_fn, source_ids)
        shapley = _shapley_from_values(values, source_ids)
        duration_ms = (time.perf_counter() - start) * 1000

        report = AttributionReport(
            values=shapley,
            grand_coalition_value=values[frozenset(source_ids)],
            coalitions_evaluated=len(values) - 1,
        )
        self._metrics.record_shapley_run(report.coalitions_evaluated, duration_ms)
        self._log.info(
            "shapley_computed",
            sources=len(source_ids),
            coalitions_evaluated=report.coalitions_evaluated,
            grand_coalition_value=report.grand_coalition_value,
            efficiency_gap=report.efficiency_gap,
            duration_ms=round(duration_ms, 3),
        )
        return report
