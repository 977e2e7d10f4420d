"""Coalition value functions for Shapley attribution."""

from collections.abc import Callable, Iterable, Mapping

from arena_engine.config.schemas.attribution import AttributionConfig
from arena_engine.config.schemas.base import BlendMode
from arena_engine.errors import InvalidCoalitionError
from arena_engine.quality.models import QualityReport


# Maps a set of source ids to the value that coalition produces
CoalitionValueFunction = Callable[[frozenset[str]], float]


def tabulated_value(
    table: Mapping[frozenset[str], float] | Iterable[tuple[Iterable[str], float]],
) -> CoalitionValueFunction:
    """Build a value function from an explicit coalition table.

    The empty coalition is worth 0 and need not appear in the table.

    Args:
        table: Coalition to value, as a mapping or (members, value) pairs.

    Returns:
        Value function raising InvalidCoalitionError for missing coalitions.
    """
    items = table.items() if isinstance(table, Mapping) else table
    values = {frozenset(members): float(value) for members, value in items}

    def value_fn(coalition: frozenset[str]) -> float:
        if not coalition:
            return 0.0
        try:
            return values[coalition]
        except KeyError:
            msg = f"No value for coalition {sorted(coalition)}"
            raise InvalidCoalitionError(msg) from None

    return value_fn


class BlendValueFunction:
    """Coalition value from the overall quality scores of its members.

    In ``mean`` mode a coalition is worth the blend-weighted mean of its
    members' scores; in ``max`` mode it is worth its best member's score.
    Sources without an explicit blend weight weigh 1.0.
    """

    def __init__(
        self,
        scores: Mapping[str, float],
        mode: BlendMode = BlendMode.MEAN,
        blend_weights: Mapping[str, float] | None = None,
    ) -> None:
        """Initialize the value function.

        Args:
            scores: Source id to overall quality score.
            mode: Blend mode.
            blend_weights: Optional source id to blend weight.

        Raises:
            InvalidCoalitionError: If a blend weight is negative.
        """
        self._scores = dict(scores)
        self._mode = BlendMode(mode)
        self._weights = dict(blend_weights or {})
        for source_id, weight in self._weights.items():
            if weight < 0:
                msg = f"Blend weight for {source_id!r} must be >= 0, got {weight}"
                raise InvalidCoalitionError(msg)

    @classmethod
    def from_reports(
        cls,
        reports: Mapping[str, QualityReport],
        config: AttributionConfig | None = None,
    ) -> "BlendValueFunction":
        """Build from scored content using the attribution configuration."""
        config = config or AttributionConfig()
        return cls(
            scores={source_id: r.overall_score for source_id, r in reports.items()},
            mode=config.blend_mode,
            blend_weights=config.blend_weights,
        )

    @property
    def source_ids(self) -> list[str]:
        """Sources this function can value, in input order."""
        return list(self._scores)

    def __call__(self, coalition: frozenset[str]) -> float:
        """Value a coalition.

        Args:
            coalition: Member source ids.

        Returns:
            Coalition value (0.0 for the empty coalition).

        Raises:
            InvalidCoalitionError: If a member has no score.
        """
        if not coalition:
            return 0.0
        missing = sorted(coalition - self._scores.keys())
        if missing:
            msg = f"No quality score for sources {missing}"
            raise InvalidCoalitionError(msg)

        if self._mode is BlendMode.MAX:
            return max(self._scores[source_id] for source_id in coalition)

        # Sorted so float summation order does not depend on set iteration
        members = sorted(coalition)
        total_weight = sum(self._weights.get(s, 1.0) for s in members)
        if total_weight == 0.0:
            return 0.0
        weighted = sum(self._weights.get(s, 1.0) * self._scores[s] for s in members)
        return weighted / total_weight
