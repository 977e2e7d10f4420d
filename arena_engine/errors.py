"""Domain-specific error types for the engine.

Every error is local and recoverable by the caller; none of them is raised
after partial mutation, because the engine never mutates its inputs.
"""


class ArenaEngineError(Exception):
    """Base class for engine errors."""


class InvalidRatingError(ArenaEngineError, ValueError):
    """Rating state rejected before any computation.

    Attributes:
        role: Which input was rejected (e.g. 'rating_a').
        field_name: Offending field ('mu', 'phi' or 'sigma').
        value: The rejected value.
    """

    def __init__(self, role: str, field_name: str, value: float) -> None:
        self.role = role
        self.field_name = field_name
        self.value = value
        super().__init__(f"Invalid {role}.{field_name}: {value!r}")


class InvalidOutcomeError(ArenaEngineError, ValueError):
    """Match outcome that does not fit the standings it is applied to."""


class InvalidStandingError(ArenaEngineError, ValueError):
    """Standing counters that violate total = wins + losses + ties."""


class AttributionError(ArenaEngineError):
    """Shapley attribution precondition failure."""


class InvalidCoalitionError(AttributionError, ValueError):
    """Duplicate source ids or an unusable coalition value."""


class CoalitionTooLargeError(AttributionError):
    """More sources than the exhaustive enumeration ceiling allows.

    Attributes:
        source_count: Number of sources requested.
        max_sources: Configured ceiling.
    """

    def __init__(self, source_count: int, max_sources: int) -> None:
        self.source_count = source_count
        self.max_sources = max_sources
        super().__init__(
            f"Cannot enumerate {2**source_count} coalitions for {source_count} "
            f"sources; the configured ceiling is {max_sources} sources"
        )
