"""Rating and attribution engine for blind knowledge-source comparisons.

Sources are rated from pairwise votes with Glicko-2, their content is scored
on five quality metrics, and the value of a blended coalition of sources is
split across its members with exact Shapley values.
"""

from arena_engine.engine import ArenaEngine, ContentAttribution
from arena_engine.errors import (
    ArenaEngineError,
    AttributionError,
    CoalitionTooLargeError,
    InvalidCoalitionError,
    InvalidOutcomeError,
    InvalidRatingError,
    InvalidStandingError,
)


__version__ = "0.1.0"

__all__ = [
    "ArenaEngine",
    "ArenaEngineError",
    "AttributionError",
    "CoalitionTooLargeError",
    "ContentAttribution",
    "InvalidCoalitionError",
    "InvalidOutcomeError",
    "InvalidRatingError",
    "InvalidStandingError",
]
