"""Data models for the source leaderboard."""

from dataclasses import dataclass, field

from arena_engine.ranking.combiner import ExpectedValueBreakdown
from arena_engine.rating.models import RatingInterval, RatingState


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked source.

    Attributes:
        rank: 1-based position.
        source_id: Source identifier.
        rating: Current rating state.
        interval: Confidence band around the rating.
        total_matches: Matches played.
        components: Expected value and its normalized inputs.
    """

    rank: int
    source_id: str
    rating: RatingState
    interval: RatingInterval
    total_matches: int
    components: ExpectedValueBreakdown

    @property
    def expected_value(self) -> float:
        """Ranking scalar."""
        return self.components.expected_value

    def to_json_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "rank": self.rank,
            "source_id": self.source_id,
            "rating": self.rating.to_dict(),
            "interval": self.interval.to_dict(),
            "total_matches": self.total_matches,
            "components": self.components.to_dict(),
        }


@dataclass(frozen=True)
class Leaderboard:
    """Ordered leaderboard.

    Attributes:
        entries: Entries in rank order.
        checksum: SHA-256 of the ordered entries JSON.
    """

    entries: list[LeaderboardEntry] = field(default_factory=list)
    checksum: str = ""

    def to_json_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "entries": [entry.to_json_dict() for entry in self.entries],
            "checksum": self.checksum,
        }
