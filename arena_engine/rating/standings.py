"""Persisted per-source standings and vote resolution."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from arena_engine.config.schemas.rating import RatingConfig
from arena_engine.errors import InvalidOutcomeError, InvalidStandingError
from arena_engine.rating.glicko import GlickoUpdater
from arena_engine.rating.models import (
    MatchOutcome,
    RatingState,
    RatingUpdate,
    validate_rating_state,
)


@dataclass(frozen=True)
class SourceStanding:
    """A source's rating together with its match counters.

    Attributes:
        source_id: Stable source identifier.
        rating: Current Glicko-2 state.
        total_matches: Number of resolved votes the source took part in.
        wins: Votes won.
        losses: Votes lost.
        ties: Votes tied.
    """

    source_id: str
    rating: RatingState
    total_matches: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0

    def __post_init__(self) -> None:
        """Check counter consistency."""
        if not self.source_id:
            msg = "source_id must be a non-empty string"
            raise InvalidStandingError(msg)
        counters = {
            "total_matches": self.total_matches,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
        }
        for name, value in counters.items():
            if value < 0:
                msg = f"{self.source_id}: {name} must be non-negative, got {value}"
                raise InvalidStandingError(msg)
        if self.total_matches != self.wins + self.losses + self.ties:
            msg = (
                f"{self.source_id}: total_matches={self.total_matches} does not "
                f"equal wins+losses+ties={self.wins + self.losses + self.ties}"
            )
            raise InvalidStandingError(msg)

    @classmethod
    def new(
        cls, source_id: str, config: RatingConfig | None = None
    ) -> "SourceStanding":
        """Create the standing of a newly registered source."""
        return cls(source_id=source_id, rating=RatingState.initial(config))

    @property
    def win_rate(self) -> float:
        """Wins over matches played (0.0 before the first match)."""
        return self.wins / max(self.total_matches, 1)

    def record(self, score: float, rating: RatingState) -> "SourceStanding":
        """Return a new standing with one more match applied.

        Args:
            score: 1.0 for a win, 0.0 for a loss, 0.5 for a tie.
            rating: Post-match rating state.

        Returns:
            Updated standing.
        """
        if score == 1.0:
            counters = {"wins": self.wins + 1}
        elif score == 0.0:
            counters = {"losses": self.losses + 1}
        elif score == 0.5:
            counters = {"ties": self.ties + 1}
        else:
            msg = f"Score must be 0.0, 0.5 or 1.0, got {score!r}"
            raise InvalidOutcomeError(msg)

        return replace(
            self, rating=rating, total_matches=self.total_matches + 1, **counters
        )

    def to_row(self) -> dict[str, float | int]:
        """Map to the persisted row layout."""
        return {
            "rating": self.rating.mu,
            "rating_deviation": self.rating.phi,
            "volatility": self.rating.sigma,
            "total_matches": self.total_matches,
            "total_wins": self.wins,
            "total_losses": self.losses,
            "total_ties": self.ties,
        }

    @classmethod
    def from_row(
        cls, source_id: str, row: Mapping[str, float | int]
    ) -> "SourceStanding":
        """Build a standing from a persisted row.

        Args:
            source_id: Source the row belongs to.
            row: Mapping with the keys produced by ``to_row``.

        Returns:
            SourceStanding.

        Raises:
            InvalidStandingError: If a key is missing, a value is not numeric,
                or the counters disagree.
            InvalidRatingError: If the rating triple is invalid.
        """
        try:
            rating = RatingState(
                mu=float(row["rating"]),
                phi=float(row["rating_deviation"]),
                sigma=float(row["volatility"]),
            )
            counters = {
                "total_matches": int(row["total_matches"]),
                "wins": int(row["total_wins"]),
                "losses": int(row["total_losses"]),
                "ties": int(row["total_ties"]),
            }
        except KeyError as e:
            msg = f"{source_id}: persisted row is missing {e.args[0]!r}"
            raise InvalidStandingError(msg) from e
        except (TypeError, ValueError) as e:
            msg = f"{source_id}: persisted row has a non-numeric value: {e}"
            raise InvalidStandingError(msg) from e

        validate_rating_state(rating, source_id)
        return cls(source_id=source_id, rating=rating, **counters)


@dataclass(frozen=True)
class VoteResolution:
    """Both standings after a vote.

    Attributes:
        outcome: The vote that was applied.
        standing_a: New standing of source A.
        standing_b: New standing of source B.
        update: Raw rating update (solver flags and deltas).
    """

    outcome: MatchOutcome
    standing_a: SourceStanding
    standing_b: SourceStanding
    update: RatingUpdate = field(repr=False)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        return {
            "result": self.outcome.result.value,
            "standings": {
                self.standing_a.source_id: self.standing_a.to_row(),
                self.standing_b.source_id: self.standing_b.to_row(),
            },
            "volatility_converged": self.update.volatility_converged,
            "warnings": self.update.warnings,
        }


def resolve_vote(
    outcome: MatchOutcome,
    standing_a: SourceStanding,
    standing_b: SourceStanding,
    updater: GlickoUpdater | None = None,
) -> VoteResolution:
    """Apply a vote to both standings.

    Args:
        outcome: The vote.
        standing_a: Pre-vote standing of the source shown as A.
        standing_b: Pre-vote standing of the source shown as B.
        updater: Glicko-2 updater (default configuration if omitted).

    Returns:
        VoteResolution with both new standings.

    Raises:
        InvalidOutcomeError: If the outcome names different sources than the
            standings, or pits a source against itself.
    """
    if outcome.source_a_id == outcome.source_b_id:
        msg = f"Source {outcome.source_a_id!r} cannot be compared with itself"
        raise InvalidOutcomeError(msg)
    if (outcome.source_a_id, outcome.source_b_id) != (
        standing_a.source_id,
        standing_b.source_id,
    ):
        msg = (
            f"Outcome is for ({outcome.source_a_id!r}, {outcome.source_b_id!r}) "
            f"but standings are for ({standing_a.source_id!r}, "
            f"{standing_b.source_id!r})"
        )
        raise InvalidOutcomeError(msg)

    updater = updater or GlickoUpdater()
    update = updater.update(standing_a.rating, standing_b.rating, outcome)

    return VoteResolution(
        outcome=outcome,
        standing_a=standing_a.record(outcome.result.score_a, update.rating_a),
        standing_b=standing_b.record(outcome.result.score_b, update.rating_b),
        update=update,
    )
