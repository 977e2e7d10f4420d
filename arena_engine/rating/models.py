"""Data models for Glicko-2 ratings."""

import math
from dataclasses import dataclass
from enum import Enum

from arena_engine.config.schemas.rating import RatingConfig
from arena_engine.errors import InvalidRatingError


class MatchResult(str, Enum):
    """Resolved result of a blind comparison between sources A and B."""

    A_WINS = "a"
    B_WINS = "b"
    TIE = "tie"

    @property
    def score_a(self) -> float:
        """Score credited to source A (1, 0 or 0.5)."""
        if self is MatchResult.A_WINS:
            return 1.0
        if self is MatchResult.B_WINS:
            return 0.0
        return 0.5

    @property
    def score_b(self) -> float:
        """Score credited to source B."""
        return 1.0 - self.score_a


@dataclass(frozen=True)
class MatchOutcome:
    """A resolved vote between two sources.

    Attributes:
        source_a_id: Identifier of the source shown as A.
        source_b_id: Identifier of the source shown as B.
        result: Who won.
    """

    source_a_id: str
    source_b_id: str
    result: MatchResult


@dataclass(frozen=True)
class RatingState:
    """A source's Glicko-2 state on the display scale.

    Attributes:
        mu: Skill estimate (display scale, centred on 1500).
        phi: Rating deviation (display scale, new sources start at 350).
        sigma: Volatility.
    """

    mu: float
    phi: float
    sigma: float

    @classmethod
    def initial(cls, config: RatingConfig | None = None) -> "RatingState":
        """Create the state a newly registered source starts with."""
        config = config or RatingConfig()
        return cls(
            mu=config.initial_rating,
            phi=config.initial_deviation,
            sigma=config.initial_volatility,
        )

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for serialization."""
        return {"mu": self.mu, "phi": self.phi, "sigma": self.sigma}


def validate_rating_state(rating: RatingState, role: str) -> None:
    """Reject a rating state that would poison the arithmetic.

    Args:
        rating: State to check.
        role: Name of the input for the error message.

    Raises:
        InvalidRatingError: If mu is non-finite, or phi/sigma are
            non-finite or not strictly positive.
    """
    if not math.isfinite(rating.mu):
        raise InvalidRatingError(role, "mu", rating.mu)
    if not math.isfinite(rating.phi) or rating.phi <= 0:
        raise InvalidRatingError(role, "phi", rating.phi)
    if not math.isfinite(rating.sigma) or rating.sigma <= 0:
        raise InvalidRatingError(role, "sigma", rating.sigma)


@dataclass(frozen=True)
class RatingInterval:
    """Symmetric confidence band around a rating.

    Attributes:
        low: mu - k*phi.
        high: mu + k*phi.
    """

    low: float
    high: float

    @property
    def width(self) -> float:
        """Width of the band."""
        return self.high - self.low

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for serialization."""
        return {"low": self.low, "high": self.high}


@dataclass(frozen=True)
class Game:
    """One game inside a rating period.

    Attributes:
        opponent: Opponent's pre-period state.
        score: 1.0 win, 0.0 loss, 0.5 tie.
    """

    opponent: RatingState
    score: float


@dataclass(frozen=True)
class SideUpdate:
    """Outcome of rating one participant over a rating period.

    Attributes:
        rating: New state.
        delta: Estimated improvement (Glicko-2 scale).
        phi_star: Pre-update inflated deviation (display scale).
        volatility_converged: False when the solver ran out of iterations
            and the previous sigma was kept.
        solver_iterations: Iterations the volatility solver used.
    """

    rating: RatingState
    delta: float
    phi_star: float
    volatility_converged: bool = True
    solver_iterations: int = 0


@dataclass(frozen=True)
class RatingUpdate:
    """Result of applying one pairwise outcome to both participants.

    Attributes:
        a: Update for source A.
        b: Update for source B.
    """

    a: SideUpdate
    b: SideUpdate

    @property
    def rating_a(self) -> RatingState:
        """New state of source A."""
        return self.a.rating

    @property
    def rating_b(self) -> RatingState:
        """New state of source B."""
        return self.b.rating

    @property
    def volatility_converged(self) -> bool:
        """True if both volatility solves converged."""
        return self.a.volatility_converged and self.b.volatility_converged

    @property
    def warnings(self) -> list[str]:
        """Human-readable warnings for the caller to surface."""
        return [
            f"volatility solver did not converge for source {side}; sigma retained"
            for side, update in (("a", self.a), ("b", self.b))
            if not update.volatility_converged
        ]

    def as_pair(self) -> tuple[RatingState, RatingState]:
        """Return the two new states as (rating_a, rating_b)."""
        return self.a.rating, self.b.rating

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        return {
            "rating_a": self.a.rating.to_dict(),
            "rating_b": self.b.rating.to_dict(),
            "volatility_converged": self.volatility_converged,
            "warnings": self.warnings,
        }
