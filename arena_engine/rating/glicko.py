"""Glicko-2 rating updates for pairwise source comparisons.

Follows Mark Glickman's "Example of the Glicko-2 system". Ratings arrive and
leave on the display scale; all arithmetic happens on the Glicko-2 scale.
"""

import math
import time
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from arena_engine.config.constants import COMPONENT_RATING, DISPLAY_RATING_CENTER
from arena_engine.config.schemas.rating import RatingConfig
from arena_engine.observability.metrics import EngineMetrics
from arena_engine.rating.models import (
    Game,
    MatchOutcome,
    MatchResult,
    RatingState,
    RatingUpdate,
    SideUpdate,
    validate_rating_state,
)


logger = structlog.get_logger()


def g_factor(phi: float) -> float:
    """Dampen an opponent's influence by their uncertainty.

    g(phi) = 1 / sqrt(1 + 3 phi^2 / pi^2)

    Args:
        phi: Opponent deviation on the Glicko-2 scale.

    Returns:
        Factor in (0, 1].
    """
    return 1.0 / math.sqrt(1.0 + 3.0 * phi * phi / (math.pi * math.pi))


def win_probability(mu: float, mu_j: float, phi_j: float) -> float:
    """Expected score against one opponent (Glicko-2 scale).

    E = 1 / (1 + exp(-g(phi_j) * (mu - mu_j)))

    Args:
        mu: Player rating.
        mu_j: Opponent rating.
        phi_j: Opponent deviation.

    Returns:
        Probability in [0, 1].
    """
    x = g_factor(phi_j) * (mu - mu_j)
    # Evaluate the logistic on the side that cannot overflow
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


@dataclass(frozen=True)
class VolatilitySolution:
    """Result of the volatility root-find.

    Attributes:
        sigma: New volatility, or the previous one when not converged.
        converged: Whether the bracket closed within the iteration budget.
        iterations: Iterations used.
    """

    sigma: float
    converged: bool
    iterations: int


def solve_volatility(  # noqa: PLR0913
    sigma: float,
    phi: float,
    v: float,
    delta: float,
    *,
    tau: float,
    epsilon: float,
    max_iterations: int,
) -> VolatilitySolution:
    """Find the new volatility with the Illinois variant of regula falsi.

    Solves f(x) = 0 for x = ln(sigma'^2). Both the search for the lower
    bracket and the Illinois iteration are bounded by max_iterations; if
    either runs out, the previous sigma is returned with converged=False.

    Args:
        sigma: Current volatility.
        phi: Current deviation (Glicko-2 scale).
        v: Estimated outcome variance.
        delta: Estimated improvement.
        tau: System constant.
        epsilon: Bracket width at which to stop.
        max_iterations: Iteration budget.

    Returns:
        VolatilitySolution.
    """
    a = math.log(sigma * sigma)
    phi_sq = phi * phi
    delta_sq = delta * delta
    tau_sq = tau * tau

    def f(x: float) -> float:
        ex = math.exp(x)
        return ex * (delta_sq - phi_sq - v - ex) / (
            2.0 * (phi_sq + v + ex) ** 2
        ) - (x - a) / tau_sq

    bound_a = a
    if delta_sq > phi_sq + v:
        bound_b = math.log(delta_sq - phi_sq - v)
    else:
        k = 1
        while f(a - k * tau) < 0:
            k += 1
            if k > max_iterations:
                return VolatilitySolution(sigma=sigma, converged=False, iterations=k)
        bound_b = a - k * tau

    f_a = f(bound_a)
    f_b = f(bound_b)
    iterations = 0

    while abs(bound_b - bound_a) > epsilon:
        if iterations >= max_iterations or f_b == f_a:
            return VolatilitySolution(
                sigma=sigma, converged=False, iterations=iterations
            )
        bound_c = bound_a + (bound_a - bound_b) * f_a / (f_b - f_a)
        f_c = f(bound_c)
        if f_c * f_b <= 0:
            bound_a, f_a = bound_b, f_b
        else:
            f_a /= 2.0
        bound_b, f_b = bound_c, f_c
        iterations += 1

    return VolatilitySolution(
        sigma=math.exp(bound_a / 2.0), converged=True, iterations=iterations
    )


class GlickoUpdater:
    """Applies Glicko-2 updates to source ratings.

    Each vote is its own rating period with exactly one opponent per side;
    both sides are rated from their pre-match states. ``rate_period`` exposes
    the general multi-opponent form and ``decay`` the inactivity step.
    """

    def __init__(
        self,
        config: RatingConfig | None = None,
        metrics: EngineMetrics | None = None,
    ) -> None:
        """Initialize the updater.

        Args:
            config: Glicko-2 parameters.
            metrics: Optional metrics instance.
        """
        self._config = config or RatingConfig()
        self._metrics = metrics or EngineMetrics.get_instance()
        self._log = logger.bind(component=COMPONENT_RATING, subcomponent="glicko")

    @property
    def config(self) -> RatingConfig:
        """Get the rating configuration."""
        return self._config

    def update(
        self,
        rating_a: RatingState,
        rating_b: RatingState,
        outcome: MatchOutcome | MatchResult,
    ) -> RatingUpdate:
        """Apply one pairwise outcome to both participants.

        Args:
            rating_a: Pre-match state of source A.
            rating_b: Pre-match state of source B.
            outcome: The vote, or just its result.

        Returns:
            RatingUpdate with both new states and solver flags.

        Raises:
            InvalidRatingError: If either state is invalid.
        """
        result = outcome.result if isinstance(outcome, MatchOutcome) else outcome
        validate_rating_state(rating_a, "rating_a")
        validate_rating_state(rating_b, "rating_b")

        start = time.perf_counter()
        side_a = self._rate(rating_a, [Game(opponent=rating_b, score=result.score_a)])
        side_b = self._rate(rating_b, [Game(opponent=rating_a, score=result.score_b)])
        self._metrics.record_rating_update((time.perf_counter() - start) * 1000)

        update = RatingUpdate(a=side_a, b=side_b)
        self._log.debug(
            "rating_updated",
            result=result.value,
            mu_a=side_a.rating.mu,
            mu_b=side_b.rating.mu,
            phi_a=side_a.rating.phi,
            phi_b=side_b.rating.phi,
            volatility_converged=update.volatility_converged,
        )
        return update

    def rate_period(self, rating: RatingState, games: Sequence[Game]) -> SideUpdate:
        """Rate one participant over a period with any number of games.

        With no games the participant only goes through the inactivity step.

        Args:
            rating: Pre-period state.
            games: Games played during the period.

        Returns:
            SideUpdate for the participant.

        Raises:
            InvalidRatingError: If the state or any opponent is invalid.
        """
        validate_rating_state(rating, "rating")
        for index, game in enumerate(games):
            validate_rating_state(game.opponent, f"games[{index}].opponent")

        if not games:
            decayed = self.decay(rating)
            return SideUpdate(rating=decayed, delta=0.0, phi_star=decayed.phi)

        start = time.perf_counter()
        side = self._rate(rating, games)
        self._metrics.record_rating_update((time.perf_counter() - start) * 1000)
        return side

    def decay(self, rating: RatingState) -> RatingState:
        """Inflate the deviation of a source that played no games.

        phi' = sqrt(phi^2 + sigma^2), capped at the initial deviation.

        Args:
            rating: Current state.

        Returns:
            State with inflated deviation.
        """
        validate_rating_state(rating, "rating")
        scale = self._config.scale
        phi = rating.phi / scale
        phi_star = math.sqrt(phi * phi + rating.sigma * rating.sigma) * scale
        return RatingState(
            mu=rating.mu,
            phi=min(phi_star, max(rating.phi, self._config.initial_deviation)),
            sigma=rating.sigma,
        )

    def _rate(self, rating: RatingState, games: Sequence[Game]) -> SideUpdate:
        """Run steps 2-8 of the algorithm for one participant."""
        scale = self._config.scale
        mu = (rating.mu - DISPLAY_RATING_CENTER) / scale
        phi = rating.phi / scale

        # information is 1/v; improvement is sum of g * (s - E)
        information = 0.0
        improvement = 0.0
        for game in games:
            mu_j = (game.opponent.mu - DISPLAY_RATING_CENTER) / scale
            phi_j = game.opponent.phi / scale
            g_j = g_factor(phi_j)
            e_j = win_probability(mu, mu_j, phi_j)
            information += g_j * g_j * e_j * (1.0 - e_j)
            improvement += g_j * (game.score - e_j)

        if information > 0.0:
            v = 1.0 / information
            delta = v * improvement
            solution = solve_volatility(
                rating.sigma,
                phi,
                v,
                delta,
                tau=self._config.tau,
                epsilon=self._config.convergence_epsilon,
                max_iterations=self._config.max_iterations,
            )
        else:
            # Prediction saturated: sigma is kept, mu still moves on an upset
            delta = 0.0
            solution = VolatilitySolution(
                sigma=rating.sigma, converged=True, iterations=0
            )

        if not solution.converged:
            self._metrics.record_volatility_failure()
            self._log.warning(
                "volatility_not_converged",
                mu=rating.mu,
                phi=rating.phi,
                sigma=rating.sigma,
                iterations=solution.iterations,
                max_iterations=self._config.max_iterations,
            )

        phi_star = math.sqrt(phi * phi + solution.sigma * solution.sigma)
        new_phi = 1.0 / math.sqrt(1.0 / (phi_star * phi_star) + information)
        new_mu = mu + new_phi * new_phi * improvement

        return SideUpdate(
            rating=RatingState(
                mu=new_mu * scale + DISPLAY_RATING_CENTER,
                phi=new_phi * scale,
                sigma=solution.sigma,
            ),
            delta=delta,
            phi_star=phi_star * scale,
            volatility_converged=solution.converged,
            solver_iterations=solution.iterations,
        )


def update_ratings(
    rating_a: RatingState,
    rating_b: RatingState,
    outcome: MatchOutcome | MatchResult,
    config: RatingConfig | None = None,
) -> RatingUpdate:
    """Pure function API for a pairwise update.

    Args:
        rating_a: Pre-match state of source A.
        rating_b: Pre-match state of source B.
        outcome: The vote, or just its result.
        config: Glicko-2 parameters.

    Returns:
        RatingUpdate with both new states.
    """
    return GlickoUpdater(config=config).update(rating_a, rating_b, outcome)
