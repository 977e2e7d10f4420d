"""Glicko-2 ratings for pairwise source comparisons."""

from arena_engine.rating.glicko import (
    GlickoUpdater,
    VolatilitySolution,
    g_factor,
    solve_volatility,
    update_ratings,
    win_probability,
)
from arena_engine.rating.models import (
    Game,
    MatchOutcome,
    MatchResult,
    RatingInterval,
    RatingState,
    RatingUpdate,
    SideUpdate,
    validate_rating_state,
)
from arena_engine.rating.predictor import OutcomePredictor
from arena_engine.rating.standings import SourceStanding, VoteResolution, resolve_vote


__all__ = [
    "Game",
    "GlickoUpdater",
    "MatchOutcome",
    "MatchResult",
    "OutcomePredictor",
    "RatingInterval",
    "RatingState",
    "RatingUpdate",
    "SideUpdate",
    "SourceStanding",
    "VolatilitySolution",
    "VoteResolution",
    "g_factor",
    "resolve_vote",
    "solve_volatility",
    "update_ratings",
    "win_probability",
]
