"""Unit tests for source standings and vote resolution."""

import pytest

from arena_engine.errors import InvalidOutcomeError, InvalidStandingError
from arena_engine.observability.metrics import EngineMetrics
from arena_engine.rating.models import MatchOutcome, MatchResult, RatingState
from arena_engine.rating.standings import SourceStanding, resolve_vote


@pytest.fixture(autouse=True)
def _reset_metrics() -> None:
    """Start every test with fresh counters."""
    EngineMetrics.reset()


def _make_standing(
    source_id: str = "wikipedia",
    mu: float = 1500.0,
    wins: int = 0,
    losses: int = 0,
    ties: int = 0,
) -> SourceStanding:
    """Create a SourceStanding with consistent counters."""
    return SourceStanding(
        source_id=source_id,
        rating=RatingState(mu=mu, phi=200.0, sigma=0.06),
        total_matches=wins + losses + ties,
        wins=wins,
        losses=losses,
        ties=ties,
    )


class TestSourceStanding:
    """Tests for SourceStanding."""

    def test_new_standing_uses_defaults(self) -> None:
        """A new source starts at 1500/350/0.06 with no matches."""
        standing = SourceStanding.new("britannica")

        assert standing.rating == RatingState(mu=1500.0, phi=350.0, sigma=0.06)
        assert standing.total_matches == 0
        assert standing.win_rate == 0.0

    def test_inconsistent_counters_rejected(self) -> None:
        """total_matches must equal wins + losses + ties."""
        with pytest.raises(InvalidStandingError, match="total_matches"):
            SourceStanding(
                source_id="wikipedia",
                rating=RatingState(mu=1500.0, phi=350.0, sigma=0.06),
                total_matches=3,
                wins=1,
            )

    def test_negative_counter_rejected(self) -> None:
        """Counters cannot be negative."""
        with pytest.raises(InvalidStandingError, match="wins"):
            SourceStanding(
                source_id="wikipedia",
                rating=RatingState(mu=1500.0, phi=350.0, sigma=0.06),
                total_matches=0,
                wins=-1,
                losses=1,
            )

    @pytest.mark.parametrize(
        ("score", "counter"), [(1.0, "wins"), (0.0, "losses"), (0.5, "ties")]
    )
    def test_record_increments_one_counter(self, score: float, counter: str) -> None:
        """Recording a match bumps the right counter and the total."""
        standing = _make_standing(wins=2, losses=1)
        new_rating = RatingState(mu=1510.0, phi=190.0, sigma=0.06)

        updated = standing.record(score, new_rating)

        assert updated.total_matches == standing.total_matches + 1
        assert getattr(updated, counter) == getattr(standing, counter) + 1
        assert updated.rating == new_rating
        assert standing.total_matches == 3

    def test_record_rejects_unknown_score(self) -> None:
        """Only win, loss and tie scores are valid."""
        with pytest.raises(InvalidOutcomeError):
            _make_standing().record(0.7, RatingState(mu=1500.0, phi=1.0, sigma=0.1))

    def test_win_rate(self) -> None:
        """Win rate is wins over total."""
        assert _make_standing(wins=3, losses=1).win_rate == 0.75

    def test_row_round_trip(self) -> None:
        """to_row / from_row preserve the standing."""
        standing = _make_standing(mu=1612.5, wins=4, losses=2, ties=1)

        row = standing.to_row()

        assert row == {
            "rating": 1612.5,
            "rating_deviation": 200.0,
            "volatility": 0.06,
            "total_matches": 7,
            "total_wins": 4,
            "total_losses": 2,
            "total_ties": 1,
        }
        assert SourceStanding.from_row("wikipedia", row) == standing

    def test_from_row_missing_key(self) -> None:
        """A row without a required column is rejected."""
        row = _make_standing().to_row()
        del row["volatility"]

        with pytest.raises(InvalidStandingError, match="volatility"):
            SourceStanding.from_row("wikipedia", row)

    @pytest.mark.parametrize(
        ("column", "value"),
        [
            ("total_matches", None),
            ("rating", "abc"),
            ("volatility", None),
            ("total_ties", "one"),
        ],
    )
    def test_from_row_non_numeric_value(self, column: str, value: object) -> None:
        """A NULL or non-numeric column is a standing error, not a raw TypeError."""
        row: dict[str, object] = dict(_make_standing().to_row())
        row[column] = value

        with pytest.raises(InvalidStandingError, match="non-numeric"):
            SourceStanding.from_row("wikipedia", row)  # type: ignore[arg-type]

    def test_from_row_counter_mismatch_keeps_message(self) -> None:
        """Inconsistent counters are reported by the standing itself."""
        row = _make_standing().to_row()
        row["total_wins"] += 1

        with pytest.raises(InvalidStandingError) as exc_info:
            SourceStanding.from_row("wikipedia", row)
        assert "non-numeric" not in str(exc_info.value)


class TestResolveVote:
    """Tests for resolve_vote."""

    def test_win_updates_ratings_and_counters(self) -> None:
        """The winner gains rating and a win; the loser a loss."""
        a = _make_standing("wikipedia")
        b = _make_standing("britannica")
        outcome = MatchOutcome("wikipedia", "britannica", MatchResult.A_WINS)

        resolution = resolve_vote(outcome, a, b)

        assert resolution.standing_a.wins == 1
        assert resolution.standing_b.losses == 1
        assert resolution.standing_a.rating.mu > a.rating.mu
        assert resolution.standing_b.rating.mu < b.rating.mu
        assert resolution.update.volatility_converged

    def test_tie_counts_for_both(self) -> None:
        """A tie is recorded on both sides."""
        a = _make_standing("wikipedia")
        b = _make_standing("grokipedia")
        outcome = MatchOutcome("wikipedia", "grokipedia", MatchResult.TIE)

        resolution = resolve_vote(outcome, a, b)

        assert resolution.standing_a.ties == 1
        assert resolution.standing_b.ties == 1
        assert resolution.to_dict()["standings"]["grokipedia"]["total_ties"] == 1

    def test_mismatched_sources_rejected(self) -> None:
        """The outcome must name the standings' sources in order."""
        a = _make_standing("wikipedia")
        b = _make_standing("britannica")
        outcome = MatchOutcome("britannica", "wikipedia", MatchResult.A_WINS)

        with pytest.raises(InvalidOutcomeError):
            resolve_vote(outcome, a, b)
        assert EngineMetrics.get_instance().rating_updates == 0

    def test_self_match_rejected(self) -> None:
        """A source cannot be compared with itself."""
        a = _make_standing("wikipedia")
        outcome = MatchOutcome("wikipedia", "wikipedia", MatchResult.TIE)

        with pytest.raises(InvalidOutcomeError, match="itself"):
            resolve_vote(outcome, a, a)
