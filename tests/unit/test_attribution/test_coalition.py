"""Unit tests for coalition value functions."""

import pytest

from arena_engine.attribution.coalition import BlendValueFunction, tabulated_value
from arena_engine.attribution.shapley import calculate_shapley_values
from arena_engine.config.schemas.attribution import AttributionConfig
from arena_engine.config.schemas.base import BlendMode
from arena_engine.errors import InvalidCoalitionError
from arena_engine.quality.models import QualityMetrics, QualityReport, TextSignals


def _make_report(source_id: str, overall: float) -> QualityReport:
    """Create a QualityReport with a given overall score."""
    return QualityReport(
        source_id=source_id,
        metrics=QualityMetrics(
            accuracy=overall,
            readability=overall,
            depth=overall,
            objectivity=overall,
            citations=overall,
        ),
        overall_score=overall,
        signals=TextSignals(
            word_count=100,
            sentence_count=5,
            heading_count=1,
            reference_count=1,
            opinion_marker_count=0,
        ),
    )


class TestTabulatedValue:
    """Tests for tabulated_value."""

    def test_accepts_pairs(self) -> None:
        """Tables can be given as (members, value) pairs."""
        value_fn = tabulated_value([(["a"], 0.6), (("a", "b"), 0.8)])

        assert value_fn(frozenset({"a"})) == 0.6
        assert value_fn(frozenset({"b", "a"})) == 0.8

    def test_empty_coalition_is_zero(self) -> None:
        """v(empty) is 0 without a table entry."""
        assert tabulated_value({})(frozenset()) == 0.0

    def test_missing_coalition(self) -> None:
        """Unknown coalitions are an error."""
        with pytest.raises(InvalidCoalitionError):
            tabulated_value({frozenset({"a"}): 0.6})(frozenset({"b"}))


class TestBlendValueFunction:
    """Tests for BlendValueFunction."""

    def test_mean_blend(self) -> None:
        """Unweighted mean of member scores."""
        value_fn = BlendValueFunction({"a": 0.8, "b": 0.4})

        assert value_fn(frozenset({"a", "b"})) == pytest.approx(0.6)
        assert value_fn(frozenset({"a"})) == 0.8
        assert value_fn(frozenset()) == 0.0

    def test_weighted_mean_blend(self) -> None:
        """Blend weights skew the mean."""
        value_fn = BlendValueFunction(
            {"a": 0.8, "b": 0.4}, blend_weights={"a": 3.0, "b": 1.0}
        )
        assert value_fn(frozenset({"a", "b"})) == pytest.approx(0.7)

    def test_zero_weight_coalition(self) -> None:
        """A coalition whose members all weigh 0 is worth 0."""
        value_fn = BlendValueFunction({"a": 0.8}, blend_weights={"a": 0.0})
        assert value_fn(frozenset({"a"})) == 0.0

    def test_max_blend(self) -> None:
        """Max mode takes the best member."""
        value_fn = BlendValueFunction({"a": 0.8, "b": 0.4}, mode=BlendMode.MAX)
        assert value_fn(frozenset({"a", "b"})) == 0.8

    def test_unknown_member(self) -> None:
        """Members without a score are an error."""
        with pytest.raises(InvalidCoalitionError, match="c"):
            BlendValueFunction({"a": 0.8})(frozenset({"a", "c"}))

    def test_negative_weight_rejected(self) -> None:
        """Blend weights must be non-negative."""
        with pytest.raises(InvalidCoalitionError):
            BlendValueFunction({"a": 0.8}, blend_weights={"a": -1.0})

    def test_from_reports_uses_config(self) -> None:
        """Scores come from reports, mode and weights from configuration."""
        reports = {"a": _make_report("a", 0.8), "b": _make_report("b", 0.4)}
        value_fn = BlendValueFunction.from_reports(
            reports, AttributionConfig(blend_mode=BlendMode.MAX)
        )

        assert value_fn.source_ids == ["a", "b"]
        assert value_fn(frozenset({"a", "b"})) == 0.8

    def test_shapley_of_mean_blend(self) -> None:
        """A weaker source dilutes the mean and gets less credit."""
        value_fn = BlendValueFunction({"a": 0.8, "b": 0.4})

        values = calculate_shapley_values(value_fn, ["a", "b"])

        assert values["a"] == pytest.approx(0.5)
        assert values["b"] == pytest.approx(0.1)
