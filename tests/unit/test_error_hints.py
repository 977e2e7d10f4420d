"""Unit tests for error hints system."""

import pytest

from arena_engine.config.error_hints import (
    ERROR_HINTS,
    FIELD_HINTS,
    format_validation_error,
    get_error_hint,
)


class TestGetErrorHint:
    """Tests for get_error_hint function."""

    @pytest.mark.unit
    def test_returns_hint_for_known_error_type(self) -> None:
        """Test that known error types return their hints."""
        hint = get_error_hint("missing")
        assert hint == ERROR_HINTS["missing"]
        assert "required" in hint.lower()

    @pytest.mark.unit
    def test_returns_default_for_unknown_error_type(self) -> None:
        """Test that unknown error types return default hint."""
        hint = get_error_hint("some_unknown_error_type")
        assert "documentation" in hint.lower()

    @pytest.mark.unit
    def test_field_specific_hint_takes_precedence(self) -> None:
        """Test that field-specific hints override error type hints."""
        hint = get_error_hint("less_than_equal", field_name="rating.tau")
        assert hint == FIELD_HINTS["tau"]
        assert "0.3" in hint and "1.2" in hint

    @pytest.mark.unit
    def test_walks_path_to_nearest_known_field(self) -> None:
        """Test that the closest hinted ancestor of a leaf is used."""
        hint = get_error_hint("greater_than_equal", field_name="quality.weights.depth")
        assert hint == FIELD_HINTS["weights"]

    @pytest.mark.unit
    def test_unhinted_path_falls_back_to_error_type(self) -> None:
        """Test fallback when no part of the path has a field hint."""
        hint = get_error_hint("float_parsing", field_name="quality.opinion_penalty")
        assert hint == ERROR_HINTS["float_parsing"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("field_name", "expected_substring"),
        [
            ("rating.tau", "volatility"),
            ("rating.max_iterations", "iteration"),
            ("quality.accuracy.match_mode", "substring"),
            ("attribution.blend_mode", "mean"),
            ("attribution.max_sources", "20"),
            ("ranking.rating_ceiling", "rating_floor"),
        ],
    )
    def test_field_hints_contain_expected_info(
        self, field_name: str, expected_substring: str
    ) -> None:
        """Test that field hints contain relevant information."""
        hint = get_error_hint("value_error", field_name=field_name)
        assert expected_substring in hint


class TestFormatValidationError:
    """Tests for format_validation_error function."""

    @pytest.mark.unit
    def test_formats_error_with_hint(self) -> None:
        """Test error formatting with hint included."""
        formatted = format_validation_error(
            location="rating.tau",
            message="Input should be less than or equal to 1.2",
            error_type="less_than_equal",
        )
        assert formatted.startswith("rating.tau: Input should be")
        assert "\n    Hint: " in formatted

    @pytest.mark.unit
    def test_formats_error_without_hint(self) -> None:
        """Test error formatting without hint."""
        formatted = format_validation_error(
            location="version",
            message="Field required",
            error_type="missing",
            include_hint=False,
        )
        assert formatted == "version: Field required"


class TestErrorHintsCompleteness:
    """Tests to ensure error hints are comprehensive."""

    @pytest.mark.unit
    def test_loader_error_types_have_hints(self) -> None:
        """Test that every error type the loader records has a hint."""
        for error_type in [
            "missing",
            "extra_forbidden",
            "value_error",
            "file_not_found",
            "yaml_parse_error",
        ]:
            assert error_type in ERROR_HINTS, f"Missing hint for {error_type}"
