"""Unit tests for the source accuracy table."""

import pytest

from arena_engine.config.schemas.base import AccuracyMatchMode
from arena_engine.config.schemas.quality import AccuracyConfig
from arena_engine.quality.accuracy import AccuracyTable


class TestExactMatching:
    """Tests for the default exact matching mode."""

    @pytest.mark.parametrize(
        ("identity", "expected"),
        [("britannica", 0.85), ("wikipedia", 0.80), ("grokipedia", 0.75)],
    )
    def test_known_sources(self, identity: str, expected: float) -> None:
        """Configured sources resolve to their base accuracy."""
        assert AccuracyTable().lookup(identity) == expected

    def test_case_and_whitespace_ignored(self) -> None:
        """Matching ignores case and surrounding whitespace."""
        assert AccuracyTable().lookup("  Wikipedia ") == 0.80

    def test_unknown_source_gets_default(self) -> None:
        """Unknown identities fall back to the default."""
        assert AccuracyTable().lookup("some-blog") == 0.70

    def test_display_name_is_unknown_in_exact_mode(self) -> None:
        """Exact mode does not resolve display names."""
        table = AccuracyTable()
        assert table.resolve_key("Encyclopedia Britannica") is None
        assert table.lookup("Encyclopedia Britannica") == 0.70


class TestSubstringMatching:
    """Tests for substring matching mode."""

    def test_display_name_resolves(self) -> None:
        """A display name containing a key resolves to it."""
        table = AccuracyTable(AccuracyConfig(match_mode=AccuracyMatchMode.SUBSTRING))
        assert table.resolve_key("Encyclopedia Britannica") == "britannica"
        assert table.lookup("Encyclopedia Britannica") == 0.85

    def test_first_configured_key_wins(self) -> None:
        """Overlapping keys resolve in configured order."""
        config = AccuracyConfig(
            sources={"wiki": 0.5, "wikipedia": 0.8},
            match_mode=AccuracyMatchMode.SUBSTRING,
        )
        assert AccuracyTable(config).lookup("wikipedia") == 0.5

    def test_custom_default(self) -> None:
        """The fallback accuracy is configurable."""
        config = AccuracyConfig(
            sources={}, default=0.4, match_mode=AccuracyMatchMode.SUBSTRING
        )
        assert AccuracyTable(config).lookup("anything") == 0.4

    def test_default_keys_do_not_match_short_names(self) -> None:
        """The built-in 'grokipedia' key is longer than the name 'Grok'."""
        table = AccuracyTable(AccuracyConfig(match_mode=AccuracyMatchMode.SUBSTRING))
        assert table.resolve_key("Grok") is None
        assert table.lookup("Grok") == 0.70

    def test_short_key_matches_display_names(self) -> None:
        """A 'grok' key covers both the slug and the display name."""
        config = AccuracyConfig(
            sources={"britannica": 0.85, "wikipedia": 0.80, "grok": 0.75},
            match_mode=AccuracyMatchMode.SUBSTRING,
        )
        table = AccuracyTable(config)

        assert table.lookup("Grok") == 0.75
        assert table.lookup("grokipedia") == 0.75
        assert table.resolve_key("Grok Encyclopedia") == "grok"
