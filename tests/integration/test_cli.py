"""Integration tests for the arena CLI."""

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from arena_engine.cli.arena import cli


FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
CONFIG_PATH = FIXTURES_DIR / "config" / "engine.yaml"
NEW_SOURCE = "1500,350,0.06"


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner isolated from the caller's environment."""
    return CliRunner(
        env={
            "ARENA_CONFIG_PATH": None,
            "ARENA_LOG_LEVEL": "WARNING",
            "ARENA_JSON_LOGS": "true",
        }
    )


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop the logging configuration bound to the runner's streams."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestValidateCommand:
    """Tests for `arena validate`."""

    @pytest.mark.integration
    def test_valid_config(self, runner: CliRunner) -> None:
        """A valid file prints a summary."""
        result = runner.invoke(cli, ["--config", str(CONFIG_PATH), "validate"])

        assert result.exit_code == 0
        assert "Configuration is valid!" in result.stdout
        assert "Tau: 0.6" in result.stdout
        assert "Max Shapley sources: 8" in result.stdout

    @pytest.mark.integration
    def test_defaults_without_config(self, runner: CliRunner) -> None:
        """Without --config the built-in defaults are validated."""
        result = runner.invoke(cli, ["validate"])

        assert result.exit_code == 0
        assert "Tau: 0.5" in result.stdout

    @pytest.mark.integration
    def test_invalid_config(self, runner: CliRunner) -> None:
        """Schema errors are listed with hints and exit 1."""
        config_path = FIXTURES_DIR / "config" / "invalid_engine.yaml"
        result = runner.invoke(cli, ["--config", str(config_path), "validate"])

        assert result.exit_code == 1
        assert "Configuration validation failed:" in result.stderr
        assert "rating.tau" in result.stderr
        assert "Hint:" in result.stderr

    @pytest.mark.integration
    def test_missing_config(self, runner: CliRunner) -> None:
        """A missing file exits 1."""
        result = runner.invoke(
            cli, ["--config", str(FIXTURES_DIR / "nonexistent.yaml"), "validate"]
        )

        assert result.exit_code == 1
        assert "does not exist" in result.stderr

    @pytest.mark.integration
    def test_config_from_environment(self, runner: CliRunner) -> None:
        """ARENA_CONFIG_PATH is used when --config is omitted."""
        result = runner.invoke(
            cli, ["validate"], env={"ARENA_CONFIG_PATH": str(CONFIG_PATH)}
        )

        assert result.exit_code == 0
        assert "Tau: 0.6" in result.stdout


class TestRatingCommands:
    """Tests for `arena update`, `arena predict` and `arena interval`."""

    @pytest.mark.integration
    def test_update(self, runner: CliRunner) -> None:
        """Both new ratings are printed as JSON."""
        result = runner.invoke(
            cli, ["update", "--a", NEW_SOURCE, "--b", NEW_SOURCE, "--result", "a"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["rating_a"]["mu"] == pytest.approx(1662.3, abs=0.1)
        assert data["rating_b"]["mu"] == pytest.approx(1337.7, abs=0.1)
        assert data["volatility_converged"] is True
        assert data["warnings"] == []

    @pytest.mark.integration
    def test_update_tie(self, runner: CliRunner) -> None:
        """A tie between equals leaves both ratings at 1500."""
        result = runner.invoke(
            cli, ["update", "--a", NEW_SOURCE, "--b", NEW_SOURCE, "--result", "tie"]
        )

        data = json.loads(result.stdout)
        assert data["rating_a"]["mu"] == pytest.approx(1500.0)
        assert data["rating_b"]["mu"] == pytest.approx(1500.0)

    @pytest.mark.integration
    def test_update_rejects_malformed_rating(self, runner: CliRunner) -> None:
        """A rating without three components is a usage error."""
        result = runner.invoke(
            cli, ["update", "--a", "1500,350", "--b", NEW_SOURCE, "--result", "a"]
        )

        assert result.exit_code == 2
        assert "mu,phi,sigma" in result.stderr

    @pytest.mark.integration
    def test_update_rejects_invalid_rating(self, runner: CliRunner) -> None:
        """A non-positive deviation is reported and exits 1."""
        result = runner.invoke(
            cli, ["update", "--a", "1500,-5,0.06", "--b", NEW_SOURCE, "--result", "b"]
        )

        assert result.exit_code == 1
        assert "Error: Invalid rating_a.phi" in result.stderr

    @pytest.mark.integration
    def test_predict(self, runner: CliRunner) -> None:
        """Equal ratings give even odds."""
        result = runner.invoke(cli, ["predict", "--a", NEW_SOURCE, "--b", NEW_SOURCE])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"probability_a_wins": 0.5}

    @pytest.mark.integration
    def test_interval(self, runner: CliRunner) -> None:
        """The band is mu +/- 2 phi."""
        result = runner.invoke(cli, ["interval", "--rating", "1500,100,0.06"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "low": 1300.0,
            "high": 1700.0,
            "width": 400.0,
        }


class TestContentCommands:
    """Tests for `arena score` and `arena attribute`."""

    @pytest.mark.integration
    def test_score(self, runner: CliRunner) -> None:
        """A content file is scored into a JSON report."""
        result = runner.invoke(
            cli,
            [
                "--config",
                str(CONFIG_PATH),
                "score",
                str(FIXTURES_DIR / "content" / "wikipedia.md"),
                "--source",
                "wikipedia",
            ],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["source_id"] == "wikipedia"
        assert data["metrics"]["accuracy"] == 0.80
        assert data["signals"]["heading_count"] == 3
        assert 0.0 <= data["overall_score"] <= 1.0

    @pytest.mark.integration
    def test_attribute(self, runner: CliRunner) -> None:
        """A content set is attributed across its sources."""
        result = runner.invoke(
            cli,
            [
                "--config",
                str(CONFIG_PATH),
                "attribute",
                f"wikipedia={FIXTURES_DIR / 'content' / 'wikipedia.md'}",
                f"grokipedia={FIXTURES_DIR / 'content' / 'grokipedia.md'}",
            ],
        )

        assert result.exit_code == 0
        attribution = json.loads(result.stdout)["attribution"]
        assert set(attribution["values"]) == {"wikipedia", "grokipedia"}
        assert attribution["coalitions_evaluated"] == 3
        assert attribution["efficiency_gap"] == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.integration
    def test_attribute_rejects_bad_assignment(self, runner: CliRunner) -> None:
        """Each argument must be SOURCE=PATH."""
        result = runner.invoke(cli, ["attribute", "wikipedia"])

        assert result.exit_code == 1
        assert "expected SOURCE=PATH" in result.stderr

    @pytest.mark.integration
    def test_attribute_rejects_duplicate_source(self, runner: CliRunner) -> None:
        """A source can only be given once."""
        path = FIXTURES_DIR / "content" / "wikipedia.md"
        result = runner.invoke(
            cli, ["attribute", f"wikipedia={path}", f"wikipedia={path}"]
        )

        assert result.exit_code == 1
        assert "more than once" in result.stderr

    @pytest.mark.integration
    def test_score_rejects_undecodable_file(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        """A file that is not UTF-8 is reported, not raised."""
        path = tmp_path / "binary.md"
        path.write_bytes(b"\xff\xfe not utf-8")

        result = runner.invoke(cli, ["score", str(path), "--source", "wikipedia"])

        assert result.exit_code == 1
        assert "Error: cannot read" in result.stderr
        assert isinstance(result.exception, SystemExit)

    @pytest.mark.integration
    def test_attribute_rejects_undecodable_file(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        """A non-UTF-8 source file stops the run with a clean error."""
        path = tmp_path / "binary.md"
        path.write_bytes(b"\xff\xfe not utf-8")
        good = FIXTURES_DIR / "content" / "wikipedia.md"

        result = runner.invoke(
            cli, ["attribute", f"wikipedia={good}", f"grokipedia={path}"]
        )

        assert result.exit_code == 1
        assert "Error: cannot read" in result.stderr
        assert isinstance(result.exception, SystemExit)
