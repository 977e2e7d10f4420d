"""CLI commands for the rating and attribution engine."""

import json
import logging
import sys
import uuid
from dataclasses import dataclass
from pathlib import Path

import click
import structlog
import yaml
from pydantic import ValidationError

from arena_engine.config.constants import COMPONENT_CLI
from arena_engine.config.error_hints import format_validation_error
from arena_engine.config.loader import ConfigLoader
from arena_engine.config.schemas.engine import EngineConfig
from arena_engine.engine import ArenaEngine
from arena_engine.errors import ArenaEngineError
from arena_engine.observability.logging import bind_run_context, configure_logging
from arena_engine.rating.models import MatchResult, RatingState
from arena_engine.settings import get_settings


logger = structlog.get_logger()


@dataclass
class CliContext:
    """State shared by all commands of one invocation."""

    run_id: str
    config_path: Path | None


class RatingStateType(click.ParamType):
    """Parses 'mu,phi,sigma' into a RatingState."""

    name = "mu,phi,sigma"

    def convert(
        self,
        value: object,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> RatingState:
        if isinstance(value, RatingState):
            return value
        parts = str(value).split(",")
        if len(parts) != 3:  # noqa: PLR2004
            self.fail(f"expected 'mu,phi,sigma', got {value!r}", param, ctx)
        try:
            mu, phi, sigma = (float(part) for part in parts)
        except ValueError:
            self.fail(f"rating components must be numbers, got {value!r}", param, ctx)
        return RatingState(mu=mu, phi=phi, sigma=sigma)


RATING_STATE = RatingStateType()


def _echo_json(data: object) -> None:
    """Write a JSON document to stdout."""
    click.echo(json.dumps(data, indent=2, sort_keys=True))


def _exit_with_error(message: str) -> None:
    """Report an error on stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _echo_config_errors(loader: ConfigLoader) -> None:
    """List recorded configuration errors with remediation hints."""
    click.echo("Configuration validation failed:", err=True)
    for error in loader.validation_errors:
        formatted = format_validation_error(
            location=error["loc"],
            message=error["msg"],
            error_type=error.get("type", "unknown"),
            include_hint=True,
        )
        click.echo(f"  - {formatted}", err=True)


def _load_config(ctx: CliContext) -> EngineConfig:
    """Load the configured engine.yaml, or defaults; exit 1 on failure."""
    loader = ConfigLoader(run_id=ctx.run_id)
    if ctx.config_path is None:
        return loader.load_defaults()

    try:
        return loader.load(ctx.config_path)
    except (ValidationError, FileNotFoundError, yaml.YAMLError):
        _echo_config_errors(loader)
        sys.exit(1)


def _build_engine(ctx: CliContext) -> ArenaEngine:
    """Build an engine for the current invocation."""
    return ArenaEngine(_load_config(ctx), run_id=ctx.run_id)


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to engine.yaml (default: $ARENA_CONFIG_PATH or built-in defaults).",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Output logs in JSON format (default: $ARENA_JSON_LOGS).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Knowledge arena rating and attribution engine."""
    settings = get_settings()
    run_id = str(uuid.uuid4())

    level = logging.DEBUG if verbose else settings.resolved_log_level()
    configure_logging(
        level=level,
        json_format=settings.json_logs if json_logs is None else json_logs,
    )
    bind_run_context(run_id)

    ctx.obj = CliContext(
        run_id=run_id,
        config_path=config_path or settings.config_path,
    )
    logger.bind(component=COMPONENT_CLI).debug(
        "cli_started",
        command=ctx.invoked_subcommand,
        config_path=str(ctx.obj.config_path) if ctx.obj.config_path else None,
    )


@cli.command()
@click.pass_obj
def validate(ctx: CliContext) -> None:
    """Validate the engine configuration without computing anything."""
    config = _load_config(ctx)

    click.echo("Configuration is valid!")
    click.echo(f"  Version: {config.version}")
    click.echo(f"  Tau: {config.rating.tau}")
    click.echo(f"  Max Shapley sources: {config.attribution.max_sources}")
    click.echo(f"  Checksum: {config.compute_checksum()}")


@cli.command()
@click.option("--a", "rating_a", type=RATING_STATE, required=True, help="Source A.")
@click.option("--b", "rating_b", type=RATING_STATE, required=True, help="Source B.")
@click.option(
    "--result",
    type=click.Choice([r.value for r in MatchResult]),
    required=True,
    help="Who won: a, b or tie.",
)
@click.pass_obj
def update(
    ctx: CliContext, rating_a: RatingState, rating_b: RatingState, result: str
) -> None:
    """Apply one pairwise outcome and print both new ratings."""
    engine = _build_engine(ctx)
    try:
        rating_update = engine.update(rating_a, rating_b, MatchResult(result))
    except ArenaEngineError as e:
        _exit_with_error(str(e))
        return

    for warning in rating_update.warnings:
        click.echo(f"Warning: {warning}", err=True)
    _echo_json(rating_update.to_dict())


@cli.command()
@click.option("--a", "rating_a", type=RATING_STATE, required=True, help="Source A.")
@click.option("--b", "rating_b", type=RATING_STATE, required=True, help="Source B.")
@click.pass_obj
def predict(ctx: CliContext, rating_a: RatingState, rating_b: RatingState) -> None:
    """Print the probability that A beats B."""
    engine = _build_engine(ctx)
    try:
        probability = engine.predict_outcome(rating_a, rating_b)
    except ArenaEngineError as e:
        _exit_with_error(str(e))
        return

    _echo_json({"probability_a_wins": probability})


@cli.command()
@click.option("--rating", type=RATING_STATE, required=True, help="Rating to bound.")
@click.pass_obj
def interval(ctx: CliContext, rating: RatingState) -> None:
    """Print the confidence interval around a rating."""
    engine = _build_engine(ctx)
    try:
        band = engine.get_rating_interval(rating)
    except ArenaEngineError as e:
        _exit_with_error(str(e))
        return

    _echo_json({**band.to_dict(), "width": band.width})


@cli.command()
@click.argument(
    "content_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option("--source", "source_id", required=True, help="Source identifier.")
@click.pass_obj
def score(ctx: CliContext, content_path: Path, source_id: str) -> None:
    """Score one content file."""
    try:
        content = content_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _exit_with_error(f"cannot read {content_path}: {e}")
        return

    engine = _build_engine(ctx)
    _echo_json(engine.score_report(content, source_id).to_dict())


@cli.command()
@click.argument("assignments", nargs=-1, required=True)
@click.pass_obj
def attribute(ctx: CliContext, assignments: tuple[str, ...]) -> None:
    """Score a content set and split its blended value across sources.

    Each ASSIGNMENT is SOURCE=PATH, e.g. wikipedia=wiki.md.
    """
    contents: dict[str, str] = {}
    for assignment in assignments:
        source_id, sep, path = assignment.partition("=")
        if not sep or not source_id or not path:
            _exit_with_error(f"expected SOURCE=PATH, got {assignment!r}")
        if source_id in contents:
            _exit_with_error(f"source {source_id!r} given more than once")
        try:
            contents[source_id] = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _exit_with_error(f"cannot read {path}: {e}")

    engine = _build_engine(ctx)
    try:
        result = engine.attribute_content_set(contents)
    except ArenaEngineError as e:
        _exit_with_error(str(e))
        return

    _echo_json(result.to_dict())


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
