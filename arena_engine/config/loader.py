"""Configuration loader with validation and lifecycle tracking."""

import hashlib
import json
import time
from enum import Enum, auto
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from arena_engine.config.constants import COMPONENT_CONFIG
from arena_engine.config.schemas.engine import EngineConfig
from arena_engine.errors import ArenaEngineError


logger = structlog.get_logger()


class ConfigState(Enum):
    """Lifecycle of a single ConfigLoader.

    Reading engine.yaml walks UNLOADED -> LOADING -> VALIDATED -> READY.
    Falling back to the built-in defaults skips LOADING, since there is no
    file to read. Any state other than FAILED can move to FAILED.
    """

    UNLOADED = auto()
    LOADING = auto()
    VALIDATED = auto()
    READY = auto()
    FAILED = auto()


_TRANSITIONS: dict[ConfigState, frozenset[ConfigState]] = {
    ConfigState.UNLOADED: frozenset(
        {ConfigState.LOADING, ConfigState.VALIDATED, ConfigState.FAILED}
    ),
    ConfigState.LOADING: frozenset({ConfigState.VALIDATED, ConfigState.FAILED}),
    ConfigState.VALIDATED: frozenset({ConfigState.READY, ConfigState.FAILED}),
    ConfigState.READY: frozenset({ConfigState.FAILED}),
    ConfigState.FAILED: frozenset(),
}


class ConfigStateError(ArenaEngineError):
    """A loader was asked to do something its current state forbids.

    Loaders are single-use: a second load, or loading after a failure,
    raises this error.

    Attributes:
        from_state: State the loader was in.
        to_state: State the call tried to reach.
    """

    def __init__(self, from_state: ConfigState, to_state: ConfigState) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Config loader cannot move from {from_state.name} to {to_state.name}"
        )


class ConfigLoader:
    """Loads and validates the engine configuration file.

    Tracks its progress as a ConfigState (see the enum for the allowed
    paths) and records the file checksum and any validation errors.

    The returned EngineConfig is frozen; every component receives it (or a
    section of it) explicitly.
    """

    def __init__(self, run_id: str) -> None:
        """Initialize the loader.

        Args:
            run_id: Identifier for the current run, used in logs.
        """
        self._run_id = run_id
        self._state = ConfigState.UNLOADED
        self._config: EngineConfig | None = None
        self._file_checksum: str | None = None
        self._validation_errors: list[dict[str, str]] = []
        self._validation_duration_ms: float = 0

    @property
    def state(self) -> ConfigState:
        """Get the current loader state."""
        return self._state

    @property
    def file_checksum(self) -> str | None:
        """Get the SHA-256 checksum of the loaded file."""
        return self._file_checksum

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    @property
    def validation_duration_ms(self) -> float:
        """Get validation duration in milliseconds."""
        return self._validation_duration_ms

    def _advance(self, to_state: ConfigState) -> None:
        """Move to to_state or raise ConfigStateError."""
        if to_state not in _TRANSITIONS[self._state]:
            raise ConfigStateError(self._state, to_state)
        self._state = to_state

    def load_defaults(self) -> EngineConfig:
        """Use the built-in defaults when no configuration file is given.

        Returns:
            Default EngineConfig.

        Raises:
            ConfigStateError: If called in an invalid state.
        """
        self._advance(ConfigState.VALIDATED)
        self._config = EngineConfig()
        self._advance(ConfigState.READY)
        logger.info(
            "config_defaults_used",
            run_id=self._run_id,
            component=COMPONENT_CONFIG,
            phase="READY",
            config_checksum=self._config.compute_checksum(),
        )
        return self._config

    def load(self, config_path: Path) -> EngineConfig:
        """Load and validate an engine configuration file.

        An empty file yields the default configuration.

        Args:
            config_path: Path to engine.yaml.

        Returns:
            Validated EngineConfig.

        Raises:
            pydantic.ValidationError: If the file does not match the schema.
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            ConfigStateError: If called in an invalid state.
        """
        start_time = time.perf_counter()
        self._advance(ConfigState.LOADING)

        log = logger.bind(
            run_id=self._run_id,
            component=COMPONENT_CONFIG,
            phase="LOADING",
        )

        try:
            log.info("loading_config_file", file_path=str(config_path))
            content_bytes = config_path.read_bytes()
            self._file_checksum = hashlib.sha256(content_bytes).hexdigest()
            parsed = yaml.safe_load(content_bytes.decode("utf-8")) or {}
            self._config = EngineConfig.model_validate(parsed)

            self._advance(ConfigState.VALIDATED)
            self._validation_duration_ms = (time.perf_counter() - start_time) * 1000

            log.info(
                "config_file_loaded",
                phase="VALIDATED",
                file_path=str(config_path),
                file_sha256=self._file_checksum,
                config_checksum=self._config.compute_checksum(),
                config_validation_duration_ms=self._validation_duration_ms,
            )

            self._advance(ConfigState.READY)
            log.info("config_ready", phase="READY")

            return self._config

        except ValidationError as e:
            self._fail(
                log,
                "config_validation_failed",
                [
                    {
                        "loc": ".".join(str(loc) for loc in err["loc"]),
                        "msg": err["msg"],
                        "type": err["type"],
                    }
                    for err in e.errors()
                ],
            )
            raise

        except FileNotFoundError as e:
            self._fail(
                log,
                "config_file_not_found",
                [{"loc": "file", "msg": str(e), "type": "file_not_found"}],
            )
            raise

        except yaml.YAMLError as e:
            self._fail(
                log,
                "config_yaml_parse_error",
                [{"loc": "yaml", "msg": str(e), "type": "yaml_parse_error"}],
            )
            raise

    def _fail(
        self,
        log: structlog.stdlib.BoundLogger,
        event: str,
        errors: list[dict[str, str]],
    ) -> None:
        """Record errors and move to FAILED."""
        self._advance(ConfigState.FAILED)
        self._validation_errors.extend(errors)
        log.error(
            event,
            phase="FAILED",
            validation_error_count=len(self._validation_errors),
            errors=self._validation_errors,
        )

    def get_validation_summary(self) -> dict[str, object]:
        """Get a summary of the validation process."""
        return {
            "run_id": self._run_id,
            "state": self._state.name,
            "file_checksum": self._file_checksum,
            "config_checksum": (
                self._config.compute_checksum() if self._config else None
            ),
            "validation_error_count": len(self._validation_errors),
            "validation_errors": self._validation_errors,
            "validation_duration_ms": self._validation_duration_ms,
        }

    def get_validation_summary_json(self) -> str:
        """Get validation summary as JSON string with stable ordering."""
        return json.dumps(self.get_validation_summary(), sort_keys=True, indent=2)


def load_engine_config(
    config_path: Path | None, run_id: str = "config"
) -> EngineConfig:
    """Load a configuration file, or return defaults when no path is given.

    Args:
        config_path: Optional path to engine.yaml.
        run_id: Run identifier for logging.

    Returns:
        Validated EngineConfig.
    """
    loader = ConfigLoader(run_id=run_id)
    if config_path is None:
        return loader.load_defaults()
    return loader.load(config_path)
