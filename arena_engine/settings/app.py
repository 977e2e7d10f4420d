"""Application settings powered by Pydantic BaseSettings."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment configuration for hosts embedding the engine."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    config_path: Path | None = Field(default=None, validation_alias="ARENA_CONFIG_PATH")
    log_level: str = Field(default="WARNING", validation_alias="ARENA_LOG_LEVEL")
    json_logs: bool = Field(default=True, validation_alias="ARENA_JSON_LOGS")

    def resolved_log_level(self) -> int:
        """Return the numeric logging level, falling back to WARNING."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
