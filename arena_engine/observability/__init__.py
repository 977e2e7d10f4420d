"""Observability module for logging and metrics."""

from arena_engine.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
    get_logger,
)
from arena_engine.observability.metrics import EngineMetrics


__all__ = [
    "EngineMetrics",
    "bind_run_context",
    "clear_run_context",
    "configure_logging",
    "get_logger",
]
