"""Base schema types and shared validators for configuration."""

from collections.abc import Mapping
from enum import Enum

from arena_engine.config.constants import WEIGHT_SUM_TOLERANCE


class AccuracyMatchMode(str, Enum):
    """How a source identity is matched against the accuracy table.

    EXACT: case-insensitive equality with a table key.
    SUBSTRING: first table key (in configured order) contained in the identity.
    """

    EXACT = "exact"
    SUBSTRING = "substring"


class BlendMode(str, Enum):
    """How per-source quality scores combine into a coalition value."""

    MEAN = "mean"
    MAX = "max"


def check_weight_sum(weights: Mapping[str, float], label: str) -> None:
    """Ensure a weight table sums to 1.0.

    Args:
        weights: Mapping of component name to weight.
        label: Name of the table for the error message.

    Raises:
        ValueError: If the weights do not sum to 1.0.
    """
    total = sum(weights.values())
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        msg = f"{label} must sum to 1.0, got {total:.6f}"
        raise ValueError(msg)
