"""Shapley attribution of coalition value to content sources."""

from arena_engine.attribution.coalition import (
    BlendValueFunction,
    CoalitionValueFunction,
    tabulated_value,
)
from arena_engine.attribution.models import AttributionReport
from arena_engine.attribution.shapley import (
    ShapleyAttributor,
    calculate_shapley_values,
)


__all__ = [
    "AttributionReport",
    "BlendValueFunction",
    "CoalitionValueFunction",
    "ShapleyAttributor",
    "calculate_shapley_values",
    "tabulated_value",
]
