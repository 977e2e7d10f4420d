"""Data models for Shapley attribution."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AttributionReport:
    """Per-source Shapley values for one coalition.

    Attributes:
        values: Source id to Shapley value, in input order.
        grand_coalition_value: v(N) for the full set of sources.
        coalitions_evaluated: Number of value function calls made.
    """

    values: dict[str, float] = field(default_factory=dict)
    grand_coalition_value: float = 0.0
    coalitions_evaluated: int = 0

    @property
    def efficiency_gap(self) -> float:
        """v(N) minus the sum of the values; zero up to rounding."""
        return self.grand_coalition_value - sum(self.values.values())

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        return {
            "values": dict(self.values),
            "grand_coalition_value": self.grand_coalition_value,
            "efficiency_gap": self.efficiency_gap,
            "coalitions_evaluated": self.coalitions_evaluated,
        }
