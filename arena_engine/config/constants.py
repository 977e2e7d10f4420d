"""Constants for the rating and attribution engine.

These are the defaults baked into the configuration schemas. Components never
read them directly; they receive an ``EngineConfig`` (or one of its sections)
so tests can swap any of them out.
"""

from typing import Final


# Conversion factor between the display scale and the Glicko-2 scale
GLICKO2_SCALE: Final[float] = 173.7178

# Display-scale rating that maps to 0 on the Glicko-2 scale
DISPLAY_RATING_CENTER: Final[float] = 1500.0

# Initial state for a newly registered source
DEFAULT_RATING: Final[float] = 1500.0
DEFAULT_DEVIATION: Final[float] = 350.0
DEFAULT_VOLATILITY: Final[float] = 0.06

# Volatility solver
DEFAULT_TAU: Final[float] = 0.5
MIN_TAU: Final[float] = 0.3
MAX_TAU: Final[float] = 1.2
DEFAULT_CONVERGENCE_EPSILON: Final[float] = 1e-6
DEFAULT_MAX_ITERATIONS: Final[int] = 100

# Multiplier k for the mu +/- k*phi band (~95%)
DEFAULT_INTERVAL_MULTIPLIER: Final[float] = 2.0

# Quality metric weights (sum to 1.0)
DEFAULT_METRIC_WEIGHTS: Final[dict[str, float]] = {
    "accuracy": 0.30,
    "readability": 0.20,
    "depth": 0.25,
    "objectivity": 0.15,
    "citations": 0.10,
}

# Base accuracy per stable source identifier
DEFAULT_SOURCE_ACCURACY: Final[dict[str, float]] = {
    "britannica": 0.85,
    "wikipedia": 0.80,
    "grokipedia": 0.75,
}
DEFAULT_UNKNOWN_ACCURACY: Final[float] = 0.70

# Readability: ideal sentence length and the span over which it decays to 0
DEFAULT_TARGET_SENTENCE_LENGTH: Final[float] = 15.0
DEFAULT_SENTENCE_LENGTH_SPAN: Final[float] = 30.0

# Words and phrases that signal opinion rather than neutral reporting
DEFAULT_OPINION_MARKERS: Final[tuple[str, ...]] = (
    "best",
    "worst",
    "terrible",
    "amazing",
    "awful",
    "incredible",
    "obviously",
    "clearly",
    "undoubtedly",
    "everyone knows",
)
DEFAULT_OPINION_PENALTY: Final[float] = 0.1

# Structural targets at which depth and citations saturate
DEFAULT_TARGET_WORD_COUNT: Final[int] = 1500
DEFAULT_TARGET_HEADING_COUNT: Final[int] = 6
DEFAULT_DEPTH_LENGTH_WEIGHT: Final[float] = 0.6
DEFAULT_TARGET_REFERENCE_DENSITY: Final[float] = 5.0  # references per 1000 words

# Exhaustive Shapley enumeration evaluates 2^n coalitions
DEFAULT_MAX_SHAPLEY_SOURCES: Final[int] = 12
HARD_MAX_SHAPLEY_SOURCES: Final[int] = 20

# Expected value blend (sum to 1.0)
DEFAULT_EXPECTED_VALUE_WEIGHTS: Final[dict[str, float]] = {
    "quality": 0.40,
    "rating": 0.35,
    "win_rate": 0.25,
}
DEFAULT_RATING_FLOOR: Final[float] = 1000.0
DEFAULT_RATING_CEILING: Final[float] = 2000.0

# Allowed drift when checking that a weight table sums to 1.0
WEIGHT_SUM_TOLERANCE: Final[float] = 1e-6

# Log component names
COMPONENT_CONFIG: Final[str] = "config"
COMPONENT_RATING: Final[str] = "rating"
COMPONENT_QUALITY: Final[str] = "quality"
COMPONENT_ATTRIBUTION: Final[str] = "attribution"
COMPONENT_RANKING: Final[str] = "ranking"
COMPONENT_CLI: Final[str] = "cli"
