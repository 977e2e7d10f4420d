"""Error hints for configuration validation errors.

Provides user-friendly hints with actionable remediation steps
for common validation errors.
"""

from typing import Final


# Mapping of error types to user-friendly hints
ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "This field is required. Please add it to your configuration.",
    "extra_forbidden": "Unknown field. Check the spelling against the documented keys.",
    "enum": "Check the allowed values in the documentation.",
    "int_type": "This field must be an integer (whole number).",
    "float_type": "This field must be a number.",
    "float_parsing": "This field must be a number.",
    "string_type": "This field must be a text string.",
    "list_type": "This field must be a list/array.",
    "dict_type": "This field must be an object/mapping.",
    "greater_than": "The value is too small. It must be strictly positive.",
    "greater_than_equal": "The value is too small. Check the minimum allowed.",
    "less_than_equal": "The value is too large. Check the maximum allowed.",
    "string_pattern_mismatch": "The format is invalid. Versions look like '1.0'.",
    "value_error": "Check the value. Weight tables must sum to 1.0.",
    "file_not_found": "The file does not exist. Check the file path.",
    "yaml_parse_error": "Invalid YAML syntax. Check indentation and formatting.",
}

# Field-specific hints for more context
FIELD_HINTS: Final[dict[str, str]] = {
    "tau": "Must be between 0.3 and 1.2; smaller values restrict volatility change.",
    "convergence_epsilon": "Must be a small positive number (e.g. 0.000001).",
    "max_iterations": "Must be a positive integer iteration budget (e.g. 100).",
    "initial_deviation": "Must be a positive display-scale deviation (e.g. 350).",
    "initial_volatility": "Must be a positive volatility (e.g. 0.06).",
    "match_mode": "Must be 'exact' or 'substring'.",
    "blend_mode": "Must be 'mean' or 'max'.",
    "max_sources": "Must be between 1 and 20; enumeration cost doubles per source.",
    "weights": "All weights must be between 0.0 and 1.0 and sum to 1.0.",
    "opinion_markers": "Must be a list of non-empty words or phrases.",
    "rating_ceiling": "Must be greater than rating_floor.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a validation error.

    Args:
        error_type: The Pydantic error type (e.g., 'missing', 'enum').
        field_name: Optional field path for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        # Walk the dotted path from the leaf up ('quality.weights.depth' -> 'weights')
        for part in reversed(field_name.split(".")):
            if part in FIELD_HINTS:
                return FIELD_HINTS[part]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error with optional hint.

    Args:
        location: The error location (e.g., 'rating.tau').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base
