"""Schema validation for the upstream solution payload."""

from .validator import (
    ValidationError,
    format_validation_error,
    looks_like_solution,
    validate_solution,
)

__all__ = [
    "ValidationError",
    "format_validation_error",
    "looks_like_solution",
    "validate_solution",
]
