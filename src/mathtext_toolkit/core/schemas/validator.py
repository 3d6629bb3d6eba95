"""
Schema Validation Utilities

Validates the upstream solution payload before it is formatted.

Two levels:
- Basic checks (always): required fields, types and non-empty strings,
  with a precise path for the first failure
- Strict checks (opt-in): full JSON Schema validation of
  `solution.schema.json` with jsonschema
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}

_OPTIONAL_STEP_FIELDS = ("equation", "content", "summary", "explanation")


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_solution(data: Any, *, strict: bool = False) -> None:
    """
    Validate a solution payload.

    Args:
        data: Decoded JSON payload
        strict: If True, also validate against the JSON Schema

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Solution must be an object, got {type(data).__name__}",
            path="",
        )

    required = ["problem", "steps", "finalAnswer"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    problem = data["problem"]
    if not isinstance(problem, str) or not problem.strip():
        raise ValidationError("problem must be a non-empty string", path="problem")

    steps = data["steps"]
    if not isinstance(steps, list) or not steps:
        raise ValidationError("steps must be a non-empty list", path="steps")
    for i, step in enumerate(steps):
        _validate_step(step, f"steps[{i}]")

    _validate_final_answer(data["finalAnswer"], "finalAnswer")

    if strict:
        schema = _load_schema("solution")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            ) from e


def _validate_step(step: Any, path: str) -> None:
    """Validate one step object."""
    if not isinstance(step, dict):
        raise ValidationError("step must be an object", path=path)

    title = step.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError(
            "step title must be a non-empty string",
            path=f"{path}.title"
        )

    for name in _OPTIONAL_STEP_FIELDS:
        if name in step and step[name] is not None and not isinstance(step[name], str):
            raise ValidationError(
                f"{name} must be a string",
                path=f"{path}.{name}"
            )


def _validate_final_answer(value: Any, path: str) -> None:
    """Validate the final answer: a string or {parts: [str, ...]}."""
    if isinstance(value, str):
        if not value.strip():
            raise ValidationError("finalAnswer cannot be empty", path=path)
        return

    if isinstance(value, dict):
        parts = value.get("parts")
        if not isinstance(parts, list) or not parts:
            raise ValidationError(
                "finalAnswer.parts must be a non-empty list",
                path=f"{path}.parts"
            )
        bad = [i for i, p in enumerate(parts) if not isinstance(p, str)]
        if bad:
            raise ValidationError(
                f"finalAnswer.parts must contain strings (bad indexes: {bad})",
                path=f"{path}.parts",
                errors=[f"parts[{i}] is not a string" for i in bad]
            )
        return

    raise ValidationError(
        "finalAnswer must be a string or an object with parts",
        path=path
    )


def looks_like_solution(data: Any) -> bool:
    """Return True when data passes the basic checks, without raising."""
    try:
        validate_solution(data, strict=False)
    except ValidationError:
        return False
    return True


def format_validation_error(error: ValidationError) -> str:
    """
    Render a ValidationError as a short message for end users.

    Example:
        >>> format_validation_error(ValidationError("steps must be a non-empty list", path="steps"))
        'The solution could not be displayed: steps must be a non-empty list (at steps).'
    """
    location = f" (at {error.path})" if error.path else ""
    return f"The solution could not be displayed: {error}{location}."
