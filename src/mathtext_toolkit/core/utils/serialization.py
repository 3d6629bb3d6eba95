"""
Serialization Utilities

Provides to/from JSON utilities for the toolkit's data models.

- `serialize_*` / `deserialize_*` pairs for solutions and inline elements
- Payloads are validated with `validate_solution` before deserialization
- Formatted solutions serialize to the camelCase shape the renderer reads
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Sequence

from ..models.colors import HighlightColor
from ..models.elements import ELEMENT_TYPES, Arrow, Fraction, Highlighted, Image, InlineElement, Italic, Text
from ..models.equations import Equation
from ..models.solutions import FormattedSolution, FormattedStep, Solution
from ..schemas.validator import ValidationError, validate_solution


# ─────────────────────────────────────────────────────────────────────────────
# Solution Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_solution(solution: Solution) -> dict[str, Any]:
    """
    Serialize a Solution back to the upstream payload shape.

    Args:
        solution: Solution instance to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    return solution.to_dict()


def deserialize_solution(data: dict[str, Any], *, validate: bool = True) -> Solution:
    """
    Deserialize a Solution from a decoded payload.

    Args:
        data: Dictionary from JSON
        validate: Whether to run the basic payload checks first

    Returns:
        Solution instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If data cannot be parsed
    """
    if validate:
        validate_solution(data, strict=False)

    try:
        return Solution.from_dict(data)
    except (KeyError, TypeError) as e:
        raise ValueError(f"Cannot parse solution payload: {e}") from e


def serialize_formatted_step(step: FormattedStep) -> dict[str, Any]:
    """Serialize a formatted step, omitting absent fields."""
    d: dict[str, Any] = {
        "id": step.id,
        "title": step.title,
        "action": step.action.to_dict(),
    }
    if step.equation is not None:
        d["equation"] = step.equation
        d["equationKind"] = step.equation_kind.value if step.equation_kind else None
    if step.content is not None:
        d["content"] = step.content
    if step.summary is not None:
        d["summary"] = step.summary
        d["summaryKind"] = step.summary_kind.value if step.summary_kind else None
    if step.explanation is not None:
        d["explanation"] = step.explanation
    if step.equations:
        d["equations"] = serialize_equations(step.equations)
    return d


def serialize_formatted_solution(solution: FormattedSolution) -> dict[str, Any]:
    """
    Serialize a formatted solution for persistence.

    A single final answer is stored as a string, several parts as
    `{"parts": [...]}`, matching the upstream payload.
    """
    final: str | dict[str, Any]
    if len(solution.final_answer) == 1:
        final = solution.final_answer[0]
    else:
        final = {"parts": list(solution.final_answer)}

    d: dict[str, Any] = {
        "problem": solution.problem,
        "steps": [serialize_formatted_step(s) for s in solution.steps],
        "finalAnswer": final,
    }
    if solution.variable_colors:
        d["variableColors"] = dict(solution.variable_colors)
    return d


# ─────────────────────────────────────────────────────────────────────────────
# Inline Elements and Equations
# ─────────────────────────────────────────────────────────────────────────────

def serialize_elements(elements: Iterable[InlineElement]) -> list[dict[str, Any]]:
    """Serialize one line of inline elements."""
    return [element.to_dict() for element in elements]


def deserialize_element(data: dict[str, Any]) -> InlineElement:
    """
    Rebuild an inline element from its dict form.

    Raises:
        ValueError: If the element type is unknown
    """
    kind = data.get("type")
    if kind not in ELEMENT_TYPES:
        raise ValueError(f"Unknown inline element type: {kind!r}")

    if kind == Text.kind:
        return Text(data["content"])
    if kind == Fraction.kind:
        return Fraction(data["numerator"], data["denominator"], data.get("attached", ""))
    if kind == Highlighted.kind:
        return Highlighted(
            data["content"],
            color=HighlightColor.from_name(data.get("color", "default")),
            underline=bool(data.get("underline", False)),
        )
    if kind == Italic.kind:
        return Italic(data["content"])
    if kind == Image.kind:
        return Image(data["url"], data.get("description", ""))
    return Arrow()


def deserialize_elements(items: Sequence[dict[str, Any]]) -> list[InlineElement]:
    """Rebuild one line of inline elements."""
    return [deserialize_element(item) for item in items]


def serialize_equations(equations: Iterable[Equation]) -> list[str]:
    """Serialize equations as their display strings."""
    return [eq.text for eq in equations]


# ─────────────────────────────────────────────────────────────────────────────
# JSON Files
# ─────────────────────────────────────────────────────────────────────────────

def load_solution_json(path: Path, *, validate: bool = True) -> Solution:
    """
    Load a solution payload from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the payload is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Solution file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Error parsing {path.name}: {e}",
                path=str(path),
                errors=[str(e)]
            ) from e

    return deserialize_solution(data, validate=validate)


def save_formatted_solution_json(solution: FormattedSolution, path: Path) -> None:
    """Save a formatted solution to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_formatted_solution(solution), f, indent=2, ensure_ascii=False)
