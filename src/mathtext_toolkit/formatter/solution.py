"""
Module: formatter.solution

Purpose:
    Format a whole solution payload in one call: validate it, canonicalize
    every field for its content kind, classify each step's action, extract
    each step's equations and optionally give every variable one color
    across the solution.

Key Functions:
    - format_solution(): Payload or Solution -> FormattedSolution

Dependencies:
    - core.utils.serialization: Payload validation and parsing
    - equations: Step equation extraction
    - pedagogy: Step actions and variable colors

Used By:
    - Application code consuming the completion service (external)
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from mathtext_toolkit.core.models.canonical import ContentKind, RenderMode
from mathtext_toolkit.core.models.solutions import FormattedSolution, FormattedStep, Solution, SolutionStep
from mathtext_toolkit.core.models.steps import StepAction
from mathtext_toolkit.core.utils.serialization import deserialize_solution
from mathtext_toolkit.equations.extractor import extract_equations
from mathtext_toolkit.pedagogy.actions import infer_step_action
from mathtext_toolkit.pedagogy.variables import apply_var_colors, build_var_color_map

from .config import DEFAULT_CONFIG, FormatterConfig
from .content_kind import detect_content_kind, format_by_kind
from .diagnostics import DiagnosticsCollector
from .pipeline import canonicalize

logger = logging.getLogger(__name__)

_EQUATION_KINDS = (ContentKind.MATH, ContentKind.LIST)


def _format_field(
    text: Optional[str],
    context: str,
    config: FormatterConfig,
    diagnostics: Optional[DiagnosticsCollector],
) -> tuple[Optional[str], Optional[ContentKind]]:
    if text is None:
        return None, None
    kind = detect_content_kind(text)
    formatted = format_by_kind(text, kind, config=config, context=context, diagnostics=diagnostics)
    return formatted, kind


def _format_step(
    index: int,
    step: SolutionStep,
    config: FormatterConfig,
    diagnostics: Optional[DiagnosticsCollector],
) -> FormattedStep:
    path = f"steps[{index}]"
    title = canonicalize(step.title, RenderMode.TITLE, config=config, context=f"{path}.title", diagnostics=diagnostics)
    equation, equation_kind = _format_field(step.equation, f"{path}.equation", config, diagnostics)
    content, _ = _format_field(step.content, f"{path}.content", config, diagnostics)
    summary, summary_kind = _format_field(step.summary, f"{path}.summary", config, diagnostics)
    explanation, _ = _format_field(step.explanation, f"{path}.explanation", config, diagnostics)

    action = infer_step_action(title)
    if action.action is StepAction.REWRITE and content:
        action = infer_step_action(content)

    equations = tuple(extract_equations(equation)) if equation_kind in _EQUATION_KINDS else ()
    return FormattedStep(
        id=f"step-{index + 1}",
        title=title,
        action=action,
        equation=equation,
        equation_kind=equation_kind,
        content=content,
        summary=summary,
        summary_kind=summary_kind,
        explanation=explanation,
        equations=equations,
    )


def _colorize(solution: FormattedSolution) -> FormattedSolution:
    color_map = build_var_color_map(solution.texts())
    if not color_map:
        return solution

    def paint(text: Optional[str]) -> Optional[str]:
        return apply_var_colors(text, color_map) if text is not None else None

    steps = tuple(
        FormattedStep(
            id=step.id,
            title=step.title,
            action=step.action,
            equation=paint(step.equation),
            equation_kind=step.equation_kind,
            content=paint(step.content),
            summary=paint(step.summary),
            summary_kind=step.summary_kind,
            explanation=paint(step.explanation),
            equations=step.equations,
        )
        for step in solution.steps
    )
    return FormattedSolution(
        problem=paint(solution.problem),
        steps=steps,
        final_answer=tuple(paint(part) for part in solution.final_answer),
        variable_colors={letter: color.value for letter, color in color_map.items()},
    )


def format_solution(
    payload: Solution | dict[str, Any],
    config: Optional[FormatterConfig] = None,
    *,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> FormattedSolution:
    """
    Canonicalize every text field of a solution.

    Args:
        payload: Decoded `{problem, steps, finalAnswer}` dict or a Solution
        config: Strictness, thresholds and the variable coloring switch
        diagnostics: Collector shared by every field; contexts are field
            paths such as "steps[2].equation"

    Returns:
        FormattedSolution with step ids "step-1", "step-2", ...

    Raises:
        ValidationError: If the payload fails validation
        ContractViolation: strict config only
    """
    config = config or DEFAULT_CONFIG
    solution = payload if isinstance(payload, Solution) else deserialize_solution(payload)

    problem, _ = _format_field(solution.problem, "problem", config, diagnostics)
    steps = tuple(_format_step(i, step, config, diagnostics) for i, step in enumerate(solution.steps))
    final_answer = tuple(
        _format_field(part, f"finalAnswer[{i}]", config, diagnostics)[0]
        for i, part in enumerate(solution.final_answer.parts)
    )

    formatted = FormattedSolution(problem=problem, steps=steps, final_answer=final_answer)
    logger.debug(f"Formatted solution with {formatted.step_count} steps")

    if config.colorize_variables:
        formatted = _colorize(formatted)
    return formatted
