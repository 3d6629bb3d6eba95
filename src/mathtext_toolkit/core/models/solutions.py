"""
Module: solutions

Purpose:
    Typed view of the upstream solution payload
    `{problem, steps: [{title, equation?, ...}], finalAnswer}` and of its
    formatted counterpart returned by `formatter.solution.format_solution`.

Key Classes:
    - SolutionStep / FinalAnswer / Solution: Raw payload (RawText fields)
    - FormattedStep / FormattedSolution: Canonicalized payload with
      content kinds, step actions and extracted equations

Dependencies:
    - dataclasses (std)
    - .canonical, .equations, .steps

Used By:
    - core.utils.serialization: dict conversion
    - formatter.solution: Formatting entry point
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .canonical import ContentKind
from .equations import Equation
from .steps import StepActionClassification


_STEP_TEXT_FIELDS = ("equation", "content", "summary", "explanation")


@dataclass(frozen=True, slots=True)
class SolutionStep:
    """One raw step as returned by the completion service."""

    title: str
    equation: Optional[str] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    explanation: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ValueError("Step title cannot be empty")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SolutionStep:
        return cls(
            title=data["title"],
            **{name: data.get(name) for name in _STEP_TEXT_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"title": self.title}
        for name in _STEP_TEXT_FIELDS:
            value = getattr(self, name)
            if value is not None:
                d[name] = value
        return d


@dataclass(frozen=True, slots=True)
class FinalAnswer:
    """
    Final answer, either one string or several parts.

    The payload spells a single answer as a string and a multi-part answer
    as `{"parts": [...]}`.
    """

    parts: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.parts:
            raise ValueError("Final answer must have at least one part")

    @property
    def is_multipart(self) -> bool:
        return len(self.parts) > 1

    @classmethod
    def from_value(cls, value: str | dict[str, Any]) -> FinalAnswer:
        if isinstance(value, str):
            return cls(parts=(value,))
        return cls(parts=tuple(value["parts"]))

    def to_value(self) -> str | dict[str, Any]:
        if self.is_multipart:
            return {"parts": list(self.parts)}
        return self.parts[0]


@dataclass(frozen=True, slots=True)
class Solution:
    """Raw solution payload."""

    problem: str
    steps: tuple[SolutionStep, ...]
    final_answer: FinalAnswer

    def __post_init__(self) -> None:
        if not self.steps:
            raise ValueError("Solution must have at least one step")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Solution:
        return cls(
            problem=data["problem"],
            steps=tuple(SolutionStep.from_dict(s) for s in data["steps"]),
            final_answer=FinalAnswer.from_value(data["finalAnswer"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "problem": self.problem,
            "steps": [s.to_dict() for s in self.steps],
            "finalAnswer": self.final_answer.to_value(),
        }


@dataclass(frozen=True)
class FormattedStep:
    """
    A step after canonicalization.

    Text fields hold CanonicalText (or None when absent in the payload).
    `equations` are extracted from the formatted equation field, in order.
    """

    id: str
    title: str
    action: StepActionClassification
    equation: Optional[str] = None
    equation_kind: Optional[ContentKind] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    summary_kind: Optional[ContentKind] = None
    explanation: Optional[str] = None
    equations: tuple[Equation, ...] = field(default_factory=tuple)

    @property
    def final_equation(self) -> Optional[Equation]:
        """Last extracted equation, taken as the most simplified one."""
        return self.equations[-1] if self.equations else None


@dataclass(frozen=True)
class FormattedSolution:
    """Solution after canonicalization, ready to persist or render."""

    problem: str
    steps: tuple[FormattedStep, ...]
    final_answer: tuple[str, ...]
    variable_colors: dict[str, str] = field(default_factory=dict)

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def texts(self) -> Sequence[str]:
        """Every formatted text field, for leak and consistency checks."""
        out: list[str] = [self.problem, *self.final_answer]
        for step in self.steps:
            out.append(step.title)
            for value in (step.equation, step.content, step.summary, step.explanation):
                if value is not None:
                    out.append(value)
        return out
