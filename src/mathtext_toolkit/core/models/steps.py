"""
Module: steps

Purpose:
    Pedagogical classification of a solution step: which kind of algebraic
    move it describes and, when it applies an operation to both sides of an
    equation, which operation and operand.

Key Classes:
    - StepAction: Enum of action kinds with display labels
    - BothSidesOperation: Operation kind plus operand text
    - StepActionClassification: Action plus optional both-sides operation

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - pedagogy.actions: Produces classifications
    - formatter.solution: Attaches classifications to formatted steps
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional


OperationKind = Literal["add", "subtract", "multiply", "divide"]
_OPERATION_KINDS = ("add", "subtract", "multiply", "divide")


class StepAction(str, Enum):
    """Kind of move a step performs."""

    REWRITE = "rewrite"
    DISTRIBUTE = "distribute"
    COMBINE_LIKE_TERMS = "combine_like_terms"
    SIMPLIFY = "simplify"
    ADD_SUBTRACT_BOTH_SIDES = "add_subtract_both_sides"
    MULTIPLY_DIVIDE_BOTH_SIDES = "multiply_divide_both_sides"
    ISOLATE_VARIABLE = "isolate_variable"
    FACTOR = "factor"
    SUBSTITUTE = "substitute"
    EVALUATE = "evaluate"
    CHECK = "check"
    FINAL = "final"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Short human-readable label shown next to the step."""
        return _ACTION_LABELS[self]


_ACTION_LABELS: dict[StepAction, str] = {
    StepAction.REWRITE: "Rewrite",
    StepAction.DISTRIBUTE: "Distribute",
    StepAction.COMBINE_LIKE_TERMS: "Combine like terms",
    StepAction.SIMPLIFY: "Simplify",
    StepAction.ADD_SUBTRACT_BOTH_SIDES: "Add/Subtract both sides",
    StepAction.MULTIPLY_DIVIDE_BOTH_SIDES: "Multiply/Divide both sides",
    StepAction.ISOLATE_VARIABLE: "Isolate variable",
    StepAction.FACTOR: "Factor",
    StepAction.SUBSTITUTE: "Substitute",
    StepAction.EVALUATE: "Evaluate",
    StepAction.CHECK: "Check",
    StepAction.FINAL: "Final answer",
}


@dataclass(frozen=True, slots=True)
class BothSidesOperation:
    """
    Operation applied to both sides of an equation.

    Attributes:
        kind: add / subtract / multiply / divide
        operand: Operand text as written, e.g. "11", "3x", "{1/2}", "*x*"
    """

    kind: OperationKind
    operand: str

    def __post_init__(self) -> None:
        if self.kind not in _OPERATION_KINDS:
            raise ValueError(f"Invalid operation kind: {self.kind}")
        if not self.operand.strip():
            raise ValueError("Operand cannot be empty")

    @property
    def action(self) -> StepAction:
        if self.kind in ("add", "subtract"):
            return StepAction.ADD_SUBTRACT_BOTH_SIDES
        return StepAction.MULTIPLY_DIVIDE_BOTH_SIDES

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "value": self.operand}


@dataclass(frozen=True, slots=True)
class StepActionClassification:
    """Result of classifying a step's title or description."""

    action: StepAction
    both_sides: Optional[BothSidesOperation] = None

    @property
    def label(self) -> str:
        return self.action.label

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"action": self.action.value, "label": self.label}
        if self.both_sides is not None:
            d["both_sides_op"] = self.both_sides.to_dict()
        return d
