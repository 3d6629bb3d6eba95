"""
Module: pedagogy.actions

Purpose:
    Label each step with the kind of move it makes ("Distribute", "Divide
    both sides", ...) from its title or description. This is a keyword
    heuristic over free-form English, not a grammar: the first matching
    rule wins and anything unrecognized is a rewrite.

Key Functions:
    - infer_step_action(): Text -> StepActionClassification
    - extract_both_sides_op(): "Add 11 to both sides" -> add "11"

Used By:
    - formatter.solution
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from mathtext_toolkit.core.models.steps import BothSidesOperation, StepAction, StepActionClassification

logger = logging.getLogger(__name__)

_SIDES = r"(?:both|each)\s+sides?"
_BOTH_SIDES_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("add", re.compile(rf"\badd(?:ing)?\s+(.+?)\s+to\s+{_SIDES}", re.IGNORECASE)),
    ("subtract", re.compile(rf"\bsubtract(?:ing)?\s+(.+?)\s+from\s+{_SIDES}", re.IGNORECASE)),
    ("multiply", re.compile(rf"\bmultiply(?:ing)?\s+{_SIDES}\s+by\s+(\S+)", re.IGNORECASE)),
    ("divide", re.compile(rf"\bdivid(?:e|ing)\s+{_SIDES}\s+by\s+(\S+)", re.IGNORECASE)),
)
_TRAILING_PUNCTUATION = re.compile(r"[.,;:!?]+$")

_ACTION_RULES: tuple[tuple[StepAction, re.Pattern[str]], ...] = (
    (StepAction.FINAL, re.compile(
        r"^\s*(?:therefore|thus|hence)\b|\bfinal answer\b|\bthe answer is\b|\bsolution is\b",
        re.IGNORECASE,
    )),
    (StepAction.ADD_SUBTRACT_BOTH_SIDES, re.compile(
        rf"\b(?:add|subtract)(?:ing)?\b.*\b{_SIDES}", re.IGNORECASE,
    )),
    (StepAction.MULTIPLY_DIVIDE_BOTH_SIDES, re.compile(
        rf"\b(?:multiply|multiplying|divide|dividing)\b.*\b{_SIDES}|\b{_SIDES}\b.*\b(?:multipl|divid)",
        re.IGNORECASE,
    )),
    (StepAction.DISTRIBUTE, re.compile(r"\bdistribut|\bexpand", re.IGNORECASE)),
    (StepAction.COMBINE_LIKE_TERMS, re.compile(r"\bcombine\b|\blike terms\b", re.IGNORECASE)),
    (StepAction.FACTOR, re.compile(r"\bfactor", re.IGNORECASE)),
    (StepAction.SUBSTITUTE, re.compile(r"\bsubstitut|\bplug", re.IGNORECASE)),
    (StepAction.ISOLATE_VARIABLE, re.compile(r"\bisolat|\bsolve for\b", re.IGNORECASE)),
    (StepAction.CHECK, re.compile(r"\bcheck|\bverif", re.IGNORECASE)),
    (StepAction.EVALUATE, re.compile(r"\bcalculat|\bevaluat|\bcompute", re.IGNORECASE)),
    (StepAction.SIMPLIFY, re.compile(r"\bsimplif|\breduce", re.IGNORECASE)),
)


def extract_both_sides_op(text: Optional[str]) -> Optional[BothSidesOperation]:
    """
    Find an operation applied to both sides.

    Recognizes "Add X to both sides", "Subtract X from each side",
    "Multiply both sides by X" and "Divide both sides by X", including the
    -ing forms. Trailing punctuation is dropped from the operand.

    Example:
        >>> extract_both_sides_op("Multiplying both sides by {1/2}")
        BothSidesOperation(kind='multiply', operand='{1/2}')
    """
    if not text:
        return None
    for kind, pattern in _BOTH_SIDES_RULES:
        match = pattern.search(text)
        if not match:
            continue
        operand = _TRAILING_PUNCTUATION.sub("", match.group(1).strip())
        if operand:
            return BothSidesOperation(kind=kind, operand=operand)
    return None


def infer_step_action(text: Optional[str]) -> StepActionClassification:
    """
    Classify a step from its title or description.

    Example:
        >>> infer_step_action("Divide both sides by 3").label
        'Multiply/Divide both sides'
    """
    if not text:
        return StepActionClassification(action=StepAction.REWRITE)

    operation = extract_both_sides_op(text)
    if operation is not None and not _ACTION_RULES[0][1].search(text):
        return StepActionClassification(action=operation.action, both_sides=operation)

    for action, pattern in _ACTION_RULES:
        if pattern.search(text):
            logger.debug(f"Step {text[:40]!r} classified as {action}")
            return StepActionClassification(action=action, both_sides=operation)
    return StepActionClassification(action=StepAction.REWRITE)
