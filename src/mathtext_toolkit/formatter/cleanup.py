"""
Module: formatter.cleanup

Purpose:
    Equation-mode repairs for habits of the upstream model that are not
    notation problems: restating a result right before its highlighted
    answer, underscores left behind from blank-filling, and orphan dash
    lines.

Key Functions:
    - fix_redundant_answers(): Drop a value repeated before its [red:...] answer
    - clean_stray_underscores(): `47_.` -> `47.`, `problem_41` -> `problem 41`
    - remove_orphan_dash_lines(): Lines holding only "-", "--" or "---"

Used By:
    - formatter.pipeline
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_ORPHAN_FOR = re.compile(r"(?im)^([ \t]*)for\s*:\s*(?=[*a-zA-Z])")
_VALUE_BEFORE_ANSWER = re.compile(r"([^=\n→]+)=\s*([^→\n=]+?)\s*→\s*\[red:([^\]\n]+)\]")
_EQUATION_BEFORE_ANSWER = re.compile(r"([*a-zA-Z0-9=+\-×÷{}/.() ]+?)\s*→\s*\[red:([^\]\n]+)\]")
_PROSE_BEFORE_ANSWER = r"([^:\n→\[\]]{{{min_prefix},}}):\s*\[red:([^\]\n]+)\]"
_COMPARE_STRIP = re.compile(r"[\s*{}]")

_NUMBER_UNDERSCORE_END = re.compile(r"(?<![\w^])(\d+)_+(?=[.,;:)\s]|$)")
_NUMBER_UNDERSCORE_OPERATOR = re.compile(r"(?<![\w^])(\d+)_+\s*([+\-*/×÷=])")
_WORD_UNDERSCORE_NUMBER = re.compile(r"\b(problem|exercise|question|step|part)_+(\d+)", re.IGNORECASE)
_ORPHAN_DASH_LINE = re.compile(r"(?m)^[ \t]*-{1,3}[ \t]*$")


def _same_value(a: str, b: str) -> bool:
    ca = _COMPARE_STRIP.sub("", a).lower()
    cb = _COMPARE_STRIP.sub("", b).lower()
    return bool(ca) and ca == cb


def fix_redundant_answers(text: str, min_prose_prefix: int = 10) -> str:
    """
    Remove a result that is stated twice around a highlighted answer.

    Only exact repeats (ignoring spaces, asterisks, braces and case) are
    removed:
    - `expr = v → [red:v]` becomes `expr → [red:v]`
    - `eq → [red:eq]` becomes `→ [red:eq]`
    - `some prose: [red:some prose]` becomes `→ [red:some prose]`
    Orphan "for:" fragments at the start of a line are dropped.

    Example:
        >>> fix_redundant_answers("2x = 10 → [red:10]")
        '2x → [red:10]'
    """
    if "[red:" not in text and "for" not in text.lower():
        return text

    text = _ORPHAN_FOR.sub(r"\1", text)

    def value_repeat(m: re.Match[str]) -> str:
        expression, value, answer = m.group(1), m.group(2), m.group(3)
        if _same_value(value, answer):
            logger.debug(f"Dropping repeated value {value!r} before answer")
            return f"{expression.rstrip()} → [red:{answer}]"
        return m.group(0)

    def equation_repeat(m: re.Match[str]) -> str:
        before, answer = m.group(1), m.group(2)
        if _same_value(before, answer):
            return f"→ [red:{answer}]"
        return m.group(0)

    def prose_repeat(m: re.Match[str]) -> str:
        before, answer = m.group(1), m.group(2)
        if _same_value(before, answer):
            return f"→ [red:{answer}]"
        return m.group(0)

    text = _VALUE_BEFORE_ANSWER.sub(value_repeat, text)
    text = _EQUATION_BEFORE_ANSWER.sub(equation_repeat, text)
    prose_before_answer = re.compile(_PROSE_BEFORE_ANSWER.format(min_prefix=min_prose_prefix))
    return prose_before_answer.sub(prose_repeat, text)


def clean_stray_underscores(text: str) -> str:
    """Remove blank-filling underscores stuck to numbers and labels."""
    if "_" not in text:
        return text
    text = _WORD_UNDERSCORE_NUMBER.sub(r"\1 \2", text)
    text = _NUMBER_UNDERSCORE_OPERATOR.sub(r"\1 \2", text)
    return _NUMBER_UNDERSCORE_END.sub(r"\1", text)


def remove_orphan_dash_lines(text: str) -> str:
    """Blank out lines that hold nothing but one to three dashes."""
    return _ORPHAN_DASH_LINE.sub("", text)
