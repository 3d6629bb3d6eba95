"""
Module: formatter.line_join

Purpose:
    Stage 5 of canonicalization. The model often wraps an expression across
    lines ("x +" / "5 = 10"). A line is joined with its successor when it
    looks unfinished or the successor looks like a continuation, but never
    across a label, a blank line or the start of a new equation.

Key Functions:
    - is_incomplete_line(): Unbalanced, or ends in operator / opener / comma
    - starts_with_continuation(): Starts with closer, operator or "-x"
    - starts_new_equation(): Identifier start and a top-level "=" early on
    - join_broken_lines(): One joining pass, paragraph by paragraph
    - join_until_stable(): Bounded repeat of join_broken_lines

Dependencies:
    - core.models.equations: Top-level "=" scan
    - formatter.delimiters, formatter.labels, formatter.fixpoint

Used By:
    - formatter.pipeline
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from mathtext_toolkit.core.models.equations import top_level_equals

from .delimiters import has_unbalanced_delimiters
from .fixpoint import CapCallback, run_until_stable
from .labels import is_label_line

logger = logging.getLogger(__name__)

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_WHITESPACE = re.compile(r"\s+")

_TRAILING_OPERATOR = re.compile(r"[+\-−*/=×÷<>≤≥≠]$")
_TRAILING_OPENER = re.compile(r"[(\[{]$")
_LEADING_CLOSER = re.compile(r"^[)\]}]")
_LEADING_OPERATOR = re.compile(r"^[+*/=×÷]")
_LEADING_MINUS = re.compile(r"^[-−][^0-9]")
_BULLET = re.compile(r"^[-*•]\s+[A-Za-z]{2,}")
_EQUATION_START = re.compile(r"^[0-9a-zA-Z*_]")


def is_incomplete_line(line: str) -> bool:
    """
    True when a line cannot end an expression.

    That is: empty, unbalanced delimiters, or ending in an operator, an
    opening delimiter or a comma.
    """
    stripped = line.strip()
    if not stripped:
        return True
    return bool(
        has_unbalanced_delimiters(stripped)
        or _TRAILING_OPERATOR.search(stripped)
        or _TRAILING_OPENER.search(stripped)
        or stripped.endswith(",")
    )


def starts_with_continuation(line: str) -> bool:
    """
    True when a line continues the previous one.

    Starts with a closing delimiter, a binary operator, or a minus sign not
    followed by a digit. Bullet items ("- First point") are not
    continuations.
    """
    stripped = line.strip()
    if _BULLET.match(stripped):
        return False
    return bool(
        _LEADING_CLOSER.match(stripped)
        or _LEADING_OPERATOR.match(stripped)
        or _LEADING_MINUS.match(stripped)
    )


def starts_new_equation(line: str, min_prefix: int = 2) -> bool:
    """
    True when a line clearly opens a new equation.

    It must begin with an identifier or number and its first top-level "="
    must sit past `min_prefix`, so "5 = 10" (a wrapped right-hand side) is
    not a new equation but "2x + 3 = 7" is.
    """
    stripped = line.strip()
    if not _EQUATION_START.match(stripped):
        return False
    positions = top_level_equals(stripped)
    return bool(positions) and positions[0] > min_prefix


def _join_paragraph(lines: list[str], min_prefix: int) -> list[str]:
    joined: list[str] = []
    i = 0
    while i < len(lines):
        current = lines[i]
        if is_label_line(current):
            joined.append(current)
            i += 1
            continue

        while i + 1 < len(lines):
            nxt = lines[i + 1]
            if is_label_line(nxt) or starts_new_equation(nxt, min_prefix):
                break
            if not (is_incomplete_line(current) or starts_with_continuation(nxt)):
                break
            logger.debug(f"Joining broken line {current!r} + {nxt!r}")
            current = _WHITESPACE.sub(" ", f"{current} {nxt}")
            i += 1

        joined.append(current)
        i += 1
    return joined


def join_broken_lines(text: str, min_prefix: int = 2) -> str:
    """
    Join wrapped expression lines within each paragraph.

    Text is split on blank lines; inside a paragraph lines are trimmed,
    empty ones dropped, and joinable neighbours space-concatenated.
    Paragraphs are rejoined with one blank line.

    Example:
        >>> join_broken_lines("x +\\n5 = 10\\n\\nLeft Side:\\ny")
        'x + 5 = 10\\n\\nLeft Side:\\ny'
    """
    if "\n" not in text:
        return text.strip()

    paragraphs: list[str] = []
    for block in _PARAGRAPH_SPLIT.split(text):
        lines = [line.strip() for line in block.split("\n") if line.strip()]
        if lines:
            paragraphs.append("\n".join(_join_paragraph(lines, min_prefix)))
    return "\n\n".join(paragraphs)


def join_until_stable(
    text: str,
    *,
    min_prefix: int = 2,
    max_iterations: int = 20,
    on_cap: Optional[CapCallback] = None,
) -> str:
    """Repeat join_broken_lines until the text stops changing (capped)."""
    return run_until_stable(
        lambda t: join_broken_lines(t, min_prefix),
        text,
        max_iterations=max_iterations,
        name="line_join",
        on_cap=on_cap,
    )
