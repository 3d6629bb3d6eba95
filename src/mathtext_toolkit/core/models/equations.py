"""
Module: equations

Purpose:
    The Equation model: an expression with exactly one top-level "=" and
    two non-empty sides. Also hosts the split-point scan shared by the
    equation extractor and the line-join heuristic.

Key Functions:
    - top_level_equals(text): Indexes of "=" usable as split points
    - Equation.parse(text): Build an Equation from a one-split string

Key Classes:
    - Equation: Frozen left/right pair

Dependencies:
    - dataclasses (std)

Used By:
    - equations.extractor, equations.validator
    - formatter.line_join: New-equation detection
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

_OPENERS = "([{"
_CLOSERS = ")]}"
_WHITESPACE = re.compile(r"\s+")


def top_level_equals(text: str) -> list[int]:
    """
    Find every "=" that can split an equation.

    Skips "=" nested inside brackets and any "=" that is part of "==",
    "!=", "<=", ">=" or the "=>" arrow.

    Args:
        text: Candidate expression

    Returns:
        Character indexes, in order
    """
    positions: list[int] = []
    depth = 0
    for i, ch in enumerate(text):
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(0, depth - 1)
        elif ch == "=" and depth == 0:
            prev = text[i - 1] if i > 0 else ""
            nxt = text[i + 1] if i + 1 < len(text) else ""
            if prev in ("=", "!", "<", ">") or nxt in ("=", ">"):
                continue
            positions.append(i)
    return positions


@dataclass(frozen=True, slots=True)
class Equation:
    """
    A validated two-sided equation.

    Attributes:
        left: Expression before the split "=", trimmed
        right: Expression after the split "=", trimmed

    Invariants:
        - both sides non-empty
        - neither side contains a top-level split "="

    Example:
        >>> eq = Equation.parse("6x - 11 = x + 17")
        >>> eq.left, eq.right
        ('6x - 11', 'x + 17')
    """

    left: str
    right: str

    def __post_init__(self) -> None:
        if not self.left.strip() or not self.right.strip():
            raise ValueError(f"Equation sides cannot be empty: {self.left!r} = {self.right!r}")
        if top_level_equals(self.left) or top_level_equals(self.right):
            raise ValueError(f"Equation must have exactly one split point: {self.left!r} = {self.right!r}")

    @classmethod
    def parse(cls, text: str) -> Optional[Equation]:
        """
        Build an Equation from text with exactly one top-level "=".

        Returns:
            Equation, or None when the text has zero or several split
            points or an empty side
        """
        positions = top_level_equals(text)
        if len(positions) != 1:
            return None
        idx = positions[0]
        left, right = text[:idx].strip(), text[idx + 1:].strip()
        if not left or not right:
            return None
        return cls(left=left, right=right)

    @property
    def text(self) -> str:
        return f"{self.left} = {self.right}"

    @property
    def key(self) -> str:
        """Whitespace-insensitive identity used for de-duplication."""
        return _WHITESPACE.sub("", self.text)

    def __str__(self) -> str:
        return self.text

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "left": self.left, "right": self.right}
