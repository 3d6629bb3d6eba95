"""
Module: equations.extractor

Purpose:
    Pull the distinct equations out of one step's canonical text, for the
    "show your work" view that aligns them on their "=" signs.

    Per non-empty line: image references are dropped (only content after
    the image is kept, and only when it holds an "="), a leading label is
    stripped, color tags are unwrapped, a line repeated twice in a row is
    folded, and the line is split on arrows into transformation segments.
    Each segment contributes every consecutive "left = right" pair as a
    candidate. Accepted candidates are de-duplicated ignoring whitespace.

Key Functions:
    - extract_rows(): Equation and content rows in order
    - extract_equations(): Only the equations
    - final_equation(): Last equation, taken as the most simplified one
    - split_for_alignment(): (left, right) for two-column layouts

Key Classes:
    - EquationRow: One row of the aligned view

Used By:
    - formatter.solution
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal, Optional

from mathtext_toolkit.common.thresholds import DEFAULT_THRESHOLDS, HeuristicThresholds
from mathtext_toolkit.common.vocabulary import ARROW_PATTERN, IMAGE_REFERENCE, LEADING_LABEL_PATTERN
from mathtext_toolkit.core.models.colors import COLOR_TAG_ALTERNATION
from mathtext_toolkit.core.models.equations import Equation, top_level_equals

from .prose import is_prose_line
from .validator import split_equation, validate_candidate

logger = logging.getLogger(__name__)

_COLOR_TAG = re.compile(rf"\[(?:{COLOR_TAG_ALTERNATION}):([^\]]*)\]", re.IGNORECASE)
_UNPROCESSED_IMAGE = re.compile(r"\[IMAGE(?: NEEDED)?:[^\]]*\]")
_WHITESPACE = re.compile(r"\s+")
_COMPLEX_FOR_COMPACT = ("√", "opposite", "adjacent")

RowKind = Literal["equation", "content"]


@dataclass(frozen=True, slots=True)
class EquationRow:
    """One row: an accepted equation or a line of plain content."""

    kind: RowKind
    text: str
    equation: Optional[Equation] = None


# ─────────────────────────────────────────────────────────────────────────────
# Line Preparation
# ─────────────────────────────────────────────────────────────────────────────

def _after_image(line: str) -> Optional[str]:
    """
    Content following an image reference, or None to drop the line.

    Lines without an image are returned unchanged.
    """
    last_end = -1
    for pattern in (IMAGE_REFERENCE, _UNPROCESSED_IMAGE):
        for match in pattern.finditer(line):
            last_end = max(last_end, match.end())
    if last_end < 0:
        return line
    rest = line[last_end:].strip()
    return rest if "=" in rest else None


def _fold_repeated(line: str) -> str:
    """Fold a line stated twice: "x = 5 x = 5" becomes "x = 5"."""
    tokens = line.split()
    half = len(tokens) // 2
    if half and len(tokens) % 2 == 0 and tokens[:half] == tokens[half:]:
        return " ".join(tokens[:half])
    return line


def _prepare(line: str) -> Optional[str]:
    line = _after_image(line.strip())
    if line is None:
        return None
    line = LEADING_LABEL_PATTERN.sub("", line, count=1)
    line = _COLOR_TAG.sub(r"\1", line)
    return _fold_repeated(_WHITESPACE.sub(" ", line).strip())


def _segment_candidates(segment: str) -> list[str]:
    """Consecutive "left = right" pairs: "a = b = c" -> ["a = b", "b = c"]."""
    positions = top_level_equals(segment)
    if not positions:
        return []
    bounds = [-1, *positions, len(segment)]
    pieces = [segment[bounds[i] + 1:bounds[i + 1]].strip() for i in range(len(bounds) - 1)]
    return [f"{pieces[i]} = {pieces[i + 1]}" for i in range(len(pieces) - 1)]


# ─────────────────────────────────────────────────────────────────────────────
# Extraction
# ─────────────────────────────────────────────────────────────────────────────

def extract_rows(text: Optional[str]) -> list[EquationRow]:
    """
    Extract equation and content rows from one step's text.

    Lines that yield no accepted equation become content rows, unless the
    prose classifier marks them as explanatory noise.

    Example:
        >>> [r.text for r in extract_rows("Left Side: 6x - 11 = x + 17")]
        ['6x - 11 = x + 17']
    """
    if not text:
        return []

    rows: list[EquationRow] = []
    seen: set[str] = set()

    for raw_line in text.split("\n"):
        if not raw_line.strip():
            continue
        line = _prepare(raw_line)
        if not line:
            continue

        found = False
        for segment in ARROW_PATTERN.split(line):
            for candidate in _segment_candidates(segment):
                verdict = validate_candidate(candidate)
                if not verdict:
                    continue
                found = True
                equation = verdict.equation
                if equation.key in seen:
                    continue
                seen.add(equation.key)
                rows.append(EquationRow(kind="equation", text=equation.text, equation=equation))

        if not found and not is_prose_line(line):
            rows.append(EquationRow(kind="content", text=line))
        elif not found:
            logger.debug(f"Dropping prose line {line!r}")

    return rows


def extract_equations(text: Optional[str]) -> list[Equation]:
    """Ordered, de-duplicated equations found in the text."""
    return [row.equation for row in extract_rows(text) if row.equation is not None]


def final_equation(text: Optional[str]) -> Optional[Equation]:
    """
    The last extracted equation, or None.

    Assumes the model writes the most simplified form last; this is a
    heuristic, not a mathematical check.
    """
    equations = extract_equations(text)
    return equations[-1] if equations else None


def split_for_alignment(
    text: str,
    compact: bool = False,
    thresholds: HeuristicThresholds = DEFAULT_THRESHOLDS,
) -> Optional[tuple[str, str]]:
    """
    Split an equation into the two columns of an aligned layout.

    The first "=" is used, so a chain keeps its whole progression on the
    right ("m = {150/3} = 50" -> ("m", "{150/3} = 50")). In compact
    (narrow, portrait) layouts, chains, long sides and expressions with
    roots or trig words are not split and render as one line.

    Returns:
        (left, right), or None when the text should not be split
    """
    sides = split_equation(text)
    if sides is None:
        return None
    left, right = sides
    if not left or not right:
        return None

    if compact:
        if "=" in right:
            return None
        if len(left) > thresholds.compact_left_max or len(right) > thresholds.compact_right_max:
            return None
        if any(marker in text for marker in _COMPLEX_FOR_COMPACT):
            return None
    return left, right
