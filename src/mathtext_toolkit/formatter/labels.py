"""
Module: formatter.labels

Purpose:
    Stage 2 of canonicalization. Structural labels ("Left Side:",
    "Step 3:", "Therefore:") are hard boundaries for every later stage, so
    each one is moved onto its own line with a blank line before it, and
    synonyms collapse to one spelling.

Key Functions:
    - isolate_labels(): Normalize and isolate labels (idempotent)
    - is_label_line(): True if a line starts with a recognized label
    - strip_leading_label(): Remove a leading label before extraction

Dependencies:
    - common.vocabulary: Label patterns

Used By:
    - formatter.pipeline
    - formatter.line_join: Labels are never joined
    - equations.extractor: Leading label removal
"""

from __future__ import annotations

import re

from mathtext_toolkit.common.vocabulary import (
    CANONICAL_LABELS,
    ISOLATED_LABEL_PATTERN,
    LABEL_LINE_PATTERN,
    LEADING_LABEL_PATTERN,
    LEFT_SIDE_SYNONYM,
    RIGHT_SIDE_SYNONYM,
)

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_SPACES = re.compile(r"\s+")
_STEP_LABEL = re.compile(r"step (\d+)")
_SIMPLIFYING_PREFIX = "equation after simplifying"


def normalize_label_synonyms(text: str) -> str:
    """Rewrite "Left-hand side:", "left side:" etc. to "Left Side:" / "Right Side:"."""
    text = LEFT_SIDE_SYNONYM.sub("Left Side:", text)
    return RIGHT_SIDE_SYNONYM.sub("Right Side:", text)


def _canonical_label(raw: str) -> str:
    phrase = _SPACES.sub(" ", raw.strip())
    key = phrase.lower()
    if key in CANONICAL_LABELS:
        return CANONICAL_LABELS[key]
    step = _STEP_LABEL.fullmatch(key)
    if step:
        return f"Step {step.group(1)}:"
    if key.startswith(_SIMPLIFYING_PREFIX):
        return "Equation after simplifying" + phrase[len(_SIMPLIFYING_PREFIX):] + ":"
    return phrase + ":"


def isolate_labels(text: str) -> str:
    """
    Put every structural label on its own line.

    Each label becomes "\\n\\n<Label>:\\n" wherever it occurs, even
    mid-sentence; runs of three or more newlines then collapse to one
    blank line and leading newlines are dropped, so running this twice
    gives the same text.

    Example:
        >>> isolate_labels("x + 5 Left-hand side: y = 10")
        'x + 5\\n\\nLeft Side:\\ny = 10'
    """
    if not text:
        return text

    text = normalize_label_synonyms(text)
    text = ISOLATED_LABEL_PATTERN.sub(lambda m: f"\n\n{_canonical_label(m.group(1))}\n", text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.lstrip("\n")


def is_label_line(line: str) -> bool:
    """True if the line starts with a recognized label followed by a colon."""
    return LABEL_LINE_PATTERN.match(line.strip()) is not None


def strip_leading_label(line: str) -> str:
    """
    Remove one leading label phrase.

    Example:
        >>> strip_leading_label("Left Side: 6x - 11 = x + 17")
        '6x - 11 = x + 17'
    """
    return LEADING_LABEL_PATTERN.sub("", line, count=1).strip()
