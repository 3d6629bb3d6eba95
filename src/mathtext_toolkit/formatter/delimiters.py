"""
Module: formatter.delimiters

Purpose:
    Stage 1 of canonicalization. Collapses every line-break variant to
    "\\n" and removes line breaks that fall strictly inside an open (),
    {} or [] group, so an expression the model wrapped mid-fraction or
    mid-tag comes back together.

Key Functions:
    - normalize_line_breaks(): CRLF / CR / U+2028 / U+2029 -> "\\n"
    - remove_newlines_inside_delimiters(): Depth-tracking newline removal
    - has_unbalanced_delimiters(): Any group left open at end of text
    - repair_color_tags(): Bounded repair of newlines inside color tags

Dependencies:
    - core.models.colors: Tag names for the repair pattern
    - formatter.fixpoint: Iteration cap

Used By:
    - formatter.pipeline
    - formatter.line_join: Incomplete-line test
    - formatter.finalizer: Re-applied after breaks are released
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from mathtext_toolkit.core.models.colors import COLOR_TAG_ALTERNATION

from .fixpoint import CapCallback, run_until_stable

logger = logging.getLogger(__name__)

_LINE_BREAKS = re.compile(r"\r\n|\r|\u2028|\u2029")
_HORIZONTAL_SPACE = " \t"

_OPEN_TO_SLOT = {"(": 0, "{": 1, "[": 2}
_CLOSE_TO_SLOT = {")": 0, "}": 1, "]": 2}

_NEWLINE_IN_COLOR_TAG = re.compile(
    rf"(\[(?:{COLOR_TAG_ALTERNATION}):[^\]\n]*?)[ \t]*\n[ \t]*(?=[^\[\]\n]*\])",
    re.IGNORECASE,
)
_NEWLINE_IN_BRACES = re.compile(r"(\{[^{}\n]*?)[ \t]*\n[ \t]*(?=[^{}\n]*\})")


def normalize_line_breaks(text: str) -> str:
    """Convert CRLF, CR and Unicode line/paragraph separators to "\\n"."""
    return _LINE_BREAKS.sub("\n", text)


def _depth_scan(text: str) -> list[int]:
    """Final (parens, braces, brackets) depths, each clamped at zero."""
    depths = [0, 0, 0]
    for ch in text:
        if ch in _OPEN_TO_SLOT:
            depths[_OPEN_TO_SLOT[ch]] += 1
        elif ch in _CLOSE_TO_SLOT:
            slot = _CLOSE_TO_SLOT[ch]
            depths[slot] = max(0, depths[slot] - 1)
    return depths


def has_unbalanced_delimiters(text: str) -> bool:
    """True when some (, { or [ is still open at the end of text."""
    return any(_depth_scan(text))


def remove_newlines_inside_delimiters(text: str) -> str:
    """
    Replace newlines inside open delimiters with a single space.

    Single left-to-right scan with three independent depth counters. A
    newline seen while any counter is positive becomes one space (none if
    the output already ends in a space or tab) and the horizontal
    whitespace after it is skipped. Counters never go negative, so a stray
    closing delimiter cannot corrupt the rest of the scan.

    Example:
        >>> remove_newlines_inside_delimiters("{3/\\n   4} + (x\\n+ 1)")
        '{3/ 4} + (x + 1)'
    """
    depths = [0, 0, 0]
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _OPEN_TO_SLOT:
            depths[_OPEN_TO_SLOT[ch]] += 1
        elif ch in _CLOSE_TO_SLOT:
            slot = _CLOSE_TO_SLOT[ch]
            depths[slot] = max(0, depths[slot] - 1)
        elif ch == "\n" and any(depths):
            if not out or out[-1] not in _HORIZONTAL_SPACE:
                out.append(" ")
            i += 1
            while i < n and text[i] in _HORIZONTAL_SPACE:
                i += 1
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _join_tag_newlines(text: str) -> str:
    text = _NEWLINE_IN_COLOR_TAG.sub(r"\1 ", text)
    return _NEWLINE_IN_BRACES.sub(r"\1 ", text)


def repair_color_tags(
    text: str,
    *,
    max_iterations: int = 20,
    on_cap: Optional[CapCallback] = None,
) -> str:
    """
    Join newlines that split a `[color:...]` tag or a `{...}` group.

    Each pass removes one newline per tag, so the rewrite is repeated until
    stable, bounded by max_iterations. Only a newline whose tag closes on
    the following line is joined.
    """
    return run_until_stable(
        _join_tag_newlines,
        text,
        max_iterations=max_iterations,
        name="color_tag_repair",
        on_cap=on_cap,
    )
