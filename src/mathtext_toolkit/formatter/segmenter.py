"""
Module: formatter.segmenter

Purpose:
    Stage 6 of canonicalization. Multiple-choice options and step
    instructions often arrive run together on one line. A paragraph-break
    sentinel is inserted before each later list marker and before each
    step-instruction verb; the finalizer turns sentinels into blank lines
    at the very end, so nothing in between can re-join them.

    Rules:
    - List markers `B.`-`D.`, `B)`-`D)`, `(b)`-`(d)` and `N.`/`N)` for
      N >= 2 break only when at least `min_prefix` characters of content
      precede them on the line. The first marker of a list (`A.`, `(a)`,
      `1.`) opens the list inline.
    - Capitalized step verbs ("Add", "Subtract", ...) break after any
      character and whitespace, except right after a colon or a list
      marker, where the verb belongs to the label or item.

Key Functions:
    - segment(): Insert break sentinels
    - release_breaks(): Sentinels -> "\\n\\n" (finalizer only)
    - repair_marker_underscores(): `B_.` -> `B.`

Dependencies:
    - common.vocabulary: Step verbs, image reference pattern
    - formatter.masking: Sentinel and image masking

Used By:
    - formatter.pipeline
    - formatter.finalizer
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from mathtext_toolkit.common.vocabulary import IMAGE_REFERENCE, STEP_VERBS

from .masking import BREAK_SENTINEL, MaskArena

logger = logging.getLogger(__name__)

_LIST_MARKER = re.compile(
    r"[ \t]+(\([b-d]\)|[B-D][.)]|\d{1,2}[.)])(?=\s)"
)
_STEP_VERB = re.compile(
    r"(\S)\s+(?=(?:"
    + "|".join(re.escape(v) for v in sorted(STEP_VERBS, key=len, reverse=True))
    + r")\b)"
)
_ENDS_WITH_MARKER = re.compile(rf"(?:^|\s|{BREAK_SENTINEL})(?:\([A-Da-d]\)|[A-Da-d][.)]|\d{{1,2}}[.)])$")

_MARKER_UNDERSCORE = re.compile(r"\b([A-D])_+\.")
_MARKER_MISSING_SPACE = re.compile(r"(?<=\s)([A-D])\.(?=[A-Z][a-z])")


def repair_marker_underscores(text: str) -> str:
    """Fix list markers mangled by stray underscores or a missing space."""
    text = _MARKER_UNDERSCORE.sub(r"\1.", text)
    return _MARKER_MISSING_SPACE.sub(r"\1. ", text)


def _line_prefix(text: str, end: int) -> str:
    start = text.rfind("\n", 0, end) + 1
    return text[start:end]


def _is_first_marker(marker: str) -> bool:
    digits = marker.rstrip(".)")
    return digits.isdigit() and int(digits) < 2


def _list_break(m: re.Match[str], source: str, min_prefix: int) -> str:
    marker = m.group(1)
    if _is_first_marker(marker):
        return m.group(0)
    if len(_line_prefix(source, m.start()).strip()) < min_prefix:
        return m.group(0)
    logger.debug(f"List break before {marker!r}")
    return BREAK_SENTINEL + marker


def _step_break(m: re.Match[str], source: str) -> str:
    before = m.group(1)
    if before in (":", BREAK_SENTINEL):
        return m.group(0)
    if _ENDS_WITH_MARKER.search(_line_prefix(source, m.start() + 1)):
        return m.group(0)
    return before + BREAK_SENTINEL


def segment(text: str, min_prefix: int = 20, arena: Optional[MaskArena] = None) -> str:
    """
    Insert break sentinels before list markers and step verbs.

    Args:
        text: Text after line joining
        min_prefix: Characters of content required before a list marker
        arena: Shared arena for this pipeline call

    Returns:
        Text containing BREAK_SENTINEL where paragraph breaks belong
    """
    if not text:
        return text

    arena = arena if arena is not None else MaskArena()
    mark = arena.mark()
    masked = arena.mask(IMAGE_REFERENCE, text)

    listed = _LIST_MARKER.sub(lambda m: _list_break(m, masked, min_prefix), masked)
    stepped = _STEP_VERB.sub(lambda m: _step_break(m, listed), listed)
    return arena.unmask(stepped, since=mark)


def release_breaks(text: str) -> str:
    """Replace break sentinels with a blank line."""
    return text.replace(BREAK_SENTINEL, "\n\n")
