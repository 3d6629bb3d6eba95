"""
Module: formatter.finalizer

Purpose:
    Stage 7 of canonicalization and the only place CanonicalText is
    built. Owns the closed set of reserved patterns: the private-use keys
    and break sentinel used by this pipeline, plus the marker spellings
    older formatters leaked into stored content.

    A reserved pattern reaching this stage is a pipeline bug. In strict
    mode it raises ContractViolation; in lenient mode it is stripped and
    recorded as a diagnostic.

Key Functions:
    - scrub_input(): Remove reserved patterns from raw input
    - find_leaks(): Reserved patterns present in text
    - strip_internal_artifacts(): Remove every reserved pattern
    - collapse_whitespace(): Apply a mode's newline policy
    - finalize(): Release breaks, guard leaks, collapse, seal

Key Classes:
    - ContractViolation: Raised in strict mode when a sentinel leaks

Used By:
    - formatter.pipeline
    - formatter.content_kind: Code fields
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from mathtext_toolkit.core.models.canonical import CanonicalText, RenderMode, Strictness

from .delimiters import remove_newlines_inside_delimiters
from .diagnostics import DiagnosticsCollector
from .masking import BREAK_SENTINEL, MASK_KEY, RESERVED_CHARS
from .segmenter import release_breaks

logger = logging.getLogger(__name__)

_EXCERPT_RADIUS = 30

# Name -> pattern. Pipeline sentinels first, then legacy marker spellings.
RESERVED_PATTERNS: dict[str, re.Pattern[str]] = {
    "mask_key": MASK_KEY,
    "break_sentinel": re.compile(re.escape(BREAK_SENTINEL)),
    "reserved_char": RESERVED_CHARS,
    "IMASK": re.compile(r"\bIMASK\d+IMASK\b"),
    "MASK": re.compile(r"\bMASK\d+\b"),
    "_MASK": re.compile(r"\b_MASK\d+_?"),
    "PLACEHOLDER": re.compile(r"\bPLACEHOLDER[_\d]+\b"),
    "XXIMAGEPROTECTED": re.compile(r"XXIMAGEPROTECTED\d*XX"),
    "PROTECTED": re.compile(r"〔PROTECTED\d+〕"),
    "LIST_BREAK": re.compile(r"\bLIST_BREAK\b"),
    "STEP": re.compile(r"⟪STEP⟫"),
    "ITALIC": re.compile(r"<<ITALIC_\d+>>"),
    "FILE_URL": re.compile(r"__FILE_URL_\d+__"),
}

_HORIZONTAL_RUN = re.compile(r"[ \t]+")
_ANY_WHITESPACE = re.compile(r"\s+")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


class ContractViolation(Exception):
    """Raised in strict mode when a reserved pattern survives to the output."""

    def __init__(self, pattern: str, context: str = "", excerpt: str = ""):
        where = context or "unknown context"
        super().__init__(f"Reserved pattern {pattern!r} leaked into output ({where}): {excerpt!r}")
        self.pattern = pattern
        self.context = context
        self.excerpt = excerpt


def _excerpt(text: str, match: re.Match[str]) -> str:
    start = max(0, match.start() - _EXCERPT_RADIUS)
    return text[start:match.end() + _EXCERPT_RADIUS]


def find_leaks(text: str) -> list[tuple[str, str]]:
    """
    Find reserved patterns in text.

    Returns:
        (pattern name, excerpt) for the first hit of each pattern present
    """
    leaks: list[tuple[str, str]] = []
    for name, pattern in RESERVED_PATTERNS.items():
        match = pattern.search(text)
        if match:
            leaks.append((name, _excerpt(text, match)))
    return leaks


def strip_internal_artifacts(text: str) -> str:
    """
    Remove every reserved pattern and the double spaces left behind.

    Example:
        >>> strip_internal_artifacts("text IMASK0IMASK more MASK123 end")
        'text more end'
    """
    for pattern in RESERVED_PATTERNS.values():
        text = pattern.sub("", text)
    return _HORIZONTAL_RUN.sub(" ", text)


def scrub_input(
    text: str,
    *,
    context: str = "",
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> str:
    """
    Remove reserved patterns from raw input before any stage runs.

    Input that already contains a marker (content stored by an older
    formatter, or a stray private-use character) is sanitized here so it
    can never collide with this call's own keys. This is never a contract
    violation.
    """
    leaks = find_leaks(text)
    if not leaks:
        return text
    for name, excerpt in leaks:
        logger.debug(f"Scrubbing reserved pattern {name} from input ({context})")
        if diagnostics is not None:
            diagnostics.add_scrubbed_input(context, name, excerpt)
    return strip_internal_artifacts(text)


def collapse_whitespace(text: str, mode: RenderMode) -> str:
    """
    Apply the newline policy of a render mode.

    TITLE and PROSE turn every whitespace run into one space. EQUATION
    collapses spaces within lines, trims each line and keeps at most one
    blank line between paragraphs.
    """
    if not mode.keeps_line_breaks:
        return _ANY_WHITESPACE.sub(" ", text).strip()

    lines = [_HORIZONTAL_RUN.sub(" ", line).strip() for line in text.split("\n")]
    return _EXCESS_NEWLINES.sub("\n\n", "\n".join(lines)).strip()


def finalize(
    text: str,
    mode: RenderMode,
    *,
    strictness: Strictness = Strictness.LENIENT,
    context: str = "",
    diagnostics: Optional[DiagnosticsCollector] = None,
    preserve_layout: bool = False,
) -> CanonicalText:
    """
    Turn pipeline output into CanonicalText.

    Steps: release break sentinels, drop newlines the breaks placed inside
    open delimiters, guard against leaked reserved patterns, then collapse
    whitespace for the mode.

    Args:
        text: Output of stages 1-6
        mode: Render mode whose newline policy applies
        strictness: STRICT raises on a leak, LENIENT strips it
        context: Caller location named in errors and diagnostics
        diagnostics: Optional collector for lenient-mode issues
        preserve_layout: Keep every newline and space as-is (code fields)

    Raises:
        ContractViolation: strict mode only, when a reserved pattern leaked
    """
    text = release_breaks(text)
    if mode.keeps_line_breaks and not preserve_layout:
        text = remove_newlines_inside_delimiters(text)

    leaks = find_leaks(text)
    if leaks:
        name, excerpt = leaks[0]
        if strictness is Strictness.STRICT:
            raise ContractViolation(name, context, excerpt)
        for name, excerpt in leaks:
            logger.warning(f"Reserved pattern {name} leaked into output ({context or 'no context'})")
            if diagnostics is not None:
                diagnostics.add_leaked_sentinel(context, name, excerpt)
        text = strip_internal_artifacts(text)

    if not preserve_layout:
        text = collapse_whitespace(text, mode)
    return CanonicalText(text)
