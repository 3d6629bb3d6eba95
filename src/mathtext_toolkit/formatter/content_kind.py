"""
Module: formatter.content_kind

Purpose:
    Route a solution field to the formatting it needs. Step fields hold a
    mix of equations, option lists, explanations and the occasional code
    snippet; only the first two want the full equation pipeline.

Key Functions:
    - detect_content_kind(): Guess math / prose / list / code
    - format_by_kind(): Canonicalize a field for its kind

Used By:
    - formatter.solution
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from mathtext_toolkit.core.models.canonical import CanonicalText, ContentKind, RenderMode

from .config import DEFAULT_CONFIG, FormatterConfig
from .delimiters import normalize_line_breaks
from .diagnostics import DiagnosticsCollector
from .finalizer import finalize, scrub_input
from .pipeline import canonicalize

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^\s*```", re.MULTILINE)
_CODE_LINE = re.compile(
    r"^\s*(?:(?:return|const|var|def|function|class|import|public|private|#include)\b.*"
    r"|.*;[ \t]*)$",
    re.MULTILINE,
)
_LIST_START = re.compile(r"^\s*(?:[A-Da-d][.)]|\([A-Da-d]\)|\d{1,2}[.)]|[-•*])\s+\S")
_MATH_SIGNAL = re.compile(r"=|\{[^{}\n]*/[^{}\n]*\}|\[[a-z]+:|\^")


def detect_content_kind(text: Optional[str]) -> ContentKind:
    """
    Guess the broad shape of a field.

    Code wins over everything (a fenced block, or any line that looks like a
    statement), then a list marker on the first line, then math markup.

    Example:
        >>> detect_content_kind("y = {1/2}x + 3")
        <ContentKind.MATH: 'math'>
    """
    if not text or not text.strip():
        return ContentKind.PROSE
    if _CODE_FENCE.search(text) or _CODE_LINE.search(text):
        return ContentKind.CODE
    first_line = text.strip().split("\n", 1)[0]
    if _LIST_START.match(first_line):
        return ContentKind.LIST
    if _MATH_SIGNAL.search(text):
        return ContentKind.MATH
    return ContentKind.PROSE


def format_by_kind(
    text: Optional[str],
    kind: ContentKind | str,
    *,
    config: Optional[FormatterConfig] = None,
    context: str = "",
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> CanonicalText:
    """
    Canonicalize a field according to its content kind.

    - math, list: equation mode (structural breaks kept)
    - prose: prose mode
    - code: whitespace kept verbatim; only line breaks are normalized and
      reserved patterns removed, so newlines inside braces survive
    """
    kind = ContentKind(kind)
    config = config or DEFAULT_CONFIG

    if kind is ContentKind.CODE:
        text = scrub_input(normalize_line_breaks(text or ""), context=context, diagnostics=diagnostics)
        return finalize(
            text,
            RenderMode.EQUATION,
            strictness=config.strictness,
            context=context,
            diagnostics=diagnostics,
            preserve_layout=True,
        )

    mode = RenderMode.PROSE if kind is ContentKind.PROSE else RenderMode.EQUATION
    logger.debug(f"Formatting {context or 'field'} as {kind} ({mode} mode)")
    return canonicalize(text, mode, config=config, context=context, diagnostics=diagnostics)
