"""
Module: tokenizer.parser

Purpose:
    Stage 8: turn one line of canonical text into typed inline elements.
    A single left-to-right scan tries each production at the current
    position in priority order; characters no production claims collect
    in a text buffer that is flushed when a production fires.

    Priority: italic, image, arrow, fraction, highlight, underline.

Key Functions:
    - tokenize_line(): One line -> list[InlineElement]
    - tokenize(): Multi-line text -> one element list per line

Dependencies:
    - core.models.elements: Element types
    - formatter.config: Italic and script windows

Used By:
    - Renderers (external)
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from mathtext_toolkit.common.vocabulary import ARROW_PATTERN, IMAGE_REFERENCE
from mathtext_toolkit.core.models.colors import COLOR_TAG_ALTERNATION, HighlightColor
from mathtext_toolkit.core.models.elements import (
    Arrow,
    Fraction,
    Highlighted,
    Image,
    InlineElement,
    Italic,
    Text,
)
from mathtext_toolkit.formatter.config import DEFAULT_CONFIG, FormatterConfig
from mathtext_toolkit.formatter.fractions import DIVISION_SLASH

logger = logging.getLogger(__name__)

_COLOR_TAG = re.compile(rf"\[(?:{COLOR_TAG_ALTERNATION}):([^\]]+)\]", re.IGNORECASE)
_ALPHANUMERIC = re.compile(r"[a-zA-Z0-9]")
_IDENTIFIER = re.compile(r"[a-zA-Z][a-zA-Z0-9_]*")
# Letter written directly after a fraction, with any attached scripts.
_ATTACHED_LETTER = re.compile(r"[a-zA-Z](?:_[^_\s]+_|\^[^^\s]+\^)*(?![a-zA-Z])")


class _LineScanner:
    """Single-pass scanner over one line; see tokenize_line."""

    def __init__(self, line: str, config: FormatterConfig):
        self.line = line
        self.pos = 0
        self.buffer = ""
        self.elements: list[InlineElement] = []
        self.italic_window = config.thresholds.italic_max_length
        self.script_window = config.thresholds.script_max_length

    # ─────────────────────────────────────────────────────────────────────
    # Buffer
    # ─────────────────────────────────────────────────────────────────────

    def flush(self) -> None:
        if self.buffer:
            self.elements.append(Text(self.buffer))
            self.buffer = ""

    def emit(self, element: InlineElement, end: int) -> bool:
        self.flush()
        self.elements.append(element)
        self.pos = end
        return True

    def literal(self, end: int) -> bool:
        self.buffer += self.line[self.pos:end]
        self.pos = end
        return True

    # ─────────────────────────────────────────────────────────────────────
    # Productions
    # ─────────────────────────────────────────────────────────────────────

    def italic(self) -> bool:
        line, start = self.line, self.pos
        if line[start] != "*":
            return False
        close = line.find("*", start + 1)
        if close == -1 or close - start > self.italic_window:
            return False
        content = line[start + 1:close]
        if not _IDENTIFIER.fullmatch(content):
            return False

        end = close + 1
        while end < len(line) and line[end] in "_^":
            script_close = line.find(line[end], end + 1)
            if script_close == -1 or script_close - end > self.script_window or script_close == end + 1:
                break
            content += line[end:script_close + 1]
            end = script_close + 1
        return self.emit(Italic(content), end)

    def image(self) -> bool:
        match = IMAGE_REFERENCE.match(self.line, self.pos)
        if not match:
            return False
        description, url = match.group(1).strip(), match.group(2).strip()
        if "file:" in url:
            url = url.replace(DIVISION_SLASH, "/")
        return self.emit(Image(url=url, description=description), match.end())

    def arrow(self) -> bool:
        match = ARROW_PATTERN.match(self.line, self.pos)
        if not match:
            return False
        return self.emit(Arrow(), match.end())

    def fraction(self) -> bool:
        line, start = self.line, self.pos
        if line[start] != "{":
            return False
        close = line.find("}", start)
        if close == -1:
            return False

        content = line[start + 1:close]
        slash = content.find("/")
        if "{" in content or slash == -1:
            return self.literal(close + 1)

        numerator = _COLOR_TAG.sub(r"\1", content[:slash]).strip()
        denominator = _COLOR_TAG.sub(r"\1", content[slash + 1:]).strip()
        if not numerator or not denominator:
            logger.debug(f"Malformed fraction kept as text: {line[start:close + 1]!r}")
            return self.literal(close + 1)
        return self.emit(Fraction(numerator, denominator), close + 1)

    def highlight(self) -> bool:
        line, start = self.line, self.pos
        if line[start] != "[":
            return False
        close = line.find("]", start)
        if close == -1:
            return False

        body = line[start + 1:close]
        colon = body.find(":")
        if colon == -1:
            return self.literal(close + 1)
        color = HighlightColor.from_name(body[:colon].strip())
        return self.emit(Highlighted(body[colon + 1:].strip(), color=color), close + 1)

    def underline(self) -> bool:
        line, start = self.line, self.pos
        if line[start] != "_":
            return False
        close = line.find("_", start + 1)
        if close == -1 or close == start + 1:
            return False

        before = line[start - 1] if start > 0 else " "
        after = line[close + 1] if close + 1 < len(line) else " "
        if _ALPHANUMERIC.match(before) or _ALPHANUMERIC.match(after):
            return False
        return self.emit(Highlighted(line[start + 1:close], underline=True), close + 1)

    def run(self) -> list[InlineElement]:
        productions = (self.italic, self.image, self.arrow, self.fraction, self.highlight, self.underline)
        while self.pos < len(self.line):
            if not any(production() for production in productions):
                self.buffer += self.line[self.pos]
                self.pos += 1
        self.flush()
        return self.elements


# ─────────────────────────────────────────────────────────────────────────────
# Post-pass
# ─────────────────────────────────────────────────────────────────────────────

def _merge_attached_letters(elements: list[InlineElement]) -> list[InlineElement]:
    """
    Keep `{3/4}y` together: a fraction directly followed by one letter.

    Fires only when the text after the fraction starts with the letter (no
    whitespace); the letter and its scripts move into Fraction.attached.
    """
    merged: list[InlineElement] = []
    i = 0
    while i < len(elements):
        current = elements[i]
        nxt = elements[i + 1] if i + 1 < len(elements) else None
        if isinstance(current, Fraction) and not current.attached and isinstance(nxt, Text):
            match = _ATTACHED_LETTER.match(nxt.content)
            if match:
                merged.append(Fraction(current.numerator, current.denominator, attached=match.group(0)))
                rest = nxt.content[match.end():]
                if rest:
                    merged.append(Text(rest))
                i += 2
                continue
        merged.append(current)
        i += 1
    return merged


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def tokenize_line(line: str, config: Optional[FormatterConfig] = None) -> list[InlineElement]:
    """
    Tokenize one line of canonical text.

    Args:
        line: A single line (no newlines) of CanonicalText
        config: Supplies the italic and script windows

    Returns:
        Elements in render order

    Example:
        >>> tokenize_line("The slope is {3/4}")
        [Text(content='The slope is '), Fraction(numerator='3', denominator='4', attached='')]
    """
    if not line:
        return []
    elements = _LineScanner(line, config or DEFAULT_CONFIG).run()
    return _merge_attached_letters(elements)


def tokenize(text: str, config: Optional[FormatterConfig] = None) -> list[list[InlineElement]]:
    """Tokenize each line of multi-line canonical text; blank lines give []."""
    return [tokenize_line(line, config) for line in (text or "").split("\n")]
