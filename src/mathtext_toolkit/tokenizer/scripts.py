"""
Module: tokenizer.scripts

Purpose:
    Split text carrying `_sub_` / `^sup^` markup into typed runs, and map
    runs to Unicode script characters for renderers that cannot shrink
    and shift glyphs themselves.

Key Functions:
    - split_script_notation(): "H_2_O" -> normal "H", subscript "2", normal "O"
    - to_unicode_script(): "2" as subscript -> "₂"

Key Classes:
    - ScriptRun: One run of text with its script kind
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

ScriptKind = Literal["normal", "subscript", "superscript"]

_SUBSCRIPT_CHARS = str.maketrans("0123456789+-=()", "₀₁₂₃₄₅₆₇₈₉₊₋₌₍₎")
_SUPERSCRIPT_CHARS = str.maketrans("0123456789+-=()n", "⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻⁼⁽⁾ⁿ")
_MARKERS: dict[str, ScriptKind] = {"_": "subscript", "^": "superscript"}


@dataclass(frozen=True, slots=True)
class ScriptRun:
    """A run of text rendered at one script level."""

    text: str
    kind: ScriptKind = "normal"

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "kind": self.kind}


def split_script_notation(text: str) -> list[ScriptRun]:
    """
    Split text into normal, subscript and superscript runs.

    A marker opens a script only when a matching closing marker follows
    with at least one character between them; otherwise it is literal.

    Example:
        >>> [(r.text, r.kind) for r in split_script_notation("x^2^ + H_2_O")]
        [('x', 'normal'), ('2', 'superscript'), (' + H', 'normal'), ('2', 'subscript'), ('O', 'normal')]
    """
    runs: list[ScriptRun] = []
    buffer = ""
    i = 0
    while i < len(text):
        marker = text[i]
        if marker in _MARKERS:
            close = text.find(marker, i + 1)
            if close > i + 1:
                if buffer:
                    runs.append(ScriptRun(buffer))
                    buffer = ""
                runs.append(ScriptRun(text[i + 1:close], _MARKERS[marker]))
                i = close + 1
                continue
        buffer += marker
        i += 1

    if buffer:
        runs.append(ScriptRun(buffer))
    return runs


def to_unicode_script(text: str, kind: ScriptKind) -> str:
    """Map digits and signs to Unicode script characters; others pass through."""
    if kind == "subscript":
        return text.translate(_SUBSCRIPT_CHARS)
    if kind == "superscript":
        return text.translate(_SUPERSCRIPT_CHARS)
    return text
