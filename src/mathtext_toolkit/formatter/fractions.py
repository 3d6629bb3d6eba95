"""
Module: formatter.fractions

Purpose:
    Stage 4 of canonicalization. Every fraction spelling becomes the one
    bracketed form `{numerator/denominator}` the tokenizer renders as a
    stacked fraction, and explicit "×" is inserted where a fraction sits
    directly against a number or a parenthesis.

    Two things must never be read as fractions: alphabetic `word/word`
    ratios ("rise/run"), whose slash becomes U+2215 DIVISION SLASH, and
    local file URIs, which are masked while the rules run.

Key Functions:
    - normalize_fraction_forms(): Unicode, parenthesized and bare fractions
    - normalize_fraction_spacing(): `{ 3 / 4 }` -> `{3/4}`
    - normalize_fraction_multiplication(): `{3/4}8` -> `{3/4} × 8`
    - normalize_adjacent_fractions(): `}` followed by a digit or `(`

Dependencies:
    - formatter.masking: File URI protection

Used By:
    - formatter.pipeline
"""

from __future__ import annotations

import re
from typing import Optional

from .masking import MaskArena

DIVISION_SLASH = "∕"

_FILE_URI = re.compile(r"file:///[^\s)\]]+")
# An explicitly braced {x/y} is already a fraction.
_WORD_SLASH_WORD = re.compile(r"(?<!\{)\b([a-zA-Z]+)/([a-zA-Z]+)\b(?!\})")

_UNICODE_FRACTIONS = {
    "½": "{1/2}", "⅓": "{1/3}", "⅔": "{2/3}", "¼": "{1/4}", "¾": "{3/4}",
    "⅕": "{1/5}", "⅖": "{2/5}", "⅗": "{3/5}", "⅘": "{4/5}", "⅙": "{1/6}",
    "⅚": "{5/6}", "⅛": "{1/8}", "⅜": "{3/8}", "⅝": "{5/8}", "⅞": "{7/8}",
}
_UNICODE_FRACTION = re.compile(f"[{''.join(_UNICODE_FRACTIONS)}]")

_PARENTHESIZED: tuple[re.Pattern[str], ...] = (
    re.compile(r"\((-?\d+)\)\s*/\s*\((\d+)\)"),  # (3)/(4)
    re.compile(r"\((\d+)\s*/\s*(\d+)\)"),  # (3/4)
    re.compile(r"\((-?\d*[a-zA-Z]+)\s*/\s*(\d+)\)"),  # (3x/4), (-x/2)
    re.compile(r"\((-\d+)\s*/\s*(\d+)\)"),  # (-3/4)
)
_BARE_FRACTION = re.compile(r"(^|[\s=(])(\d{1,2})/(\d{1,2})(?=[\s,)*a-zA-Z]|\.(?!\d)|$)")

_BRACED_FRACTION = re.compile(r"\{\s*([^{}/]+?)\s*/\s*([^{}]+?)\s*\}")

_NUMERIC = r"\{(\d+\s*/\s*\d+)\}"
_FRACTION_THEN_DIGIT = re.compile(_NUMERIC + r"[ \t]*(?=\d)")
_FRACTION_THEN_PAREN = re.compile(_NUMERIC + r"[ \t]*(?=\()")
_FRACTION_THEN_ASTERISK = re.compile(_NUMERIC + r"[ \t]*\*[ \t]*(?=[\d({\-])")

_BRACE_THEN_DIGIT = re.compile(r"\}(?=\d)")
_BRACE_THEN_PAREN = re.compile(r"\}(?=\()")


def normalize_fraction_forms(text: str, arena: Optional[MaskArena] = None) -> str:
    """
    Rewrite fraction spellings into `{n/d}`.

    Handles Unicode vulgar fractions, `(3/4)`, `(3x/4)`, `(-3/4)`,
    `(3)/(4)` and bare one- or two-digit fractions like `1/2` when they
    stand alone. Alphabetic ratios get a division slash so no later rule
    treats them as fractions; `file:///` URIs are restored verbatim.

    Example:
        >>> normalize_fraction_forms("(3/4) of ½ the rise/run")
        '{3/4} of {1/2} the rise∕run'
    """
    if not text:
        return text

    arena = arena if arena is not None else MaskArena()
    mark = arena.mark()
    text = arena.mask(_FILE_URI, text)

    text = _UNICODE_FRACTION.sub(lambda m: _UNICODE_FRACTIONS[m.group(0)], text)
    text = _WORD_SLASH_WORD.sub(rf"\1{DIVISION_SLASH}\2", text)
    for pattern in _PARENTHESIZED:
        text = pattern.sub(r"{\1/\2}", text)
    text = _BARE_FRACTION.sub(r"\1{\2/\3}", text)

    return arena.unmask(text, since=mark)


def normalize_fraction_spacing(text: str) -> str:
    """Trim whitespace inside bracketed fractions: `{ 3 / 4 }` -> `{3/4}`."""
    return _BRACED_FRACTION.sub(
        lambda m: "{" + m.group(1).strip() + "/" + m.group(2).strip() + "}", text
    )


def normalize_fraction_multiplication(text: str) -> str:
    """
    Insert "×" after a numeric fraction followed by a number, "(" or "*".

    A following letter is a coefficient (`{3/4}x`) and is left implicit.

    Example:
        >>> normalize_fraction_multiplication("{3/4}8 + {1/2}(x) + {2/3}y")
        '{3/4} × 8 + {1/2} × (x) + {2/3}y'
    """
    if "{" not in text:
        return text
    text = _FRACTION_THEN_DIGIT.sub(r"{\1} × ", text)
    text = _FRACTION_THEN_PAREN.sub(r"{\1} × ", text)
    return _FRACTION_THEN_ASTERISK.sub(r"{\1} × ", text)


def normalize_adjacent_fractions(text: str) -> str:
    """Insert "×" where a closing brace touches a digit or "(" with no space."""
    if "}" not in text:
        return text
    text = _BRACE_THEN_DIGIT.sub("} × ", text)
    return _BRACE_THEN_PAREN.sub("} × ", text)
