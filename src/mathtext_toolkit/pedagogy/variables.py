"""
Module: pedagogy.variables

Purpose:
    Give each single-letter variable one color across a whole solution,
    so *x* reads the same in every step. Italic variables are wrapped in
    color tags; text already inside a color tag is never touched.

Key Functions:
    - extract_single_letter_vars(): Italic single letters in order
    - build_var_color_map(): Letter -> palette color, cycling
    - apply_var_colors(): Wrap italic variables in their color tags

Used By:
    - formatter.solution
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from mathtext_toolkit.core.models.colors import COLOR_TAG_ALTERNATION, HighlightColor
from mathtext_toolkit.formatter.masking import MaskArena

VAR_COLORS: tuple[HighlightColor, ...] = (
    HighlightColor.BLUE,
    HighlightColor.GREEN,
    HighlightColor.ORANGE,
    HighlightColor.PURPLE,
)

# Usually the article and the pronoun, not variables.
_SKIPPED_LETTERS = frozenset({"a", "i"})

_ITALIC_LETTER = re.compile(r"(?<![\w*])\*([a-zA-Z])\*")
_COLOR_TAG = re.compile(rf"\[(?:{COLOR_TAG_ALTERNATION}):[^\]]*\]", re.IGNORECASE)


def extract_single_letter_vars(text: str) -> list[str]:
    """
    Unique italic single-letter variables in first-seen order.

    Example:
        >>> extract_single_letter_vars("*x* + *y* + *x* = *z*")
        ['x', 'y', 'z']
    """
    found: list[str] = []
    for match in _ITALIC_LETTER.finditer(text or ""):
        letter = match.group(1)
        if letter in _SKIPPED_LETTERS or letter in found:
            continue
        found.append(letter)
    return found


def build_var_color_map(texts: str | Iterable[str]) -> dict[str, HighlightColor]:
    """
    Assign palette colors to variables in order of appearance.

    Accepts one text or many (e.g. every field of a solution); colors
    cycle when there are more variables than palette entries.
    """
    if isinstance(texts, str):
        texts = [texts]

    color_map: dict[str, HighlightColor] = {}
    for text in texts:
        for letter in extract_single_letter_vars(text):
            if letter not in color_map:
                color_map[letter] = VAR_COLORS[len(color_map) % len(VAR_COLORS)]
    return color_map


def apply_var_colors(text: str, color_map: Mapping[str, HighlightColor | str]) -> str:
    """
    Wrap italic variables with their color: *x* -> [blue:*x*].

    Existing color tags are masked first, so a variable that already has a
    color keeps it and tags never nest.
    """
    if not text or not color_map:
        return text

    arena = MaskArena()
    masked = arena.mask(_COLOR_TAG, text)

    def wrap(m: re.Match[str]) -> str:
        color = color_map.get(m.group(1))
        if color is None:
            return m.group(0)
        return f"[{HighlightColor(color).value}:{m.group(0)}]"

    return arena.unmask(_ITALIC_LETTER.sub(wrap, masked))
