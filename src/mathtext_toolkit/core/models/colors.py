"""
Module: colors

Purpose:
    Closed palette of highlight colors accepted in `[color:text]` tags.
    Unknown color names never fall through string comparisons; they map to
    the explicit DEFAULT member, which renders in the default foreground.

Key Classes:
    - HighlightColor: str Enum of palette colors with hex values

Dependencies:
    - enum (std)

Used By:
    - core.models.elements.Highlighted
    - tokenizer.parser: Color lookup for highlight tags
    - pedagogy.variables: Variable color assignment
    - formatter.delimiters: Color tag repair
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class HighlightColor(str, Enum):
    """
    Palette color for highlighted spans.

    The string value is the tag name used in markup (`[red:...]`).
    DEFAULT has no hex value; renderers use their foreground color.

    Example:
        >>> HighlightColor.from_name("Blue")
        <HighlightColor.BLUE: 'blue'>
        >>> HighlightColor.from_name("magenta") is HighlightColor.DEFAULT
        True
    """

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    ORANGE = "orange"
    PURPLE = "purple"
    YELLOW = "yellow"
    TEAL = "teal"
    INDIGO = "indigo"
    PINK = "pink"
    DEFAULT = "default"

    def __str__(self) -> str:
        return self.value

    @property
    def hex(self) -> Optional[str]:
        """Hex color for this member, or None for DEFAULT."""
        return _HEX_VALUES.get(self)

    @classmethod
    def from_name(cls, name: str) -> HighlightColor:
        """
        Resolve a tag name to a palette member.

        Args:
            name: Color name as written in markup (case-insensitive)

        Returns:
            Matching member, or DEFAULT when the name is not in the palette
        """
        key = name.strip().lower()
        for member in cls:
            if member.value == key and member is not cls.DEFAULT:
                return member
        return cls.DEFAULT

    @classmethod
    def tag_names(cls) -> tuple[str, ...]:
        """Names usable in `[color:text]` tags (excludes DEFAULT)."""
        return tuple(m.value for m in cls if m is not cls.DEFAULT)


_HEX_VALUES: dict[HighlightColor, str] = {
    HighlightColor.RED: "#ef4444",
    HighlightColor.BLUE: "#3b82f6",
    HighlightColor.GREEN: "#10b981",
    HighlightColor.ORANGE: "#f97316",
    HighlightColor.PURPLE: "#a855f7",
    HighlightColor.YELLOW: "#eab308",
    HighlightColor.TEAL: "#14b8a6",
    HighlightColor.INDIGO: "#6366f1",
    HighlightColor.PINK: "#ec4899",
}

# Alternation of tag names for regexes, e.g. r"\[(?:red|blue|...):"
COLOR_TAG_ALTERNATION = "|".join(HighlightColor.tag_names())
