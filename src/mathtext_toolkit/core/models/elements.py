"""
Module: elements

Purpose:
    Typed inline elements produced by the tokenizer. A renderer lays these
    out in order without parsing markup again.

Key Classes:
    - Text: Plain run of characters
    - Fraction: Stacked numerator/denominator, optionally with an attached
      coefficient letter kept in the same visual unit
    - Highlighted: Colored and/or underlined span
    - Italic: Italic variable name (may include attached scripts)
    - Arrow: Transformation arrow
    - Image: Inline image reference

Dependencies:
    - dataclasses (std)
    - .colors.HighlightColor

Used By:
    - tokenizer.parser: Produces InlineElement lists
    - core.utils.serialization: Element (de)serialization
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union

from .colors import HighlightColor


@dataclass(frozen=True, slots=True)
class Text:
    """Plain text run."""

    content: str
    kind: ClassVar[str] = "text"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "content": self.content}


@dataclass(frozen=True, slots=True)
class Fraction:
    """
    Stacked fraction.

    Attributes:
        numerator: Text above the bar (color tags already stripped)
        denominator: Text below the bar
        attached: Letter (plus any attached script) written directly after
            the fraction, e.g. "y" in `{3/4}y`. Empty when none.

    Invariants:
        - numerator and denominator are non-empty after trimming
    """

    numerator: str
    denominator: str
    attached: str = ""
    kind: ClassVar[str] = "fraction"

    def __post_init__(self) -> None:
        if not self.numerator.strip():
            raise ValueError("Fraction numerator cannot be empty")
        if not self.denominator.strip():
            raise ValueError("Fraction denominator cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "type": self.kind,
            "numerator": self.numerator,
            "denominator": self.denominator,
        }
        if self.attached:
            d["attached"] = self.attached
        return d


@dataclass(frozen=True, slots=True)
class Highlighted:
    """Colored span, or an underlined emphasis span when underline is set."""

    content: str
    color: HighlightColor = HighlightColor.DEFAULT
    underline: bool = False
    kind: ClassVar[str] = "highlighted"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.kind, "content": self.content}
        if self.color is not HighlightColor.DEFAULT:
            d["color"] = self.color.value
        if self.underline:
            d["underline"] = True
        return d


@dataclass(frozen=True, slots=True)
class Italic:
    """Italic variable, e.g. `x` or `v_0_`."""

    content: str
    kind: ClassVar[str] = "italic"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "content": self.content}


@dataclass(frozen=True, slots=True)
class Arrow:
    """Transformation arrow between two expressions."""

    kind: ClassVar[str] = "arrow"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind}


@dataclass(frozen=True, slots=True)
class Image:
    """Inline image reference `[IMAGE: description](url)`."""

    url: str
    description: str = ""
    kind: ClassVar[str] = "image"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "url": self.url, "description": self.description}


InlineElement = Union[Text, Fraction, Highlighted, Italic, Arrow, Image]

ELEMENT_TYPES: dict[str, type] = {
    cls.kind: cls for cls in (Text, Fraction, Highlighted, Italic, Arrow, Image)
}
