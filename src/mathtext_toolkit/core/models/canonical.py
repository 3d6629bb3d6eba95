"""
Module: canonical

Purpose:
    Rendering modes, strictness levels and the CanonicalText type that
    crosses the boundary between the formatter and its consumers.

Key Classes:
    - RenderMode: title / prose / equation newline policies
    - Strictness: strict (raise on leaked sentinels) or lenient (sanitize)
    - ContentKind: math / prose / list / code routing for solution fields
    - CanonicalText: str subclass produced only by the finalizer

Dependencies:
    - enum (std)

Used By:
    - formatter.finalizer: Constructs CanonicalText
    - formatter.pipeline: Mode dispatch
    - formatter.content_kind: Content routing
"""

from __future__ import annotations

from enum import Enum


class RenderMode(str, Enum):
    """Newline policy requested by the caller."""

    TITLE = "title"  # every whitespace run becomes one space
    PROSE = "prose"  # newlines become spaces
    EQUATION = "equation"  # structural breaks kept, broken expressions repaired

    def __str__(self) -> str:
        return self.value

    @property
    def keeps_line_breaks(self) -> bool:
        return self is RenderMode.EQUATION


class Strictness(str, Enum):
    """How the finalizer reacts to a reserved sentinel in its output."""

    STRICT = "strict"
    LENIENT = "lenient"

    def __str__(self) -> str:
        return self.value


class ContentKind(str, Enum):
    """Broad shape of a text field, used to pick a formatting route."""

    MATH = "math"
    PROSE = "prose"
    LIST = "list"
    CODE = "code"

    def __str__(self) -> str:
        return self.value


class CanonicalText(str):
    """
    Text that has passed through the finalizer.

    Guarantees, by construction:
        - no reserved sentinel pattern
        - no newline strictly inside an open (), [] or {} delimiter
        - the newline policy of the mode it was produced for

    Only `formatter.finalizer.finalize` should construct instances. Since
    the type is a plain str subclass, any str operation returns a plain str,
    which drops the guarantee as intended.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"CanonicalText({str.__repr__(self)})"
