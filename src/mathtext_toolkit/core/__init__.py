"""
Math Text Toolkit Core Package

Shared data models, the upstream payload schema and serialization helpers.
Every other subpackage depends on this one; it depends on nothing but
jsonschema.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses; stages return new values instead of mutating

2. **Canonical Text Is a Type**
   - `CanonicalText` is only built by the finalizer, so a consumer can tell
     formatted text apart from RawText

3. **Closed Palettes and Enums**
   - Colors, render modes, content kinds and step actions are enums with an
     explicit fallback member where input can be unknown
"""

from .models import (
    CanonicalText,
    ContentKind,
    Equation,
    HighlightColor,
    RenderMode,
    Solution,
    StepAction,
    Strictness,
)

__all__ = [
    "CanonicalText",
    "ContentKind",
    "Equation",
    "HighlightColor",
    "RenderMode",
    "Solution",
    "StepAction",
    "Strictness",
]
