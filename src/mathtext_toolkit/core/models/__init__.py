"""
Core Models Package

Immutable, validated data models shared by every stage.

**DESIGN RATIONALE:**

Models are frozen dataclasses. This ensures:
1. No accidental mutation while a text moves through the pipeline
2. Safe to share between concurrent formatting calls
3. Elements and equations compare by value, so tests can assert on lists
"""

from .colors import HighlightColor
from .canonical import CanonicalText, ContentKind, RenderMode, Strictness
from .elements import Arrow, Fraction, Highlighted, Image, InlineElement, Italic, Text
from .equations import Equation, top_level_equals
from .steps import BothSidesOperation, StepAction, StepActionClassification
from .solutions import (
    FinalAnswer,
    FormattedSolution,
    FormattedStep,
    Solution,
    SolutionStep,
)

__all__ = [
    "HighlightColor",
    "CanonicalText",
    "ContentKind",
    "RenderMode",
    "Strictness",
    "Arrow",
    "Fraction",
    "Highlighted",
    "Image",
    "InlineElement",
    "Italic",
    "Text",
    "Equation",
    "top_level_equals",
    "BothSidesOperation",
    "StepAction",
    "StepActionClassification",
    "FinalAnswer",
    "FormattedSolution",
    "FormattedStep",
    "Solution",
    "SolutionStep",
]
