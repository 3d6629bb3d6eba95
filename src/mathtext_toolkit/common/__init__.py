"""Common constants shared across the toolkit."""

from __future__ import annotations

from .thresholds import DEFAULT_THRESHOLDS, HeuristicThresholds
from .vocabulary import (
    ARROW_GLYPHS,
    ARROW_PATTERN,
    STEP_VERBS,
    PROSE_PREFIXES,
)

__all__ = [
    # thresholds
    "DEFAULT_THRESHOLDS",
    "HeuristicThresholds",
    # vocabulary
    "ARROW_GLYPHS",
    "ARROW_PATTERN",
    "STEP_VERBS",
    "PROSE_PREFIXES",
]
