"""Centralized threshold and magic number configuration.

This module contains the hardcoded windows, prefixes and caps used by the
formatting heuristics. Having these in one place makes tuning easier and
documents what each value guards against.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HeuristicThresholds:
    """Thresholds for the text normalization and parsing heuristics."""

    # Bounded rewrite loops (line join, color tag repair)
    max_iterations: int = 20  # Hard cap for every repeat-until-stable loop

    # List/step segmentation
    list_marker_min_prefix: int = 20  # Chars of prior content before a list marker breaks

    # Line joining
    new_equation_min_prefix: int = 2  # First "=" must sit beyond this index to start a new equation

    # Inline tokenizer windows
    italic_max_length: int = 10  # Max distance from opening to closing "*"
    script_max_length: int = 10  # Max distance from opening to closing "_" or "^"

    # Redundant answer cleanup
    redundant_prefix_min_length: int = 10  # Prose before ": [red:...]" must be at least this long

    # Two-column equation alignment on narrow layouts
    compact_left_max: int = 15
    compact_right_max: int = 25


DEFAULT_THRESHOLDS = HeuristicThresholds()
