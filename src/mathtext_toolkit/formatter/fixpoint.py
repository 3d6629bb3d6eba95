"""
Module: formatter.fixpoint

Purpose:
    Bounded "apply until the text stops changing" loop. The cap is part of
    the contract: on pathological input the loop stops after
    `max_iterations` passes and returns the last result.

Key Functions:
    - run_until_stable: Apply a rewrite repeatedly with an iteration cap

Used By:
    - formatter.delimiters.repair_color_tags
    - formatter.line_join.join_until_stable
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

CapCallback = Callable[[str, int], None]


def run_until_stable(
    rewrite: Callable[[str], str],
    text: str,
    *,
    max_iterations: int,
    name: str,
    on_cap: Optional[CapCallback] = None,
) -> str:
    """
    Apply rewrite until it returns its input unchanged.

    Args:
        rewrite: Pure text-to-text function
        text: Starting text
        max_iterations: Maximum number of rewrite passes
        name: Loop name for logs and diagnostics
        on_cap: Called with (name, max_iterations) when the cap is hit

    Returns:
        The stable text, or the result of the last pass when capped
    """
    current = text
    for _ in range(max_iterations):
        updated = rewrite(current)
        if updated == current:
            return current
        current = updated

    logger.warning(f"{name} hit iteration cap ({max_iterations}); returning last result")
    if on_cap is not None:
        on_cap(name, max_iterations)
    return current
