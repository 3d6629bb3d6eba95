"""Prose-line classifier used when a line yields no equation."""

from __future__ import annotations

from mathtext_toolkit.common.vocabulary import PROSE_PREFIXES


def is_prose_line(line: str) -> bool:
    """
    True for explanatory lines that should not become content rows.

    A line is prose when it introduces something (ends with ":") or opens
    with a connective or an instruction ("where", "since", "we ", "the ",
    "Add ", ...).

    Example:
        >>> is_prose_line("where x is the unknown")
        True
        >>> is_prose_line("x + 17")
        False
    """
    lowered = line.strip().lower()
    if not lowered:
        return True
    return lowered.endswith(":") or lowered.startswith(PROSE_PREFIXES)
