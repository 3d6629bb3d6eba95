"""
Module: formatter.masking

Purpose:
    Arena for temporarily hiding substrings from rewrite rules. A stage
    masks what must survive untouched (italic variables, image references,
    file URIs), rewrites the rest, then restores the originals.

    Keys are built only from private-use code points (U+E000 block). The
    pipeline scrubs that block from every raw input before masking, so a
    key can never collide with input text. No ASCII rewrite rule can match
    inside a key.

Key Classes:
    - MaskArena: Ordered store of originals with counter-derived keys

Key Constants:
    - BREAK_SENTINEL: Paragraph-break marker used by the segmenter
    - RESERVED_CHARS: Regex matching any private-use code point we use

Used By:
    - formatter.notation, formatter.fractions, formatter.segmenter
    - formatter.pipeline: Pipeline-wide image/URI protection
    - pedagogy.variables: Protects existing color tags
"""

from __future__ import annotations

import logging
import re
from typing import Pattern

logger = logging.getLogger(__name__)

KEY_OPEN = "\ue000"
KEY_CLOSE = "\ue001"
BREAK_SENTINEL = "\ue002"
_DIGIT_BASE = 0xE010  # U+E010..U+E019 encode the digits 0-9

RESERVED_CHARS = re.compile("[\ue000-\ue0ff]")
MASK_KEY = re.compile("\ue000[\ue010-\ue019]+\ue001")


def _encode_index(index: int) -> str:
    return "".join(chr(_DIGIT_BASE + int(d)) for d in str(index))


class MaskArena:
    """
    Bijective table from unique keys to original substrings.

    Scoped to one pipeline call. Entries are never reused: the counter only
    grows, so two identical originals still get distinct keys. Stages
    sharing an arena restore only their own entries by passing the mark
    taken before masking.

    Example:
        >>> arena = MaskArena()
        >>> mark = arena.mark()
        >>> masked = arena.mask(re.compile(r"\\*x\\*"), "2*x*")
        >>> masked == "2" + arena.key_for(0)
        True
        >>> arena.unmask(masked, since=mark)
        '2*x*'
    """

    def __init__(self):
        self._originals: list[str] = []

    def __len__(self) -> int:
        return len(self._originals)

    # ─────────────────────────────────────────────────────────────────────────
    # Masking
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def key_for(index: int) -> str:
        """Key for the entry at index."""
        return f"{KEY_OPEN}{_encode_index(index)}{KEY_CLOSE}"

    def mark(self) -> int:
        """Current counter value; pass to unmask(since=...) later."""
        return len(self._originals)

    def store(self, original: str) -> str:
        """Store one original substring and return its key."""
        key = self.key_for(len(self._originals))
        self._originals.append(original)
        return key

    def mask(self, pattern: Pattern[str], text: str) -> str:
        """Replace every match of pattern with a fresh key."""
        return pattern.sub(lambda m: self.store(m.group(0)), text)

    # ─────────────────────────────────────────────────────────────────────────
    # Restoring
    # ─────────────────────────────────────────────────────────────────────────

    def unmask(self, text: str, since: int = 0) -> str:
        """
        Restore entries created at or after `since`.

        Later entries are restored first so an original that contains an
        earlier key is expanded before that key is looked up.
        """
        for index in range(len(self._originals) - 1, since - 1, -1):
            key = self.key_for(index)
            if key in text:
                text = text.replace(key, self._originals[index])
            else:
                logger.debug(f"Mask entry {index} no longer present in text")
        return text

    def has_keys(self, text: str) -> bool:
        """True if any arena key is still present in text."""
        return MASK_KEY.search(text) is not None
