"""
Tests for formatter.masking and formatter.fixpoint

Test Coverage:
- MaskArena: Private-use keys, unique entries, scoped restore
- run_until_stable: Fixpoint and iteration cap
"""
import re

from mathtext_toolkit.formatter.fixpoint import run_until_stable
from mathtext_toolkit.formatter.masking import BREAK_SENTINEL, RESERVED_CHARS, MaskArena


class TestMaskArena:
    """Tests for MaskArena."""

    def test_key_for_when_built_then_only_private_use_chars(self):
        """Keys never contain characters a rewrite rule could match."""
        key = MaskArena.key_for(12)

        assert key == "\ue000\ue011\ue012\ue001"
        assert all(RESERVED_CHARS.match(ch) for ch in key)
        assert RESERVED_CHARS.match(BREAK_SENTINEL)

    def test_mask_when_identical_originals_then_distinct_keys(self):
        """Two equal matches still get two entries."""
        arena = MaskArena()

        masked = arena.mask(re.compile(r"\*x\*"), "*x* + *x*")

        assert masked == f"{arena.key_for(0)} + {arena.key_for(1)}"
        assert len(arena) == 2
        assert arena.has_keys(masked)

    def test_unmask_when_since_mark_then_earlier_entries_kept(self):
        """A stage restores only the entries it created."""
        arena = MaskArena()
        outer = arena.mask(re.compile(r"IMG"), "IMG and *y*")
        mark = arena.mark()
        inner = arena.mask(re.compile(r"\*y\*"), outer)

        restored = arena.unmask(inner, since=mark)

        assert restored == f"{arena.key_for(0)} and *y*"
        assert arena.unmask(restored) == "IMG and *y*"

    def test_unmask_when_nested_key_then_fully_restored(self):
        """Later entries are restored first, so nested keys expand."""
        arena = MaskArena()
        first = arena.store("*x*")
        second = arena.store(f"({first})")

        assert arena.unmask(f"2{second}") == "2(*x*)"
        assert not arena.has_keys(arena.unmask(f"2{second}"))


class TestRunUntilStable:
    """Tests for the bounded fixpoint loop."""

    def test_run_when_converges_then_stable_text(self):
        """Stops as soon as a pass changes nothing."""
        result = run_until_stable(
            lambda t: t.replace("  ", " "),
            "a    b",
            max_iterations=20,
            name="spaces",
        )

        assert result == "a b"

    def test_run_when_never_stable_then_capped_and_reported(self):
        """The cap returns the last result and fires the callback."""
        calls = []

        result = run_until_stable(
            lambda t: t + "x",
            "ab",
            max_iterations=3,
            name="grow",
            on_cap=lambda name, n: calls.append((name, n)),
        )

        assert result == "abxxx"
        assert calls == [("grow", 3)]
