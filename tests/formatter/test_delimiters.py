"""
Tests for formatter.delimiters

Test Coverage:
- normalize_line_breaks: Line-break variants
- remove_newlines_inside_delimiters: Depth tracking and clamping
- has_unbalanced_delimiters
- repair_color_tags
"""
from mathtext_toolkit.formatter.delimiters import (
    has_unbalanced_delimiters,
    normalize_line_breaks,
    remove_newlines_inside_delimiters,
    repair_color_tags,
)


class TestLineBreaks:
    """Tests for line-break normalization."""

    def test_normalize_when_mixed_breaks_then_newlines(self):
        """CRLF, CR and Unicode separators all become \\n."""
        assert normalize_line_breaks("a\r\nb\rc\u2028d\u2029e") == "a\nb\nc\nd\ne"


class TestRemoveNewlinesInsideDelimiters:
    """Tests for delimiter-aware newline removal."""

    def test_remove_when_inside_groups_then_single_space(self):
        """Newlines inside {} and () become one space."""
        assert remove_newlines_inside_delimiters("{3/\n   4} + (x\n+ 1)") == "{3/ 4} + (x + 1)"

    def test_remove_when_outside_groups_then_kept(self):
        """Top-level newlines are structural."""
        assert remove_newlines_inside_delimiters("x = 1\ny = 2") == "x = 1\ny = 2"

    def test_remove_when_stray_closer_then_depth_clamped(self):
        """A stray closer cannot make later newlines look top-level or nested."""
        assert remove_newlines_inside_delimiters(") \n(a\nb)") == ") \n(a b)"

    def test_remove_when_blank_line_inside_group_then_one_space(self):
        """Several newlines in a row still give a single space."""
        assert remove_newlines_inside_delimiters("[red:a\n\nb]") == "[red:a b]"


class TestUnbalanced:
    """Tests for has_unbalanced_delimiters."""

    def test_unbalanced_when_open_group_then_true(self):
        """An unclosed opener is unbalanced."""
        assert has_unbalanced_delimiters("(x + 1")
        assert has_unbalanced_delimiters(")(")

    def test_unbalanced_when_closed_then_false(self):
        """Matched groups and stray closers alone are balanced."""
        assert not has_unbalanced_delimiters("{(x)}")
        assert not has_unbalanced_delimiters("x)")


class TestRepairColorTags:
    """Tests for color tag repair."""

    def test_repair_when_tag_split_then_joined(self):
        """A tag that closes on the next line is joined."""
        assert repair_color_tags("[red:x =\n5]") == "[red:x = 5]"

    def test_repair_when_not_a_color_tag_then_unchanged(self):
        """Ordinary brackets are left to the depth scan."""
        assert repair_color_tags("[note\nhere]") == "[note\nhere]"
