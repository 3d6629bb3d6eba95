"""
Tests for formatter.segmenter

Test Coverage:
- segment: List markers, step verbs, exemptions
- release_breaks / repair_marker_underscores
"""
from mathtext_toolkit.formatter.masking import BREAK_SENTINEL
from mathtext_toolkit.formatter.segmenter import release_breaks, repair_marker_underscores, segment


class TestSegment:
    """Tests for break insertion."""

    def test_segment_when_long_prefix_before_marker_then_break(self):
        """A later list marker after enough content breaks."""
        text = "A. The first option is long B. The second option"

        result = segment(text, min_prefix=20)

        assert result == f"A. The first option is long{BREAK_SENTINEL}B. The second option"
        assert release_breaks(result) == "A. The first option is long\n\nB. The second option"

    def test_segment_when_short_prefix_then_no_break(self):
        """Short inline option lists stay on one line."""
        assert segment("A. 5 B. 6", min_prefix=20) == "A. 5 B. 6"

    def test_segment_when_step_verb_then_break(self):
        """Capitalized step verbs start a new paragraph."""
        result = release_breaks(segment("Start with 2x = 10 Divide by 2"))

        assert result == "Start with 2x = 10\n\nDivide by 2"

    def test_segment_when_verb_after_colon_or_marker_then_no_break(self):
        """A verb belonging to a label or list item stays inline."""
        assert segment("Step 1: Add 5") == "Step 1: Add 5"
        assert segment("A. Add 5") == "A. Add 5"

    def test_segment_when_lowercase_verb_then_no_break(self):
        """Step verbs are matched case-sensitively."""
        assert segment("then add 5 to both sides") == "then add 5 to both sides"

    def test_segment_when_verb_inside_image_then_untouched(self):
        """Image references are masked during segmentation."""
        text = "[IMAGE: Add a line](graph.png)"

        assert segment(text) == text


class TestMarkerRepair:
    """Tests for repair_marker_underscores."""

    def test_repair_when_underscore_and_missing_space_then_fixed(self):
        """B_. becomes B. and B.Second becomes B. Second."""
        assert repair_marker_underscores("A_. first B.Second") == "A. first B. Second"
