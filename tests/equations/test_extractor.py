"""
Tests for equations.extractor and equations.prose

Test Coverage:
- extract_rows / extract_equations: Labels, chains, arrows, images, dedupe
- final_equation
- split_for_alignment: Normal and compact layouts
- is_prose_line
"""
import pytest

from mathtext_toolkit.equations.extractor import (
    EquationRow,
    extract_equations,
    extract_rows,
    final_equation,
    split_for_alignment,
)
from mathtext_toolkit.equations.prose import is_prose_line


def _texts(text):
    return [eq.text for eq in extract_equations(text)]


class TestExtractEquations:
    """Tests for equation extraction."""

    def test_extract_when_leading_label_then_label_removed(self):
        """Labels never end up in an equation side."""
        assert _texts("Left Side: 6x - 11 = x + 17") == ["6x - 11 = x + 17"]

    def test_extract_when_chain_then_consecutive_pairs(self):
        """a = b = c contributes a = b and b = c."""
        assert _texts("m = {150/3} = 50") == ["m = {150/3}", "{150/3} = 50"]

    def test_extract_when_arrow_then_segments_split(self):
        """Transformation arrows separate equations."""
        assert _texts("2x = 10 → x = 5") == ["2x = 10", "x = 5"]

    def test_extract_when_repeats_then_deduplicated_ignoring_spaces(self):
        """The same equation is reported once."""
        assert _texts("x = 5\nx=5") == ["x = 5"]

    def test_extract_when_line_stated_twice_then_folded(self):
        """x = 5 x = 5 is one statement."""
        assert _texts("x = 5 x = 5") == ["x = 5"]

    def test_extract_when_color_tag_then_unwrapped(self):
        """Highlighted equations are extracted without their tag."""
        assert _texts("[red:x = 5]") == ["x = 5"]

    def test_extract_when_image_then_only_following_equation_kept(self):
        """Content after an image is kept only when it holds an equation."""
        assert _texts("[IMAGE: graph](file:///g.png) y = 2x") == ["y = 2x"]
        assert extract_rows("[IMAGE: graph](file:///g.png) see above") == []

    def test_extract_when_no_equation_then_content_row_unless_prose(self):
        """Non-prose lines become content rows; prose is dropped."""
        rows = extract_rows("x + 17\nwhere x is the unknown")

        assert rows == [EquationRow(kind="content", text="x + 17")]

    def test_extract_when_empty_then_no_rows(self):
        """None and empty text give nothing."""
        assert extract_rows(None) == []
        assert extract_equations("") == []

    def test_final_equation_when_several_then_last(self):
        """The last equation is taken as the final one."""
        assert final_equation("2x = 10\nx = 5").text == "x = 5"
        assert final_equation("no equations here") is None


class TestSplitForAlignment:
    """Tests for split_for_alignment."""

    def test_split_when_chain_then_progression_on_right(self):
        """Normal layouts keep the whole chain on the right."""
        assert split_for_alignment("m = {150/3} = 50") == ("m", "{150/3} = 50")

    @pytest.mark.parametrize("text", [
        "m = {150/3} = 50",
        "averageSpeedOfTheTrain = 5",
        "x = √2",
    ])
    def test_split_when_compact_and_complex_then_none(self, text):
        """Compact layouts do not split chains, long sides or roots."""
        assert split_for_alignment(text, compact=True) is None

    def test_split_when_compact_and_short_then_split(self):
        """Short equations still split in compact layouts."""
        assert split_for_alignment("x = 5", compact=True) == ("x", "5")

    def test_split_when_no_equals_then_none(self):
        """Text without a split point is not split."""
        assert split_for_alignment("x + 1") is None


class TestIsProseLine:
    """Tests for the prose classifier."""

    @pytest.mark.parametrize("line", ["where x is the unknown", "The result:", "Add 5 to both sides", ""])
    def test_is_prose_when_explanatory_then_true(self, line):
        """Connectives, instructions and introductions are prose."""
        assert is_prose_line(line)

    def test_is_prose_when_expression_then_false(self):
        """Expressions are not prose."""
        assert not is_prose_line("x + 17")


class TestLabelPrefixedExtraction:
    """Extraction from label-prefixed lines."""

    def test_extract_when_left_and_right_labels_then_labels_stripped(self):
        """Each side's equation is extracted once without its label."""
        text = "Left Side: 6x - 11 = x + 17\nRight Side: x + 17 = x + 17"

        assert _texts(text) == ["6x - 11 = x + 17", "x + 17 = x + 17"]
