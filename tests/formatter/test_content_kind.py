"""
Tests for formatter.content_kind

Test Coverage:
- detect_content_kind: math / list / code / prose
- format_by_kind: Routing per kind
"""
import pytest

from mathtext_toolkit.core.models.canonical import ContentKind
from mathtext_toolkit.formatter.content_kind import detect_content_kind, format_by_kind


class TestDetectContentKind:
    """Tests for content kind detection."""

    @pytest.mark.parametrize("text, kind", [
        ("y = {1/2}x + 3", ContentKind.MATH),
        ("x^2^ grows fast", ContentKind.MATH),
        ("A. first\nB. second", ContentKind.LIST),
        ("- one point\n- another", ContentKind.LIST),
        ("```\nprint(1)\n```", ContentKind.CODE),
        ("function foo() {\n  return 5;\n}", ContentKind.CODE),
        ("Just words here.", ContentKind.PROSE),
        ("", ContentKind.PROSE),
        (None, ContentKind.PROSE),
    ])
    def test_detect_when_sample_then_expected_kind(self, text, kind):
        """Each sample is routed to its kind."""
        assert detect_content_kind(text) is kind


class TestFormatByKind:
    """Tests for kind-specific formatting."""

    def test_format_when_code_then_layout_preserved(self):
        """Code keeps its newlines, including inside braces."""
        code = "function foo() {\n  return 5;\n}"

        assert format_by_kind(code, ContentKind.CODE) == code

    def test_format_when_code_with_marker_then_scrubbed(self):
        """Code is still scrubbed of reserved patterns."""
        assert format_by_kind("x = 1; LIST_BREAK", "code") == "x = 1; "

    def test_format_when_prose_then_single_line(self):
        """Prose is flattened."""
        assert format_by_kind("one\ntwo", ContentKind.PROSE) == "one two"

    def test_format_when_list_then_lines_kept(self):
        """Lists keep one item per line."""
        assert format_by_kind("A. first\nB. second", ContentKind.LIST) == "A. first\nB. second"
