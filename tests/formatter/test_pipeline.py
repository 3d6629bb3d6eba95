"""
Tests for formatter.pipeline

Test Coverage:
- canonicalize: Mode policies, end-to-end repairs, idempotence
- Leak freedom and delimiter preservation on hostile input
- canonicalize_with_report: Out-of-band issues
"""
import re

import pytest

from mathtext_toolkit.core.models.canonical import CanonicalText, RenderMode
from mathtext_toolkit.formatter.config import FormatterConfig
from mathtext_toolkit.formatter.diagnostics import DiagnosticsCollector
from mathtext_toolkit.formatter.finalizer import find_leaks
from mathtext_toolkit.formatter.masking import MaskArena
from mathtext_toolkit.formatter.pipeline import (
    canonicalize,
    canonicalize_with_report,
    format_equation,
    format_prose,
    format_title,
)
from mathtext_toolkit.formatter.timing import TimingLog


SAMPLES = [
    "x +\n5 = 10",
    "A. The first option is long B. The second option",
    "The slope is (3/4) of rise/run",
    "Left-hand side: 2*x* + 3 = 7",
    "3 * 4 = 12",
    "x² + ½",
    "Start with 2x = 10 Divide by 2",
    "x LIST_BREAK = ⟪STEP⟫ 5",
    "half rise/run½",
    "(3/4)\n5 = 10",
    "{3/4}\n(x + 1) = 2",
    "(Left-hand side: x = 2)",
    "x = ½\n4",
]


class TestCanonicalizeScenarios:
    """End-to-end behaviour of canonicalize in equation mode."""

    def test_canonicalize_when_wrapped_expression_then_joined(self):
        """A line ending in an operator is rejoined."""
        assert format_equation("x +\n5 = 10") == "x + 5 = 10"

    def test_canonicalize_when_options_run_together_then_split(self):
        """Long inline options are separated by a blank line."""
        result = canonicalize("A. The first option is long B. The second option")

        assert result == "A. The first option is long\n\nB. The second option"

    def test_canonicalize_when_label_mid_line_then_isolated(self):
        """Labels land on their own line after a blank line."""
        assert canonicalize("x + 5 Left-hand side: y = 10") == "x + 5\n\nLeft Side:\ny = 10"

    @pytest.mark.parametrize("raw", ["(3/4)", "{ 3 / 4 }", "¾"])
    def test_canonicalize_when_fraction_spelling_then_bracketed(self, raw):
        """Every fraction spelling converges on {3/4}."""
        assert canonicalize(raw) == "{3/4}"
        assert canonicalize(raw, RenderMode.TITLE) == "{3/4}"

    def test_canonicalize_when_newlines_inside_groups_then_removed(self):
        """No newline survives inside an open delimiter."""
        result = canonicalize("{3/\n4} + (x\n+ 1) = 2")

        assert result == "{3/4} + (x + 1) = 2"

    def test_canonicalize_when_prose_mode_then_single_line(self):
        """Prose mode turns newlines into spaces."""
        assert format_prose("line one\nline two") == "line one line two"
        assert format_title("  A   title \n") == "A title"

    @pytest.mark.parametrize("mode", [RenderMode.TITLE, RenderMode.PROSE])
    def test_canonicalize_when_fraction_ends_line_then_times_in_single_line_modes(self, mode):
        """A newline between a fraction and a number collapses before the × rule."""
        assert canonicalize("(3/4)\n5 = 10", mode) == "{3/4} × 5 = 10"
        assert canonicalize("{3/4}\n(x + 1) = 2", mode) == "{3/4} × (x + 1) = 2"

    @pytest.mark.parametrize("mode", list(RenderMode))
    def test_canonicalize_when_vulgar_fraction_touches_word_ratio_then_ratio_protected(self, mode):
        """The ratio gets the division slash on the first pass."""
        assert canonicalize("half rise/run½", mode) == "half rise∕run{1/2}"

    def test_canonicalize_when_fraction_and_factor_joined_then_times(self):
        """Fraction rules see lines after broken expressions are rejoined."""
        assert canonicalize("{3/4} *\n5 = x") == "{3/4} × 5 = x"

    def test_canonicalize_when_none_then_empty(self):
        """None is treated as empty input."""
        result = canonicalize(None, "title")

        assert result == ""
        assert isinstance(result, CanonicalText)


class TestCanonicalizeInvariants:
    """Properties that hold for every input and mode."""

    @pytest.mark.parametrize("mode", list(RenderMode))
    @pytest.mark.parametrize("raw", SAMPLES)
    def test_canonicalize_when_applied_twice_then_unchanged(self, raw, mode):
        """Canonicalization is idempotent."""
        once = canonicalize(raw, mode)

        assert canonicalize(once, mode) == once

    @pytest.mark.parametrize("mode", list(RenderMode))
    @pytest.mark.parametrize("raw", SAMPLES)
    def test_canonicalize_when_any_input_then_no_reserved_patterns(self, raw, mode):
        """No reserved pattern ever reaches the output."""
        assert find_leaks(canonicalize(raw, mode)) == []

    def test_canonicalize_when_strict_and_legacy_input_then_scrubbed_not_raised(self, strict_config):
        """Markers in the input are scrubbed, so strict mode does not raise."""
        result = canonicalize("x LIST_BREAK = ⟪STEP⟫ 5", config=strict_config)

        assert result == "x = 5"

    def test_canonicalize_when_private_use_input_then_cannot_collide(self, strict_config):
        """Private-use characters in the input are removed before masking."""
        result = canonicalize(f"*x*{MaskArena.key_for(0)} = 5\ue0ff", config=strict_config)

        assert result == "*x* = 5"


class TestCanonicalizeWithReport:
    """Tests for the lenient report API."""

    def test_report_when_clean_input_then_no_issues(self):
        """Clean input reports nothing."""
        result = canonicalize_with_report("x = 5")

        assert result.text == "x = 5"
        assert result.is_clean

    def test_report_when_legacy_marker_then_scrubbed_issue(self):
        """Scrubbed input is reported out of band."""
        result = canonicalize_with_report("x = 5 MASK3", context="finalAnswer[0]")

        assert result.text == "x = 5"
        assert [i.issue_type for i in result.issues] == ["scrubbed_input"]
        assert result.issues[0].context == "finalAnswer[0]"

    def test_report_when_unclosed_fraction_then_malformed_issue(self):
        """An unclosed fraction stays literal and is reported."""
        result = canonicalize_with_report("x = {3/4")

        assert result.text == "x = {3/4"
        assert [i.issue_type for i in result.issues] == ["malformed_fraction"]

    def test_canonicalize_when_timings_then_stages_recorded(self):
        """A timing log collects per-stage durations."""
        log = TimingLog()

        canonicalize("x +\n5 = 10", timings=log)

        assert {"delimiters", "line_join", "segmenter", "finalize"} <= set(log.stage_timings)


    def test_canonicalize_when_run_diagnostics_without_collector_then_issues_logged(self, caplog):
        """The config flag collects issues internally and logs each one."""
        config = FormatterConfig(run_diagnostics=True)

        with caplog.at_level("WARNING"):
            result = canonicalize("x = 5 MASK3", config=config, context="finalAnswer[0]")

        assert result == "x = 5"
        assert "[scrubbed_input] finalAnswer[0]" in caplog.text

    def test_canonicalize_when_diagnostics_flag_off_then_nothing_logged(self, caplog):
        """Without the flag or a collector, scrubbing is silent."""
        with caplog.at_level("WARNING"):
            canonicalize("x = 5 MASK3")

        assert "scrubbed_input" not in caplog.text

    def test_canonicalize_when_caller_collector_then_flag_does_not_log(self, caplog):
        """A caller-supplied collector receives the issues instead of the log."""
        collector = DiagnosticsCollector()

        with caplog.at_level("WARNING"):
            canonicalize("x = 5 MASK3", config=FormatterConfig(run_diagnostics=True), diagnostics=collector)

        assert collector.issue_count == 1
        assert "scrubbed_input" not in caplog.text


class TestDocumentedScenarios:
    """Fixture behaviours the canonicalizer must reproduce exactly."""

    def test_canonicalize_when_first_marker_near_start_then_only_later_marker_breaks(self):
        """A. opens the list inline; B. after long context breaks."""
        result = canonicalize("Here is some twenty-plus context A. first B. second")

        assert result == "Here is some twenty-plus context A. first\n\nB. second"

    @pytest.mark.parametrize("raw", [
        "(x\n+ 1) = [red:y\n+ 2]",
        "{3/\n4} + (x\n+ 1) = 2",
    ])
    def test_canonicalize_when_newlines_in_balanced_groups_then_only_whitespace_changes(self, raw):
        """Only newlines are removed; every other character survives."""
        result = canonicalize(raw)

        assert "\n" not in result
        assert re.sub(r"\s", "", result) == re.sub(r"\s", "", raw)
