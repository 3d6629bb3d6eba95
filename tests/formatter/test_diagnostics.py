"""
Tests for formatter.diagnostics and formatter.timing

Test Coverage:
- FormattingIssue: Serialization and excerpt truncation
- DiagnosticsCollector: Issue collection per type
- FormattingDiagnosticsReport: Summary and JSON output
- TimingLog / timed_stage
"""
import json

from mathtext_toolkit.formatter.diagnostics import DiagnosticsCollector, FormattingIssue
from mathtext_toolkit.formatter.timing import TimingLog, timed_stage


class TestFormattingIssue:
    """Tests for FormattingIssue dataclass."""

    def test_to_dict_when_long_excerpt_then_truncated(self):
        """Excerpts are capped at 200 characters."""
        issue = FormattingIssue(
            issue_type="leaked_sentinel",
            context="problem",
            message="m",
            pattern="MASK",
            excerpt="x" * 500,
        )

        d = issue.to_dict()

        assert d["pattern"] == "MASK"
        assert len(d["excerpt"]) == 200

    def test_to_dict_when_no_pattern_then_key_omitted(self):
        """Empty optional fields are omitted."""
        d = FormattingIssue(issue_type="iteration_cap", context="c", message="m").to_dict()

        assert "pattern" not in d
        assert "excerpt" not in d


class TestDiagnosticsCollector:
    """Tests for DiagnosticsCollector class."""

    def test_add_when_each_type_then_counted(self):
        """Every add_* method records one issue of its type."""
        collector = DiagnosticsCollector()

        collector.add_scrubbed_input("problem", "MASK", "MASK1")
        collector.add_leaked_sentinel("steps[0].equation", "mask_key")
        collector.add_iteration_cap("steps[0].equation", "line_join", 20)
        collector.add_malformed_fraction("steps[1].equation", "{3/4")

        assert collector.issue_count == 4
        report = collector.generate_report()
        assert report.summary_by_type == {
            "scrubbed_input": 1,
            "leaked_sentinel": 1,
            "iteration_cap": 1,
            "malformed_fraction": 1,
        }
        assert report.contexts == ["problem", "steps[0].equation", "steps[1].equation"]

    def test_iteration_cap_message_when_added_then_names_loop(self):
        """Capped loop issues name the loop and cap."""
        collector = DiagnosticsCollector()

        collector.add_iteration_cap("c", "color_tag_repair", 20)

        assert "color_tag_repair did not stabilize within 20" in collector.issues[0].message


class TestDiagnosticsReport:
    """Tests for FormattingDiagnosticsReport output."""

    def test_save_when_path_then_json_written(self, tmp_path):
        """save() writes the report as JSON, creating parent dirs."""
        collector = DiagnosticsCollector()
        collector.add_scrubbed_input("problem", "LIST_BREAK")
        path = tmp_path / "reports" / "diagnostics.json"

        collector.generate_report().save(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["total_issues"] == 1
        assert data["issues"][0]["issue_type"] == "scrubbed_input"
        assert "generated_at" in data


class TestTiming:
    """Tests for TimingLog and timed_stage."""

    def test_timing_log_when_stages_logged_then_totals_and_averages(self):
        """Durations accumulate per stage."""
        log = TimingLog()
        log.log_stage("line_join", 0.2)
        log.log_stage("line_join", 0.4)
        log.log_stage("finalize", 0.1)

        assert log.get_stage_totals()["line_join"] == 0.2 + 0.4
        assert log.get_stage_averages()["finalize"] == 0.1
        assert log.call_count == 2
        assert "line_join" in log.summary()

    def test_timed_stage_when_log_then_duration_recorded(self):
        """The context manager records one non-negative duration."""
        log = TimingLog()

        with timed_stage(log, "fractions"):
            pass

        assert len(log.stage_timings["fractions"]) == 1
        assert log.stage_timings["fractions"][0] >= 0

    def test_timed_stage_when_no_log_then_noop(self):
        """A None log is allowed."""
        with timed_stage(None, "fractions"):
            value = 1
        assert value == 1

    def test_save_when_path_then_json_written(self, tmp_path):
        """save() overwrites the file with the current totals."""
        log = TimingLog()
        log.log_stage("labels", 0.5)
        path = tmp_path / "timing.json"

        log.save(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["calls"] == 1
        assert data["stage_totals"] == {"labels": 0.5}
