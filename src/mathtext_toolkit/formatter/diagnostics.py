"""
Module: formatter.diagnostics

Captures formatting issues during canonicalization and generates
diagnostic reports for analysis. This is the out-of-band channel of
lenient mode: the pipeline keeps going and records what it repaired.

Issue types:
- scrubbed_input: reserved pattern found in raw input and removed
- leaked_sentinel: reserved pattern survived to the finalizer
- iteration_cap: a bounded rewrite loop hit its cap
- malformed_fraction: "{a/b" left unclosed and kept literal
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Set

logger = logging.getLogger(__name__)

_EXCERPT_LIMIT = 200


@dataclass
class FormattingIssue:
    """
    A single formatting issue with diagnostic context.

    Fields:
    - context: caller-supplied location, e.g. "step[2].equation"
    - pattern: name of the reserved pattern or loop involved
    - excerpt: text around the problem, truncated
    """
    issue_type: str
    context: str
    message: str
    pattern: str = ""
    excerpt: str = ""

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "issue_type": self.issue_type,
            "context": self.context,
            "message": self.message,
        }
        if self.pattern:
            d["pattern"] = self.pattern
        if self.excerpt:
            d["excerpt"] = self.excerpt[:_EXCERPT_LIMIT]
        return d


class DiagnosticsCollector:
    """
    Thread-safe collector for formatting issues.

    One collector may be shared by many canonicalize calls, e.g. all the
    fields of one solution.
    """

    def __init__(self):
        self._issues: List[FormattingIssue] = []
        self._lock = threading.Lock()
        self._contexts: Set[str] = set()

    def _add(self, issue: FormattingIssue) -> None:
        with self._lock:
            self._issues.append(issue)
            self._contexts.add(issue.context)

    def add_scrubbed_input(self, context: str, pattern: str, excerpt: str = "") -> None:
        """Record a reserved pattern removed from raw input."""
        self._add(FormattingIssue(
            issue_type="scrubbed_input",
            context=context,
            message=f"Removed reserved pattern {pattern} from input",
            pattern=pattern,
            excerpt=excerpt,
        ))

    def add_leaked_sentinel(self, context: str, pattern: str, excerpt: str = "") -> None:
        """Record a reserved pattern that reached the finalizer."""
        self._add(FormattingIssue(
            issue_type="leaked_sentinel",
            context=context,
            message=f"Reserved pattern {pattern} survived to output and was stripped",
            pattern=pattern,
            excerpt=excerpt,
        ))

    def add_iteration_cap(self, context: str, loop_name: str, iterations: int) -> None:
        """Record a bounded loop that stopped at its cap."""
        self._add(FormattingIssue(
            issue_type="iteration_cap",
            context=context,
            message=f"{loop_name} did not stabilize within {iterations} iterations",
            pattern=loop_name,
        ))

    def add_malformed_fraction(self, context: str, excerpt: str) -> None:
        """Record a fraction left as literal text because its braces never close."""
        self._add(FormattingIssue(
            issue_type="malformed_fraction",
            context=context,
            message="Fraction has no closing brace and was kept as literal text",
            excerpt=excerpt,
        ))

    @property
    def issues(self) -> List[FormattingIssue]:
        with self._lock:
            return list(self._issues)

    def generate_report(self) -> "FormattingDiagnosticsReport":
        with self._lock:
            return FormattingDiagnosticsReport.from_issues(list(self._issues), set(self._contexts))

    @property
    def issue_count(self) -> int:
        with self._lock:
            return len(self._issues)


@dataclass
class FormattingDiagnosticsReport:
    """Complete diagnostics report."""
    generated_at: str
    contexts: List[str]
    total_issues: int
    summary_by_type: Dict[str, int]
    issues: List[FormattingIssue]

    @classmethod
    def from_issues(cls, issues: List[FormattingIssue], contexts: Set[str]) -> "FormattingDiagnosticsReport":
        summary_by_type: Dict[str, int] = {}
        for issue in issues:
            summary_by_type[issue.issue_type] = summary_by_type.get(issue.issue_type, 0) + 1

        return cls(
            generated_at=datetime.now(timezone.utc).isoformat(),
            contexts=sorted(contexts),
            total_issues=len(issues),
            summary_by_type=summary_by_type,
            issues=issues,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "contexts": self.contexts,
            "total_issues": self.total_issues,
            "summary_by_type": self.summary_by_type,
            "issues": [issue.to_dict() for issue in self.issues],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        logger.info(f"Formatting diagnostics saved: {path}")
