"""
Formatter Package

Stages 1-7 of canonicalization: raw model output in, CanonicalText out.

Solution-level formatting lives in `formatter.solution` and is imported
from there directly.
"""

from .config import DEFAULT_CONFIG, FormatterConfig
from .content_kind import detect_content_kind, format_by_kind
from .diagnostics import DiagnosticsCollector, FormattingDiagnosticsReport, FormattingIssue
from .finalizer import ContractViolation, find_leaks, scrub_input, strip_internal_artifacts
from .masking import MaskArena
from .pipeline import (
    CanonicalizationResult,
    canonicalize,
    canonicalize_with_report,
    format_equation,
    format_prose,
    format_title,
)
from .timing import TimingLog, timed_stage

__all__ = [
    "DEFAULT_CONFIG",
    "FormatterConfig",
    "detect_content_kind",
    "format_by_kind",
    "DiagnosticsCollector",
    "FormattingDiagnosticsReport",
    "FormattingIssue",
    "ContractViolation",
    "find_leaks",
    "scrub_input",
    "strip_internal_artifacts",
    "MaskArena",
    "CanonicalizationResult",
    "canonicalize",
    "canonicalize_with_report",
    "format_equation",
    "format_prose",
    "format_title",
    "TimingLog",
    "timed_stage",
]
