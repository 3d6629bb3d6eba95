"""
Module: formatter.pipeline

Purpose:
    Entry point of the canonicalizer. Composes stages 1-7 in dependency
    order for the requested render mode and returns CanonicalText.

    All masking in one call goes through a single MaskArena, so keys stay
    unique across stages and every key is drained before finalize runs.

Key Functions:
    - canonicalize(): (text, mode) -> CanonicalText
    - canonicalize_with_report(): Lenient result plus out-of-band issues
    - format_title() / format_prose() / format_equation(): Mode shortcuts

Key Classes:
    - CanonicalizationResult: Text plus the diagnostics recorded for it

Used By:
    - formatter.content_kind
    - formatter.solution
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from mathtext_toolkit.common.vocabulary import IMAGE_REFERENCE
from mathtext_toolkit.core.models.canonical import CanonicalText, RenderMode

from .cleanup import clean_stray_underscores, fix_redundant_answers, remove_orphan_dash_lines
from .config import DEFAULT_CONFIG, FormatterConfig
from .delimiters import normalize_line_breaks, remove_newlines_inside_delimiters, repair_color_tags
from .diagnostics import DiagnosticsCollector, FormattingIssue
from .finalizer import collapse_whitespace, finalize, scrub_input
from .fractions import (
    normalize_adjacent_fractions,
    normalize_fraction_forms,
    normalize_fraction_multiplication,
    normalize_fraction_spacing,
)
from .labels import isolate_labels
from .line_join import join_until_stable
from .masking import MaskArena
from .notation import close_script_notation, convert_unicode_scripts, disambiguate_asterisks, strip_latex
from .segmenter import repair_marker_underscores, segment
from .timing import TimingLog, timed_stage

logger = logging.getLogger(__name__)

# "{3/4" with no closing brace before the end of the line.
_UNCLOSED_FRACTION = re.compile(r"\{[^{}\n]*/[^{}\n]*$", re.MULTILINE)


@dataclass
class CanonicalizationResult:
    """Best-effort canonical text plus the issues recorded while producing it."""
    text: CanonicalText
    issues: List[FormattingIssue] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.issues


# ─────────────────────────────────────────────────────────────────────────────
# Stage Composition
# ─────────────────────────────────────────────────────────────────────────────

def _inline_stages(text: str, arena: MaskArena, timings: Optional[TimingLog]) -> str:
    """Stages shared by every mode: asterisks, then fraction spellings."""
    with timed_stage(timings, "notation"):
        text = disambiguate_asterisks(text, arena)
    with timed_stage(timings, "fractions"):
        text = normalize_fraction_forms(text, arena)
        text = normalize_fraction_spacing(text)
        text = normalize_fraction_multiplication(text)
    return text


def _equation_stages(
    text: str,
    arena: MaskArena,
    config: FormatterConfig,
    context: str,
    diagnostics: Optional[DiagnosticsCollector],
    timings: Optional[TimingLog],
) -> str:
    thresholds = config.thresholds

    def on_cap(name: str, iterations: int) -> None:
        if diagnostics is not None:
            diagnostics.add_iteration_cap(context, name, iterations)

    mark = arena.mark()
    text = arena.mask(IMAGE_REFERENCE, text)

    with timed_stage(timings, "notation"):
        text = strip_latex(text)
        text = convert_unicode_scripts(text)
        text = disambiguate_asterisks(text, arena)

    with timed_stage(timings, "fractions"):
        text = normalize_fraction_forms(text, arena)

    with timed_stage(timings, "labels"):
        text = isolate_labels(text)

    with timed_stage(timings, "fractions"):
        text = normalize_fraction_spacing(text)
        text = normalize_fraction_multiplication(text)

    with timed_stage(timings, "delimiters"):
        text = repair_color_tags(text, max_iterations=config.max_iterations, on_cap=on_cap)
        text = remove_newlines_inside_delimiters(text)

    with timed_stage(timings, "line_join"):
        text = join_until_stable(
            text,
            min_prefix=thresholds.new_equation_min_prefix,
            max_iterations=config.max_iterations,
            on_cap=on_cap,
        )

    with timed_stage(timings, "cleanup"):
        text = normalize_fraction_multiplication(text)
        text = normalize_adjacent_fractions(text)
        text = close_script_notation(text)
        text = fix_redundant_answers(text, thresholds.redundant_prefix_min_length)
        text = clean_stray_underscores(text)
        text = repair_marker_underscores(text)

    with timed_stage(timings, "segmenter"):
        text = segment(text, thresholds.list_marker_min_prefix, arena)
        text = remove_orphan_dash_lines(text)

    text = arena.unmask(text, since=mark)

    if diagnostics is not None:
        for match in _UNCLOSED_FRACTION.finditer(text):
            diagnostics.add_malformed_fraction(context, match.group(0))
    return text


# ─────────────────────────────────────────────────────────────────────────────
# Entry Points
# ─────────────────────────────────────────────────────────────────────────────

def canonicalize(
    text: Optional[str],
    mode: RenderMode | str = RenderMode.EQUATION,
    *,
    config: Optional[FormatterConfig] = None,
    context: str = "",
    diagnostics: Optional[DiagnosticsCollector] = None,
    timings: Optional[TimingLog] = None,
) -> CanonicalText:
    """
    Canonicalize raw model output for one render mode.

    Args:
        text: Untrusted input (None is treated as empty)
        mode: "title" collapses all whitespace, "prose" turns newlines into
            spaces, "equation" keeps structural breaks and repairs broken
            expressions
        config: Strictness and thresholds (default: lenient)
        context: Caller location, named in errors and diagnostics
        diagnostics: Collector for scrubbed input, leaks and capped loops
        timings: Optional per-stage timing log

    Returns:
        CanonicalText; canonicalize(canonicalize(x, m), m) == canonicalize(x, m)

    Raises:
        ContractViolation: strict config only, when a reserved pattern leaks
    """
    mode = RenderMode(mode)
    config = config or DEFAULT_CONFIG
    owns_collector = diagnostics is None and config.run_diagnostics
    if owns_collector:
        diagnostics = DiagnosticsCollector()
    issues_before = diagnostics.issue_count if diagnostics is not None else 0

    text = scrub_input(text or "", context=context, diagnostics=diagnostics)
    with timed_stage(timings, "delimiters"):
        text = normalize_line_breaks(text)

    arena = MaskArena()
    if mode is RenderMode.EQUATION:
        text = _equation_stages(text, arena, config, context, diagnostics, timings)
    else:
        # Single-line modes: whitespace collapses before the inline rules.
        text = collapse_whitespace(text, mode)
        text = _inline_stages(text, arena, timings)

    with timed_stage(timings, "finalize"):
        result = finalize(
            text,
            mode,
            strictness=config.strictness,
            context=context,
            diagnostics=diagnostics,
        )

    if diagnostics is not None and diagnostics.issue_count > issues_before:
        logger.debug(
            f"Canonicalized {context or 'text'} ({mode}) with "
            f"{diagnostics.issue_count - issues_before} new issue(s)"
        )
    if owns_collector:
        for issue in diagnostics.issues:
            logger.warning(f"[{issue.issue_type}] {issue.context or 'text'}: {issue.message}")
    return result


def canonicalize_with_report(
    text: Optional[str],
    mode: RenderMode | str = RenderMode.EQUATION,
    *,
    config: Optional[FormatterConfig] = None,
    context: str = "",
    timings: Optional[TimingLog] = None,
) -> CanonicalizationResult:
    """
    Canonicalize and return the diagnostics recorded for this call.

    With a lenient config this never raises; the issues list is the
    out-of-band record of anything that was scrubbed, stripped or capped.
    """
    collector = DiagnosticsCollector()
    canonical = canonicalize(
        text,
        mode,
        config=config,
        context=context,
        diagnostics=collector,
        timings=timings,
    )
    return CanonicalizationResult(text=canonical, issues=collector.issues)


def format_title(text: Optional[str], **kwargs) -> CanonicalText:
    return canonicalize(text, RenderMode.TITLE, **kwargs)


def format_prose(text: Optional[str], **kwargs) -> CanonicalText:
    return canonicalize(text, RenderMode.PROSE, **kwargs)


def format_equation(text: Optional[str], **kwargs) -> CanonicalText:
    return canonicalize(text, RenderMode.EQUATION, **kwargs)
