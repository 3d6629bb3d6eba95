"""
Module: formatter.config

Purpose:
    Configuration dataclass for the canonicalization pipeline. Provides
    immutable settings for strictness, heuristic thresholds and optional
    post-processing.

Key Classes:
    - FormatterConfig: Main configuration for canonicalization

Dependencies:
    - dataclasses: For frozen dataclass support
    - common.thresholds: Heuristic constants

Used By:
    - formatter.pipeline: Pipeline settings
    - formatter.solution: Variable coloring switch
    - tokenizer.parser: Italic/script windows
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mathtext_toolkit.common.thresholds import HeuristicThresholds
from mathtext_toolkit.core.models.canonical import Strictness


@dataclass(frozen=True)
class FormatterConfig:
    """
    Configuration for the canonicalization pipeline.

    Attributes:
        strictness: LENIENT strips leaked sentinels and records a diagnostic;
            STRICT raises ContractViolation instead (default LENIENT)
        thresholds: Heuristic windows and caps (default HeuristicThresholds())
        colorize_variables: Wrap italic single-letter variables in color
            tags when formatting a whole solution (default False)
        run_diagnostics: When the caller passes no collector, collect issues
            anyway and log each one as a warning (default False)
    """
    strictness: Strictness = Strictness.LENIENT
    thresholds: HeuristicThresholds = field(default_factory=HeuristicThresholds)
    colorize_variables: bool = False
    run_diagnostics: bool = False

    @property
    def max_iterations(self) -> int:
        return self.thresholds.max_iterations

    @classmethod
    def strict(cls) -> FormatterConfig:
        """Configuration used by development runs and the test suite."""
        return cls(strictness=Strictness.STRICT)


DEFAULT_CONFIG = FormatterConfig()
