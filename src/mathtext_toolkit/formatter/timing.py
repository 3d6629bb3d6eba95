"""
Module: formatter.timing

Purpose:
    Timing instrumentation for the canonicalization pipeline to find the
    stages that dominate latency on long inputs.

Key Classes:
    - TimingLog: Collects per-stage durations across calls

Key Functions:
    - timed_stage: Context manager for timing one stage

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - formatter.pipeline: Stage orchestration
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class TimingLog:
    """
    Stage timing metrics for the canonicalization pipeline.

    Every call appends one duration per stage, so a log shared across a
    batch gives per-stage totals and averages.

    Attributes:
        stage_timings: Dict of stage_name -> list of durations in seconds

    Example:
        >>> log = TimingLog()
        >>> log.log_stage("line_join", 0.0004)
        >>> log.get_stage_totals()["line_join"]
        0.0004
    """
    stage_timings: Dict[str, List[float]] = field(default_factory=dict)

    def log_stage(self, stage: str, duration: float) -> None:
        """Log one stage duration."""
        self.stage_timings.setdefault(stage, []).append(duration)

    def get_stage_totals(self) -> Dict[str, float]:
        """Total time spent in each stage."""
        return {stage: sum(durations) for stage, durations in self.stage_timings.items()}

    def get_stage_averages(self) -> Dict[str, float]:
        """Average time per call for each stage."""
        return {
            stage: sum(durations) / len(durations)
            for stage, durations in self.stage_timings.items()
            if durations
        }

    @property
    def call_count(self) -> int:
        """Number of calls recorded (largest per-stage sample count)."""
        return max((len(d) for d in self.stage_timings.values()), default=0)

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Canonicalization Timing Summary ==="]

        totals = self.get_stage_totals()
        averages = self.get_stage_averages()
        for stage, total in sorted(totals.items(), key=lambda x: -x[1]):
            lines.append(f"  {stage:25s} {total:.4f}s total, {averages.get(stage, 0.0) * 1000:.3f}ms avg")

        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary."""
        return {
            "calls": self.call_count,
            "stage_totals": self.get_stage_totals(),
            "stage_averages": self.get_stage_averages(),
        }

    def save(self, path: Path) -> None:
        """Save timing data to a JSON file, overwriting any previous run."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug(f"Saved timing data to {path}")


@contextmanager
def timed_stage(log: Optional[TimingLog], stage: str) -> Generator[None, None, None]:
    """
    Context manager for timing a pipeline stage.

    A None log makes this a no-op so the pipeline can always use it.

    Example:
        >>> log = TimingLog()
        >>> with timed_stage(log, "fractions"):
        ...     text = normalize_fraction_forms(text)
    """
    if log is None:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        log.log_stage(stage, time.perf_counter() - start)
