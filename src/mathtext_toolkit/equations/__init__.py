"""
Equations Package

Stage 9: extract and validate the distinct equations in canonical text.
"""

from mathtext_toolkit.core.models.equations import top_level_equals as find_top_level_equals

from .extractor import (
    EquationRow,
    extract_equations,
    extract_rows,
    final_equation,
    split_for_alignment,
)
from .prose import is_prose_line
from .validator import (
    CandidateVerdict,
    RejectionReason,
    is_valid_equation,
    split_equation,
    validate_candidate,
)

__all__ = [
    "find_top_level_equals",
    "EquationRow",
    "extract_equations",
    "extract_rows",
    "final_equation",
    "split_for_alignment",
    "is_prose_line",
    "CandidateVerdict",
    "RejectionReason",
    "is_valid_equation",
    "split_equation",
    "validate_candidate",
]
