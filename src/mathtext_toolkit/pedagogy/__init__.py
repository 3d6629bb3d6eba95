"""
Pedagogy Package

Heuristics that annotate a solution for teaching: what each step does
and a consistent color per variable.
"""

from .actions import extract_both_sides_op, infer_step_action
from .variables import VAR_COLORS, apply_var_colors, build_var_color_map, extract_single_letter_vars

__all__ = [
    "extract_both_sides_op",
    "infer_step_action",
    "VAR_COLORS",
    "apply_var_colors",
    "build_var_color_map",
    "extract_single_letter_vars",
]
