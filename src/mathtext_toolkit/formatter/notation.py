"""
Module: formatter.notation

Purpose:
    Stage 3 of canonicalization. The asterisk means italics in `*x*` and
    multiplication in `2*3`; both must survive. Italic runs are masked,
    remaining operator asterisks become "×", then italics are restored.

    Also hosts the notation repairs applied in equation mode: LaTeX
    commands the model emits despite instructions, Unicode super/subscript
    digits, and `^`/`_` scripts the model opened but never closed.

Key Functions:
    - disambiguate_asterisks(): Italic vs multiplication asterisks
    - strip_latex(): LaTeX commands -> house markup
    - convert_unicode_scripts(): x² -> x^2^, H₂ -> H_2_
    - close_script_notation(): x^2 -> x^2^, v_0 -> v_0_

Dependencies:
    - formatter.masking: Italic masking

Used By:
    - formatter.pipeline
"""

from __future__ import annotations

import re
from typing import Optional

from .masking import KEY_CLOSE, KEY_OPEN, MaskArena

_ITALIC_RUN = re.compile(r"\*([a-zA-Z][a-zA-Z0-9_]*)\*")
# A masked italic counts as an operand on either side.
_OPERATOR_ASTERISK = re.compile(
    rf"([0-9a-zA-Z}})\]{KEY_CLOSE}])[ \t]*\*[ \t]*(?=[0-9a-zA-Z{{(\[\-{KEY_OPEN}])"
)

_LATEX_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\\(?:text|mathrm|mathbf|operatorname)\{([^{}]*)\}"), r"\1"),
    (re.compile(r"\\[dt]?frac\{([^{}]*)\}\{([^{}]*)\}"), r"{\1/\2}"),
    (re.compile(r"\\\[|\\\]|\\\(|\\\)"), ""),
    (re.compile(r"\\(?:left|right)(?![a-zA-Z])"), ""),
    (re.compile(r"\\times(?![a-zA-Z])"), "×"),
    (re.compile(r"\\cdot(?![a-zA-Z])"), "·"),
    (re.compile(r"\\div(?![a-zA-Z])"), "÷"),
    (re.compile(r"\\sqrt(?![a-zA-Z])"), "√"),
    (re.compile(r"\\pm(?![a-zA-Z])"), "±"),
    (re.compile(r"\\leq?(?![a-zA-Z])"), "≤"),
    (re.compile(r"\\geq?(?![a-zA-Z])"), "≥"),
    (re.compile(r"\\neq?(?![a-zA-Z])"), "≠"),
    (re.compile(r"\\pi(?![a-zA-Z])"), "π"),
    (re.compile(r"\\theta(?![a-zA-Z])"), "θ"),
    (re.compile(r"\\\{"), "{"),
    (re.compile(r"\\\}"), "}"),
)

_SUPERSCRIPTS = {
    "⁰": "0", "¹": "1", "²": "2", "³": "3", "⁴": "4",
    "⁵": "5", "⁶": "6", "⁷": "7", "⁸": "8", "⁹": "9",
    "⁺": "+", "⁻": "-",
}
_SUBSCRIPTS = {
    "₀": "0", "₁": "1", "₂": "2", "₃": "3", "₄": "4",
    "₅": "5", "₆": "6", "₇": "7", "₈": "8", "₉": "9",
}
_SUPERSCRIPT_RUN = re.compile(f"[{''.join(_SUPERSCRIPTS)}]+")
_SUBSCRIPT_RUN = re.compile(f"[{''.join(_SUBSCRIPTS)}]+")

_PAREN_EXPONENT = re.compile(r"\^\((-?\d+)\)")
_OPEN_SUPERSCRIPT = re.compile(
    r"([a-zA-Z\d.)\]]+)\^(-?\d{1,2}|[+\-]|\w{1,3})(?!\^)(?=[\s,.\])=:/]|$)"
)
_OPEN_SUBSCRIPT = re.compile(
    r"([a-zA-Z])_([a-zA-Z]+\d*|\d{1,2})(?!_)(?=[\s,.\])=:]|$)"
)


def disambiguate_asterisks(text: str, arena: Optional[MaskArena] = None) -> str:
    """
    Turn operator asterisks into "×" while keeping `*ident*` italics.

    An asterisk becomes "×" only with an operand on both sides: a letter,
    digit or closing delimiter on the left and a letter, digit, opening
    delimiter or minus sign on the right. A leading bullet asterisk has no
    left operand and is left alone.

    Args:
        text: Text to rewrite
        arena: Shared arena for this pipeline call; a private one is used
            when omitted

    Example:
        >>> disambiguate_asterisks("{3/4}*8 + *x*")
        '{3/4} × 8 + *x*'
    """
    if "*" not in text:
        return text

    arena = arena if arena is not None else MaskArena()
    mark = arena.mark()
    masked = arena.mask(_ITALIC_RUN, text)
    rewritten = _OPERATOR_ASTERISK.sub(r"\1 × ", masked)
    return arena.unmask(rewritten, since=mark)


def strip_latex(text: str) -> str:
    """Replace common LaTeX commands with plain symbols and `{a/b}` fractions."""
    if "\\" not in text:
        return text
    for pattern, replacement in _LATEX_RULES:
        text = pattern.sub(replacement, text)
    return text


def convert_unicode_scripts(text: str) -> str:
    """
    Rewrite Unicode superscript/subscript runs into caret/underscore markup.

    Example:
        >>> convert_unicode_scripts("x² + H₂O")
        'x^2^ + H_2_O'
    """
    text = _SUPERSCRIPT_RUN.sub(
        lambda m: "^" + "".join(_SUPERSCRIPTS[c] for c in m.group(0)) + "^", text
    )
    return _SUBSCRIPT_RUN.sub(
        lambda m: "_" + "".join(_SUBSCRIPTS[c] for c in m.group(0)) + "_", text
    )


def close_script_notation(text: str) -> str:
    """
    Close superscripts and subscripts the model left open.

    `x^2 + 3` becomes `x^2^ + 3`, `tan^(-1)` becomes `tan^-1^`, `v_0 = 5`
    becomes `v_0_ = 5`. A script is only closed when a space, punctuation
    or end of line follows it; already closed scripts are untouched.
    """
    if "^" in text:
        text = _PAREN_EXPONENT.sub(r"^\1^", text)
        text = _OPEN_SUPERSCRIPT.sub(r"\1^\2^", text)
    if "_" in text:
        text = _OPEN_SUBSCRIPT.sub(r"\1_\2_", text)
    return text
