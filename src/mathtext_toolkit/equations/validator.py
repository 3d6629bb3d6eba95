"""
Module: equations.validator

Purpose:
    Decide whether a "left = right" candidate is a real equation or an
    artifact of messy model output. Rejections are never errors: the
    candidate is simply excluded, and the verdict carries the reason for
    callers that want to inspect it.

Key Functions:
    - split_equation(): First usable "=" split, as (left, right)
    - validate_candidate(): Candidate -> CandidateVerdict
    - is_valid_equation(): Boolean shortcut

Key Classes:
    - RejectionReason: Why a candidate was excluded
    - CandidateVerdict: accepted flag, reason and the parsed Equation

Dependencies:
    - core.models.equations: Split-point scan and Equation model

Used By:
    - equations.extractor
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from mathtext_toolkit.core.models.equations import Equation, top_level_equals

logger = logging.getLogger(__name__)

_TRAILING_OPERATOR = re.compile(r"[+\-−*/×÷=^]\s*$")
_LEADING_OPERATOR = re.compile(r"^[+*/×÷=^]")
_ITALIC = re.compile(r"\*[a-zA-Z][a-zA-Z0-9_^]*\*")
_OPERAND_LEFT = re.compile(r"[\w)}\]]")
_OPERAND_RIGHT = re.compile(r"[\w({\[\-]")
_REPEATED_LETTER = re.compile(r"(?<![\w*])([a-zA-Z])\s+\1(?![\w])")
_FRACTION_LETTER = re.compile(r"\{[^{}/]+/[^{}]+\}\s*[a-zA-Z](?![a-zA-Z])")
_UNSIMPLIFIED_PRODUCT = re.compile(r"×\s*\{[^{}/]+/[^{}]+\}\s*[a-zA-Z]$")
_ALPHANUMERIC = re.compile(r"[^\W_]")
_WHITESPACE = re.compile(r"\s+")


class RejectionReason(str, Enum):
    """Why a candidate equation was excluded."""

    NO_SPLIT = "no_split"
    MULTIPLE_SPLITS = "multiple_splits"
    EMPTY_SIDE = "empty_side"
    RIGHT_STARTS_WITH_OPERATOR = "right_starts_with_operator"
    TRAILING_OPERATOR = "trailing_operator"
    DANGLING_ASTERISK = "dangling_asterisk"
    REPEATED_TOKEN = "repeated_token"
    UNSIMPLIFIED_PRODUCT = "unsimplified_product"
    DUPLICATED_TERM = "duplicated_term"
    NO_CONTENT = "no_content"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class CandidateVerdict:
    """
    Outcome of validating one candidate.

    Truthy exactly when the candidate was accepted, in which case
    `equation` holds the parsed Equation.
    """

    text: str
    reason: Optional[RejectionReason] = None
    equation: Optional[Equation] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.accepted


def split_equation(text: str) -> Optional[tuple[str, str]]:
    """
    Split at the first "=" that is not part of a comparison.

    Everything after that "=" (including further "=") is the right side.

    Example:
        >>> split_equation("m = {150/3} = 50")
        ('m', '{150/3} = 50')
    """
    positions = top_level_equals(text)
    if not positions:
        return None
    idx = positions[0]
    return text[:idx].strip(), text[idx + 1:].strip()


def _compact(text: str) -> str:
    return _WHITESPACE.sub("", text)


def _has_dangling_asterisk(text: str) -> bool:
    """An asterisk (outside an italic run) missing an operand on either side."""
    text = _ITALIC.sub("v", text)
    for i, ch in enumerate(text):
        if ch != "*":
            continue
        before = text[:i].rstrip()[-1:]
        after = text[i + 1:].lstrip()[:1]
        if not (before and _OPERAND_LEFT.match(before) and after and _OPERAND_RIGHT.match(after)):
            return True
    return False


def _reject(text: str, reason: RejectionReason) -> CandidateVerdict:
    logger.debug(f"Rejected equation candidate {text!r}: {reason}")
    return CandidateVerdict(text=text, reason=reason)


def validate_candidate(text: str) -> CandidateVerdict:
    """
    Validate a "left = right" candidate.

    Rejects, in order: an empty side; a trailing operator; a dangling
    asterisk; a single letter repeated as consecutive tokens ("x x", left
    behind by asterisk corruption); no split point or more than one; a
    right side starting with an operator; a right side with no letters or
    digits; a right side ending in "× {a/b}x"; a right side repeating a
    fraction-letter term from the left side.

    Example:
        >>> validate_candidate("x = 7/5").accepted
        True
        >>> validate_candidate("=").reason
        <RejectionReason.EMPTY_SIDE: 'empty_side'>
    """
    candidate = text.strip()
    positions = top_level_equals(candidate)

    if positions:
        first, last = positions[0], positions[-1]
        if not candidate[:first].strip() or not candidate[last + 1:].strip():
            return _reject(candidate, RejectionReason.EMPTY_SIDE)

    if _TRAILING_OPERATOR.search(candidate):
        return _reject(candidate, RejectionReason.TRAILING_OPERATOR)
    if _has_dangling_asterisk(candidate):
        return _reject(candidate, RejectionReason.DANGLING_ASTERISK)
    if _REPEATED_LETTER.search(candidate):
        return _reject(candidate, RejectionReason.REPEATED_TOKEN)

    if not positions:
        return _reject(candidate, RejectionReason.NO_SPLIT)
    if len(positions) > 1:
        return _reject(candidate, RejectionReason.MULTIPLE_SPLITS)

    left = candidate[:positions[0]].strip()
    right = candidate[positions[0] + 1:].strip()

    if _LEADING_OPERATOR.match(right):
        return _reject(candidate, RejectionReason.RIGHT_STARTS_WITH_OPERATOR)
    if not _ALPHANUMERIC.search(right):
        return _reject(candidate, RejectionReason.NO_CONTENT)
    if _UNSIMPLIFIED_PRODUCT.search(right):
        return _reject(candidate, RejectionReason.UNSIMPLIFIED_PRODUCT)

    left_terms = {_compact(m.group(0)) for m in _FRACTION_LETTER.finditer(left)}
    if any(_compact(m.group(0)) in left_terms for m in _FRACTION_LETTER.finditer(right)):
        return _reject(candidate, RejectionReason.DUPLICATED_TERM)

    return CandidateVerdict(text=candidate, equation=Equation(left=left, right=right))


def is_valid_equation(text: str) -> bool:
    """True when validate_candidate accepts the text."""
    return validate_candidate(text).accepted
