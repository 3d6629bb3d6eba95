"""
Module: common.vocabulary

Purpose:
    Shared word lists and glyph sets used by several stages: structural
    labels, step-instruction verbs, arrow glyphs and prose openers. Keeping
    them here stops the formatter, tokenizer and equation extractor from
    drifting apart.

Key Constants:
    - ARROW_GLYPHS / ARROW_PATTERN: Transformation arrows
    - STEP_VERBS: Capitalized step-instruction verbs
    - ISOLATED_LABEL_PATTERN: Labels forced onto their own line
    - LABEL_LINE_PATTERN: Labels recognized at the start of a line
    - PROSE_PREFIXES: Line openers that mark explanatory prose

Used By:
    - formatter.labels, formatter.segmenter, formatter.cleanup
    - tokenizer.parser
    - equations.extractor, equations.prose
"""

from __future__ import annotations

import re

# Longest glyphs first so "->" never shadows a longer spelling.
ARROW_GLYPHS: tuple[str, ...] = ("→", "->", "=>", "⟶", "⟹", "⇒", "➔", "➝", "➞", "➟")
ARROW_PATTERN = re.compile(
    "|".join(re.escape(g) for g in sorted(ARROW_GLYPHS, key=len, reverse=True))
)

STEP_VERBS: tuple[str, ...] = (
    "Start with the equation",
    "Starting with the equation",
    "Start with",
    "Starting with",
    "Original equation",
    "Add",
    "Subtract",
    "Multiply",
    "Divide",
    "Simplify",
    "Combine",
    "Factor",
    "Expand",
    "Distribute",
    "Solve",
    "Rearrange",
    "Isolate",
    "Cross-multiply",
    "Cross multiply",
    "Graph",
    "Rewrite",
    "Convert",
    "Transform",
)

# Canonical spelling for every label that gets its own line.
CANONICAL_LABELS: dict[str, str] = {
    "left side": "Left Side:",
    "right side": "Right Side:",
    "lhs": "LHS:",
    "rhs": "RHS:",
    "original equation": "Original equation:",
    "simplified": "Simplified:",
    "therefore": "Therefore:",
    "hence": "Hence:",
    "thus": "Thus:",
}

LEFT_SIDE_SYNONYM = re.compile(r"\b(?:left[- ]hand[- ]side|left side)\s*:", re.IGNORECASE)
RIGHT_SIDE_SYNONYM = re.compile(r"\b(?:right[- ]hand[- ]side|right side)\s*:", re.IGNORECASE)

ISOLATED_LABEL_PATTERN = re.compile(
    r"[ \t\n]*\b("
    r"Left Side|Right Side|LHS|RHS|Original equation|Simplified|Therefore|Hence|Thus"
    r"|Step \d+"
    r"|Equation after simplifying[^:\n]*"
    r"):[ \t\n]*",
    re.IGNORECASE,
)

LABEL_LINE_PATTERN = re.compile(
    r"^(Left-hand side|Right-hand side|Left side|Right side|LHS|RHS|Step \d+|Part [a-zA-Z]"
    r"|Case \d+|Solution|Answer|Result|Given|Find|Proof|Example|Original equation"
    r"|Simplified|Therefore|Hence|Thus|Equation after simplifying[^:\n]*):",
    re.IGNORECASE,
)

# Leading labels removed before equation extraction. Connectives need no colon.
LEADING_LABEL_PATTERN = re.compile(
    r"^\s*(?:"
    r"(?:Left[- ]hand[- ]side|Right[- ]hand[- ]side|Left Side|Right Side|LHS|RHS"
    r"|Step \d+|Part [a-zA-Z]|Case \d+|Original equation|Simplified|Final answer|Answer"
    r"|Result|Solution|Equation after simplifying[^:\n]*)\s*[:,]"
    r"|(?:Therefore|Hence|Thus|So)\b,?"
    r")\s*",
    re.IGNORECASE,
)

PROSE_PREFIXES: tuple[str, ...] = (
    "where",
    "since",
    "because",
    "note",
    "this",
    "add ",
    "subtract",
    "multiply",
    "divide",
    "distribute",
    "combine",
    "simplify",
    "solve",
    "we ",
    "the ",
    "let ",
    "original",
)

# Inline image reference: [IMAGE: description](url)
IMAGE_REFERENCE = re.compile(r"\[IMAGE:\s*([^\]]*)\]\(([^)\s]*)\)")
