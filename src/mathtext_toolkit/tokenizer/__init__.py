"""
Tokenizer Package

Stage 8: canonical text -> typed inline elements for a renderer.
"""

from .parser import tokenize, tokenize_line
from .scripts import ScriptRun, split_script_notation, to_unicode_script

__all__ = [
    "tokenize",
    "tokenize_line",
    "ScriptRun",
    "split_script_notation",
    "to_unicode_script",
]
