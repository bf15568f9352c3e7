"""
Formatter for Surface-style markup: nested tags, free text and `{{ }}`
expression snippets.

Two passes: the whitespace classifier annotates the parsed tree with
explicit whitespace markers, the layout renderer turns it into text.
"""

from __future__ import annotations

from .classify import classify
from .engine import format_file, format_string, format_tree, parse
from .errors import ConfigError, ExpressionFormatError, StructuralInputError, SurfmtUserError
from .expression import ExpressionFormatter, ExpressionSyntaxError, format_python_expression
from .render import render
from .types import DEFAULT_LINE_LENGTH, FormatOptions

__all__ = [
    "classify",
    "render",
    "parse",
    "format_tree",
    "format_string",
    "format_file",
    "FormatOptions",
    "DEFAULT_LINE_LENGTH",
    "ExpressionFormatter",
    "ExpressionSyntaxError",
    "format_python_expression",
    "SurfmtUserError",
    "StructuralInputError",
    "ExpressionFormatError",
    "ConfigError",
]
