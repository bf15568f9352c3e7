"""
Embedded-expression formatter capability.

The renderer never formats expression code itself: it calls an injected
`ExpressionFormatter` (text in, formatted text out) and expects
`ExpressionSyntaxError` on invalid input. The default implementation
handles Python expressions with the standard `ast` module.
"""

from __future__ import annotations

import ast
from typing import Callable

# formatter(raw_code) -> formatted_code; must be deterministic and idempotent
ExpressionFormatter = Callable[[str], str]


class ExpressionSyntaxError(Exception):
    """Signal from an expression formatter: the snippet is not valid code."""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.message = message
        self.code = code


def format_python_expression(code: str) -> str:
    """
    Format a Python expression.

    A single-line `# comment` is returned as is, so comment interpolations
    like `{{ # TODO }}` survive formatting.

    Raises:
        ExpressionSyntaxError: if the snippet is empty or does not parse
    """
    stripped = code.strip()
    if not stripped:
        raise ExpressionSyntaxError("empty expression", code)
    if stripped.startswith("#") and "\n" not in stripped:
        return stripped
    try:
        tree = ast.parse(stripped, mode="eval")
    except SyntaxError as e:
        raise ExpressionSyntaxError(e.msg or "invalid syntax", code) from e
    return ast.unparse(tree)


__all__ = ["ExpressionFormatter", "ExpressionSyntaxError", "format_python_expression"]
