"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from SurfmtUserError.

Programming errors and bugs should NOT inherit from SurfmtUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class SurfmtUserError(Exception):
    """
    Base class for all user-facing errors of the formatter.

    These errors indicate problems that the user can fix:
    broken markup, invalid expression snippets, bad configuration.
    """
    pass


class StructuralInputError(SurfmtUserError):
    """Malformed markup: unbalanced tags, unterminated constructs, broken spans."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        where = f" at {line}:{column}" if line else ""
        super().__init__(f"{message}{where}")
        self.line = line
        self.column = column


class ExpressionFormatError(SurfmtUserError):
    """
    An attribute value or interpolation could not be formatted.

    Carries the enclosing element, the attribute name (None for
    interpolations used as children) and the offending raw snippet.
    """

    def __init__(
        self,
        element: Optional[str],
        snippet: str,
        *,
        attribute: Optional[str] = None,
        line: int = 0,
        column: int = 0,
        reason: str = "",
    ):
        if attribute:
            target = f"attribute '{attribute}' of <{element}>"
        elif element:
            target = f"interpolation in <{element}>"
        else:
            target = "top-level interpolation"
        where = f" at {line}:{column}" if line else ""
        msg = f"Cannot format {target}{where}: {snippet!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
        self.element = element
        self.attribute = attribute
        self.snippet = snippet
        self.line = line
        self.column = column


class ConfigError(SurfmtUserError):
    """Invalid formatter configuration."""
    pass


__all__ = ["SurfmtUserError", "StructuralInputError", "ExpressionFormatError", "ConfigError"]
