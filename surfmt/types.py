from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

# ---- Fixed layout constants ----
DEFAULT_LINE_LENGTH = 98
INDENT_UNIT = "  "  # один уровень отступа: два пробела

Newline = Literal["\n", "\r\n"]


@dataclass(frozen=True)
class FormatOptions:
    """
    Параметры форматирования, которые принимает рендерер.

    Всё остальное (размер отступа, набор чувствительных к пробелам тегов,
    схлопывание пустых строк до одной) зафиксировано и не настраивается.
    """
    line_length: int = DEFAULT_LINE_LENGTH
    newline: Newline = "\n"

    def __post_init__(self) -> None:
        if not isinstance(self.line_length, int) or isinstance(self.line_length, bool) or self.line_length <= 0:
            raise ValueError(f"line_length must be a positive integer, got: {self.line_length!r}")
        if self.newline not in ("\n", "\r\n"):
            raise ValueError(f"newline must be '\\n' or '\\r\\n', got: {self.newline!r}")


__all__ = ["DEFAULT_LINE_LENGTH", "INDENT_UNIT", "Newline", "FormatOptions"]
