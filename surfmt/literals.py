from __future__ import annotations

import ast
import re
from typing import Optional

from .tree import LiteralValue

_DECIMAL = re.compile(r"0|[1-9][0-9]*")
_BOOL_WORDS = {"true": True, "false": False}


def _is_plain_string(value: str) -> bool:
    """Строку можно записать как "..." без экранирования и без интерполяции."""
    # isprintable() отсекает \t, \n, \r и прочие управляющие символы
    return value.isprintable() and not any(s in value for s in ('"', "\\", "{{"))


def literal_from_code(code: str) -> Optional[LiteralValue]:
    """
    Распознаёт литерал внутри `{{ ... }}`.

    Строки, целые числа и булевы значения (`True`/`False`, а также
    `true`/`false`, как их обычно пишут в разметке). Всё прочее — None.
    """
    stripped = code.strip()
    if stripped in _BOOL_WORDS:
        return LiteralValue(_BOOL_WORDS[stripped])
    try:
        node = ast.parse(stripped, mode="eval").body
    except SyntaxError:
        return None
    if not isinstance(node, ast.Constant):
        return None
    value = node.value
    if isinstance(value, bool):
        return LiteralValue(value)
    if isinstance(value, int):
        return LiteralValue(value)
    if isinstance(value, str) and _is_plain_string(value):
        return LiteralValue(value)
    return None


def literal_from_bare(raw: str) -> Optional[LiteralValue]:
    """Значение без кавычек: `true`, `false` или десятичное целое."""
    if raw in _BOOL_WORDS:
        return LiteralValue(_BOOL_WORDS[raw])
    if _DECIMAL.fullmatch(raw):
        return LiteralValue(int(raw))
    return None


def render_literal(name: str, literal: LiteralValue) -> str:
    value = literal.value
    if value is True:
        # shorthand: атрибут без значения означает true
        return name
    if value is False:
        return f"{name}=false"
    if isinstance(value, int):
        return f"{name}={value}"
    return f'{name}="{value}"'


__all__ = ["literal_from_code", "literal_from_bare", "render_literal"]
