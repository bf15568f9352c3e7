"""
Узлы «сырого» дерева разметки.

Это выход структурного парсера: теги, атрибуты, текст, выражения и
комментарии с позициями в исходном тексте. Классификатор пробелов
восстанавливает по этим позициям точные срезы исходника между узлами.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

AttrKind = Literal["none", "string", "bare", "expression"]


@dataclass(frozen=True)
class RawAttribute:
    """
    Атрибут открывающего тега.

    kind:
      - "none"       — атрибут без значения (`secure`)
      - "string"     — значение в кавычках, value хранит кавычки (`"hello"`)
      - "bare"       — значение без кавычек (`123`)
      - "expression" — содержимое `{{ ... }}` без разделителей
    """
    name: str
    kind: AttrKind
    value: Optional[str]
    line: int
    column: int


@dataclass(frozen=True)
class RawText:
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class RawExpression:
    """Интерполяция `{{ code }}`; code — текст между разделителями как есть."""
    code: str
    start: int
    end: int
    line: int
    column: int


@dataclass(frozen=True)
class RawComment:
    text: str
    start: int
    end: int


@dataclass
class RawElement:
    """
    Элемент разметки.

    Позиции (смещения в исходном тексте):
      start       — `<` открывающего тега
      open_end    — сразу после `>` открывающего тега
      close_start — `<` закрывающего тега
      end         — сразу после `>` закрывающего тега

    Для самозакрывающихся и void-элементов open_end == close_start == end.
    """
    name: str
    attributes: List[RawAttribute]
    start: int
    open_end: int
    line: int
    column: int
    self_closing: bool = False
    close_start: int = -1
    end: int = -1
    children: List[RawNode] = field(default_factory=list)


RawNode = Union[RawElement, RawText, RawExpression, RawComment]

# Корень: список узлов верхнего уровня
RawTree = List[RawNode]


__all__ = [
    "AttrKind",
    "RawAttribute",
    "RawText",
    "RawExpression",
    "RawComment",
    "RawElement",
    "RawNode",
    "RawTree",
]
