"""
Классификатор пробелов.

Проходит по сырому дереву и исходному тексту и строит аннотированное
дерево, в котором каждая граница с пробелами в исходнике явно отмечена
маркером WhitespaceMarker, а пробелы в нечувствительных контекстах
схлопнуты.

Границы определяются по срезам исходного текста между узлами, поэтому
сырые текстовые узлы как таковые не используются: текст восстанавливается
из тех же срезов.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence, Union

from .errors import StructuralInputError
from .literals import literal_from_bare, literal_from_code
from .rules import is_directive, is_whitespace_sensitive
from .syntax.nodes import RawAttribute, RawComment, RawElement, RawExpression, RawNode, RawText, RawTree
from .tree import (
    AnnotatedTree, Attribute, AttributeValue, BareValue, Element, Expression, ExpressionValue,
    LiteralValue, MarkerPosition, Node, StringValue, Text, WhitespaceMarker,
)

logger = logging.getLogger(__name__)

# Пробелы разметки; неразрывный пробел и прочий юникод сюда не входят
_WS_CHARS = " \t\r\n\f"
_WS_RUN = re.compile(r"[ \t\r\n\f]+")


@dataclass(frozen=True)
class _Gap:
    """Пробельный промежуток до расстановки позиций маркеров."""
    newlines: int


_Item = Union[Element, Text, Expression, _Gap]


def _merge_runs(left: str, right: str) -> str:
    """
    Склеивает текст по обе стороны удалённого комментария.

    Из пробельного хвоста left и пробельного начала right остаётся один
    прогон, с наибольшим числом переводов строки.
    """
    rest = right.lstrip(_WS_CHARS)
    right_run = right[:len(right) - len(rest)]
    body = left.rstrip(_WS_CHARS)
    left_run = left[len(body):]
    run = right_run if right_run.count("\n") > left_run.count("\n") else left_run
    return body + run + rest


class WhitespaceClassifier:
    """
    Строит аннотированное дерево по сырому дереву и исходному тексту.

    Экземпляр привязан к одному документу; дерево строится один раз и
    дальше не изменяется.
    """

    def __init__(self, source_text: str):
        self.source = source_text

    def classify(self, raw_tree: RawTree) -> AnnotatedTree:
        items = self._content_items(raw_tree, 0, len(self.source), "document")

        # пробелы в начале и в конце документа не значимы
        while items and isinstance(items[0], _Gap):
            items.pop(0)
        while items and isinstance(items[-1], _Gap):
            items.pop()

        tree: AnnotatedTree = [WhitespaceMarker(MarkerPosition.DOCUMENT_START)]
        tree.extend(self._place_markers(items))
        return tree

    # ------------------------------------------------------------------ #

    def _content_items(self, children: Sequence[RawNode], start: int, end: int, owner: str) -> List[_Item]:
        """
        Разбирает содержимое [start, end) на узлы и пробельные промежутки.

        Комментарии выбрасываются. Если слева от комментария уже был пробел,
        пробелы по обе стороны сливаются в один промежуток: остаётся тот,
        в котором больше переводов строки. Комментарий на отдельной строке
        не превращается в пустую строку, а пустая строка после него не теряется.
        """
        items: List[_Item] = []
        cursor = start
        pending = ""
        merge_next = False

        for child in children:
            if isinstance(child, RawText):
                continue
            self._check_span(child, cursor, end, owner)
            piece = self.source[cursor:child.start]
            pending = _merge_runs(pending, piece) if merge_next else pending + piece
            cursor = child.end

            if isinstance(child, RawComment):
                merge_next = bool(pending) and pending[-1] in _WS_CHARS
                continue

            merge_next = False
            items.extend(self._split_gap(pending))
            pending = ""
            items.append(self._node(child))

        tail = self.source[cursor:end]
        pending = _merge_runs(pending, tail) if merge_next else pending + tail
        items.extend(self._split_gap(pending))
        return items

    @staticmethod
    def _split_gap(text: str) -> List[_Item]:
        """
        Текст между двумя узлами → последовательность Text и _Gap.

        Пробелы без перевода строки внутри текста схлопываются в один
        пробел; пробелы с переводом строки, а также пробелы по краям,
        становятся границами.
        """
        items: List[_Item] = []
        words: List[str] = []
        pos = 0

        def flush() -> None:
            if words:
                items.append(Text("".join(words)))
                words.clear()

        for m in _WS_RUN.finditer(text):
            chunk = text[pos:m.start()]
            if chunk:
                words.append(chunk)
            run = m.group(0)
            if words and "\n" not in run and m.end() < len(text):
                words.append(" ")
            else:
                flush()
                items.append(_Gap(run.count("\n")))
            pos = m.end()

        if pos < len(text):
            words.append(text[pos:])
        flush()
        return items

    @staticmethod
    def _place_markers(items: List[_Item]) -> List[Node]:
        out: List[Node] = []
        last = len(items) - 1
        for i, item in enumerate(items):
            if not isinstance(item, _Gap):
                out.append(item)
                continue
            if i == last:
                position = MarkerPosition.BEFORE_CLOSING_TAG
            elif i == 0:
                position = MarkerPosition.BEFORE_FIRST_CHILD
            else:
                position = MarkerPosition.BETWEEN_SIBLINGS
            out.append(WhitespaceMarker(position, blank_line=item.newlines >= 2))
        return out

    # ------------------------------------------------------------------ #

    def _node(self, raw: Union[RawElement, RawExpression]) -> Union[Element, Expression]:
        if isinstance(raw, RawExpression):
            return Expression(raw.code, raw.line, raw.column)
        return self._element(raw)

    def _element(self, raw: RawElement) -> Element:
        sensitive = is_whitespace_sensitive(raw.name)
        attributes = tuple(self._attribute(a) for a in raw.attributes)

        if raw.self_closing:
            children: tuple = ()
        elif sensitive:
            inner = self.source[raw.open_end:raw.close_start]
            children = (Text(inner),) if inner else ()
        else:
            items = self._content_items(raw.children, raw.open_end, raw.close_start, f"<{raw.name}>")
            children = tuple(self._place_markers(items))

        return Element(
            name=raw.name,
            attributes=attributes,
            children=children,
            self_closing=raw.self_closing,
            whitespace_sensitive=sensitive,
            line=raw.line,
            column=raw.column,
        )

    @staticmethod
    def _attribute(raw: RawAttribute) -> Attribute:
        value: AttributeValue
        if raw.kind == "none":
            value = LiteralValue(True)
        elif raw.kind == "string":
            value = StringValue(raw.value or '""')
        elif raw.kind == "bare":
            literal = None if is_directive(raw.name) else literal_from_bare(raw.value or "")
            value = literal or BareValue(raw.value or "")
        else:
            literal = None if is_directive(raw.name) else literal_from_code(raw.value or "")
            value = literal or ExpressionValue(raw.value or "")
        return Attribute(raw.name, value, raw.line, raw.column)

    def _check_span(self, child: RawNode, cursor: int, end: int, owner: str) -> None:
        ok = cursor <= child.start <= child.end <= end
        if isinstance(child, RawElement):
            ok = ok and child.start < child.open_end <= child.close_start <= child.end
        if ok:
            return
        line = getattr(child, "line", 0)
        column = getattr(child, "column", 0)
        label = f"<{child.name}>" if isinstance(child, RawElement) else type(child).__name__
        raise StructuralInputError(f"Inconsistent source positions for {label} inside {owner}", line, column)


def classify(raw_tree: RawTree, source_text: str) -> AnnotatedTree:
    """
    Аннотирует сырое дерево явными маркерами пробелов.

    Args:
        raw_tree: Узлы верхнего уровня от структурного парсера
        source_text: Исходный текст, по которому построено дерево

    Returns:
        Аннотированное дерево, начинающееся с маркера DOCUMENT_START

    Raises:
        StructuralInputError: Если позиции узлов не согласованы с текстом
    """
    tree = WhitespaceClassifier(source_text).classify(raw_tree)
    logger.debug("classified %d top-level nodes", len(tree) - 1)
    return tree


__all__ = ["WhitespaceClassifier", "classify"]
