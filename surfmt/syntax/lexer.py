"""
Лексический анализатор разметки.

Разбивает исходный текст на токены: текст, комментарии, интерполяции
`{{ ... }}`, открывающие и закрывающие теги (с уже разобранными атрибутами).
Каждый токен несёт точные смещения в исходнике — по ним классификатор
пробелов потом восстанавливает срезы между узлами.
"""

from __future__ import annotations

import bisect
import enum
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .nodes import RawAttribute
from ..errors import StructuralInputError
from ..rules import is_whitespace_sensitive


class TokenType(enum.Enum):
    """Типы токенов разметки."""
    TEXT = "TEXT"
    RAW_TEXT = "RAW_TEXT"        # содержимое тегов, чувствительных к пробелам
    COMMENT = "COMMENT"          # <!-- ... -->
    EXPRESSION = "EXPRESSION"    # {{ ... }}
    START_TAG = "START_TAG"      # <Name ...> / <Name ... />
    END_TAG = "END_TAG"          # </Name>
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.

    Для TEXT/RAW_TEXT/COMMENT value — текст, для EXPRESSION — код между
    разделителями, для тегов — имя тега.
    """
    type: TokenType
    value: str
    position: int        # Позиция в исходном тексте
    end: int             # Позиция сразу после токена
    line: int            # Номер строки (начиная с 1)
    column: int          # Номер колонки (начиная с 1)
    attributes: Tuple[RawAttribute, ...] = ()
    self_closing: bool = False

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class LexerError(StructuralInputError):
    """Ошибка лексического анализа."""

    def __init__(self, message: str, line: int, column: int, position: int):
        super().__init__(message, line, column)
        self.position = position


_NAME = re.compile(r"[#:]?[A-Za-z_][\w.:\-]*")
_ATTR_NAME = re.compile(r"[^\s=/>\"'{}<]+")
_UNQUOTED = re.compile(r"(?:[^\s\"'=<>`/]|/(?!>))+")
_WS = re.compile(r"[ \t\r\n\f]*")


class MarkupLexer:
    """
    Лексический анализатор разметки.

    Учитывает два контекста:
    - обычная разметка (теги, текст, интерполяции, комментарии)
    - «сырое» содержимое тегов, чувствительных к пробелам (`<pre>`, `<code>`,
      макро-компоненты `<#Name>`): всё до парного закрывающего тега
      выдаётся одним RAW_TEXT токеном
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.length = len(text)
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст и возвращает список токенов (с EOF в конце).
        """
        tokens: List[Token] = []

        while self.position < self.length:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.START_TAG and not token.self_closing and is_whitespace_sensitive(token.value):
                raw = self._read_raw_content(token)
                if raw is not None:
                    tokens.append(raw)

        line, column = self.line_col(self.length)
        tokens.append(Token(TokenType.EOF, "", self.length, self.length, line, column))
        return tokens

    def next_token(self) -> Token:
        """Извлекает следующий токен из входного потока."""
        text = self.text
        pos = self.position

        if text.startswith("<!--", pos):
            return self._read_comment()
        if text.startswith("</", pos):
            return self._read_end_tag()
        if text.startswith("<", pos) and _NAME.match(text, pos + 1):
            return self._read_start_tag()
        if text.startswith("{{", pos):
            return self._read_expression()

        end = self._find_text_end(pos)
        return self._make(TokenType.TEXT, text[pos:end], pos, end)

    # ---------------------------- positions ---------------------------- #

    def line_col(self, offset: int) -> Tuple[int, int]:
        idx = bisect.bisect_right(self._line_starts, offset) - 1
        return idx + 1, offset - self._line_starts[idx] + 1

    def _make(self, ttype: TokenType, value: str, start: int, end: int, **extra) -> Token:
        self.position = end
        line, column = self.line_col(start)
        return Token(ttype, value, start, end, line, column, **extra)

    def _error(self, message: str, offset: int) -> LexerError:
        line, column = self.line_col(offset)
        return LexerError(message, line, column, offset)

    # ------------------------------ text ------------------------------- #

    def _find_text_end(self, pos: int) -> int:
        """Текст идёт до ближайшего тега, комментария или `{{`."""
        text = self.text
        i = pos + 1
        while i < self.length:
            ch = text[i]
            if ch == "<":
                if text.startswith("<!--", i) or text.startswith("</", i) or _NAME.match(text, i + 1):
                    return i
            elif ch == "{" and text.startswith("{{", i):
                return i
            i += 1
        return self.length

    def _read_comment(self) -> Token:
        start = self.position
        close = self.text.find("-->", start + 4)
        if close < 0:
            raise self._error("Unterminated comment", start)
        end = close + 3
        return self._make(TokenType.COMMENT, self.text[start:end], start, end)

    # --------------------------- expressions --------------------------- #

    def _read_expression(self) -> Token:
        start = self.position
        code_end = self._find_expression_end(start + 2)
        return self._make(TokenType.EXPRESSION, self.text[start + 2:code_end], start, code_end + 2)

    def _find_expression_end(self, pos: int) -> int:
        """
        Ищет закрывающие `}}` интерполяции, начиная с pos (после `{{`).

        Вложенные фигурные скобки и строковые литералы пропускаются,
        поэтому `{{ {"a": {"b": 1}} }}` разбирается корректно.
        Возвращает позицию первой `}` закрывающей пары.
        """
        text = self.text
        depth = 0
        i = pos
        while i < self.length:
            ch = text[i]
            if ch in "\"'":
                i = self._skip_string(i)
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                if depth == 0:
                    if text.startswith("}}", i):
                        return i
                    raise self._error("Unbalanced '}' in interpolation", i)
                depth -= 1
            i += 1
        raise self._error("Unterminated interpolation", pos - 2)

    def _skip_string(self, pos: int) -> int:
        text = self.text
        quote = text[pos] * 3 if text.startswith(text[pos] * 3, pos) else text[pos]
        i = pos + len(quote)
        while i < self.length:
            if text[i] == "\\":
                i += 2
                continue
            if text.startswith(quote, i):
                return i + len(quote)
            i += 1
        raise self._error("Unterminated string literal in interpolation", pos)

    # ------------------------------ tags ------------------------------- #

    def _read_end_tag(self) -> Token:
        start = self.position
        m = _NAME.match(self.text, start + 2)
        if not m:
            raise self._error("Invalid closing tag", start)
        ws = _WS.match(self.text, m.end())
        if not self.text.startswith(">", ws.end()):
            raise self._error(f"Unterminated closing tag </{m.group(0)}", start)
        return self._make(TokenType.END_TAG, m.group(0), start, ws.end() + 1)

    def _read_start_tag(self) -> Token:
        start = self.position
        text = self.text
        m = _NAME.match(text, start + 1)
        name = m.group(0)
        pos = m.end()
        attributes: List[RawAttribute] = []

        while True:
            pos = _WS.match(text, pos).end()
            if pos >= self.length:
                raise self._error(f"Unterminated tag <{name}", start)
            if text.startswith("/>", pos):
                return self._make(TokenType.START_TAG, name, start, pos + 2,
                                  attributes=tuple(attributes), self_closing=True)
            if text.startswith(">", pos):
                return self._make(TokenType.START_TAG, name, start, pos + 1,
                                  attributes=tuple(attributes))
            attr, pos = self._read_attribute(pos, name)
            attributes.append(attr)

    def _read_attribute(self, pos: int, tag: str) -> Tuple[RawAttribute, int]:
        text = self.text
        m = _ATTR_NAME.match(text, pos)
        if not m:
            raise self._error(f"Unexpected character {text[pos]!r} in tag <{tag}>", pos)
        name = m.group(0)
        line, column = self.line_col(pos)

        after = _WS.match(text, m.end()).end()
        if not text.startswith("=", after):
            return RawAttribute(name, "none", None, line, column), m.end()

        vpos = _WS.match(text, after + 1).end()
        kind, value, end = self._read_attribute_value(vpos, name)
        return RawAttribute(name, kind, value, line, column), end

    def _read_attribute_value(self, pos: int, attr: str) -> Tuple[str, str, int]:
        text = self.text
        if pos >= self.length:
            raise self._error(f"Missing value for attribute '{attr}'", pos)
        ch = text[pos]
        if ch in "\"'":
            close = text.find(ch, pos + 1)
            if close < 0:
                raise self._error(f"Unterminated value of attribute '{attr}'", pos)
            return "string", text[pos:close + 1], close + 1
        if text.startswith("{{", pos):
            code_end = self._find_expression_end(pos + 2)
            return "expression", text[pos + 2:code_end], code_end + 2
        m = _UNQUOTED.match(text, pos)
        if not m:
            raise self._error(f"Missing value for attribute '{attr}'", pos)
        return "bare", m.group(0), m.end()

    def _read_raw_content(self, tag: Token) -> Optional[Token]:
        """Всё содержимое чувствительного тега до парного `</Name>`."""
        start = self.position
        closing = re.compile(r"</" + re.escape(tag.value) + r"[ \t\r\n\f]*>")
        m = closing.search(self.text, start)
        if not m:
            raise LexerError(f"Unclosed tag <{tag.value}>", tag.line, tag.column, tag.position)
        if m.start() == start:
            return None
        return self._make(TokenType.RAW_TEXT, self.text[start:m.start()], start, m.start())


def tokenize_markup(text: str) -> List[Token]:
    """Удобная функция для токенизации разметки."""
    return MarkupLexer(text).tokenize()


__all__ = ["TokenType", "Token", "LexerError", "MarkupLexer", "tokenize_markup"]
