"""
Структурный парсер разметки.

Собирает поток токенов лексера в «сырое» дерево с позициями. Проверяет
только баланс тегов — всё остальное (пробелы, атрибуты, выражения)
интерпретируется уже классификатором и рендерером.
"""

from __future__ import annotations

import logging
from typing import List

from .lexer import MarkupLexer, Token, TokenType
from .nodes import RawComment, RawElement, RawExpression, RawNode, RawText, RawTree
from ..errors import StructuralInputError
from ..rules import is_void

logger = logging.getLogger(__name__)


class ParserError(StructuralInputError):
    """Ошибка синтаксического анализа."""

    def __init__(self, message: str, token: Token):
        super().__init__(message, token.line, token.column)
        self.token = token


class MarkupParser:
    """
    Стековый парсер: открывающий тег кладётся на стек, закрывающий
    должен совпасть с вершиной стека.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens

    def parse(self) -> RawTree:
        """
        Парсит последовательность токенов в дерево.

        Returns:
            Список корневых узлов

        Raises:
            ParserError: При несбалансированных тегах
        """
        root: RawTree = []
        stack: List[RawElement] = []

        for token in self.tokens:
            if token.type == TokenType.EOF:
                break
            container: List[RawNode] = stack[-1].children if stack else root

            if token.type in (TokenType.TEXT, TokenType.RAW_TEXT):
                container.append(RawText(token.value, token.position, token.end))
            elif token.type == TokenType.COMMENT:
                container.append(RawComment(token.value, token.position, token.end))
            elif token.type == TokenType.EXPRESSION:
                container.append(RawExpression(token.value, token.position, token.end, token.line, token.column))
            elif token.type == TokenType.START_TAG:
                element = RawElement(
                    name=token.value,
                    attributes=list(token.attributes),
                    start=token.position,
                    open_end=token.end,
                    line=token.line,
                    column=token.column,
                    self_closing=token.self_closing,
                )
                container.append(element)
                if token.self_closing or is_void(token.value):
                    element.close_start = element.end = token.end
                else:
                    stack.append(element)
            elif token.type == TokenType.END_TAG:
                self._close(stack, token)

        if stack:
            unclosed = stack[-1]
            raise StructuralInputError(f"Unclosed tag <{unclosed.name}>", unclosed.line, unclosed.column)

        return root

    @staticmethod
    def _close(stack: List[RawElement], token: Token) -> None:
        if not stack:
            raise ParserError(f"Unexpected closing tag </{token.value}>", token)
        top = stack[-1]
        if top.name != token.value:
            raise ParserError(f"Mismatched closing tag </{token.value}>, expected </{top.name}>", token)
        top.close_start = token.position
        top.end = token.end
        stack.pop()


def parse_markup(text: str) -> RawTree:
    """Удобная функция: исходный текст → сырое дерево."""
    tokens = MarkupLexer(text).tokenize()
    logger.debug("lexed %d tokens", len(tokens))
    return MarkupParser(tokens).parse()


__all__ = ["ParserError", "MarkupParser", "parse_markup"]
