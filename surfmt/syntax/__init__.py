"""
Upstream structural parser adapter.

Turns markup source into the raw node tree (tags, attributes, text,
interpolations, comments with source offsets) consumed by the whitespace
classifier. Any other parser producing the same node types can be used instead.
"""

from __future__ import annotations

from .lexer import LexerError, MarkupLexer, Token, TokenType, tokenize_markup
from .nodes import RawAttribute, RawComment, RawElement, RawExpression, RawNode, RawText, RawTree
from .parser import MarkupParser, ParserError, parse_markup

__all__ = [
    "LexerError",
    "MarkupLexer",
    "Token",
    "TokenType",
    "tokenize_markup",
    "RawAttribute",
    "RawComment",
    "RawElement",
    "RawExpression",
    "RawNode",
    "RawText",
    "RawTree",
    "MarkupParser",
    "ParserError",
    "parse_markup",
]
