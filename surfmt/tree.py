"""
Annotated tree.

Output of the whitespace classifier and the only input of the renderer.
Whitespace that mattered in the source is represented by explicit
WhitespaceMarker nodes; a missing marker means there was no whitespace.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Tuple, Union


class MarkerPosition(enum.Enum):
    DOCUMENT_START = "document_start"
    BEFORE_FIRST_CHILD = "before_first_child"
    BETWEEN_SIBLINGS = "between_siblings"
    BEFORE_CLOSING_TAG = "before_closing_tag"


@dataclass(frozen=True)
class WhitespaceMarker:
    """
    Zero-width marker: whitespace existed at this boundary in the source.

    blank_line is set when the whitespace run held two or more newlines;
    the renderer then keeps exactly one empty line there.
    """
    position: MarkerPosition
    blank_line: bool = False


# ---- Attribute values ----

@dataclass(frozen=True)
class LiteralValue:
    """Plain string / integer / boolean written without interpolation brackets."""
    value: Union[str, int, bool]


@dataclass(frozen=True)
class StringValue:
    """Quoted value exactly as written, quotes included."""
    raw: str


@dataclass(frozen=True)
class BareValue:
    """Unquoted value that is not a recognised literal."""
    raw: str


@dataclass(frozen=True)
class ExpressionValue:
    """Code between `{{` and `}}`, awaiting the expression formatter."""
    raw: str


AttributeValue = Union[LiteralValue, StringValue, BareValue, ExpressionValue]


@dataclass(frozen=True)
class Attribute:
    name: str
    value: AttributeValue
    line: int = 0
    column: int = 0


# ---- Nodes ----

@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class Expression:
    raw: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class Element:
    name: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple[Node, ...] = ()
    self_closing: bool = False
    whitespace_sensitive: bool = False
    line: int = 0
    column: int = 0


Node = Union[Element, Text, Expression, WhitespaceMarker]

# Documents are node lists that start with a DOCUMENT_START marker
AnnotatedTree = List[Node]


__all__ = [
    "MarkerPosition",
    "WhitespaceMarker",
    "LiteralValue",
    "StringValue",
    "BareValue",
    "ExpressionValue",
    "AttributeValue",
    "Attribute",
    "Text",
    "Expression",
    "Element",
    "Node",
    "AnnotatedTree",
]
