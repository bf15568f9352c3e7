"""
Layout renderer.

Walks the annotated tree and emits text:

  - children go on their own line (one indent unit deeper) only where the
    classifier left a whitespace marker; no marker means zero characters
    between the rendered neighbours;
  - a blank-line marker keeps exactly one empty line;
  - attributes stay on the tag line unless the opening tag is too long or
    a formatted expression spans several lines next to other attributes;
  - content of whitespace-sensitive elements is copied byte for byte.

The renderer is a pure function of (tree, options, formatter). Indentation
state is threaded through an immutable RenderContext.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from .errors import ExpressionFormatError
from .expression import ExpressionFormatter, ExpressionSyntaxError, format_python_expression
from .literals import render_literal
from .rules import is_void
from .tree import (
    AnnotatedTree, Attribute, BareValue, Element, Expression, ExpressionValue, LiteralValue,
    MarkerPosition, Node, StringValue, Text, WhitespaceMarker,
)
from .types import INDENT_UNIT, FormatOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderContext:
    depth: int = 0
    # once set for an ancestor, stays set for the whole subtree
    sensitive: bool = False

    @property
    def indent(self) -> str:
        return INDENT_UNIT * self.depth

    def nested(self) -> RenderContext:
        return replace(self, depth=self.depth + 1)

    def verbatim(self) -> RenderContext:
        return replace(self, sensitive=True)


class LayoutRenderer:
    """Renders one annotated tree; holds only the options and the formatter."""

    def __init__(self, options: Optional[FormatOptions] = None, formatter: Optional[ExpressionFormatter] = None):
        self.options = options or FormatOptions()
        self.formatter = formatter or format_python_expression
        self.nl = self.options.newline

    def render(self, tree: AnnotatedTree) -> str:
        body = self._children(tree, RenderContext(), None)
        if not body:
            return ""
        return body + self.nl

    # ----------------------------- children ----------------------------- #

    def _children(self, nodes: Sequence[Node], ctx: RenderContext, owner: Optional[str]) -> str:
        """
        Renders a child list; ctx is the context of the children themselves.

        A marker turns into a line break before the next node, or before
        the parent's closing tag when it is the last item.
        """
        parts: List[str] = []
        pending_blank: Optional[bool] = None

        for node in nodes:
            if isinstance(node, WhitespaceMarker):
                if node.position is MarkerPosition.DOCUMENT_START:
                    continue
                pending_blank = bool(pending_blank) or node.blank_line
                continue
            if pending_blank is not None:
                parts.append(self._line_break(pending_blank, ctx.indent))
                pending_blank = None
            parts.append(self._node(node, ctx, owner))

        if pending_blank is not None:
            closing_indent = INDENT_UNIT * max(ctx.depth - 1, 0)
            parts.append(self._line_break(pending_blank, closing_indent))

        return "".join(parts)

    def _line_break(self, blank: bool, indent: str) -> str:
        return self.nl * (2 if blank else 1) + indent

    def _node(self, node: Node, ctx: RenderContext, owner: Optional[str]) -> str:
        if isinstance(node, Element):
            return self._element(node, ctx)
        if isinstance(node, Expression):
            return self._interpolation(node, ctx, owner)
        if isinstance(node, Text):
            return node.content
        return ""

    def _verbatim(self, node: Node, ctx: RenderContext) -> str:
        if isinstance(node, Text):
            return node.content
        if isinstance(node, Expression):
            return "{{" + node.raw + "}}"
        if isinstance(node, Element):
            return self._element(node, ctx)
        return ""

    # ----------------------------- elements ----------------------------- #

    def _element(self, element: Element, ctx: RenderContext) -> str:
        opening = self._opening_tag(element, ctx)
        if element.self_closing or (not element.children and is_void(element.name)):
            return opening

        if ctx.sensitive or element.whitespace_sensitive:
            inner_ctx = ctx.verbatim()
            inner = "".join(self._verbatim(child, inner_ctx) for child in element.children)
        else:
            inner = self._children(element.children, ctx.nested(), element.name)

        return f"{opening}{inner}</{element.name}>"

    def _opening_tag(self, element: Element, ctx: RenderContext) -> str:
        close = " />" if element.self_closing else ">"
        if not element.attributes:
            return f"<{element.name}{close}"

        attrs = [self._attribute(element, attr) for attr in element.attributes]
        single = f"<{element.name} {' '.join(attrs)}{close}"
        if ctx.sensitive:
            return single

        multiline = ["\n" in a for a in attrs]

        # a lone multi-line attribute stays next to the tag name
        if len(attrs) == 1 and multiline[0]:
            return f"<{element.name} {self._reindent(attrs[0], ctx.indent)}{close}"

        if any(multiline) or len(ctx.indent) + len(single) > self.options.line_length:
            attr_indent = ctx.nested().indent
            lines = [f"<{element.name}"]
            lines.extend(attr_indent + self._reindent(a, attr_indent) for a in attrs)
            lines.append(ctx.indent + close.strip())
            return self.nl.join(lines)

        return single

    def _attribute(self, element: Element, attr: Attribute) -> str:
        value = attr.value
        if isinstance(value, LiteralValue):
            return render_literal(attr.name, value)
        if isinstance(value, (StringValue, BareValue)):
            return f"{attr.name}={value.raw}"
        if isinstance(value, ExpressionValue):
            formatted = self._format(value.raw, element.name, attr.name, attr.line, attr.column)
            return f"{attr.name}={self._wrap(formatted)}"
        raise TypeError(f"Unsupported attribute value: {value!r}")

    # ---------------------------- expressions --------------------------- #

    def _interpolation(self, node: Expression, ctx: RenderContext, owner: Optional[str]) -> str:
        formatted = self._format(node.raw, owner, None, node.line, node.column)
        return self._reindent(self._wrap(formatted), ctx.indent)

    def _format(self, raw: str, element: Optional[str], attribute: Optional[str], line: int, column: int) -> str:
        try:
            return self.formatter(raw).strip()
        except ExpressionSyntaxError as e:
            raise ExpressionFormatError(
                element, raw, attribute=attribute, line=line, column=column, reason=e.message
            ) from e

    @staticmethod
    def _wrap(formatted: str) -> str:
        # multi-line code hugs the brackets: {{[ ... ]}}
        if "\n" in formatted:
            return "{{" + formatted + "}}"
        return "{{ " + formatted + " }}"

    def _reindent(self, text: str, indent: str) -> str:
        """Prefixes continuation lines with indent; empty lines stay empty."""
        lines = text.splitlines()
        if len(lines) < 2:
            return text
        rest = [indent + line if line.strip() else "" for line in lines[1:]]
        return self.nl.join([lines[0]] + rest)


def render(
    tree: AnnotatedTree,
    options: Optional[FormatOptions] = None,
    *,
    formatter: Optional[ExpressionFormatter] = None,
) -> str:
    """
    Renders an annotated tree to text.

    Raises:
        ExpressionFormatError: if an attribute value or interpolation
            cannot be formatted; nothing is returned in that case.
    """
    renderer = LayoutRenderer(options, formatter)
    text = renderer.render(tree)
    logger.debug("rendered %d chars (line_length=%d)", len(text), renderer.options.line_length)
    return text


__all__ = ["RenderContext", "LayoutRenderer", "render"]
