"""
Formatting pipeline: markup → raw tree → annotated tree → text.

Each call owns all of its intermediate state, so independent documents can
be formatted concurrently.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .classify import classify
from .expression import ExpressionFormatter
from .render import render
from .syntax import parse_markup
from .tree import AnnotatedTree
from .types import FormatOptions

logger = logging.getLogger(__name__)


def parse(text: str) -> AnnotatedTree:
    """
    Parses markup and annotates it with explicit whitespace markers.

    Raises:
        StructuralInputError: on malformed markup
    """
    raw_tree = parse_markup(text)
    return classify(raw_tree, text)


def format_tree(
    tree: AnnotatedTree,
    options: Optional[FormatOptions] = None,
    *,
    formatter: Optional[ExpressionFormatter] = None,
) -> str:
    return render(tree, options, formatter=formatter)


def format_string(
    text: str,
    options: Optional[FormatOptions] = None,
    *,
    formatter: Optional[ExpressionFormatter] = None,
) -> str:
    """
    Formats a markup document.

    In short:
      - elements are indented two spaces to the right of their parents;
      - attributes are split on multiple lines if the opening tag is too long;
        the tag's indentation counts toward line_length, so nested tags
        wrap earlier than top-level ones;
      - code inside `{{ }}` goes through the expression formatter;
      - lack of whitespace is preserved: `<span>Foo bar</span>` stays as is;
      - more than one blank line collapses into one;
      - `<pre>`, `<code>` and `<#Macro>` content is kept verbatim;
      - HTML comments are removed.

    Raises:
        StructuralInputError: on malformed markup
        ExpressionFormatError: when a snippet cannot be formatted
    """
    tree = parse(text)
    return format_tree(tree, options, formatter=formatter)


def format_file(
    path: Path,
    options: Optional[FormatOptions] = None,
    *,
    formatter: Optional[ExpressionFormatter] = None,
    write: bool = True,
) -> str:
    """
    Formats a file; rewrites it in place when write=True and the text changed.

    Returns the formatted text.
    """
    source = path.read_text(encoding="utf-8")
    result = format_string(source, options, formatter=formatter)
    if write and result != source:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(result)
        logger.info("reformatted %s", path)
    else:
        logger.debug("unchanged %s", path)
    return result


__all__ = ["parse", "format_tree", "format_string", "format_file"]
