"""
Static lookup tables keyed by tag and attribute names.

Consulted once per node during parsing/classification; the results are
cached on the nodes, so nothing downstream dispatches on names again.
"""

from __future__ import annotations

from typing import FrozenSet

# Tags whose content is rendered verbatim
VERBATIM_TAGS: FrozenSet[str] = frozenset({"pre", "code"})

# Macro components: <#Markdown>, <#Raw>, ...
MACRO_PREFIX = "#"

# Directives (:if, :for, ...) keep expression syntax even for literal values
DIRECTIVE_PREFIX = ":"

VOID_ELEMENTS: FrozenSet[str] = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta",
    "param", "source", "track", "wbr",
})


def is_whitespace_sensitive(name: str) -> bool:
    return name in VERBATIM_TAGS or name.startswith(MACRO_PREFIX)


def is_void(name: str) -> bool:
    # case-sensitive: <Link>, <Input> are components, not HTML void tags
    return name in VOID_ELEMENTS


def is_directive(attr_name: str) -> bool:
    return attr_name.startswith(DIRECTIVE_PREFIX)


__all__ = [
    "VERBATIM_TAGS",
    "MACRO_PREFIX",
    "DIRECTIVE_PREFIX",
    "VOID_ELEMENTS",
    "is_whitespace_sensitive",
    "is_void",
    "is_directive",
]
