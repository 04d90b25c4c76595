# topmark:header:start
#
#   project      : EmbedFmt
#   file         : __init__.py
#   file_relpath : src/embedfmt/markup/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Markup collaborators: a source-position-aware HTML tree, parser and serializer.

``parse(text)`` turns HTML into a tree of typed nodes whose elements carry a
`SourceRange`; ``serialize(node)`` turns a node (or a `Fragment` of nodes)
back into markup text.
"""

from __future__ import annotations

from embedfmt.markup.nodes import Element, Fragment, Node, SourcePosition, SourceRange, Text
from embedfmt.markup.parser import parse
from embedfmt.markup.serializer import serialize

__all__ = [
    "Element",
    "Fragment",
    "Node",
    "SourcePosition",
    "SourceRange",
    "Text",
    "parse",
    "serialize",
]
