# topmark:header:start
#
#   project      : EmbedFmt
#   file         : serializer.py
#   file_relpath : src/embedfmt/markup/serializer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Serialize markup nodes back to text.

Elements parsed from source keep their original opening and closing tag text,
so serialization of an unmodified element reproduces the source exactly.
Synthesized elements get a canonical rendering (double-quoted, escaped
attribute values). Text nodes hold raw source text and are emitted verbatim.
"""

from __future__ import annotations

from html import escape

from embedfmt.markup.nodes import VOID_ELEMENTS, Element, Fragment, Node, Text


def _render_start_tag(element: Element) -> str:
    parts: list[str] = [element.tag]
    for name, value in element.attrs:
        parts.append(name if value is None else f'{name}="{escape(value, quote=True)}"')
    closing: str = "/>" if element.self_closing else ">"
    return f"<{' '.join(parts)}{closing}"


def _end_tag(element: Element) -> str:
    if element.end_tag_text is not None:
        return element.end_tag_text
    # parsed elements closed implicitly had no end tag in the source
    return "" if element.source is not None else f"</{element.tag}>"


def serialize(node: Node) -> str:
    """Return the markup text for ``node``.

    A `Fragment` serializes as the concatenation of its children. Deeply nested
    trees are walked with an explicit stack.

    Args:
        node (Node): The node to serialize.

    Returns:
        str: Markup text.
    """
    parts: list[str] = []
    # Pending nodes, and end-tag text to emit once an element's children are done
    pending: list[Node | str] = [node]
    while pending:
        item: Node | str = pending.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Text):
            parts.append(item.data)
        elif isinstance(item, Fragment):
            pending.extend(reversed(item.children))
        else:
            parts.append(item.start_tag_text or _render_start_tag(item))
            if item.self_closing or item.tag in VOID_ELEMENTS:
                continue
            pending.append(_end_tag(item))
            pending.extend(reversed(item.children))
    return "".join(parts)
