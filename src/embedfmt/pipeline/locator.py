# topmark:header:start
#
#   project      : EmbedFmt
#   file         : locator.py
#   file_relpath : src/embedfmt/pipeline/locator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Locate embeddable script blocks in a parsed markup tree.

A ``<script>`` element qualifies when its ``type`` attribute is absent or names
JavaScript (``text/javascript``, ``application/javascript``) or an ES module
(``module``). Templates, JSON data blocks and other non-script types are left
alone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from embedfmt.config.logging import get_logger
from embedfmt.constants import SCRIPT_TYPES
from embedfmt.errors import ParseError
from embedfmt.markup.nodes import Element, iter_elements
from embedfmt.pipeline.model import Block

if TYPE_CHECKING:
    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.markup.nodes import Node

logger: EmbedfmtLogger = get_logger(__name__)


def is_embeddable_script(element: Element) -> bool:
    """Return True if ``element`` is a script whose content should be reformatted."""
    if element.tag != "script":
        return False
    declared: str | None = element.get_attr("type")
    if declared is None:
        return True
    return declared.strip().lower() in SCRIPT_TYPES


def locate(tree: Node) -> list[Block]:
    """Return the qualifying blocks of ``tree`` in document order.

    Args:
        tree (Node): The parsed document root.

    Returns:
        list[Block]: Blocks ordered by the position of their opening tag.

    Raises:
        ParseError: If a qualifying element has no source location or no end tag.
    """
    blocks: list[Block] = []
    for element in iter_elements(tree):
        if not is_embeddable_script(element):
            continue
        source = element.source
        if source is None or source.end_tag is None:
            line: int | None = source.start.line if source is not None else None
            raise ParseError("script element has no closing tag", line=line)
        blocks.append(
            Block(
                start_line=source.start.line,
                start_column=source.start.column,
                end_line=source.end_tag.start.line,
                end_column=source.end_tag.end.column,
                raw_text=element.text_content,
                node=element,
            )
        )

    # Tree order already is document order; sorting guards synthesized trees.
    blocks.sort(key=lambda b: (b.start_line, b.start_column))
    logger.debug("Located %d embeddable block(s)", len(blocks))
    return blocks
