# topmark:header:start
#
#   project      : EmbedFmt
#   file         : reassembler.py
#   file_relpath : src/embedfmt/pipeline/reassembler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Splice finalized block text back into a document's line buffer.

Blocks are applied bottom-up (descending start line). A splice may change the
number of lines, which shifts every later index; working from the end keeps
earlier block positions valid. Lines outside every block are never touched.

Blocks that share a line (``<script src="a.js"></script><script>...``) are
spliced together: one wrapper rebuilds the shared lines from all of them and
the text between them, so no splice ever reads a line another one replaced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from embedfmt.config.logging import get_logger
from embedfmt.markup.nodes import Fragment, Node, Text
from embedfmt.markup.serializer import serialize

if TYPE_CHECKING:
    from collections.abc import Sequence

    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.pipeline.model import Block, Document

logger: EmbedfmtLogger = get_logger(__name__)


def group_blocks(blocks: Sequence[Block]) -> list[list[Block]]:
    """Return ``blocks`` in document order, grouped where their line ranges meet.

    A block joins the previous group when it starts on the line the group's last
    block ends on. The groups' line ranges are mutually disjoint.
    """
    groups: list[list[Block]] = []
    for block in sorted(blocks, key=lambda b: (b.start_line, b.start_column)):
        if groups and block.start_line <= groups[-1][-1].end_line:
            groups[-1].append(block)
        else:
            groups.append([block])
    return groups


def build_wrapper(group: Sequence[Block], lines: Sequence[str]) -> Fragment:
    """Return the fragment that replaces the original lines of ``group``.

    The fragment holds the text before the first opening tag (spaces up to the
    tag's column, or the original prefix when it contains markup), a copy of
    each block element carrying its final text, the original text between
    consecutive elements, and whatever followed the last closing tag on its line.

    Raises:
        ValueError: If a block has no final text.
    """
    first: Block = group[0]
    prefix: str = lines[first.start_line - 1][: first.start_column - 1]
    lead: str = prefix if prefix.strip() else " " * (first.start_column - 1)
    children: list[Node] = [Text(lead)]
    previous: Block | None = None
    for block in group:
        if block.final_text is None:
            raise ValueError(f"block at line {block.start_line} has no final text")
        if previous is not None:
            between: str = lines[previous.end_line - 1][
                previous.end_column - 1 : block.start_column - 1
            ]
            children.append(Text(between))
        children.append(block.node.with_text(block.final_text))
        previous = block
    last: Block = group[-1]
    tail: str = lines[last.end_line - 1][last.end_column - 1 :]
    if tail:
        children.append(Text(tail))
    return Fragment(children)


def splice_blocks(lines: list[str], groups: Sequence[Sequence[Block]]) -> list[str]:
    """Replace each group's line range in ``lines`` in the order given.

    The caller decides the order; `reassemble` always passes groups in
    descending start-line order.
    """
    for group in groups:
        start: int = group[0].start_line
        end: int = group[-1].end_line
        replacement: list[str] = serialize(build_wrapper(group, lines)).split("\n")
        lines[start - 1 : end] = replacement
    return lines


class DocumentReassembler:
    """Produce the final text of a document from its finalized blocks."""

    def reassemble(self, document: Document) -> str:
        """Return ``document``'s text with every block replaced by its final text.

        Raises:
            ValueError: If a block has no final text.
        """
        for block in document.blocks:
            if block.final_text is None:
                raise ValueError(f"block at line {block.start_line} has no final text")
        groups: list[list[Block]] = group_blocks(document.blocks)
        if len(groups) < len(document.blocks):
            logger.debug(
                "%d block(s) share lines; spliced as %d group(s)", len(document.blocks), len(groups)
            )
        lines: list[str] = splice_blocks(document.lines, groups[::-1])
        logger.debug("Reassembled %d block(s) into %d line(s)", len(document.blocks), len(lines))
        return "\n".join(lines)


def reassemble(document: Document) -> str:
    """Functional shorthand for ``DocumentReassembler().reassemble(document)``."""
    return DocumentReassembler().reassemble(document)
