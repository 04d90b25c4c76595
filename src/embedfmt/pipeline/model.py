# topmark:header:start
#
#   project      : EmbedFmt
#   file         : model.py
#   file_relpath : src/embedfmt/pipeline/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Data model for embedded-block processing.

Sections:
    NonIndentableSpan:
        Line range inside a block's formatted text that must not receive an
        indentation prefix.

    Block:
        One embedded ``<script>`` region with its exact source position, the
        raw text handed to the formatter and the formatter's result.

    Document:
        The original text of one markup file, its line buffer, its parsed tree
        and the ordered blocks it contains.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from embedfmt.errors import PipelineStateError

if TYPE_CHECKING:
    from pathlib import Path

    from embedfmt.markup.nodes import Element, Fragment


@dataclass(frozen=True, slots=True)
class NonIndentableSpan:
    """Lines ``start_line + 1 .. end_line`` (1-indexed, inclusive) are exempt from indentation.

    ``start_line`` is the line on which the multi-line literal opens; that line
    still begins with ordinary code and remains indentable.
    """

    start_line: int
    end_line: int

    def covers(self, line_number: int) -> bool:
        """Return True if ``line_number`` is interior to (or closes) the literal."""
        return self.start_line < line_number <= self.end_line


@dataclass(slots=True)
class Block:
    """An embedded code region.

    Attributes:
        start_line (int): 1-indexed line of the opening ``<script`` tag.
        start_column (int): 1-indexed column of the opening ``<script`` tag.
        end_line (int): 1-indexed line of the closing ``</script>`` tag.
        end_column (int): 1-indexed column just past the closing tag's ``>``.
        raw_text (str): The embedded content exactly as extracted.
        node (Element): Non-owning reference to the originating element.
        final_text (str | None): Re-indented text ready for reinsertion.
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    raw_text: str
    node: Element
    final_text: str | None = None
    _formatted_text: str | None = None

    @property
    def formatted_text(self) -> str | None:
        """Return the formatter's output, or ``None`` until it has resolved."""
        return self._formatted_text

    def set_formatted(self, text: str) -> None:
        """Record the formatter's output for this block.

        Raises:
            PipelineStateError: If the formatted text was already set.
        """
        if self._formatted_text is not None:
            raise PipelineStateError(f"block at line {self.start_line} already formatted")
        self._formatted_text = text

    @property
    def line_count(self) -> int:
        """Return the number of original lines spanned by the block's element."""
        return self.end_line - self.start_line + 1


@dataclass
class Document:
    """A markup document and the blocks discovered in it.

    Attributes:
        path (Path | None): Source path (``None`` for in-memory text).
        text (str): The original text with ``\\n`` line separators.
        tree (Fragment | None): The parsed tree, once available.
        blocks (list[Block]): Qualifying blocks in ascending document order.
    """

    path: Path | None
    text: str
    tree: Fragment | None = None
    blocks: list[Block] = field(default_factory=lambda: [])

    @property
    def lines(self) -> list[str]:
        """Return a fresh line buffer split from the original text."""
        return self.text.split("\n")
