# topmark:header:start
#
#   project      : EmbedFmt
#   file         : indent.py
#   file_relpath : src/embedfmt/pipeline/indent.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Recompute indentation for formatted block text.

The formatter returns script text at column zero. Before it goes back into the
document, every line is shifted right by an indent derived from how deep the
``<script>`` tag sat in the original source::

    num_tabs = start_column // tab_width + 1

Lines inside a multi-line literal (template strings by default) are left
alone: their whitespace is part of the string's value. The literal's first
line starts with ordinary code and is still indented.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import esprima

from embedfmt.config.logging import get_logger
from embedfmt.config.model import IndentStyle
from embedfmt.errors import TokenizeError
from embedfmt.pipeline.model import NonIndentableSpan

if TYPE_CHECKING:
    from collections.abc import Collection

    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.pipeline.model import Block

logger: EmbedfmtLogger = get_logger(__name__)


def indent_depth(start_column: int, tab_width: int) -> int:
    """Return the number of indent units for a block whose tag starts at ``start_column``."""
    return start_column // tab_width + 1


def find_non_indentable_spans(
    text: str, literal_kinds: Collection[str] = ("Template",)
) -> list[NonIndentableSpan]:
    """Return the spans of ``text`` covered by multi-line literal tokens.

    Args:
        text (str): Script source.
        literal_kinds (Collection[str]): Tokenizer token types treated as literals.

    Returns:
        list[NonIndentableSpan]: One span per literal token that crosses a line break.

    Raises:
        TokenizeError: If the text cannot be tokenized.
    """
    try:
        tokens: list[Any] = esprima.tokenize(text, {"loc": True})
    except Exception as exc:
        raise TokenizeError(str(exc)) from exc

    spans: list[NonIndentableSpan] = []
    for token in tokens:
        if token.type not in literal_kinds:
            continue
        start: int = token.loc.start.line
        end: int = token.loc.end.line
        if start != end:
            spans.append(NonIndentableSpan(start, end))
    return spans


def indent_lines(text: str, prefix: str, spans: Collection[NonIndentableSpan]) -> str:
    """Prefix every non-empty line of ``text`` not covered by ``spans``."""
    lines: list[str] = text.split("\n")
    for index, line in enumerate(lines):
        line_number: int = index + 1
        if line and not any(span.covers(line_number) for span in spans):
            lines[index] = f"{prefix}{line}"
    return "\n".join(lines)


class IndentReconstructor:
    """Turn a block's formatted text into the final text to reinsert.

    Args:
        style (IndentStyle): Indentation parameters.
    """

    def __init__(self, style: IndentStyle | None = None) -> None:
        self.style = style or IndentStyle()

    def reconstruct(self, block: Block) -> str:
        """Return the re-indented, framed text for ``block``.

        The result is ``"\\n" + indent + content + "\\n" + closing_indent`` where
        ``closing_indent`` is one level shallower, so the closing tag lines up
        with the opening one. An empty formatter result yields ``""``.

        Raises:
            TokenizeError: If span detection fails for the formatted text.
            ValueError: If the block has not been formatted yet.
        """
        formatted: str | None = block.formatted_text
        if formatted is None:
            raise ValueError(f"block at line {block.start_line} has no formatted text")
        if not formatted:
            return ""

        style: IndentStyle = self.style
        num_tabs: int = indent_depth(block.start_column, style.tab_width)
        prefix: str = style.tab_unit * num_tabs

        try:
            spans = find_non_indentable_spans(formatted, style.literal_kinds)
        except TokenizeError as exc:
            raise TokenizeError(str(exc), line=block.start_line) from exc

        content: str = indent_lines(formatted, prefix, spans).strip()
        if not content:
            # Whitespace-only output: nothing to frame
            return ""
        logger.trace(
            "Block at line %d: depth=%d, %d literal span(s)", block.start_line, num_tabs, len(spans)
        )
        return f"\n{prefix}{content}\n{style.tab_unit * (num_tabs - 1)}"


def reconstruct(block: Block, style: IndentStyle | None = None) -> str:
    """Functional shorthand for ``IndentReconstructor(style).reconstruct(block)``."""
    return IndentReconstructor(style).reconstruct(block)
