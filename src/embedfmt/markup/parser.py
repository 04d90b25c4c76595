# topmark:header:start
#
#   project      : EmbedFmt
#   file         : parser.py
#   file_relpath : src/embedfmt/markup/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parse HTML into a typed tree with per-element source ranges.

The parser is a thin tree builder on top of `html.parser.HTMLParser`, which
reports the (line, offset) of every tag as it is consumed. Columns are
converted to 1-indexed values. The full text is fed in one go, so the content
of raw-text elements (``<script>``, ``<style>``) arrives unmodified.

Tree construction is deliberately lenient, as browsers are: stray end tags are
ignored and unclosed elements are closed implicitly at the end of the input.
Only an unterminated raw-text element is reported, because its content cannot
be located reliably.
"""

from __future__ import annotations

import re
from html.parser import HTMLParser
from typing import TYPE_CHECKING

from embedfmt.config.logging import get_logger
from embedfmt.errors import ParseError
from embedfmt.markup.nodes import (
    RAW_TEXT_ELEMENTS,
    VOID_ELEMENTS,
    Element,
    Fragment,
    SourcePosition,
    SourceRange,
    TagSpan,
    Text,
)

if TYPE_CHECKING:
    from embedfmt.config.logging import EmbedfmtLogger

logger: EmbedfmtLogger = get_logger(__name__)

_END_TAG_RE: re.Pattern[str] = re.compile(r"</[^>]*>")


def _advance(pos: SourcePosition, text: str) -> SourcePosition:
    """Return the position reached after consuming ``text`` from ``pos``."""
    newlines: int = text.count("\n")
    if newlines == 0:
        return SourcePosition(pos.line, pos.column + len(text))
    return SourcePosition(pos.line + newlines, len(text) - text.rfind("\n"))


class _TreeBuilder(HTMLParser):
    """Build a `Fragment` tree while recording tag positions."""

    def __init__(self, text: str) -> None:
        super().__init__(convert_charrefs=False)
        self._lines: list[str] = text.split("\n")
        self.root = Fragment()
        self._stack: list[Element] = []

    # --- helpers ---------------------------------------------------------

    def _position(self) -> SourcePosition:
        line, offset = self.getpos()
        return SourcePosition(line, offset + 1)

    def _append(self, node: Element | Text) -> None:
        parent: Element | Fragment = self._stack[-1] if self._stack else self.root
        if isinstance(node, Text) and parent.children and isinstance(parent.children[-1], Text):
            # HTMLParser may split character data; keep one text node per run
            parent.children[-1].data += node.data
            return
        parent.children.append(node)

    def _open(self, tag: str, attrs: list[tuple[str, str | None]], *, self_closing: bool) -> None:
        start: SourcePosition = self._position()
        raw: str = self.get_starttag_text() or f"<{tag}>"
        element = Element(
            tag=tag,
            attrs=list(attrs),
            source=SourceRange(start_tag=TagSpan(start, _advance(start, raw))),
            start_tag_text=raw,
            self_closing=self_closing,
        )
        self._append(element)
        if not self_closing and tag not in VOID_ELEMENTS:
            self._stack.append(element)

    # --- HTMLParser callbacks ---------------------------------------------

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._open(tag, attrs, self_closing=False)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._open(tag, attrs, self_closing=True)

    def handle_endtag(self, tag: str) -> None:
        start: SourcePosition = self._position()
        line: str = self._lines[start.line - 1]
        match = _END_TAG_RE.match(line, start.column - 1)
        raw: str = match.group(0) if match else f"</{tag}>"
        end = SourcePosition(start.line, start.column + len(raw))

        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index].tag == tag:
                element: Element = self._stack[index]
                assert element.source is not None
                element.source = SourceRange(
                    start_tag=element.source.start_tag,
                    end_tag=TagSpan(start, end),
                )
                element.end_tag_text = raw
                # Implicitly close anything left open inside the matched element
                del self._stack[index:]
                return
        logger.debug("Ignoring stray end tag </%s> at %d:%d", tag, start.line, start.column)

    def handle_data(self, data: str) -> None:
        self._append(Text(data))

    def handle_entityref(self, name: str) -> None:
        self._append(Text(f"&{name};"))

    def handle_charref(self, name: str) -> None:
        self._append(Text(f"&#{name};"))

    def handle_comment(self, data: str) -> None:
        self._append(Text(f"<!--{data}-->"))

    def handle_decl(self, decl: str) -> None:
        self._append(Text(f"<!{decl}>"))

    def handle_pi(self, data: str) -> None:
        self._append(Text(f"<?{data}>"))

    def unknown_decl(self, data: str) -> None:
        self._append(Text(f"<![{data}]>"))


def parse(text: str) -> Fragment:
    """Parse ``text`` into a tree of typed nodes.

    Args:
        text (str): The markup document, with ``\\n`` line separators.

    Returns:
        Fragment: The document root; its elements carry source ranges.

    Raises:
        ParseError: If the underlying parser fails or a raw-text element
            (``<script>``/``<style>``) is never closed.
    """
    builder = _TreeBuilder(text)
    try:
        builder.feed(text)
        builder.close()
    except Exception as exc:
        raise ParseError(f"cannot parse markup: {exc}") from exc

    for element in builder._stack:
        if element.tag in RAW_TEXT_ELEMENTS:
            assert element.source is not None
            raise ParseError(f"unterminated <{element.tag}>", line=element.source.start.line)

    logger.trace("Parsed %d top-level node(s)", len(builder.root.children))
    return builder.root
