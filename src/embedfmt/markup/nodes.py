# topmark:header:start
#
#   project      : EmbedFmt
#   file         : nodes.py
#   file_relpath : src/embedfmt/markup/nodes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed markup tree nodes.

Nodes are plain dataclasses. Elements carry their source location as an
explicit `SourceRange` instead of ad hoc attributes, so consumers (block
location, reassembly) work against a typed contract.

Text nodes store *raw* source text: character and entity references are kept
exactly as written, so serializing an unmodified subtree reproduces its source.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Iterator

#: Elements that never have content or an end tag.
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

#: Elements whose content is raw text (not parsed as markup).
RAW_TEXT_ELEMENTS: frozenset[str] = frozenset({"script", "style"})


@dataclass(frozen=True, slots=True)
class SourcePosition:
    """A 1-indexed (line, column) position in the original text."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class TagSpan:
    """Location of a single tag: ``start`` at ``<``, ``end`` just past ``>``."""

    start: SourcePosition
    end: SourcePosition


@dataclass(frozen=True, slots=True)
class SourceRange:
    """Source location of an element.

    Attributes:
        start_tag (TagSpan): Span of the opening tag.
        end_tag (TagSpan | None): Span of the closing tag; ``None`` for void,
            self-closing or unterminated elements.
    """

    start_tag: TagSpan
    end_tag: TagSpan | None = None

    @property
    def start(self) -> SourcePosition:
        """Return the position of the opening ``<``."""
        return self.start_tag.start


@dataclass(slots=True)
class Text:
    """Raw character data (text, comments and declarations are all kept verbatim)."""

    data: str


@dataclass(slots=True)
class Element:
    """An element with attributes, children and its source location.

    Attributes:
        tag (str): Lower-cased tag name.
        attrs (list[tuple[str, str | None]]): Attributes in source order.
        children (list[Node]): Child nodes.
        source (SourceRange | None): Location in the original text; ``None`` for
            synthesized elements.
        start_tag_text (str | None): The opening tag exactly as written.
        end_tag_text (str | None): The closing tag exactly as written.
        self_closing (bool): Whether the element was written as ``<tag/>``.
    """

    tag: str
    attrs: list[tuple[str, str | None]] = field(default_factory=lambda: [])
    children: list[Node] = field(default_factory=lambda: [])
    source: SourceRange | None = None
    start_tag_text: str | None = None
    end_tag_text: str | None = None
    self_closing: bool = False

    def get_attr(self, name: str) -> str | None:
        """Return the value of attribute ``name`` (``""`` for a bare attribute).

        Returns ``None`` when the attribute is absent.
        """
        for key, value in self.attrs:
            if key == name:
                return "" if value is None else value
        return None

    def has_attr(self, name: str) -> bool:
        """Return True if the element declares attribute ``name``."""
        return any(key == name for key, _ in self.attrs)

    @property
    def text_content(self) -> str:
        """Return the concatenated raw text of all descendant text nodes."""
        return "".join(node.data for node in iter_text(self))

    def with_text(self, text: str) -> Element:
        """Return a shallow copy of this element whose only child is ``text``.

        The original element is left untouched.
        """
        return replace(self, children=[Text(text)] if text else [])


@dataclass(slots=True)
class Fragment:
    """A container of sibling nodes without markup of its own.

    Used as the parse result root and as the minimal wrapper that reassembly
    serializes in place of a block's original lines.
    """

    children: list[Node] = field(default_factory=lambda: [])


Node = Union[Text, Element, Fragment]


def iter_elements(node: Node) -> Iterator[Element]:
    """Yield every element below (and including) ``node`` in document order.

    The walk keeps an explicit stack, so nesting depth is not bounded by the
    interpreter's recursion limit.
    """
    pending: list[Node] = [node]
    while pending:
        current: Node = pending.pop()
        if isinstance(current, Element):
            yield current
        if isinstance(current, (Element, Fragment)):
            pending.extend(reversed(current.children))


def iter_text(node: Node) -> Iterator[Text]:
    """Yield every text node below ``node`` in document order."""
    pending: list[Node] = [node]
    while pending:
        current: Node = pending.pop()
        if isinstance(current, Text):
            yield current
        else:
            pending.extend(reversed(current.children))
