# topmark:header:start
#
#   project      : EmbedFmt
#   file         : test_parser.py
#   file_relpath : tests/markup/test_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the position-tracking markup parser."""

from __future__ import annotations

import pytest

from embedfmt.errors import ParseError
from embedfmt.markup import Element, Fragment, Text, parse
from embedfmt.markup.nodes import SourcePosition, iter_elements
from tests.conftest import parametrize


def _elements(tree: Fragment, tag: str) -> list[Element]:
    return [e for e in iter_elements(tree) if e.tag == tag]


def test_start_and_end_tag_positions() -> None:
    text = "<div>\n  <script>\nlet x=1;\n  </script>\n</div>\n"
    tree = parse(text)

    (script,) = _elements(tree, "script")
    assert script.source is not None
    assert script.source.start == SourcePosition(2, 3)
    assert script.source.start_tag.end == SourcePosition(2, 11)
    assert script.source.end_tag is not None
    assert script.source.end_tag.start == SourcePosition(4, 3)
    assert script.source.end_tag.end == SourcePosition(4, 12)


def test_script_content_is_raw_text() -> None:
    tree = parse("<script>if (a < b && c > d) { x = '<p>'; }</script>")

    (script,) = _elements(tree, "script")
    assert script.children == [Text("if (a < b && c > d) { x = '<p>'; }")]
    assert script.text_content == "if (a < b && c > d) { x = '<p>'; }"


def test_start_tag_spanning_lines() -> None:
    tree = parse('<script\n    type="module">\nfoo();\n</script>')

    (script,) = _elements(tree, "script")
    assert script.source is not None
    assert script.source.start_tag.end == SourcePosition(2, 19)
    assert script.get_attr("type") == "module"


def test_nesting_and_void_elements() -> None:
    tree = parse("<ul><li>a<br>b</li><li><img src=x></li></ul>")

    (ul,) = _elements(tree, "ul")
    items = [c for c in ul.children if isinstance(c, Element)]
    assert [i.tag for i in items] == ["li", "li"]
    assert [type(c).__name__ for c in items[0].children] == ["Text", "Element", "Text"]
    (img,) = _elements(tree, "img")
    assert img.source is not None and img.source.end_tag is None


def test_stray_end_tag_is_ignored() -> None:
    tree = parse("<div>a</span></div>")

    (div,) = _elements(tree, "div")
    assert div.end_tag_text == "</div>"


def test_unclosed_non_raw_element_is_closed_implicitly() -> None:
    tree = parse("<div><p>text\n</div>")

    (p,) = _elements(tree, "p")
    assert p.source is not None and p.source.end_tag is None


@parametrize(
    "text",
    [
        "<script>\nfoo();\n",
        "<div>\n  <script type='module'>bar()",
    ],
)
def test_unterminated_script_is_a_parse_error(text: str) -> None:
    with pytest.raises(ParseError) as excinfo:
        parse(text)
    assert excinfo.value.line is not None


def test_attributes_keep_source_order() -> None:
    tree = parse('<script async src="a.js" data-x=\'1\'></script>')

    (script,) = _elements(tree, "script")
    assert script.attrs == [("async", None), ("src", "a.js"), ("data-x", "1")]
    assert script.has_attr("async")
    assert script.get_attr("async") == ""
    assert script.get_attr("missing") is None
