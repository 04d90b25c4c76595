# topmark:header:start
#
#   project      : EmbedFmt
#   file         : test_reassembler.py
#   file_relpath : tests/pipeline/test_reassembler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for splicing finalized blocks back into a document."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from embedfmt.markup import parse
from embedfmt.pipeline.locator import locate
from embedfmt.pipeline.model import Document
from embedfmt.pipeline.reassembler import build_wrapper, group_blocks, reassemble, splice_blocks
from tests.conftest import mark_hypothesis_slow, mark_pipeline
from tests.helpers import identity, prepare_document

TWO_BLOCKS = "\n".join(
    [
        "<div>",
        "<script>",
        "a();b();",
        "</script>",
        "<p>x</p>",
        "<script>",
        "c();",
        "</script>",
        "</div>",
    ]
)


@mark_pipeline
def test_nested_script_is_reindented() -> None:
    document = prepare_document("<div>\n  <script>\nlet x=1;\n  </script>\n</div>\n")

    (block,) = document.blocks
    assert (block.start_line, block.start_column, block.end_line, block.end_column) == (2, 3, 4, 12)
    assert reassemble(document) == "<div>\n  <script>\n    let x = 1;\n  </script>\n</div>\n"


@mark_pipeline
def test_blocks_that_grow_do_not_shift_earlier_content() -> None:
    document = prepare_document(TWO_BLOCKS)

    assert reassemble(document) == "\n".join(
        [
            "<div>",
            "<script>",
            "  a();",
            "  b();",
            "</script>",
            "<p>x</p>",
            "<script>",
            "  c();",
            "</script>",
            "</div>",
        ]
    )


@mark_pipeline
def test_ascending_splice_order_corrupts_the_document() -> None:
    document = prepare_document(TWO_BLOCKS)

    lines = splice_blocks(document.lines, [[block] for block in document.blocks])

    assert "<p>x</p>" not in lines


@mark_pipeline
def test_scripts_sharing_a_line_are_spliced_together() -> None:
    document = prepare_document("<p>\n<script>a=1;</script><script>b=2;</script>\n</p>\n")

    assert reassemble(document) == (
        "<p>\n"
        "<script>\n  a = 1;\n</script><script>\n"
        + " " * 24
        + "b = 2;\n"
        + " " * 22
        + "</script>\n</p>\n"
    )


@mark_pipeline
def test_external_script_followed_by_inline_script() -> None:
    document = prepare_document(
        '<head>\n<script src="a.js"></script><script>init()</script>\n</head>'
    )

    assert reassemble(document) == (
        '<head>\n<script src="a.js"></script><script>\n'
        + " " * 30
        + "init()\n"
        + " " * 28
        + "</script>\n</head>"
    )


@mark_pipeline
def test_multiline_scripts_meeting_on_one_line() -> None:
    document = prepare_document("<script>\na=1;\n</script><script>\nb=2;\n</script>\n<p>after</p>")

    assert reassemble(document) == (
        "<script>\n  a = 1;\n</script><script>\n"
        + " " * 12
        + "b = 2;\n"
        + " " * 10
        + "</script>\n<p>after</p>"
    )


@mark_pipeline
def test_groups_have_disjoint_line_ranges() -> None:
    text = (
        "<script>a()</script><script>b()</script>\n"
        "<script>\nc()\n</script><script>d()</script>\n"
        "<script>e()</script>"
    )
    document = prepare_document(text)

    groups = group_blocks(document.blocks)

    assert [[block.raw_text for block in group] for group in groups] == [
        ["a()", "b()"],
        ["\nc()\n", "d()"],
        ["e()"],
    ]
    for earlier, later in zip(groups, groups[1:]):
        assert earlier[-1].end_line < later[0].start_line


@mark_pipeline
def test_text_around_the_tags_is_kept() -> None:
    document = prepare_document("<p><script>a()</script> tail</p>\n<hr>")

    assert reassemble(document) == "<p><script>\n      a()\n    </script> tail</p>\n<hr>"


@mark_pipeline
def test_attributes_and_tag_spelling_survive() -> None:
    document = prepare_document('<SCRIPT type="module" defer>\nx=1;</SCRIPT >')

    assert reassemble(document) == '<SCRIPT type="module" defer>\n  x = 1;\n</SCRIPT >'


@mark_pipeline
def test_empty_script_collapses() -> None:
    document = prepare_document("<body>\n  <script>\n\n  </script>\n</body>")

    assert reassemble(document) == "<body>\n  <script></script>\n</body>"


@mark_pipeline
def test_document_without_blocks_is_untouched() -> None:
    text = "<p>\n  plain\n</p>\n"
    document = Document(path=None, text=text, tree=parse(text))
    document.blocks = locate(document.tree)

    assert reassemble(document) == text


@mark_pipeline
def test_missing_final_text_is_rejected() -> None:
    text = "<script>a()</script>"
    document = Document(path=None, text=text, tree=parse(text))
    document.blocks = locate(document.tree)

    with pytest.raises(ValueError):
        reassemble(document)


@mark_pipeline
def test_wrapper_requires_final_text() -> None:
    text = "<script>a()</script>"
    document = Document(path=None, text=text, tree=parse(text))
    document.blocks = locate(document.tree)

    with pytest.raises(ValueError, match="no final text"):
        build_wrapper(document.blocks, document.lines)


_names = st.lists(st.from_regex(r"[a-z]{1,6}", fullmatch=True), min_size=1, max_size=4)


_paragraphs = st.lists(st.from_regex(r"<p>[a-z ]{0,8}</p>", fullmatch=True), max_size=3)


def _check_only_the_block_lines_change(
    indent: int, names: list[str], before: list[str], after: list[str]
) -> None:
    pad = " " * indent
    statements = [f"{name}();" for name in names]
    block_source = "\n".join([f"{pad}<script>", *statements, f"{pad}</script>"])
    text = "\n".join([*before, block_source, *after])

    result = reassemble(prepare_document(text, fn=identity))

    depth = (indent + 1) // 2 + 1
    expected_block = "\n".join(
        [
            f"{pad}<script>",
            *("  " * depth + s for s in statements),
            "  " * (depth - 1) + "</script>",
        ]
    )
    assert result == "\n".join([*before, expected_block, *after])


@mark_pipeline
@given(
    indent=st.integers(min_value=0, max_value=12),
    names=_names,
    before=_paragraphs,
    after=_paragraphs,
)
def test_only_the_block_lines_change(
    indent: int, names: list[str], before: list[str], after: list[str]
) -> None:
    _check_only_the_block_lines_change(indent, names, before, after)


@mark_hypothesis_slow
@settings(max_examples=2000, deadline=None)
@given(
    indent=st.integers(min_value=0, max_value=40),
    names=st.lists(st.from_regex(r"[a-z]{1,12}", fullmatch=True), min_size=1, max_size=12),
    before=_paragraphs,
    after=_paragraphs,
)
def test_only_the_block_lines_change_wide(
    indent: int, names: list[str], before: list[str], after: list[str]
) -> None:
    _check_only_the_block_lines_change(indent, names, before, after)
