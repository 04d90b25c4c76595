# topmark:header:start
#
#   project      : EmbedFmt
#   file         : test_indent.py
#   file_relpath : tests/pipeline/test_indent.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for indentation reconstruction and literal span detection."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from embedfmt.config import IndentStyle
from embedfmt.errors import TokenizeError
from embedfmt.markup import Element
from embedfmt.pipeline.indent import (
    find_non_indentable_spans,
    indent_depth,
    indent_lines,
    reconstruct,
)
from embedfmt.pipeline.model import Block, NonIndentableSpan
from tests.conftest import mark_pipeline, parametrize


def _block(formatted: str | None, *, column: int = 1, line: int = 1) -> Block:
    block = Block(
        start_line=line,
        start_column=column,
        end_line=line,
        end_column=column + 17,
        raw_text="",
        node=Element(tag="script"),
    )
    if formatted is not None:
        block.set_formatted(formatted)
    return block


@mark_pipeline
@parametrize(
    "column, tab_width, expected",
    [(1, 2, 1), (2, 2, 2), (3, 2, 2), (5, 2, 3), (1, 4, 1), (5, 4, 2), (9, 4, 3)],
)
def test_indent_depth(column: int, tab_width: int, expected: int) -> None:
    assert indent_depth(column, tab_width) == expected


@mark_pipeline
def test_single_line_template_is_not_a_span() -> None:
    assert find_non_indentable_spans("const s = `abc`;\nfoo();") == []


@mark_pipeline
def test_multi_line_template_span() -> None:
    spans = find_non_indentable_spans("x();\nconst s = `a\n  b\nc`;\n")
    assert spans == [NonIndentableSpan(2, 4)]
    assert not spans[0].covers(2)
    assert spans[0].covers(3) and spans[0].covers(4)


@mark_pipeline
def test_indent_lines_skips_empty_and_covered_lines() -> None:
    text = "a();\n\nb = `x\ny`;"
    assert indent_lines(text, "  ", [NonIndentableSpan(3, 4)]) == "  a();\n\n  b = `x\ny`;"


@mark_pipeline
def test_template_interior_keeps_its_whitespace() -> None:
    block = _block("const s = `a\n  b\nc`;\nfoo();")
    assert reconstruct(block) == "\n  const s = `a\n  b\nc`;\n  foo();\n"


@mark_pipeline
def test_string_literal_kind_can_be_exempted() -> None:
    formatted = "x = 'a\\\n  b';\ny();"
    default = reconstruct(_block(formatted))
    exempt = reconstruct(_block(formatted), IndentStyle(literal_kinds=("String",)))

    assert default == "\n  x = 'a\\\n    b';\n  y();\n"
    assert exempt == "\n  x = 'a\\\n  b';\n  y();\n"


@mark_pipeline
def test_closing_indent_is_one_level_shallower() -> None:
    block = _block("go();", column=5)
    # depth 5 // 2 + 1 == 3
    assert reconstruct(block) == "\n      go();\n    "


@mark_pipeline
def test_custom_tab_unit() -> None:
    block = _block("go();", column=3)
    assert reconstruct(block, IndentStyle(tab_unit="\t", tab_width=2)) == "\n\t\tgo();\n\t"


@mark_pipeline
@parametrize("formatted", ["", "   ", "\n\n  \n"])
def test_empty_output_yields_empty_text(formatted: str) -> None:
    assert reconstruct(_block(formatted, column=7)) == ""


@mark_pipeline
def test_unformatted_block_is_rejected() -> None:
    with pytest.raises(ValueError):
        reconstruct(_block(None))


@mark_pipeline
def test_untokenizable_output_reports_block_line() -> None:
    with pytest.raises(TokenizeError) as excinfo:
        reconstruct(_block("const s = `never closed;\n", line=12))
    assert excinfo.value.line == 12


@mark_pipeline
@given(
    column=st.integers(min_value=1, max_value=60),
    tab_width=st.integers(min_value=1, max_value=8),
    statements=st.lists(st.from_regex(r"[a-z]{1,6}", fullmatch=True), min_size=1, max_size=5),
)
def test_every_line_is_indented_by_the_tag_depth(
    column: int, tab_width: int, statements: list[str]
) -> None:
    style = IndentStyle(tab_unit=" " * tab_width, tab_width=tab_width)
    formatted = "\n".join(f"{name}();" for name in statements)

    result = reconstruct(_block(formatted, column=column), style)

    depth = column // tab_width + 1
    lines = result.split("\n")
    assert lines[0] == ""
    assert lines[1:-1] == [" " * (tab_width * depth) + f"{name}();" for name in statements]
    assert lines[-1] == " " * (tab_width * (depth - 1))
