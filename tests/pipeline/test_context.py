# topmark:header:start
#
#   project      : EmbedFmt
#   file         : test_context.py
#   file_relpath : tests/pipeline/test_context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the per-document context and its state machine."""

from __future__ import annotations

import pytest

from embedfmt.errors import ParseError, PipelineStateError
from embedfmt.pipeline.context import DocumentContext
from embedfmt.pipeline.status import DocumentState, FailureKind
from tests.conftest import mark_pipeline, parametrize
from tests.helpers import make_config, tidy_formatter


def _ctx(text: str = "<p></p>") -> DocumentContext:
    return DocumentContext.from_text(text, config=make_config(), formatter=tidy_formatter())


@mark_pipeline
def test_forward_walk_reaches_done() -> None:
    ctx = _ctx()
    for state in (
        DocumentState.PARSED,
        DocumentState.DISPATCHED,
        DocumentState.ALL_SETTLED,
        DocumentState.REASSEMBLED,
        DocumentState.DONE,
    ):
        ctx.advance(state)
    assert ctx.state == DocumentState.DONE


@mark_pipeline
@parametrize(
    "start, target",
    [
        (DocumentState.PENDING, DocumentState.DISPATCHED),
        (DocumentState.PARSED, DocumentState.PENDING),
        (DocumentState.ALL_SETTLED, DocumentState.DONE),
        (DocumentState.DONE, DocumentState.FAILED),
        (DocumentState.FAILED, DocumentState.PENDING),
    ],
)
def test_illegal_transitions_are_rejected(start: DocumentState, target: DocumentState) -> None:
    ctx = _ctx()
    ctx.state = start
    with pytest.raises(PipelineStateError):
        ctx.advance(target)


@mark_pipeline
def test_fail_records_failure_and_halts() -> None:
    ctx = _ctx()
    ctx.advance(DocumentState.PARSED)
    ctx.updated_text = "partial"
    error = ParseError("broken", line=3)

    ctx.fail(FailureKind.PARSE, error, at_step="ParserStep")

    assert ctx.state == DocumentState.FAILED
    assert ctx.failure == FailureKind.PARSE
    assert ctx.error is error
    assert ctx.updated_text is None
    assert ctx.is_halted and ctx.flow.at_step == "ParserStep"
    assert ctx.diagnostics.has_error()


@mark_pipeline
def test_crlf_documents_are_normalized_and_restored() -> None:
    ctx = _ctx("<p>\r\n</p>\r\n")

    assert ctx.newline_style == "\r\n"
    assert ctx.document is not None and ctx.document.text == "<p>\n</p>\n"
    assert ctx.denormalize("a\nb\n") == "a\r\nb\r\n"


@mark_pipeline
def test_mixed_newlines_are_left_alone() -> None:
    ctx = _ctx("<p>\r\n</p>\n")

    assert ctx.newline_style == "\n"
    assert ctx.document is not None and ctx.document.text == "<p>\r\n</p>\n"
    assert any("mixed line endings" in d.message for d in ctx.diagnostics)


@mark_pipeline
def test_changed_compares_against_original_text() -> None:
    ctx = _ctx("same")
    assert not ctx.changed
    ctx.updated_text = "same"
    assert not ctx.changed
    ctx.updated_text = "other"
    assert ctx.changed
    assert ctx.display_path == "<text>"
