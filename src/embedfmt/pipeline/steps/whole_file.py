# topmark:header:start
#
#   project      : EmbedFmt
#   file         : whole_file.py
#   file_relpath : src/embedfmt/pipeline/steps/whole_file.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Whole-file step: pass a standalone script file straight through the formatter.

There is no tree, no block and no re-indentation: the document's text is the
formatter input and its output is the updated text. The state machine is
walked forward exactly as for markup documents.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from embedfmt.errors import FormatterError
from embedfmt.pipeline.status import DocumentState, FailureKind
from embedfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from embedfmt.pipeline.context import DocumentContext


class WholeFileStep(BaseStep):
    """``PENDING -> ... -> REASSEMBLED`` with a single formatter call."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: DocumentContext) -> bool:
        return not ctx.is_halted and ctx.document is not None

    async def run(self, ctx: DocumentContext) -> None:
        assert ctx.document is not None
        ctx.advance(DocumentState.PARSED)
        ctx.advance(DocumentState.DISPATCHED)
        try:
            formatted: str = await ctx.formatter.format(ctx.document.text, ctx.config.language)
        except FormatterError as exc:
            ctx.fail(FailureKind.FORMATTER, exc, at_step=self.name)
            return
        ctx.advance(DocumentState.ALL_SETTLED)
        ctx.updated_text = ctx.denormalize(formatted)
        ctx.advance(DocumentState.REASSEMBLED)
