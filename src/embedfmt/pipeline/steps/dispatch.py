# topmark:header:start
#
#   project      : EmbedFmt
#   file         : dispatch.py
#   file_relpath : src/embedfmt/pipeline/steps/dispatch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Dispatch step: format every block concurrently and wait for all of them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from embedfmt.errors import FormatterError
from embedfmt.pipeline.dispatcher import FormatDispatcher
from embedfmt.pipeline.status import DocumentState, FailureKind
from embedfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from embedfmt.pipeline.context import DocumentContext


class DispatchStep(BaseStep):
    """``PARSED -> DISPATCHED -> ALL_SETTLED``; any block failure fails the document."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: DocumentContext) -> bool:
        return not ctx.is_halted and ctx.state == DocumentState.PARSED

    async def run(self, ctx: DocumentContext) -> None:
        assert ctx.document is not None
        dispatcher = FormatDispatcher(ctx.formatter, language=ctx.config.language)
        ctx.advance(DocumentState.DISPATCHED)
        try:
            await dispatcher.dispatch_all(ctx.document.blocks)
        except FormatterError as exc:
            ctx.fail(FailureKind.FORMATTER, exc, at_step=self.name)
            return
        ctx.advance(DocumentState.ALL_SETTLED)
