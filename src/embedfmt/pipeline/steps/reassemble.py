# topmark:header:start
#
#   project      : EmbedFmt
#   file         : reassemble.py
#   file_relpath : src/embedfmt/pipeline/steps/reassemble.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reassemble step: splice the final block texts into the document."""

from __future__ import annotations

from typing import TYPE_CHECKING

from embedfmt.pipeline.reassembler import reassemble
from embedfmt.pipeline.status import DocumentState
from embedfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from embedfmt.pipeline.context import DocumentContext


class ReassembleStep(BaseStep):
    """``ALL_SETTLED -> REASSEMBLED``; sets ``ctx.updated_text``."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: DocumentContext) -> bool:
        return not ctx.is_halted and ctx.state == DocumentState.ALL_SETTLED

    async def run(self, ctx: DocumentContext) -> None:
        assert ctx.document is not None
        text: str = reassemble(ctx.document) if ctx.document.blocks else ctx.document.text
        ctx.updated_text = ctx.denormalize(text)
        ctx.advance(DocumentState.REASSEMBLED)

    def hint(self, ctx: DocumentContext) -> None:
        if ctx.state == DocumentState.REASSEMBLED and not ctx.changed:
            ctx.diagnostics.add_info("already formatted")
