# topmark:header:start
#
#   project      : EmbedFmt
#   file         : reindent.py
#   file_relpath : src/embedfmt/pipeline/steps/reindent.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Re-indent step: compute the final text of every formatted block."""

from __future__ import annotations

from typing import TYPE_CHECKING

from embedfmt.errors import TokenizeError
from embedfmt.pipeline.indent import IndentReconstructor
from embedfmt.pipeline.status import DocumentState, FailureKind
from embedfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from embedfmt.pipeline.context import DocumentContext


class ReindentStep(BaseStep):
    """Fill ``Block.final_text`` using the configured `IndentStyle`."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: DocumentContext) -> bool:
        return not ctx.is_halted and ctx.state == DocumentState.ALL_SETTLED

    async def run(self, ctx: DocumentContext) -> None:
        assert ctx.document is not None
        reconstructor = IndentReconstructor(ctx.config.indent)
        try:
            for block in ctx.document.blocks:
                block.final_text = reconstructor.reconstruct(block)
        except TokenizeError as exc:
            ctx.fail(FailureKind.TOKENIZE, exc, at_step=self.name)
