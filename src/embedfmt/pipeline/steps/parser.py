# topmark:header:start
#
#   project      : EmbedFmt
#   file         : parser.py
#   file_relpath : src/embedfmt/pipeline/steps/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parser step: build the markup tree and locate the embedded blocks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from embedfmt.config.logging import get_logger
from embedfmt.errors import ParseError
from embedfmt.markup.parser import parse
from embedfmt.pipeline.locator import locate
from embedfmt.pipeline.status import DocumentState, FailureKind
from embedfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.pipeline.context import DocumentContext

logger: EmbedfmtLogger = get_logger(__name__)


class ParserStep(BaseStep):
    """Parse the document and record its blocks; ``PENDING -> PARSED``."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: DocumentContext) -> bool:
        return not ctx.is_halted and ctx.document is not None

    async def run(self, ctx: DocumentContext) -> None:
        assert ctx.document is not None
        try:
            ctx.document.tree = parse(ctx.document.text)
            ctx.document.blocks = locate(ctx.document.tree)
        except ParseError as exc:
            ctx.fail(FailureKind.PARSE, exc, at_step=self.name)
            return
        ctx.advance(DocumentState.PARSED)

    def hint(self, ctx: DocumentContext) -> None:
        if ctx.state == DocumentState.PARSED and ctx.document is not None:
            if not ctx.document.blocks:
                ctx.diagnostics.add_info("no embedded script blocks")
            else:
                ctx.diagnostics.add_info(f"{len(ctx.document.blocks)} embedded script block(s)")
