# topmark:header:start
#
#   project      : EmbedFmt
#   file         : reader.py
#   file_relpath : src/embedfmt/pipeline/steps/reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reader step: load the document text from disk.

The file is read as UTF-8. When every newline is CRLF the text is
normalized to LF for processing and the style is restored on write.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from embedfmt.config.logging import get_logger
from embedfmt.errors import DocumentIOError
from embedfmt.pipeline.status import FailureKind
from embedfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from pathlib import Path

    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.pipeline.context import DocumentContext

logger: EmbedfmtLogger = get_logger(__name__)


def read_document_text(path: Path) -> str:
    """Return the UTF-8 text of ``path`` with its newlines untranslated."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


class ReaderStep(BaseStep):
    """Read ``ctx.path`` into ``ctx.document``."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: DocumentContext) -> bool:
        # In-memory contexts arrive with their document already loaded
        return not ctx.is_halted and ctx.document is None and ctx.path is not None

    async def run(self, ctx: DocumentContext) -> None:
        assert ctx.path is not None
        try:
            # Blocking I/O runs in a worker thread
            text: str = await asyncio.to_thread(read_document_text, ctx.path)
        except (OSError, UnicodeDecodeError) as exc:
            ctx.fail(FailureKind.IO, DocumentIOError(ctx.path, exc), at_step=self.name)
            return
        ctx.load_text(text)
        logger.debug(
            "Read %s: %d chars, newline=%r", ctx.path, len(text), ctx.newline_style
        )
