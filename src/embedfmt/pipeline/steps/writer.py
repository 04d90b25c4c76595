# topmark:header:start
#
#   project      : EmbedFmt
#   file         : writer.py
#   file_relpath : src/embedfmt/pipeline/steps/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Writer step for committing reassembled text to a sink.

This is the only place where EmbedFmt writes a document. It runs only for
documents that reached ``REASSEMBLED``; a failed document is never written.

Sinks
-----
- FileSystemSink: writes in place to the document path.
- NullSink: no-op (dry run, in-memory text, or nothing changed).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from embedfmt.config.logging import get_logger
from embedfmt.errors import DocumentIOError
from embedfmt.pipeline.status import DocumentState, FailureKind
from embedfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.pipeline.context import DocumentContext

logger: EmbedfmtLogger = get_logger(__name__)


@dataclass
class WriteResult:
    """Structured result of a write operation."""

    written: bool
    bytes_written: int = 0


class WriteSink(Protocol):
    """Protocol for write sinks used by the writer step."""

    def write(self, *, ctx: DocumentContext) -> WriteResult:
        """Write ``ctx.updated_text`` to the target.

        Raises:
            OSError: If the write fails.
        """
        ...


class NullSink:
    """Dry-run sink: does not write anything."""

    def write(self, *, ctx: DocumentContext) -> WriteResult:
        return WriteResult(written=False)


class FileSystemSink:
    """Filesystem sink that overwrites ``ctx.path``."""

    def write(self, *, ctx: DocumentContext) -> WriteResult:
        assert ctx.path is not None and ctx.updated_text is not None
        with open(ctx.path, "w", encoding="utf-8", newline="") as f:
            f.write(ctx.updated_text)
        bytes_written: int = len(ctx.updated_text.encode("utf-8"))
        logger.debug("FileSystemSink: wrote %d bytes to %s", bytes_written, ctx.path)
        return WriteResult(written=True, bytes_written=bytes_written)


def select_sink(ctx: DocumentContext) -> WriteSink:
    """Return `FileSystemSink` when changes should be applied, else `NullSink`."""
    if not ctx.config.apply_changes or ctx.path is None or not ctx.changed:
        return NullSink()
    return FileSystemSink()


class WriterStep(BaseStep):
    """``REASSEMBLED -> DONE``; a failed write moves the document to ``FAILED``."""

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: DocumentContext) -> bool:
        return not ctx.is_halted and ctx.state == DocumentState.REASSEMBLED

    async def run(self, ctx: DocumentContext) -> None:
        sink: WriteSink = select_sink(ctx)
        try:
            result: WriteResult = await asyncio.to_thread(sink.write, ctx=ctx)
        except OSError as exc:
            assert ctx.path is not None
            ctx.fail(FailureKind.IO, DocumentIOError(ctx.path, exc), at_step=self.name)
            return
        ctx.written = result.written
        ctx.advance(DocumentState.DONE)
