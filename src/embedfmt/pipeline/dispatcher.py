# topmark:header:start
#
#   project      : EmbedFmt
#   file         : dispatcher.py
#   file_relpath : src/embedfmt/pipeline/dispatcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Dispatch block text to the external formatter.

Each block is formatted by an independent coroutine; `FormatDispatcher.dispatch_all`
starts them all at once and acts as a barrier. It returns only when every block
has settled, and on the first failure it cancels every still-running sibling,
waits for the cancellations to complete, and re-raises. A document is never
partially formatted, and no call is retried.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from embedfmt.config.logging import get_logger
from embedfmt.constants import DEFAULT_LANGUAGE
from embedfmt.errors import FormatterError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.formatters.base import Formatter
    from embedfmt.pipeline.model import Block

logger: EmbedfmtLogger = get_logger(__name__)


class FormatDispatcher:
    """Send block text to a `Formatter` and record the results on the blocks.

    Args:
        formatter (Formatter): The external formatter collaborator.
        language (str): Language hint so the formatter treats block text as script.
    """

    def __init__(self, formatter: Formatter, *, language: str = DEFAULT_LANGUAGE) -> None:
        self.formatter = formatter
        self.language = language

    async def dispatch(self, block: Block) -> str:
        """Format one block and store the result in its ``formatted_text`` slot.

        Raises:
            FormatterError: If the formatter fails for this block.
        """
        logger.trace("Dispatching block at line %d (%d chars)", block.start_line, len(block.raw_text))
        try:
            formatted: str = await self.formatter.format(block.raw_text, self.language)
        except FormatterError as exc:
            if exc.line is None:
                raise FormatterError(
                    str(exc), line=block.start_line, returncode=exc.returncode, stderr=exc.stderr
                ) from exc
            raise
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            raise FormatterError(str(exc) or type(exc).__name__, line=block.start_line) from exc
        block.set_formatted(formatted)
        return formatted

    async def dispatch_all(self, blocks: Sequence[Block]) -> list[str]:
        """Format all blocks concurrently and wait until every one has settled.

        Returns:
            list[str]: Formatted texts in the order of ``blocks``.

        Raises:
            FormatterError: The first failure; sibling tasks are cancelled first.
        """
        tasks: list[asyncio.Task[str]] = [
            asyncio.ensure_future(self.dispatch(block)) for block in blocks
        ]
        if not tasks:
            return []
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            pending: list[asyncio.Task[str]] = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            if pending:
                logger.debug("Cancelling %d in-flight formatter call(s)", len(pending))
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
