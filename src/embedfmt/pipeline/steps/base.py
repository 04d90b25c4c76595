# topmark:header:start
#
#   project      : EmbedFmt
#   file         : base.py
#   file_relpath : src/embedfmt/pipeline/steps/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base class for class-based pipeline steps.

The runner invokes steps as awaitable callables. `BaseStep` implements the
common lifecycle::

    ctx = await step(ctx)  # internally: may_proceed -> run? -> hint

Steps never raise for document-level failures: they record them on the
context with `DocumentContext.fail`, which also halts the flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from embedfmt.config.logging import get_logger

if TYPE_CHECKING:
    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.pipeline.context import DocumentContext

logger: EmbedfmtLogger = get_logger(__name__)


@dataclass
class BaseStep:
    """Reusable foundation for pipeline steps.

    Subclass this to implement a concrete step by overriding ``may_proceed()``,
    ``run()``, and optionally ``hint()``.

    Attributes:
        name (str): Stable step identifier for logs and tracing.
    """

    name: str

    async def __call__(self, ctx: DocumentContext) -> DocumentContext:
        """Invoke the step lifecycle: gate, run (if allowed), hint.

        Args:
            ctx (DocumentContext): The mutable context for the current document.

        Returns:
            DocumentContext: The same context instance after mutation.
        """
        ctx.steps.append(self.name)
        if self.may_proceed(ctx):
            logger.trace("%s: running %s", ctx.display_path, self.name)
            await self.run(ctx)
            if ctx.is_halted:
                logger.debug(
                    "Pipeline halted by %s: %s", ctx.flow.at_step, ctx.flow.reason
                )
        else:
            logger.trace("%s: step %s may not proceed", ctx.display_path, self.name)
        self.hint(ctx)
        return ctx

    def may_proceed(self, ctx: DocumentContext) -> bool:
        """Return whether the step should run given the current context.

        Default: run unless the flow was halted.
        """
        return not ctx.is_halted

    async def run(self, ctx: DocumentContext) -> None:
        """Perform the step's primary work, mutating ``ctx`` in place."""

    def hint(self, ctx: DocumentContext) -> None:
        """Attach non-binding diagnostics to ``ctx`` (optional)."""
