# topmark:header:start
#
#   project      : EmbedFmt
#   file         : runner.py
#   file_relpath : src/embedfmt/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run a pipeline for a single document."""

from __future__ import annotations

from typing import TYPE_CHECKING

from embedfmt.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.pipeline.context import DocumentContext
    from embedfmt.pipeline.contracts import Step

logger: EmbedfmtLogger = get_logger(__name__)


async def run(ctx: DocumentContext, steps: Sequence[Step]) -> DocumentContext:
    """Execute the steps sequentially for one document.

    Args:
        ctx (DocumentContext): Mutable processing context.
        steps (Sequence[Step]): Ordered pipeline steps.

    Returns:
        DocumentContext: The final context after all steps have run.
    """
    for step in steps:
        ctx = await step(ctx)
    logger.debug("%s: finished in state %s", ctx.display_path, ctx.state.name)
    return ctx
