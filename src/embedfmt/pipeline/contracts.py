# topmark:header:start
#
#   project      : EmbedFmt
#   file         : contracts.py
#   file_relpath : src/embedfmt/pipeline/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contracts for pipeline steps (engine-facing).

Steps are instantiated objects that are *awaitable callables*; the runner
invokes them as ``await step(ctx)`` where ``ctx`` is a `DocumentContext`.

Lifecycle
---------
1) ``step.may_proceed(ctx)`` gates execution.
2) If allowed, ``await step.run(ctx)`` mutates ``ctx`` in place.
3) Regardless, ``step.hint(ctx)`` may attach diagnostics.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from embedfmt.pipeline.context import DocumentContext


class Step(Protocol):
    """Protocol for a single pipeline step."""

    name: str

    async def __call__(self, ctx: DocumentContext) -> DocumentContext:
        """Run the full step lifecycle and return ``ctx``."""
        ...

    def may_proceed(self, ctx: DocumentContext) -> bool:
        """Return whether the step should run given the current context."""
        ...

    async def run(self, ctx: DocumentContext) -> None:
        """Execute the step, mutating the context in place.

        Expected failures are recorded with ``ctx.fail()``, not raised.
        """
        ...

    def hint(self, ctx: DocumentContext) -> None:
        """Attach non-binding diagnostics to the context."""
        ...
