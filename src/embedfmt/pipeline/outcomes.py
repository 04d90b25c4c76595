# topmark:header:start
#
#   project      : EmbedFmt
#   file         : outcomes.py
#   file_relpath : src/embedfmt/pipeline/outcomes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Map finished document contexts to user-facing outcomes.

Presentation-free: no console logic here. `DocumentOutcome` is the stable,
immutable summary returned by the engine and the public API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from embedfmt.core.exit_codes import ExitCode
from embedfmt.errors import DocumentIOError
from embedfmt.pipeline.status import DocumentState, FailureKind, FileOutcome
from embedfmt.utils.diff import unified_diff

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from embedfmt.core.diagnostics import Diagnostic
    from embedfmt.pipeline.context import DocumentContext


@dataclass(frozen=True)
class DocumentOutcome:
    """Result of processing one document.

    Attributes:
        path (Path | None): The document path (``None`` for in-memory text).
        outcome (FileOutcome): Coarse result bucket.
        state (DocumentState): Final state-machine position.
        failure (FailureKind | None): Failure kind for ``FAILED`` documents.
        error (BaseException | None): The exception behind ``failure``.
        original_text (str | None): The input text.
        updated_text (str | None): The formatted text (``None`` on failure).
        block_count (int): Number of embedded blocks processed.
        diagnostics (tuple[Diagnostic, ...]): Messages collected by the steps.
    """

    path: Path | None
    outcome: FileOutcome
    state: DocumentState
    failure: FailureKind | None = None
    error: BaseException | None = None
    original_text: str | None = None
    updated_text: str | None = None
    block_count: int = 0
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def failed(self) -> bool:
        return self.outcome == FileOutcome.FAILED

    @property
    def changed(self) -> bool:
        return self.outcome in (FileOutcome.REFORMATTED, FileOutcome.WOULD_REFORMAT)

    @property
    def exit_code(self) -> ExitCode | None:
        """Return the exit code for a failed document, refining I/O causes."""
        if self.failure is None:
            return None
        if self.failure == FailureKind.IO and isinstance(self.error, DocumentIOError):
            cause: BaseException = self.error.cause
            if isinstance(cause, (FileNotFoundError, IsADirectoryError)):
                return ExitCode.FILE_NOT_FOUND
            if isinstance(cause, PermissionError):
                return ExitCode.PERMISSION_DENIED
            if isinstance(cause, UnicodeDecodeError):
                return ExitCode.DATA_ERROR
        return self.failure.exit_code

    def diff(self) -> str:
        """Return a unified diff of the change, or ``""`` if nothing changed."""
        if self.original_text is None or self.updated_text is None:
            return ""
        name: str = str(self.path) if self.path is not None else "<text>"
        return unified_diff(self.original_text, self.updated_text, name=name)


def map_outcome(ctx: DocumentContext) -> DocumentOutcome:
    """Build the `DocumentOutcome` for a finished context."""
    if ctx.state == DocumentState.FAILED:
        outcome: FileOutcome = FileOutcome.FAILED
    elif not ctx.changed:
        outcome = FileOutcome.UNCHANGED
    elif ctx.written:
        outcome = FileOutcome.REFORMATTED
    else:
        outcome = FileOutcome.WOULD_REFORMAT
    return DocumentOutcome(
        path=ctx.path,
        outcome=outcome,
        state=ctx.state,
        failure=ctx.failure,
        error=ctx.error,
        original_text=ctx.original_text,
        updated_text=ctx.updated_text,
        block_count=len(ctx.document.blocks) if ctx.document is not None else 0,
        diagnostics=tuple(ctx.diagnostics),
    )


def summarize_exit_code(outcomes: Iterable[DocumentOutcome], *, check: bool) -> ExitCode | None:
    """Return the batch exit code.

    The first failed document determines the code. Without failures, a check
    run that found files to reformat yields `ExitCode.WOULD_CHANGE`.
    """
    would_change: bool = False
    for outcome in outcomes:
        if outcome.exit_code is not None:
            return outcome.exit_code
        would_change = would_change or outcome.outcome == FileOutcome.WOULD_REFORMAT
    if check and would_change:
        return ExitCode.WOULD_CHANGE
    return None
