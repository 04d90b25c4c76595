# topmark:header:start
#
#   project      : EmbedFmt
#   file         : status.py
#   file_relpath : src/embedfmt/pipeline/status.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Status enums for the EmbedFmt document pipeline.

`DocumentState` is the per-document state machine::

    PENDING -> PARSED -> DISPATCHED -> ALL_SETTLED -> REASSEMBLED -> DONE
                  \\            \\                         \\
                   +------------+-------------------------+--> FAILED

Transitions are strictly forward; there is no retry edge. `FailureKind`
names what went wrong when a document ends in ``FAILED``, and `FileOutcome`
is the coarse, user-facing result of a run.
"""

from __future__ import annotations

from typing import Final

from yachalk import chalk

from embedfmt.core.exit_codes import ExitCode
from embedfmt.rendering.colored_enum import ColoredStrEnum


class DocumentState(ColoredStrEnum):
    """Lifecycle state of one document."""

    PENDING = ("pending", chalk.gray)
    PARSED = ("parsed", chalk.blue)
    DISPATCHED = ("dispatched", chalk.blue)
    ALL_SETTLED = ("all blocks formatted", chalk.blue)
    REASSEMBLED = ("reassembled", chalk.green)
    DONE = ("done", chalk.green)
    FAILED = ("failed", chalk.red_bright)


#: Allowed forward transitions. ``PENDING -> FAILED`` covers read errors.
TRANSITIONS: Final[dict[DocumentState, frozenset[DocumentState]]] = {
    DocumentState.PENDING: frozenset({DocumentState.PARSED, DocumentState.FAILED}),
    DocumentState.PARSED: frozenset({DocumentState.DISPATCHED, DocumentState.FAILED}),
    DocumentState.DISPATCHED: frozenset({DocumentState.ALL_SETTLED, DocumentState.FAILED}),
    DocumentState.ALL_SETTLED: frozenset({DocumentState.REASSEMBLED, DocumentState.FAILED}),
    DocumentState.REASSEMBLED: frozenset({DocumentState.DONE, DocumentState.FAILED}),
    DocumentState.DONE: frozenset(),
    DocumentState.FAILED: frozenset(),
}


class FailureKind(ColoredStrEnum):
    """Why a document failed."""

    PARSE = ("parse error", chalk.red)
    FORMATTER = ("formatter error", chalk.red)
    TOKENIZE = ("tokenize error", chalk.red)
    IO = ("I/O error", chalk.red_bright)
    INTERNAL = ("internal error", chalk.red_bright)

    @property
    def exit_code(self) -> ExitCode:
        """Return the process exit code used when this is the first failure of a run."""
        return {
            FailureKind.PARSE: ExitCode.DATA_ERROR,
            FailureKind.TOKENIZE: ExitCode.DATA_ERROR,
            FailureKind.FORMATTER: ExitCode.FORMATTER_ERROR,
            FailureKind.IO: ExitCode.IO_ERROR,
            FailureKind.INTERNAL: ExitCode.PIPELINE_ERROR,
        }[self]


class FileOutcome(ColoredStrEnum):
    """User-facing result of processing one file."""

    UNCHANGED = ("unchanged", chalk.green)
    REFORMATTED = ("reformatted", chalk.yellow_bright)
    WOULD_REFORMAT = ("would reformat", chalk.yellow)
    FAILED = ("failed", chalk.red_bright)
