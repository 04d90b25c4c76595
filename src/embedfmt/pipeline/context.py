# topmark:header:start
#
#   project      : EmbedFmt
#   file         : context.py
#   file_relpath : src/embedfmt/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-document processing context.

A `DocumentContext` carries the complete, mutable state of one document as it
flows through the pipeline steps: configuration, the formatter collaborator,
the parsed `Document`, the state machine position, diagnostics and the final
text. Steps communicate exclusively through it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from embedfmt.config.logging import get_logger
from embedfmt.core.diagnostics import DiagnosticLog
from embedfmt.errors import PipelineStateError
from embedfmt.pipeline.model import Document
from embedfmt.pipeline.status import TRANSITIONS, DocumentState

if TYPE_CHECKING:
    from pathlib import Path

    from embedfmt.config import Config
    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.formatters.base import Formatter
    from embedfmt.pipeline.status import FailureKind

logger: EmbedfmtLogger = get_logger(__name__)


@dataclass
class FlowControl:
    """Execution flow control for the current document."""

    halt: bool = False
    reason: str = ""
    at_step: str = ""


@dataclass
class DocumentContext:
    """Mutable processing state for a single document.

    Attributes:
        path (Path | None): The document path; ``None`` for in-memory text.
        config (Config): Effective configuration.
        formatter (Formatter): The formatter collaborator.
        state (DocumentState): Current lifecycle state.
        document (Document | None): The normalized text, tree and blocks.
        original_text (str | None): The text exactly as read (native newlines).
        updated_text (str | None): The reassembled text (native newlines).
        newline_style (str): ``"\\r\\n"`` if the input used CRLF throughout, else ``"\\n"``.
        failure (FailureKind | None): Why the document failed, if it did.
        error (BaseException | None): The exception behind ``failure``.
        written (bool): Whether the updated text was written to disk.
        flow (FlowControl): Halt flag set on failure.
        steps (list[str]): Names of the steps that were invoked.
        diagnostics (DiagnosticLog): Messages collected along the way.
    """

    path: Path | None
    config: Config
    formatter: Formatter
    state: DocumentState = DocumentState.PENDING
    document: Document | None = None
    original_text: str | None = None
    updated_text: str | None = None
    newline_style: str = "\n"
    failure: FailureKind | None = None
    error: BaseException | None = None
    written: bool = False
    flow: FlowControl = field(default_factory=FlowControl)
    steps: list[str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @classmethod
    def bootstrap(cls, *, path: Path, config: Config, formatter: Formatter) -> DocumentContext:
        """Create a context for a file on disk; the reader step loads it."""
        return cls(path=path, config=config, formatter=formatter)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        config: Config,
        formatter: Formatter,
        path: Path | None = None,
    ) -> DocumentContext:
        """Create a context for in-memory text, bypassing the reader step."""
        ctx = cls(path=path, config=config, formatter=formatter)
        ctx.load_text(text)
        return ctx

    def load_text(self, text: str) -> None:
        """Record the original text and build the normalized `Document`.

        Text is normalized to ``\\n`` only when every newline is a CRLF pair;
        mixed newline styles are kept exactly as they are.
        """
        self.original_text = text
        crlf: int = text.count("\r\n")
        if crlf and crlf == text.count("\n"):
            self.newline_style = "\r\n"
            text = text.replace("\r\n", "\n")
        elif crlf:
            self.diagnostics.add_warning("mixed line endings; CRLF lines are kept as-is")
        self.document = Document(path=self.path, text=text)

    def denormalize(self, text: str) -> str:
        """Return ``text`` with the document's native newline style restored."""
        if self.newline_style == "\n":
            return text
        return text.replace("\n", self.newline_style)

    @property
    def display_path(self) -> str:
        """Return the path for messages (``<text>`` for in-memory input)."""
        return str(self.path) if self.path is not None else "<text>"

    @property
    def is_halted(self) -> bool:
        """Return True once a step requested a halt."""
        return self.flow.halt

    @property
    def changed(self) -> bool:
        """Return True if the updated text differs from the original."""
        return self.updated_text is not None and self.updated_text != self.original_text

    def advance(self, new_state: DocumentState) -> None:
        """Move the state machine forward.

        Raises:
            PipelineStateError: If ``new_state`` is not reachable from the current state.
        """
        if new_state not in TRANSITIONS[self.state]:
            raise PipelineStateError(
                f"{self.display_path}: illegal transition {self.state.name} -> {new_state.name}"
            )
        logger.trace("%s: %s -> %s", self.display_path, self.state.name, new_state.name)
        self.state = new_state

    def fail(self, kind: FailureKind, error: BaseException, *, at_step: str = "") -> None:
        """Move the document to ``FAILED`` and halt the pipeline."""
        self.advance(DocumentState.FAILED)
        self.failure = kind
        self.error = error
        self.updated_text = None
        self.diagnostics.add_error(f"{kind.value}: {error}")
        self.request_halt(reason=kind.value, at_step=at_step)
        logger.debug("%s failed at %s: %s", self.display_path, at_step or "?", error)

    def request_halt(self, *, reason: str, at_step: str) -> None:
        """Stop processing further steps for this document."""
        self.flow = FlowControl(halt=True, reason=reason, at_step=at_step)
