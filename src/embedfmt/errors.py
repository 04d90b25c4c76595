# topmark:header:start
#
#   project      : EmbedFmt
#   file         : errors.py
#   file_relpath : src/embedfmt/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exception hierarchy for EmbedFmt.

All failures that can abort the processing of a single document derive from
`EmbedfmtError`. Each subclass maps to one failure kind reported to the user
(see `embedfmt.pipeline.status.FailureKind`):

    * `ParseError`: the markup could not be parsed into a tree.
    * `FormatterError`: the external formatter failed for one embedded block.
    * `TokenizeError`: the formatted text could not be tokenized for span detection.
    * `DocumentIOError`: reading or writing the document failed.
    * `ConfigError`: configuration could not be loaded or is invalid.

`PipelineStateError` signals a programming error (illegal state transition or a
block written twice) and is never expected during normal operation.
"""

from __future__ import annotations

from pathlib import Path


class EmbedfmtError(Exception):
    """Base class for all EmbedFmt errors."""


class ParseError(EmbedfmtError):
    """The document's markup could not be parsed."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message if line is None else f"line {line}: {message}")
        self.line = line


class FormatterError(EmbedfmtError):
    """The external formatter failed or errored for one block."""

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message if line is None else f"block at line {line}: {message}")
        self.line = line
        self.returncode = returncode
        self.stderr = stderr


class TokenizeError(EmbedfmtError):
    """Formatted script text could not be tokenized."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message if line is None else f"block at line {line}: {message}")
        self.line = line


class DocumentIOError(EmbedfmtError):
    """Reading the input or writing the output failed.

    Attributes:
        path (Path): The document path.
        cause (BaseException): The underlying ``OSError`` or ``UnicodeDecodeError``.
    """

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class ConfigError(EmbedfmtError):
    """Configuration is missing, malformed or invalid."""


class PipelineStateError(EmbedfmtError):
    """Illegal document state transition or repeated write to a block slot."""
