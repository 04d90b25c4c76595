# topmark:header:start
#
#   project      : EmbedFmt
#   file         : external.py
#   file_relpath : src/embedfmt/formatters/external.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatters backed by an external executable.

`SubprocessFormatter` runs a command, writes the text to its stdin and
returns its stdout. `ClangFormatFormatter` builds the ``clang-format``
command line from the configured style.

If the awaiting task is cancelled (a sibling block failed), the child process
is killed and reaped before the cancellation propagates.
"""

from __future__ import annotations

import asyncio
import json
import shlex
from typing import TYPE_CHECKING, Any

from embedfmt.config.logging import get_logger
from embedfmt.errors import FormatterError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.config.model import Config
    from embedfmt.formatters.base import Formatter

logger: EmbedfmtLogger = get_logger(__name__)

# clang-format picks its language from the file name it is told to assume.
_ASSUME_FILENAMES: dict[str, str] = {
    "javascript": ".js",
    "js": ".js",
    "typescript": ".ts",
    "ts": ".ts",
    "json": ".json",
}


class SubprocessFormatter:
    """Run ``argv`` once per call with the text on stdin.

    Args:
        argv (Sequence[str]): Command and arguments.
        encoding (str): Encoding used for stdin and stdout.
    """

    def __init__(self, argv: Sequence[str], *, encoding: str = "utf-8") -> None:
        if not argv:
            raise ValueError("formatter command must not be empty")
        self.argv: list[str] = list(argv)
        self.encoding = encoding

    def __repr__(self) -> str:
        return f"{type(self).__name__}({shlex.join(self.argv)!r})"

    def build_argv(self, language: str) -> list[str]:
        """Return the command line for one call (hook for subclasses)."""
        return list(self.argv)

    async def format(self, text: str, language: str) -> str:
        argv: list[str] = self.build_argv(language)
        logger.trace("Running formatter: %s", shlex.join(argv))
        try:
            proc: asyncio.subprocess.Process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise FormatterError(f"cannot run {argv[0]!r}: {exc}") from exc

        try:
            stdout, stderr = await proc.communicate(text.encode(self.encoding))
        except asyncio.CancelledError:
            if proc.returncode is None:
                proc.kill()
                await proc.wait()
            logger.debug("Killed formatter process %d after cancellation", proc.pid)
            raise

        err_text: str = stderr.decode(self.encoding, errors="replace").strip()
        if proc.returncode != 0:
            raise FormatterError(
                f"{argv[0]} exited with status {proc.returncode}"
                + (f": {err_text}" if err_text else ""),
                returncode=proc.returncode,
                stderr=err_text,
            )
        try:
            return stdout.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise FormatterError(f"{argv[0]} produced undecodable output: {exc}") from exc


class ClangFormatFormatter(SubprocessFormatter):
    """Invoke ``clang-format`` with an inline JSON style.

    Args:
        command (str): The clang-format executable (may include extra arguments).
        style (Mapping[str, Any] | None): Style options, serialized as the
            ``-style`` JSON object. ``None`` or empty lets clang-format look
            for a ``.clang-format`` file.
    """

    def __init__(self, command: str = "clang-format", style: Mapping[str, Any] | None = None) -> None:
        super().__init__(shlex.split(command))
        self.style: dict[str, Any] = dict(style or {})

    def build_argv(self, language: str) -> list[str]:
        suffix: str = _ASSUME_FILENAMES.get(language.lower(), f".{language.lower()}")
        argv: list[str] = [*self.argv, f"-assume-filename={suffix}"]
        if self.style:
            argv.append(f"-style={json.dumps(self.style, separators=(',', ':'))}")
        return argv


def make_formatter(config: Config) -> Formatter:
    """Return the formatter described by ``config``.

    Commands whose executable name starts with ``clang-format`` get the
    clang-format argument conventions; anything else is run as-is.
    """
    argv: list[str] = shlex.split(config.formatter_command)
    if not argv:
        raise FormatterError("no formatter command configured")
    executable: str = argv[0].replace("\\", "/").rsplit("/", 1)[-1]
    if executable.startswith("clang-format"):
        return ClangFormatFormatter(config.formatter_command, config.style)
    return SubprocessFormatter(argv)
