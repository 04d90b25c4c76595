# topmark:header:start
#
#   project      : EmbedFmt
#   file         : errors.py
#   file_relpath : src/embedfmt/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the EmbedFmt CLI.

Raise these in commands to signal errors with standardized messages and exit
codes. They print through the project console when one is present in the
Click context.
"""

from __future__ import annotations

from typing import IO, Any

import click

from embedfmt.core.exit_codes import ExitCode


class EmbedfmtCliError(click.ClickException):
    """Base class for all EmbedFmt CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (coloring happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(self.format_message())
                return
        super().show(file)


class EmbedfmtUsageError(EmbedfmtCliError):
    """Command-line invocation error (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class EmbedfmtConfigError(EmbedfmtCliError):
    """Configuration is missing, malformed or invalid."""

    exit_code = ExitCode.CONFIG_ERROR
