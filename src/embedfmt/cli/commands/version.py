# topmark:header:start
#
#   project      : EmbedFmt
#   file         : version.py
#   file_relpath : src/embedfmt/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EmbedFmt `version` command.

Prints the EmbedFmt version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from embedfmt.constants import EMBEDFMT_VERSION

if TYPE_CHECKING:
    from embedfmt.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of EmbedFmt.",
)
def version_command() -> None:
    """Show the current version of EmbedFmt."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    if ctx.obj.get("verbosity_level", 0) > 0:
        console.print(console.styled("EmbedFmt version:", bold=True, underline=True))
        console.print(f"    {console.styled(EMBEDFMT_VERSION, bold=True)}")
    else:
        console.print(console.styled(EMBEDFMT_VERSION, bold=True))
