# topmark:header:start
#
#   project      : EmbedFmt
#   file         : format.py
#   file_relpath : src/embedfmt/cli/commands/format.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EmbedFmt `format` command.

Reformats the scripts embedded in markup files (and standalone script files)
and overwrites the files that change. With ``--check`` nothing is written and
the command exits with ``WOULD_CHANGE`` (2) if any file would be reformatted.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

import click

from embedfmt.cli.config_resolver import build_config
from embedfmt.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_filtering_options,
    common_formatting_options,
)
from embedfmt.config.logging import get_logger
from embedfmt.core.diagnostics import DiagnosticLevel
from embedfmt.core.exit_codes import ExitCode
from embedfmt.errors import FormatterError
from embedfmt.file_resolver import resolve_file_list
from embedfmt.formatters.external import make_formatter
from embedfmt.pipeline.engine import format_files
from embedfmt.pipeline.status import FileOutcome
from embedfmt.utils.diff import render_patch

if TYPE_CHECKING:
    from pathlib import Path

    from embedfmt.cli.console import ClickConsole
    from embedfmt.config import Config
    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.formatters.base import Formatter
    from embedfmt.pipeline.outcomes import DocumentOutcome

logger: EmbedfmtLogger = get_logger(__name__)


def report_outcome(
    console: ClickConsole, outcome: DocumentOutcome, *, verbosity: int, show_diff: bool
) -> None:
    """Print one file's result according to the verbosity level."""
    if outcome.failed:
        kind: str = outcome.failure.value if outcome.failure is not None else "failed"
        console.error(f"{outcome.path}: {kind}: {outcome.error}")
        return
    if outcome.changed:
        if verbosity >= 0:
            console.print(f"{outcome.outcome.colored()} {outcome.path}")
    elif verbosity > 0:
        console.print(f"{outcome.outcome.colored()} {outcome.path}")

    if verbosity > 1:
        for diagnostic in outcome.diagnostics:
            level: DiagnosticLevel = diagnostic.level
            console.print(f"    {level.color(f'[{level.value}]')} {diagnostic.message}")
    if show_diff and outcome.changed:
        console.print(render_patch(outcome.diff()), nl=False)


def summary_line(outcomes: list[DocumentOutcome]) -> str:
    """Return e.g. ``"2 reformatted, 5 unchanged"`` for the batch."""
    counts: Counter[FileOutcome] = Counter(outcome.outcome for outcome in outcomes)
    parts: list[str] = [
        f"{counts[kind]} {kind.value}" for kind in FileOutcome if counts[kind]
    ]
    return ", ".join(parts) if parts else "no files"


@click.command(
    name="format",
    help="Reformat scripts embedded in HTML files (and standalone script files).",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1, type=click.Path())
@click.option(
    "--check",
    is_flag=True,
    help="Do not write files; exit with status 2 if any file would be reformatted.",
)
@click.option("--diff", "show_diff", is_flag=True, help="Print a unified diff of each change.")
@common_config_options
@common_filtering_options
@common_formatting_options
def format_command(
    *,
    paths: tuple[str, ...],
    check: bool,
    show_diff: bool,
    no_config: bool,
    config_paths: tuple[str, ...],
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    tab_unit: str | None,
    tab_width: int | None,
    formatter_command: str | None,
) -> None:
    """Format files in place, or report what would change with ``--check``."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    verbosity: int = ctx.obj.get("verbosity_level", 0)

    config: Config = build_config(
        no_config=no_config,
        config_paths=config_paths,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        tab_unit=tab_unit,
        tab_width=tab_width,
        formatter_command=formatter_command,
        apply_changes=not check,
    )

    file_list: list[Path] = resolve_file_list(config, paths)
    if not file_list:
        console.warn("No files to format.")
        return

    try:
        formatter: Formatter = make_formatter(config)
    except FormatterError as exc:
        console.error(str(exc))
        ctx.exit(ExitCode.FORMATTER_ERROR)

    outcomes, exit_code = format_files(file_list, config=config, formatter=formatter, check=check)
    for outcome in outcomes:
        report_outcome(console, outcome, verbosity=verbosity, show_diff=show_diff)
    if verbosity >= 0:
        console.print(summary_line(outcomes))

    if exit_code is not None:
        ctx.exit(int(exit_code))
