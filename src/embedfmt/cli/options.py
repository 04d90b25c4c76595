# topmark:header:start
#
#   project      : EmbedFmt
#   file         : options.py
#   file_relpath : src/embedfmt/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

Centralizes reusable options (verbosity, color, configuration, filtering and
formatting overrides) and their resolution logic, so commands and the group
stay thin.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from embedfmt.cli.errors import EmbedfmtUsageError

P = ParamSpec("P")
R = TypeVar("R")

#: Click context settings shared by all commands.
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Return the program-output verbosity: ``-1`` (quiet), ``0`` (default) or ``1..2``.

    Raises:
        EmbedfmtUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise EmbedfmtUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return min(verbose_count, 2)


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` counting options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase output verbosity. Specify twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report failures.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(*, cli_mode: ColorMode | None, stdout_isatty: bool | None = None) -> bool:
    """Determine whether color output should be enabled.

    Honors ``--color``/``--no-color`` first, then ``FORCE_COLOR`` and
    ``NO_COLOR``, and finally enables color when stdout is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` and ``--no-color`` options."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-config`` and ``--config/-c`` options."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore project config files (only use defaults and --config files).",
    )(f)
    f = click.option(
        "--config",
        "-c",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def common_filtering_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--include/-i`` and ``--exclude/-e`` pattern options."""
    f = click.option(
        "--include",
        "-i",
        "include_patterns",
        multiple=True,
        metavar="PATTERN",
        help="Git-wildmatch pattern of files to include (repeatable).",
    )(f)
    f = click.option(
        "--exclude",
        "-e",
        "exclude_patterns",
        multiple=True,
        metavar="PATTERN",
        help="Git-wildmatch pattern of files to exclude (repeatable).",
    )(f)
    return f


def common_formatting_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add indentation and formatter override options."""
    f = click.option(
        "--tab-unit",
        "tab_unit",
        default=None,
        metavar="TEXT",
        help="String inserted per indentation level (use '\\t' for a tab).",
    )(f)
    f = click.option(
        "--tab-width",
        "tab_width",
        type=click.IntRange(min=1),
        default=None,
        help="Display width of one indentation level.",
    )(f)
    f = click.option(
        "--formatter",
        "formatter_command",
        default=None,
        metavar="COMMAND",
        help="Formatter command line (default: clang-format).",
    )(f)
    return f
