# topmark:header:start
#
#   project      : EmbedFmt
#   file         : dump_config.py
#   file_relpath : src/embedfmt/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EmbedFmt `dump-config` command.

Emits the effective configuration as TOML after applying defaults, project
config files, ``--config`` files and CLI overrides. The output is wrapped
between ``# === BEGIN ===`` and ``# === END ===`` markers for easy parsing in
tests or tooling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from embedfmt.cli.config_resolver import build_config
from embedfmt.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_filtering_options,
    common_formatting_options,
)
from embedfmt.config.loaders import to_toml

if TYPE_CHECKING:
    from embedfmt.cli.console import ClickConsole
    from embedfmt.config import Config


@click.command(
    name="dump-config",
    help="Dump the final merged configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
@common_filtering_options
@common_formatting_options
def dump_config_command(
    *,
    no_config: bool,
    config_paths: tuple[str, ...],
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    tab_unit: str | None,
    tab_width: int | None,
    formatter_command: str | None,
) -> None:
    """Print the merged configuration between BEGIN/END markers."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    config: Config = build_config(
        no_config=no_config,
        config_paths=config_paths,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        tab_unit=tab_unit,
        tab_width=tab_width,
        formatter_command=formatter_command,
    )
    console.print("# === BEGIN ===")
    console.print(to_toml(config.to_toml_dict()).rstrip("\n"))
    console.print("# === END ===")
