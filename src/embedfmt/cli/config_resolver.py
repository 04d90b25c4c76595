# topmark:header:start
#
#   project      : EmbedFmt
#   file         : config_resolver.py
#   file_relpath : src/embedfmt/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build the effective configuration from CLI options.

Layering: packaged defaults, then project config files (unless
``--no-config``), then ``--config`` files, then CLI overrides.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from embedfmt.cli.errors import EmbedfmtConfigError
from embedfmt.config import MutableConfig
from embedfmt.config.logging import get_logger
from embedfmt.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from embedfmt.config import Config
    from embedfmt.config.logging import EmbedfmtLogger

logger: EmbedfmtLogger = get_logger(__name__)


def build_config(
    *,
    no_config: bool,
    config_paths: Sequence[str],
    include_patterns: Sequence[str] = (),
    exclude_patterns: Sequence[str] = (),
    tab_unit: str | None = None,
    tab_width: int | None = None,
    formatter_command: str | None = None,
    apply_changes: bool = True,
) -> Config:
    """Return the frozen effective configuration.

    Raises:
        EmbedfmtConfigError: If any config source is invalid.
    """
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            start=Path.cwd(),
            extra_config_files=[Path(p) for p in config_paths],
            use_project_config=not no_config,
        )
        overrides = MutableConfig(
            config_files=["<cli>"],
            include_patterns=list(include_patterns),
            exclude_patterns=list(exclude_patterns),
            tab_unit=tab_unit.replace("\\t", "\t") if tab_unit is not None else None,
            tab_width=tab_width,
            formatter_command=formatter_command,
            apply_changes=apply_changes,
        )
        config: Config = draft.merge_with(overrides).freeze()
    except ConfigError as exc:
        raise EmbedfmtConfigError(str(exc)) from exc
    logger.debug("Effective config: %s", config)
    return config
