# topmark:header:start
#
#   project      : EmbedFmt
#   file         : loaders.py
#   file_relpath : src/embedfmt/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides I/O helpers for reading EmbedFmt configuration from:
- the packaged default TOML resource, and
- on-disk TOML files (`embedfmt.toml` / `pyproject.toml`).

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from embedfmt.config.logging import get_logger
from embedfmt.constants import DEFAULT_TOML_CONFIG_NAME, DEFAULT_TOML_CONFIG_PACKAGE
from embedfmt.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from embedfmt.config.logging import EmbedfmtLogger

TomlTable = dict[str, Any]

logger: EmbedfmtLogger = get_logger(__name__)


def parse_toml_text(text: str, *, origin: str) -> TomlTable:
    """Parse TOML text into a plain ``dict``.

    Args:
        text (str): The TOML document.
        origin (str): Human-readable source name used in error messages.

    Returns:
        TomlTable: The unwrapped document.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise ConfigError(f"{origin} is not valid TOML: {exc}") from exc
    return cast("TomlTable", doc.unwrap())


def load_toml_dict(path: Path) -> TomlTable:
    """Read and parse a TOML file.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    logger.debug("Loaded TOML config file %s", path)
    return parse_toml_text(text, origin=str(path))


def load_defaults_dict() -> TomlTable:
    """Return the packaged default configuration as a dict."""
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    text: str = resource.read_text(encoding="utf-8")
    return parse_toml_text(text, origin=DEFAULT_TOML_CONFIG_NAME)


def to_toml(data: TomlTable) -> str:
    """Render a plain dict as TOML text."""
    return tomlkit.dumps(data)
