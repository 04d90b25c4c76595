# topmark:header:start
#
#   project      : EmbedFmt
#   file         : constants.py
#   file_relpath : src/embedfmt/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EmbedFmt constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    EMBEDFMT_VERSION: str = get_version("embedfmt")
except PackageNotFoundError:  # running from a source checkout
    EMBEDFMT_VERSION = "0.0.0+unknown"

# Name of the bundled default config inside the package `embedfmt.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "embedfmt.config"
DEFAULT_TOML_CONFIG_NAME: str = "embedfmt-default.toml"

# Project config files discovered in the working directory (later wins).
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PROJECT_TOML_NAME: str = "embedfmt.toml"
PYPROJECT_TOOL_SECTION: str = "embedfmt"

# Suffixes handled as markup documents; everything else is formatted whole.
MARKUP_SUFFIXES: frozenset[str] = frozenset({".html", ".htm"})

# Values of <script type="..."> whose content is reformatted (absent also qualifies).
SCRIPT_TYPES: frozenset[str] = frozenset({"text/javascript", "application/javascript", "module"})

# Language hint passed to the formatter for embedded blocks.
DEFAULT_LANGUAGE: str = "javascript"
