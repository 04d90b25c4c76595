# topmark:header:start
#
#   project      : EmbedFmt
#   file         : __init__.py
#   file_relpath : src/embedfmt/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for EmbedFmt.

Re-exports the configuration model so callers can write
``from embedfmt.config import Config, MutableConfig, IndentStyle``.
"""

from __future__ import annotations

from embedfmt.config.model import Config, IndentStyle, MutableConfig

__all__ = [
    "Config",
    "IndentStyle",
    "MutableConfig",
]
