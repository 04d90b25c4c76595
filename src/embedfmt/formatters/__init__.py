# topmark:header:start
#
#   project      : EmbedFmt
#   file         : __init__.py
#   file_relpath : src/embedfmt/formatters/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatter collaborators used to reformat script text."""

from __future__ import annotations

from embedfmt.formatters.base import CallableFormatter, Formatter, identity_formatter
from embedfmt.formatters.external import ClangFormatFormatter, SubprocessFormatter, make_formatter

__all__ = [
    "CallableFormatter",
    "ClangFormatFormatter",
    "Formatter",
    "SubprocessFormatter",
    "identity_formatter",
    "make_formatter",
]
