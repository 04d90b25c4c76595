# topmark:header:start
#
#   project      : EmbedFmt
#   file         : __init__.py
#   file_relpath : src/embedfmt/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across EmbedFmt.

Included modules:

- ``diagnostics``
  Per-document diagnostic messages (info, warning, error).

- ``exit_codes``
  Centralized exit codes for the CLI and runtime, aligned with BSD-style
  ``sysexits`` where practical, with a dedicated ``WOULD_CHANGE`` code for
  dry-run mode.
"""
