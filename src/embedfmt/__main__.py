# topmark:header:start
#
#   project      : EmbedFmt
#   file         : __main__.py
#   file_relpath : src/embedfmt/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running EmbedFmt via ``python -m embedfmt``.

Delegates to `embedfmt.cli.main.cli`, the single CLI entry point.

Examples:
    Reformat a directory::

        python -m embedfmt format site/
"""

from __future__ import annotations

from embedfmt.cli.main import cli

if __name__ == "__main__":
    cli()
