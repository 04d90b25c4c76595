# topmark:header:start
#
#   project      : EmbedFmt
#   file         : __init__.py
#   file_relpath : tests/formatters/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatter collaborator tests."""
