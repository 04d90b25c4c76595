# topmark:header:start
#
#   project      : EmbedFmt
#   file         : __init__.py
#   file_relpath : src/embedfmt/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EmbedFmt package.

EmbedFmt reformats the JavaScript embedded in HTML ``<script>`` elements with
an external formatter (clang-format by default) and splices the result back
into the document at the right indentation, leaving everything else in the
file untouched. Standalone script files are formatted as a whole.
"""

from __future__ import annotations
