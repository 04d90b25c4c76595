# topmark:header:start
#
#   project      : EmbedFmt
#   file         : __init__.py
#   file_relpath : src/embedfmt/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EmbedFmt processing pipeline package.

This package contains the components that reformat embedded script blocks:

- Block location, dispatch, indentation reconstruction and reassembly
- Context handling and shared state between steps
- Step implementations and named pipelines
- The engine that runs pipelines over batches of documents
"""
