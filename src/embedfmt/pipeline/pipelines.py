# topmark:header:start
#
#   project      : EmbedFmt
#   file         : pipelines.py
#   file_relpath : src/embedfmt/pipeline/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Named pipeline variants for EmbedFmt (immutable, typed step sequences).

Overview
--------
- ``EMBEDDED``: read -> parse/locate -> dispatch -> reindent -> reassemble -> write
- ``EMBEDDED_TEXT``: ``EMBEDDED`` without the reader, for in-memory text
- ``WHOLE_FILE``: read -> format whole text -> write

```mermaid
flowchart TD
  R[reader] --> P[parser] --> D[dispatch] --> I[reindent] --> A[reassemble] --> W[writer]
  R --> F[whole file] --> W
```

Steps hold no per-document state, so the same instances serve every
document of a concurrent batch.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from embedfmt.pipeline.contracts import Step
from embedfmt.pipeline.steps import dispatch, parser, reader, reassemble, reindent, whole_file, writer

# Markup text already in memory: parse, format the blocks, splice them back
EMBEDDED_TEXT_PIPELINE: Final[tuple[Step, ...]] = (
    parser.ParserStep(),  # Parse markup and locate script blocks
    dispatch.DispatchStep(),  # Format all blocks concurrently (barrier)
    reindent.ReindentStep(),  # Recompute indentation per block
    reassemble.ReassembleStep(),  # Splice blocks into the line buffer
    writer.WriterStep(),  # Write changes (null sink without a path)
)

EMBEDDED_PIPELINE: Final[tuple[Step, ...]] = (reader.ReaderStep(),) + EMBEDDED_TEXT_PIPELINE

WHOLE_FILE_PIPELINE: Final[tuple[Step, ...]] = (
    reader.ReaderStep(),
    whole_file.WholeFileStep(),  # Pass the whole text through the formatter
    writer.WriterStep(),
)


class Pipeline(Enum):
    """Available execution pipelines, mapped to their step sequences."""

    EMBEDDED = EMBEDDED_PIPELINE
    EMBEDDED_TEXT = EMBEDDED_TEXT_PIPELINE
    WHOLE_FILE = WHOLE_FILE_PIPELINE

    @property
    def steps(self) -> tuple[Step, ...]:
        """Return the ordered step instances for this pipeline."""
        return self.value
