# topmark:header:start
#
#   project      : EmbedFmt
#   file         : engine.py
#   file_relpath : src/embedfmt/pipeline/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Execution helpers for running pipelines over documents (engine layer).

CLI-free: no Click, no console output. Both the public API and the CLI call
into this module.

Documents of a batch are processed concurrently with ``asyncio.gather``.
Each document is an independent failure domain: its failure is captured in
its own `DocumentOutcome` and never affects the others.

Typical usage::

    outcomes, err = format_files(paths, config=cfg)
    if err is not None:
        # CLI maps this to a process exit; API callers may handle it differently.
        ...
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from embedfmt.config.logging import get_logger
from embedfmt.constants import MARKUP_SUFFIXES
from embedfmt.formatters.external import make_formatter
from embedfmt.pipeline import runner
from embedfmt.pipeline.context import DocumentContext
from embedfmt.pipeline.outcomes import DocumentOutcome, map_outcome, summarize_exit_code
from embedfmt.pipeline.pipelines import Pipeline
from embedfmt.pipeline.status import DocumentState, FailureKind, FileOutcome

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from embedfmt.config import Config
    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.core.exit_codes import ExitCode
    from embedfmt.formatters.base import Formatter

logger: EmbedfmtLogger = get_logger(__name__)


def select_pipeline(path: Path) -> Pipeline:
    """Return `Pipeline.EMBEDDED` for markup files, else `Pipeline.WHOLE_FILE`."""
    if path.suffix.lower() in MARKUP_SUFFIXES:
        return Pipeline.EMBEDDED
    return Pipeline.WHOLE_FILE


async def _run_isolated(ctx: DocumentContext, pipeline: Pipeline) -> DocumentOutcome:
    try:
        ctx = await runner.run(ctx, pipeline.steps)
    except Exception as exc:
        # Anything the steps did not classify fails only this document
        logger.exception("Unexpected error processing %s: %s", ctx.display_path, exc)
        return DocumentOutcome(
            path=ctx.path,
            outcome=FileOutcome.FAILED,
            state=DocumentState.FAILED,
            failure=FailureKind.INTERNAL,
            error=exc,
            original_text=ctx.original_text,
        )
    return map_outcome(ctx)


async def process_file(path: Path, *, config: Config, formatter: Formatter) -> DocumentOutcome:
    """Run the pipeline matching ``path``'s type and return its outcome."""
    ctx: DocumentContext = DocumentContext.bootstrap(path=path, config=config, formatter=formatter)
    return await _run_isolated(ctx, select_pipeline(path))


async def process_text(
    text: str,
    *,
    config: Config,
    formatter: Formatter,
    path: Path | None = None,
) -> DocumentOutcome:
    """Format the script blocks of in-memory markup ``text``; nothing is written."""
    ctx: DocumentContext = DocumentContext.from_text(
        text, config=config, formatter=formatter, path=path
    )
    return await _run_isolated(ctx, Pipeline.EMBEDDED_TEXT)


async def run_documents(
    paths: Sequence[Path], *, config: Config, formatter: Formatter
) -> list[DocumentOutcome]:
    """Process all ``paths`` concurrently; results keep the input order."""
    return list(
        await asyncio.gather(
            *(process_file(path, config=config, formatter=formatter) for path in paths)
        )
    )


def format_files(
    paths: Sequence[Path],
    *,
    config: Config,
    formatter: Formatter | None = None,
    check: bool = False,
) -> tuple[list[DocumentOutcome], ExitCode | None]:
    """Format ``paths`` and return ``(outcomes, encountered_error_code)``.

    Args:
        paths (Sequence[Path]): Files to process.
        config (Config): Effective configuration; ``apply_changes`` controls writes.
        formatter (Formatter | None): Formatter collaborator; built from
            ``config`` when omitted.
        check (bool): Report `ExitCode.WOULD_CHANGE` when files would change.

    Returns:
        tuple[list[DocumentOutcome], ExitCode | None]: Per-file outcomes in input
        order, and the first failure's exit code (or ``WOULD_CHANGE``/``None``).
    """
    fmt: Formatter = formatter if formatter is not None else make_formatter(config)
    outcomes: list[DocumentOutcome] = asyncio.run(
        run_documents(paths, config=config, formatter=fmt)
    )
    for outcome in outcomes:
        if outcome.failed:
            logger.debug(
                "%s: %s: %s", outcome.path, outcome.failure and outcome.failure.value, outcome.error
            )
    return outcomes, summarize_exit_code(outcomes, check=check)
