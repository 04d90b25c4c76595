# topmark:header:start
#
#   project      : EmbedFmt
#   file         : api.py
#   file_relpath : src/embedfmt/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public EmbedFmt API (stable surface).

A small, typed API for integrations that want to reformat embedded scripts
programmatically without going through the CLI.

Configuration contract
----------------------
Public functions accept either a plain **mapping** (mirroring the TOML shape,
layered over the packaged defaults), a frozen `Config`, or ``None`` (project
discovery, as the CLI does)::

    from embedfmt import api

    result = api.check(
        ["site"],
        config={"indent": {"tab_unit": "    ", "tab_width": 4}},
    )

Writes are performed exclusively by the pipeline writer step.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from embedfmt.config import Config, MutableConfig
from embedfmt.config.logging import get_logger
from embedfmt.constants import EMBEDFMT_VERSION
from embedfmt.file_resolver import resolve_file_list
from embedfmt.formatters.external import make_formatter
from embedfmt.pipeline.engine import format_files, process_text

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from embedfmt.config.logging import EmbedfmtLogger
    from embedfmt.core.exit_codes import ExitCode
    from embedfmt.formatters.base import Formatter
    from embedfmt.pipeline.outcomes import DocumentOutcome

logger: EmbedfmtLogger = get_logger(__name__)

__all__ = [
    "RunResult",
    "check",
    "format_markup_text",
    "format_paths",
    "format_text",
    "version",
]


@dataclass(frozen=True)
class RunResult:
    """Outcome of a batch run.

    Attributes:
        files (tuple[DocumentOutcome, ...]): Per-file outcomes, sorted by path.
        summary (Mapping[str, int]): Count of files per outcome label.
        encountered_error_code (ExitCode | None): First failure's exit code, or
            ``WOULD_CHANGE`` for a check run with pending changes.
    """

    files: tuple[DocumentOutcome, ...]
    summary: Mapping[str, int] = field(default_factory=dict)
    encountered_error_code: ExitCode | None = None

    @property
    def had_errors(self) -> bool:
        return any(outcome.failed for outcome in self.files)


def ensure_config(value: Mapping[str, Any] | Config | None, *, apply: bool) -> Config:
    """Return a frozen `Config` from a mapping, a `Config` or ``None``.

    Raises:
        ConfigError: If the mapping is invalid.
    """
    draft: MutableConfig
    if value is None:
        draft = MutableConfig.load_merged(start=Path.cwd())
    elif isinstance(value, Config):
        draft = value.thaw()
    else:
        draft = MutableConfig.from_defaults().merge_with(
            MutableConfig.from_toml_dict(dict(value), origin="<api>")
        )
    draft.apply_changes = apply
    return draft.freeze()


def _run(
    paths: Iterable[Path | str],
    *,
    apply: bool,
    config: Mapping[str, Any] | Config | None,
    formatter: Formatter | None,
) -> RunResult:
    cfg: Config = ensure_config(config, apply=apply)
    file_list: list[Path] = resolve_file_list(cfg, list(paths))
    outcomes, code = format_files(file_list, config=cfg, formatter=formatter, check=not apply)
    summary: Counter[str] = Counter(outcome.outcome.value for outcome in outcomes)
    return RunResult(files=tuple(outcomes), summary=dict(summary), encountered_error_code=code)


def format_paths(
    paths: Iterable[Path | str],
    *,
    config: Mapping[str, Any] | Config | None = None,
    formatter: Formatter | None = None,
) -> RunResult:
    """Reformat files in place.

    Args:
        paths (Iterable[Path | str]): Files, directories or globs.
        config (Mapping[str, Any] | Config | None): Configuration (see module docs).
        formatter (Formatter | None): Formatter to use; built from the
            configuration when omitted.

    Returns:
        RunResult: Per-file outcomes and counts.
    """
    return _run(paths, apply=True, config=config, formatter=formatter)


def check(
    paths: Iterable[Path | str],
    *,
    config: Mapping[str, Any] | Config | None = None,
    formatter: Formatter | None = None,
) -> RunResult:
    """Report which files would be reformatted, without writing anything."""
    return _run(paths, apply=False, config=config, formatter=formatter)


async def format_markup_text(
    text: str,
    *,
    config: Mapping[str, Any] | Config | None = None,
    formatter: Formatter | None = None,
) -> str:
    """Return ``text`` with every embedded script block reformatted.

    Raises:
        EmbedfmtError: The error that failed the document (`ParseError`,
            `FormatterError` or `TokenizeError`).
    """
    cfg: Config = ensure_config(config if config is not None else {}, apply=False)
    fmt: Formatter = formatter if formatter is not None else make_formatter(cfg)
    outcome: DocumentOutcome = await process_text(text, config=cfg, formatter=fmt)
    if outcome.error is not None:
        raise outcome.error
    assert outcome.updated_text is not None
    return outcome.updated_text


def format_text(
    text: str,
    *,
    config: Mapping[str, Any] | Config | None = None,
    formatter: Formatter | None = None,
) -> str:
    """Synchronous wrapper around `format_markup_text`."""
    return asyncio.run(format_markup_text(text, config=config, formatter=formatter))


def version() -> str:
    """Return the installed EmbedFmt version string."""
    return EMBEDFMT_VERSION
