# topmark:header:start
#
#   project      : EmbedFmt
#   file         : file_resolver.py
#   file_relpath : src/embedfmt/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve input files for EmbedFmt based on config and positional paths.

Positional arguments are expanded (files as-is, directories recursively,
globs relative to the working directory); without any, the working directory
is walked. Files discovered by expansion are filtered with git-wildmatch
include/exclude patterns. Explicitly named files are always kept, even when
they do not match an include pattern, so that ``embedfmt format page.xhtml``
does what it says. The result is a sorted, de-duplicated list.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from embedfmt.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from embedfmt.config import Config
    from embedfmt.config.logging import EmbedfmtLogger

logger: EmbedfmtLogger = get_logger(__name__)


def _rel_for_match(path: Path, *bases: Path) -> str:
    """Return a POSIX-style path relative to the first base that contains ``path``."""
    resolved: Path = path.resolve()
    for base in bases:
        try:
            return resolved.relative_to(base.resolve()).as_posix()
        except ValueError:
            continue
    return path.as_posix()


def _spec(patterns: Iterable[str]) -> PathSpec | None:
    patterns = list(patterns)
    if not patterns:
        return None
    return PathSpec.from_lines(GitWildMatchPattern, patterns)


def _walk(directory: Path) -> list[tuple[Path, Path]]:
    return [(p, directory) for p in directory.rglob("*") if p.is_file()]


def resolve_file_list(
    config: Config,
    paths: Sequence[str | Path] = (),
    *,
    base: Path | None = None,
) -> list[Path]:
    """Return the files to process.

    Args:
        config (Config): Supplies ``include_patterns`` and ``exclude_patterns``.
        paths (Sequence[str | Path]): Positional paths; empty means "walk ``base``".
        base (Path | None): Directory that patterns are relative to (default: cwd).

    Returns:
        list[Path]: Sorted list of files selected for processing. Explicit
        file arguments that do not exist are kept so the pipeline can report
        them.
    """
    root: Path = base or Path.cwd()
    include: PathSpec | None = _spec(config.include_patterns)
    exclude: PathSpec | None = _spec(config.exclude_patterns)

    explicit: list[Path] = []
    # (file, directory it was found under)
    discovered: list[tuple[Path, Path]] = []
    if not paths:
        discovered.extend(_walk(root))
    for raw in paths:
        path = Path(raw)
        if any(ch in str(raw) for ch in "*?["):
            anchor: Path = Path(path.anchor) if path.is_absolute() else root
            pattern: str = str(path.relative_to(anchor)) if path.is_absolute() else str(raw)
            for match in sorted(anchor.glob(pattern)):
                if match.is_dir():
                    discovered.extend(_walk(match))
                elif match.is_file():
                    discovered.append((match, root))
        elif path.is_dir():
            discovered.extend(_walk(path))
        else:
            explicit.append(path)

    def _selected(candidate: Path, found_under: Path) -> bool:
        rel: str = _rel_for_match(candidate, root, found_under)
        if include is not None and not include.match_file(rel):
            return False
        return not (exclude is not None and exclude.match_file(rel))

    selected: list[Path] = [p for p, found_under in discovered if _selected(p, found_under)]
    result: list[Path] = sorted(set(explicit) | set(selected))
    logger.debug(
        "Resolved %d file(s) (%d explicit, %d of %d discovered)",
        len(result),
        len(explicit),
        len(selected),
        len(discovered),
    )
    return result
