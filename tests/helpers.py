# topmark:header:start
#
#   project      : EmbedFmt
#   file         : helpers.py
#   file_relpath : tests/helpers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared test helpers: configs, fake formatters and document preparation."""

from __future__ import annotations

import asyncio
import re
from typing import TYPE_CHECKING, Any

from embedfmt.config import Config, IndentStyle, MutableConfig
from embedfmt.errors import FormatterError
from embedfmt.formatters.base import CallableFormatter
from embedfmt.markup.parser import parse
from embedfmt.pipeline.indent import reconstruct
from embedfmt.pipeline.locator import locate
from embedfmt.pipeline.model import Document

if TYPE_CHECKING:
    from collections.abc import Callable


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from the packaged defaults and ``overrides``.

    ``overrides`` are `MutableConfig` field names.
    """
    draft: MutableConfig = MutableConfig.from_defaults()
    for key, value in overrides.items():
        setattr(draft, key, value)
    return draft.freeze()


def tidy_js(text: str, language: str = "javascript") -> str:
    """Tiny stand-in for clang-format: one statement per line, spaced ``=``."""
    statements: list[str] = [s.strip() for s in text.replace("\n", " ").split(";")]
    body: str = ";\n".join(s for s in statements if s)
    if text.strip().endswith(";"):
        body += ";"
    return re.sub(r"\s*=\s*", " = ", body)


def identity(text: str, language: str = "javascript") -> str:
    return text


def tidy_formatter() -> CallableFormatter:
    return CallableFormatter(tidy_js, name="tidy")


def failing_on(marker: str) -> CallableFormatter:
    """Formatter that fails for blocks containing ``marker`` and tidies the rest."""

    def _format(text: str, language: str) -> str:
        if marker in text:
            raise FormatterError(f"cannot format {marker!r}")
        return tidy_js(text)

    return CallableFormatter(_format, name="failing")


def prepare_document(
    text: str,
    fn: Callable[[str, str], str] = tidy_js,
    style: IndentStyle | None = None,
) -> Document:
    """Parse ``text`` and fill every block's formatted and final text synchronously."""
    document = Document(path=None, text=text)
    document.tree = parse(text)
    document.blocks = locate(document.tree)
    for block in document.blocks:
        block.set_formatted(fn(block.raw_text, "javascript"))
        block.final_text = reconstruct(block, style)
    return document


def run(coro: Any) -> Any:
    """Drive a coroutine to completion (no async test plugin needed)."""
    return asyncio.run(coro)
