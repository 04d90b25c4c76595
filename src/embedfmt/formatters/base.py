# topmark:header:start
#
#   project      : EmbedFmt
#   file         : base.py
#   file_relpath : src/embedfmt/formatters/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatter collaborator protocol.

A formatter turns a complete piece of source text into its formatted form.
It is a single coroutine returning the whole result; failures are exceptions
(`FormatterError`), never partial strings.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Awaitable, Protocol, Union, runtime_checkable

from embedfmt.errors import FormatterError

if TYPE_CHECKING:
    from collections.abc import Callable

    FormatFunc = Callable[[str, str], Union[str, Awaitable[str]]]


@runtime_checkable
class Formatter(Protocol):
    """Structural protocol for formatter collaborators."""

    async def format(self, text: str, language: str) -> str:
        """Return ``text`` formatted as ``language``.

        Raises:
            FormatterError: If formatting fails.
        """
        ...


class CallableFormatter:
    """Adapt a plain function ``(text, language) -> str`` into a `Formatter`.

    The function may be synchronous or a coroutine function. Any exception
    it raises other than `FormatterError` is wrapped in one.

    Args:
        func (FormatFunc): The formatting function.
        name (str | None): Display name used in error messages.
    """

    def __init__(self, func: FormatFunc, *, name: str | None = None) -> None:
        self.func = func
        self.name = name or getattr(func, "__name__", type(func).__name__)

    def __repr__(self) -> str:
        return f"CallableFormatter({self.name})"

    async def format(self, text: str, language: str) -> str:
        try:
            result: str | Awaitable[str] = self.func(text, language)
            if inspect.isawaitable(result):
                result = await result
        except FormatterError:
            raise
        except Exception as exc:
            raise FormatterError(f"{self.name}: {exc}") from exc
        if not isinstance(result, str):
            raise FormatterError(f"{self.name} returned {type(result).__name__}, expected str")
        return result


def identity_formatter(text: str, language: str) -> str:
    """Return ``text`` unchanged."""
    return text
