"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2026-10-18
Description: Matching over Option and Result values. `Match.on` is the fluent form and `match`
            the functional one. In both, the first applicable handler wins.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from collections.abc import Mapping
from typing import Any, Callable, Self

from .exceptions import NoMatchingPatternError
from .types import is_option_like, is_result_like

type Handler = Callable[..., Any]

_UNMATCHED: Any = object()

# Handler kinds in precedence order for the functional form.
PATTERN_KINDS = ("some", "none", "ok", "err")


def _applies(kind: str, value: Any) -> bool:
    match kind:
        case "some":
            return is_option_like(value) and value.is_some()
        case "none":
            return is_option_like(value) and not value.is_some()
        case "ok":
            return is_result_like(value) and value.is_ok()
        case "err":
            return is_result_like(value) and not value.is_ok()
    return False


def _call(kind: str, handler: Handler, value: Any) -> Any:
    match kind:
        case "some" | "ok":
            return handler(value.unwrap())
        case "err":
            return handler(value.unwrap_err())
    return handler()


class Match[U]:
    """A fluent matcher for Option and Result values.

    Examples:
        >>> Match.on(Option.some(42)).some(lambda v: v + 1).none(lambda: 0).default(lambda: -1)
        43
    """

    __slots__ = ("_value", "_result")

    def __init__(self, value: Any) -> None:
        self._value = value
        self._result: Any = _UNMATCHED

    @classmethod
    def on(cls, value: Any) -> Match[Any]:
        """Start a match on an Option or Result value."""
        return cls(value)

    @property
    def matched(self) -> bool:
        """Whether a handler already produced the result."""
        return self._result is not _UNMATCHED

    def _try(self, kind: str, handler: Handler) -> Self:
        if self._result is _UNMATCHED and _applies(kind, self._value):
            self._result = _call(kind, handler, self._value)
        return self

    def some(self, f: Callable[[Any], U]) -> Self:
        """Handle an Option holding a value. `f` receives the value."""
        return self._try("some", f)

    def none(self, f: Callable[[], U]) -> Self:
        """Handle an empty Option."""
        return self._try("none", f)

    def ok(self, f: Callable[[Any], U]) -> Self:
        """Handle a successful Result. `f` receives the value."""
        return self._try("ok", f)

    def err(self, f: Callable[[Any], U]) -> Self:
        """Handle a failed Result. `f` receives the error."""
        return self._try("err", f)

    def default(self, f: Callable[[], U]) -> U:
        """Finish the match.

        Returns:
            U: The result of the handler that matched, or of `f` if none did.
        """
        return self._result if self._result is not _UNMATCHED else f()


def match(value: Any, pattern: Mapping[str, Handler] | None = None, /, **handlers: Handler) -> Any:
    """Match a value against named handlers: some, none, ok, err and default. Handlers can be
    given as a mapping, as keywords, or both (keywords win).

    Examples:
        >>> match(Result.err("boom"), ok=lambda v: v, err=lambda e: f"failed: {e}")
        'failed: boom'
        >>> match(Option.some(42), {"default": lambda: "D"})
        'D'

    Args:
        value (Any): The Option or Result value.
        pattern (Mapping[str, Handler] | None): The handlers by name.

    Raises:
        NoMatchingPatternError: Raised when no handler applies and no default is given.

    Returns:
        Any: The result of the first applicable handler.
    """
    handlers = {**(pattern or {}), **handlers}
    for kind in PATTERN_KINDS:
        handler = handlers.get(kind)
        if handler is not None and _applies(kind, value):
            return _call(kind, handler, value)
    default = handlers.get("default")
    if default is not None:
        return default()
    raise NoMatchingPatternError(
        f"No matching pattern for {value!r} among handlers {sorted(handlers)}."
    )
