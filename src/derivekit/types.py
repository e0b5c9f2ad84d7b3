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
Description: Two-variant value types. Option holds a value or nothing, Result holds a success
            value or an error. The OptionLike and ResultLike protocols let other wrappers take
            part in serialization and matching.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from typing import Any, Callable, Protocol, runtime_checkable

from .exceptions import UnwrapError


class _Empty:
    """Marker of the empty variant."""

    def __repr__(self) -> str:
        return "<empty>"


_EMPTY: Any = _Empty()


@runtime_checkable
class OptionLike(Protocol):
    """Anything exposing the has-value / get-or-default contract."""

    def is_some(self) -> bool: ...

    def unwrap_or(self, default: Any, /) -> Any: ...


@runtime_checkable
class ResultLike(Protocol):
    """Anything exposing the success / failure contract."""

    def is_ok(self) -> bool: ...

    def unwrap(self) -> Any: ...

    def unwrap_err(self) -> Any: ...


class Option[T]:
    """An optional value, either Some(value) or None.

    Examples:
        >>> Option.some(2).map(lambda v: v * 21).unwrap()
        42
        >>> Option.none().unwrap_or("fallback")
        'fallback'
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any = _EMPTY) -> None:
        self._value = value

    @classmethod
    def some(cls, value: T) -> Option[T]:
        """Create an Option holding `value`. `Option.some(None)` holds None."""
        return cls(value)

    @classmethod
    def none(cls) -> Option[T]:
        """Create an empty Option."""
        return cls()

    def is_some(self) -> bool:
        return self._value is not _EMPTY

    def is_none(self) -> bool:
        return self._value is _EMPTY

    def unwrap(self) -> T:
        """Get the contained value.

        Raises:
            UnwrapError: Raised if the Option is empty.
        """
        if self._value is _EMPTY:
            raise UnwrapError("Called unwrap on a None value.")
        return self._value

    def unwrap_or(self, default: T, /) -> T:
        return self._value if self._value is not _EMPTY else default

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """Apply `f` to the contained value, if any."""
        if self._value is _EMPTY:
            return Option()
        return Option(f(self._value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((Option, self._value))

    def __repr__(self) -> str:
        if self._value is _EMPTY:
            return "Option.none()"
        return f"Option.some({self._value!r})"


class Result[T, E]:
    """The outcome of a computation that may fail, either Ok(value) or Err(error).

    Examples:
        >>> Result.ok(1).map(lambda v: v + 1).unwrap()
        2
        >>> Result.err("boom").unwrap_err()
        'boom'
    """

    __slots__ = ("_ok", "_value")

    def __init__(self, ok: bool, value: Any) -> None:
        self._ok = ok
        self._value = value

    @classmethod
    def ok(cls, value: T) -> Result[T, E]:
        return cls(True, value)

    @classmethod
    def err(cls, error: E) -> Result[T, E]:
        return cls(False, error)

    def is_ok(self) -> bool:
        return self._ok

    def is_err(self) -> bool:
        return not self._ok

    def unwrap(self) -> T:
        """Get the success value.

        Raises:
            UnwrapError: Raised if the Result is an error.
        """
        if not self._ok:
            raise UnwrapError(f"Called unwrap on an Err value: {self._value!r}.")
        return self._value

    def unwrap_err(self) -> E:
        """Get the error value.

        Raises:
            UnwrapError: Raised if the Result is a success.
        """
        if self._ok:
            raise UnwrapError(f"Called unwrap_err on an Ok value: {self._value!r}.")
        return self._value

    def unwrap_or(self, default: T, /) -> T:
        return self._value if self._ok else default

    def map[U](self, f: Callable[[T], U]) -> Result[U, E]:
        return Result(True, f(self._value)) if self._ok else Result(False, self._value)

    def map_err[F](self, f: Callable[[E], F]) -> Result[T, F]:
        return Result(False, f(self._value)) if not self._ok else Result(True, self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._ok == other._ok and self._value == other._value

    def __hash__(self) -> int:
        return hash((Result, self._ok, self._value))

    def __repr__(self) -> str:
        return f"Result.{'ok' if self._ok else 'err'}({self._value!r})"


def is_option_like(value: Any) -> bool:
    """Check if a value follows the OptionLike contract. Classes are never option-like."""
    return not isinstance(value, type) and isinstance(value, OptionLike)


def is_result_like(value: Any) -> bool:
    """Check if a value follows the ResultLike contract. Classes are never result-like."""
    return not isinstance(value, type) and isinstance(value, ResultLike)
