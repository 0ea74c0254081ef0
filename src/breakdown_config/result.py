"""
breakdown-config — explicit success/failure result values.

File: src/breakdown_config/result.py

Purpose
- Represent the outcome of every fallible operation as a value instead of a raised exception.

What should be included in this file
- ``Success`` / ``Failure`` variants discriminated by the ``success`` class attribute.
- Combinators: map, map_err, flat_map/and_then, or_else, tap/tap_err, match.
- Extraction: unwrap_or (never raises), unwrap/unwrap_err (raise ``UnwrapError``).
- Aggregators over iterables of results and an awaitable adapter.

Functional requirements
- Combinators never invoke the continuation on the wrong variant.
- ``all_ok`` short-circuits on the first failure; ``all_settled`` keeps input order.

Non-functional requirements
- Variants are immutable and cheap to construct.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import ClassVar, Generic, NoReturn, TypeAlias, TypeGuard, TypeVar

from breakdown_config.errors import UnknownFailure, unknown_error

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")
R = TypeVar("R")


class UnwrapError(RuntimeError):
    """Raised when ``unwrap``/``unwrap_err`` is called on the wrong variant."""

    def __init__(self, message: str, payload: object) -> None:
        super().__init__(message)
        self.payload = payload


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Successful outcome carrying ``data``."""

    data: T
    success: ClassVar[bool] = True

    def map(self, fn: Callable[[T], U]) -> Success[U]:
        return Success(fn(self.data))

    def map_err(self, fn: Callable[[object], object]) -> Success[T]:
        return self

    def flat_map(self, fn: Callable[[T], Result[U, F]]) -> Result[U, F]:
        return fn(self.data)

    def and_then(self, fn: Callable[[T], Result[U, F]]) -> Result[U, F]:
        return fn(self.data)

    def or_else(self, fn: Callable[[object], object]) -> Success[T]:
        return self

    def unwrap_or(self, default: object) -> T:
        return self.data

    def unwrap(self) -> T:
        return self.data

    def unwrap_err(self) -> NoReturn:
        raise UnwrapError("called unwrap_err() on a Success value", self.data)

    def match(self, on_ok: Callable[[T], R], on_err: Callable[[object], R]) -> R:
        return on_ok(self.data)

    def tap(self, fn: Callable[[T], object]) -> Success[T]:
        fn(self.data)
        return self

    def tap_err(self, fn: Callable[[object], object]) -> Success[T]:
        return self


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    """Failed outcome carrying a typed ``error`` record."""

    error: E
    success: ClassVar[bool] = False

    def map(self, fn: Callable[[object], object]) -> Failure[E]:
        return self

    def map_err(self, fn: Callable[[E], F]) -> Failure[F]:
        return Failure(fn(self.error))

    def flat_map(self, fn: Callable[[object], object]) -> Failure[E]:
        return self

    def and_then(self, fn: Callable[[object], object]) -> Failure[E]:
        return self

    def or_else(self, fn: Callable[[E], Result[U, F]]) -> Result[U, F]:
        return fn(self.error)

    def unwrap_or(self, default: U) -> U:
        return default

    def unwrap(self) -> NoReturn:
        raise UnwrapError(f"called unwrap() on a Failure value: {self.error!r}", self.error)

    def unwrap_err(self) -> E:
        return self.error

    def match(self, on_ok: Callable[[object], R], on_err: Callable[[E], R]) -> R:
        return on_err(self.error)

    def tap(self, fn: Callable[[object], object]) -> Failure[E]:
        return self

    def tap_err(self, fn: Callable[[E], object]) -> Failure[E]:
        fn(self.error)
        return self


Result: TypeAlias = Success[T] | Failure[E]


def ok(data: T) -> Success[T]:
    """Build a successful result."""

    return Success(data)


def err(error: E) -> Failure[E]:
    """Build a failed result."""

    return Failure(error)


success = ok
failure = err


def is_ok(result: Result[T, E]) -> TypeGuard[Success[T]]:
    return isinstance(result, Success)


def is_err(result: Result[T, E]) -> TypeGuard[Failure[E]]:
    return isinstance(result, Failure)


def all_ok(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Collect every success value, or return the first failure unchanged."""

    values: list[T] = []
    for item in results:
        if isinstance(item, Failure):
            return item
        values.append(item.data)
    return Success(values)


def all_settled(results: Iterable[Result[T, E]]) -> list[Result[T, E]]:
    """Return every result in input order, successes and failures alike."""

    return list(results)


async def from_awaitable(
    awaitable: Awaitable[T],
    error_mapper: Callable[[Exception], E] | None = None,
) -> Result[T, E | UnknownFailure]:
    """Await ``awaitable`` and convert a raised exception into a failure."""

    try:
        value = await awaitable
    except Exception as exc:  # noqa: BLE001 - converted into a typed failure.
        if error_mapper is not None:
            return Failure(error_mapper(exc))
        return Failure(unknown_error(exc, context="awaitable"))
    return Success(value)


__all__ = [
    "Failure",
    "Result",
    "Success",
    "UnwrapError",
    "all_ok",
    "all_settled",
    "err",
    "failure",
    "from_awaitable",
    "is_err",
    "is_ok",
    "ok",
    "success",
]
