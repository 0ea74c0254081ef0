"""Unit tests for the Success/Failure result type and its combinators."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from breakdown_config.errors import ErrorKind, UnknownFailure
from breakdown_config.result import (
    Failure,
    Success,
    UnwrapError,
    all_ok,
    all_settled,
    err,
    failure,
    from_awaitable,
    is_err,
    is_ok,
    ok,
    success,
)


def test_constructors_and_discriminant() -> None:
    assert ok(1) == Success(1)
    assert err("boom") == Failure("boom")
    assert success(1) == ok(1)
    assert failure("x") == err("x")
    assert ok(1).success is True
    assert err("x").success is False
    assert is_ok(ok(1)) and not is_err(ok(1))
    assert is_err(err("x")) and not is_ok(err("x"))


def test_map_and_map_err_touch_only_their_variant() -> None:
    assert ok(2).map(lambda value: value * 3) == ok(6)
    assert ok(2).map_err(lambda error: "changed") == ok(2)
    assert err("e").map(lambda value: value * 3) == err("e")
    assert err("e").map_err(str.upper) == err("E")


def test_and_then_never_calls_continuation_on_failure() -> None:
    calls: list[object] = []

    def continuation(value: object) -> Success[object]:
        calls.append(value)
        return ok(value)

    assert err("e").and_then(continuation) == err("e")
    assert err("e").flat_map(continuation) == err("e")
    assert calls == []

    assert ok(5).and_then(lambda value: ok(value + 1)) == ok(6)
    assert ok(5).flat_map(lambda value: err(f"bad {value}")) == err("bad 5")


def test_or_else_recovers_failures_only() -> None:
    assert err("e").or_else(lambda error: ok(f"recovered {error}")) == ok("recovered e")
    assert ok(1).or_else(lambda error: ok(99)) == ok(1)


def test_unwrap_or_never_raises() -> None:
    assert ok(1).unwrap_or(0) == 1
    assert err("e").unwrap_or(0) == 0


def test_unwrap_and_unwrap_err_raise_on_wrong_variant() -> None:
    assert ok(1).unwrap() == 1
    assert err("e").unwrap_err() == "e"

    with pytest.raises(UnwrapError, match="unwrap\\(\\) on a Failure"):
        err("e").unwrap()
    with pytest.raises(UnwrapError, match="unwrap_err\\(\\) on a Success"):
        ok(1).unwrap_err()


def test_match_dispatches_on_variant() -> None:
    assert ok(2).match(lambda value: f"ok {value}", lambda error: f"err {error}") == "ok 2"
    assert err("x").match(lambda value: f"ok {value}", lambda error: f"err {error}") == "err x"


def test_tap_observers_return_self_unchanged() -> None:
    seen: list[object] = []
    original_ok = ok(1)
    original_err = err("e")

    assert original_ok.tap(seen.append) is original_ok
    assert original_ok.tap_err(seen.append) is original_ok
    assert original_err.tap(seen.append) is original_err
    assert original_err.tap_err(seen.append) is original_err
    assert seen == [1, "e"]


def test_all_ok_short_circuits_on_first_failure() -> None:
    consumed: list[int] = []

    def produce() -> Iterator[Success[int] | Failure[str]]:
        for index, item in enumerate([ok(1), err("E"), ok(3)]):
            consumed.append(index)
            yield item

    assert all_ok(produce()) == err("E")
    assert consumed == [0, 1]


def test_all_ok_collects_values_and_accepts_empty_input() -> None:
    assert all_ok([ok(1), ok(2), ok(3)]) == ok([1, 2, 3])
    assert all_ok([]) == ok([])


def test_all_settled_keeps_every_result_in_order() -> None:
    results = [ok(1), err("E"), ok(3)]
    settled = all_settled(results)
    assert settled == results
    assert len(settled) == 3


@pytest.mark.asyncio
async def test_from_awaitable_wraps_value_and_maps_exceptions() -> None:
    async def value() -> int:
        return 7

    async def broken() -> int:
        raise RuntimeError("disk on fire")

    assert await from_awaitable(value()) == ok(7)

    default_mapped = await from_awaitable(broken())
    assert isinstance(default_mapped, Failure)
    assert isinstance(default_mapped.error, UnknownFailure)
    assert default_mapped.error.kind is ErrorKind.UNKNOWN_ERROR
    assert "disk on fire" in default_mapped.error.message

    custom_mapped = await from_awaitable(broken(), lambda exc: f"mapped: {exc}")
    assert custom_mapped == err("mapped: disk on fire")


@pytest.mark.asyncio
async def test_from_awaitable_message_is_well_formed_for_empty_exception_text() -> None:
    async def broken() -> None:
        raise ValueError()

    result = await from_awaitable(broken())
    assert isinstance(result, Failure)
    assert result.error.message.endswith("ValueError")
