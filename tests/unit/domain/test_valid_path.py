"""
breakdown-config — unit tests for the ValidPath value object

File: tests/unit/domain/test_valid_path.py

Purpose
- Pin the ordered rejection rules (empty, traversal, absolute, characters, length).
- Confirm construction is only possible through ``ValidPath.create``.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from breakdown_config.domain.valid_path import (
    ValidPath,
    first_forbidden_character,
    is_absolute_path,
    is_valid_path,
)
from breakdown_config.errors import PathErrorReason, PathValidationFailure
from breakdown_config.result import Failure, Success

_SAFE_SEGMENT = st.text(
    alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz0123456789_-"),
    min_size=1,
    max_size=12,
)


def _reason(value: object) -> PathErrorReason:
    result = ValidPath.create(value)
    assert isinstance(result, Failure)
    assert isinstance(result.error, PathValidationFailure)
    return result.error.reason


def test_relative_paths_are_accepted_and_trimmed() -> None:
    result = ValidPath.create("  prompts/default  ")
    assert isinstance(result, Success)
    assert result.data.get_value() == "prompts/default"
    assert str(result.data) == "prompts/default"
    assert is_valid_path(result.data)


@pytest.mark.parametrize("value", ["", "   ", None, 42])
def test_empty_or_non_string_is_empty_path(value: object) -> None:
    assert _reason(value) is PathErrorReason.EMPTY_PATH


@pytest.mark.parametrize("value", ["../etc", "a/../b", "a/..", "x..y"])
def test_double_dot_anywhere_is_traversal(value: str) -> None:
    assert _reason(value) is PathErrorReason.PATH_TRAVERSAL


@pytest.mark.parametrize("value", ["/etc/passwd", "\\\\server\\share", "//net/x", "C:\\x", "d:/y"])
def test_absolute_forms_are_rejected(value: str) -> None:
    assert _reason(value) is PathErrorReason.ABSOLUTE_PATH_NOT_ALLOWED


@pytest.mark.parametrize(
    "value", ["a<b", "a>b", "a|b", "a?b", "a*b", 'a"b', "a:b", "a\x00b", "a\tb"]
)
def test_forbidden_characters_are_rejected(value: str) -> None:
    result = ValidPath.create(value)
    assert isinstance(result, Failure)
    assert result.error.reason is PathErrorReason.INVALID_CHARACTERS
    assert "invalid character" in result.error.message


def test_traversal_wins_over_absolute() -> None:
    assert _reason("/../etc") is PathErrorReason.PATH_TRAVERSAL


def test_length_limit_is_checked_last() -> None:
    assert isinstance(ValidPath.create("a" * 4096), Success)
    assert _reason("a" * 4097) is PathErrorReason.PATH_TOO_LONG
    assert _reason("/" + "a" * 5000) is PathErrorReason.ABSOLUTE_PATH_NOT_ALLOWED


def test_direct_construction_is_refused() -> None:
    with pytest.raises(TypeError):
        ValidPath("prompts")


def test_equality_and_hash_follow_the_value() -> None:
    first = ValidPath.create("a/b").unwrap()
    second = ValidPath.create(" a/b ").unwrap()
    other = ValidPath.create("a/c").unwrap()

    assert first == second
    assert first.equals(second)
    assert hash(first) == hash(second)
    assert first != other
    assert first != "a/b"
    assert len({first, second, other}) == 2


def test_helpers_classify_raw_strings() -> None:
    assert is_absolute_path("/x")
    assert not is_absolute_path("x/y")
    assert first_forbidden_character("plain/path") is None
    assert first_forbidden_character("bad*name") == "*"


@settings(max_examples=50, deadline=None)
@given(st.lists(_SAFE_SEGMENT, min_size=1, max_size=5))
def test_joined_safe_segments_round_trip(segments: list[str]) -> None:
    candidate = "/".join(segments)
    result = ValidPath.create(candidate)
    assert isinstance(result, Success)
    assert result.data.get_value() == candidate


@settings(max_examples=50, deadline=None)
@given(_SAFE_SEGMENT, _SAFE_SEGMENT)
def test_any_path_containing_double_dot_is_traversal(prefix: str, suffix: str) -> None:
    assert _reason(f"{prefix}/../{suffix}") is PathErrorReason.PATH_TRAVERSAL
