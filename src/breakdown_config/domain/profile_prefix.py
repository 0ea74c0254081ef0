"""Validated configuration profile prefix (e.g. ``production`` in ``production-app.yml``)."""

from __future__ import annotations

import re
from typing import Final, TypeGuard

from breakdown_config.errors import (
    ConfigValidationFailure,
    ValidationViolation,
    config_validation_error,
)
from breakdown_config.result import Failure, Result, Success

_CONSTRUCTION_TOKEN: Final[object] = object()
_PREFIX_PATTERN: Final[re.Pattern[str]] = re.compile(r"[a-zA-Z0-9-]+")
_SOURCE: Final[str] = "profile_prefix"


class ValidProfilePrefix:
    __slots__ = ("_value",)

    def __init__(self, value: str, *, _token: object = None) -> None:
        if _token is not _CONSTRUCTION_TOKEN:
            raise TypeError(
                "ValidProfilePrefix instances must be created with ValidProfilePrefix.create()"
            )
        self._value = value

    @classmethod
    def create(cls, value: object) -> Result[ValidProfilePrefix, ConfigValidationFailure]:
        if not isinstance(value, str) or not value.strip():
            return Failure(
                config_validation_error(
                    _SOURCE,
                    [
                        ValidationViolation(
                            field="value",
                            value=value,
                            expected_type="non-empty string",
                            actual_type=type(value).__name__,
                            constraint="cannot be empty",
                        )
                    ],
                )
            )
        if _PREFIX_PATTERN.fullmatch(value) is None:
            return Failure(
                config_validation_error(
                    _SOURCE,
                    [
                        ValidationViolation(
                            field="value",
                            value=value,
                            expected_type="alphanumeric with hyphens",
                            actual_type="string",
                            constraint="only alphanumeric characters and hyphens are allowed",
                        )
                    ],
                )
            )
        return Success(cls(value, _token=_CONSTRUCTION_TOKEN))

    def get_value(self) -> str:
        return self._value

    def equals(self, other: object) -> bool:
        return isinstance(other, ValidProfilePrefix) and other._value == self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidProfilePrefix):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((ValidProfilePrefix, self._value))

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"ValidProfilePrefix({self._value!r})"


def is_valid_profile_prefix(value: object) -> TypeGuard[ValidProfilePrefix]:
    return isinstance(value, ValidProfilePrefix)


__all__ = ["ValidProfilePrefix", "is_valid_profile_prefix"]
