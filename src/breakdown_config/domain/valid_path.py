"""Validated relative path value object."""

from __future__ import annotations

import re
from typing import Final, TypeGuard

from breakdown_config.constants import MAX_PATH_LENGTH, PATH_FORBIDDEN_CHARACTERS
from breakdown_config.errors import PathErrorReason, PathValidationFailure, path_validation_error
from breakdown_config.result import Failure, Result, Success

_CONSTRUCTION_TOKEN: Final[object] = object()

_DRIVE_ABSOLUTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:[\\/]")
_CONTROL_CHARACTERS: Final[frozenset[str]] = frozenset(chr(code) for code in range(0x00, 0x20))
_FORBIDDEN_CHARACTERS: Final[frozenset[str]] = frozenset(PATH_FORBIDDEN_CHARACTERS)


class ValidPath:
    """Relative, traversal-free path string.

    Instances only come out of :meth:`create`; the stored value is trimmed.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str, *, _token: object = None) -> None:
        if _token is not _CONSTRUCTION_TOKEN:
            raise TypeError("ValidPath instances must be created with ValidPath.create()")
        self._value = value

    @classmethod
    def create(cls, path: object) -> Result[ValidPath, PathValidationFailure]:
        """Validate ``path`` and wrap it.

        Checks run in a fixed order and the first failing check wins:
        empty, traversal, absolute, forbidden characters, length.
        """

        if not isinstance(path, str) or not path.strip():
            return Failure(path_validation_error(_display(path), PathErrorReason.EMPTY_PATH))
        trimmed = path.strip()
        if ".." in trimmed:
            return Failure(path_validation_error(path, PathErrorReason.PATH_TRAVERSAL))
        if is_absolute_path(trimmed):
            return Failure(path_validation_error(path, PathErrorReason.ABSOLUTE_PATH_NOT_ALLOWED))
        bad_char = first_forbidden_character(trimmed)
        if bad_char is not None:
            return Failure(
                path_validation_error(
                    path,
                    PathErrorReason.INVALID_CHARACTERS,
                    details=f"Path contains invalid character {bad_char!r}: {path!r}",
                )
            )
        if len(trimmed) > MAX_PATH_LENGTH:
            return Failure(path_validation_error(path, PathErrorReason.PATH_TOO_LONG))
        return Success(cls(trimmed, _token=_CONSTRUCTION_TOKEN))

    def get_value(self) -> str:
        return self._value

    def equals(self, other: object) -> bool:
        return isinstance(other, ValidPath) and other._value == self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidPath):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((ValidPath, self._value))

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"ValidPath({self._value!r})"


def is_valid_path(value: object) -> TypeGuard[ValidPath]:
    return isinstance(value, ValidPath)


def is_absolute_path(path: str) -> bool:
    if path.startswith(("/", "\\\\", "//")):
        return True
    return _DRIVE_ABSOLUTE_PATTERN.match(path) is not None


def first_forbidden_character(path: str) -> str | None:
    for char in path:
        if char in _CONTROL_CHARACTERS or char in _FORBIDDEN_CHARACTERS:
            return char
    return None


def _display(value: object) -> str:
    return value if isinstance(value, str) else repr(value)


__all__ = ["ValidPath", "first_forbidden_character", "is_absolute_path", "is_valid_path"]
