"""
breakdown-config — closed error taxonomy.

File: src/breakdown_config/errors.py

Purpose
- Describe every expected failure of the config pipeline as an immutable, typed record.

What should be included in this file
- ``ErrorKind`` discriminant shared by all records.
- One frozen record per kind, each exposing ``kind`` and a deterministic ``message``.
- Factory functions used by components instead of constructing records ad hoc.
- ``ConfigurationError`` for the raising API surface and ``format_error`` for display.

Functional requirements
- Messages must be well formed even when the wrapped exception has no text.

Non-functional requirements
- Records are plain data; no I/O and no logging here.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, TypeAlias


class ErrorKind(StrEnum):
    """Discriminant for every config pipeline failure."""

    CONFIG_FILE_NOT_FOUND = "CONFIG_FILE_NOT_FOUND"
    CONFIG_PARSE_ERROR = "CONFIG_PARSE_ERROR"
    CONFIG_VALIDATION_ERROR = "CONFIG_VALIDATION_ERROR"
    PATH_VALIDATION_ERROR = "PATH_VALIDATION_ERROR"
    USER_CONFIG_INVALID = "USER_CONFIG_INVALID"
    CONFIG_NOT_LOADED = "CONFIG_NOT_LOADED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ConfigType(StrEnum):
    APP = "app"
    USER = "user"


class PathErrorReason(StrEnum):
    """Why a path string was rejected."""

    EMPTY_PATH = "empty_path"
    PATH_TRAVERSAL = "path_traversal"
    ABSOLUTE_PATH_NOT_ALLOWED = "absolute_path_not_allowed"
    INVALID_CHARACTERS = "invalid_characters"
    PATH_TOO_LONG = "path_too_long"


class UserConfigInvalidReason(StrEnum):
    PARSE_ERROR = "parse_error"
    VALIDATION_ERROR = "validation_error"
    UNKNOWN_ERROR = "unknown_error"


_PATH_REASON_MESSAGES: dict[PathErrorReason, str] = {
    PathErrorReason.EMPTY_PATH: "Path cannot be empty",
    PathErrorReason.PATH_TRAVERSAL: "Path traversal detected",
    PathErrorReason.ABSOLUTE_PATH_NOT_ALLOWED: "Absolute paths are not allowed",
    PathErrorReason.INVALID_CHARACTERS: "Path contains invalid characters",
    PathErrorReason.PATH_TOO_LONG: "Path exceeds the maximum length",
}


@dataclass(frozen=True, slots=True)
class ValidationViolation:
    """One failed constraint, addressed by a dot-separated field path."""

    field: str
    value: object
    expected_type: str
    actual_type: str | None = None
    constraint: str | None = None

    def describe(self) -> str:
        if self.constraint:
            return f"{self.field}: {self.constraint}"
        if self.actual_type is not None:
            return f"{self.field}: expected {self.expected_type} but got {self.actual_type}"
        return f"{self.field}: expected {self.expected_type}"


@dataclass(frozen=True, slots=True)
class ConfigFileNotFound:
    path: str
    config_type: ConfigType | None = None
    kind: ClassVar[ErrorKind] = ErrorKind.CONFIG_FILE_NOT_FOUND

    @property
    def message(self) -> str:
        label = f"{self.config_type} config" if self.config_type else "Config"
        return f"{label.capitalize()} file not found: {self.path}"


@dataclass(frozen=True, slots=True)
class ConfigParseFailure:
    path: str
    line: int
    column: int
    syntax_error: str
    kind: ClassVar[ErrorKind] = ErrorKind.CONFIG_PARSE_ERROR

    @property
    def message(self) -> str:
        return (
            f"Failed to parse {self.path} at line {self.line}, column {self.column}: "
            f"{self.syntax_error}"
        )


@dataclass(frozen=True, slots=True)
class ConfigValidationFailure:
    path: str
    violations: tuple[ValidationViolation, ...]
    kind: ClassVar[ErrorKind] = ErrorKind.CONFIG_VALIDATION_ERROR

    @property
    def message(self) -> str:
        count = len(self.violations)
        noun = "violation" if count == 1 else "violations"
        details = "; ".join(item.describe() for item in self.violations)
        return f"Configuration validation failed for {self.path} ({count} {noun}): {details}"


@dataclass(frozen=True, slots=True)
class PathValidationFailure:
    path: str
    reason: PathErrorReason
    affected_field: str | None = None
    details: str | None = None
    kind: ClassVar[ErrorKind] = ErrorKind.PATH_VALIDATION_ERROR

    @property
    def message(self) -> str:
        if self.details:
            return self.details
        base = _PATH_REASON_MESSAGES[self.reason]
        if self.affected_field:
            return f"{base} in field '{self.affected_field}': {self.path!r}"
        return f"{base}: {self.path!r}"


@dataclass(frozen=True, slots=True)
class UserConfigInvalid:
    path: str
    reason: UserConfigInvalidReason
    details: str | None = None
    cause: ConfigError | None = None
    kind: ClassVar[ErrorKind] = ErrorKind.USER_CONFIG_INVALID

    @property
    def message(self) -> str:
        text = f"User config is invalid ({self.reason}): {self.path}"
        if self.details:
            text += f": {self.details}"
        elif self.cause is not None:
            text += f": {self.cause.message}"
        return text


@dataclass(frozen=True, slots=True)
class ConfigNotLoaded:
    requested_operation: str
    suggestion: str = "Call load_config() before accessing the configuration"
    kind: ClassVar[ErrorKind] = ErrorKind.CONFIG_NOT_LOADED

    @property
    def message(self) -> str:
        return (
            f"Configuration not loaded (requested: {self.requested_operation}). "
            f"{self.suggestion}"
        )


@dataclass(frozen=True, slots=True)
class UnknownFailure:
    cause: object
    context: str | None = None
    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN_ERROR

    @property
    def message(self) -> str:
        detail = str(self.cause).strip() if self.cause is not None else ""
        if not detail:
            detail = type(self.cause).__name__
        if self.context:
            return f"Unknown error during {self.context}: {detail}"
        return f"Unknown error: {detail}"


ConfigError: TypeAlias = (
    ConfigFileNotFound
    | ConfigParseFailure
    | ConfigValidationFailure
    | PathValidationFailure
    | UserConfigInvalid
    | ConfigNotLoaded
    | UnknownFailure
)


class ConfigurationError(Exception):
    """Raised by the throwing API surface; wraps one typed error record."""

    def __init__(self, error: ConfigError) -> None:
        super().__init__(format_error(error))
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


def format_error(error: ConfigError) -> str:
    """Render ``KIND: message`` for a single error record."""

    return f"{error.kind}: {error.message}"


def config_file_not_found(
    path: str, config_type: ConfigType | None = None
) -> ConfigFileNotFound:
    return ConfigFileNotFound(path=path, config_type=config_type)


def config_parse_error(path: str, line: int, column: int, syntax_error: str) -> ConfigParseFailure:
    return ConfigParseFailure(path=path, line=line, column=column, syntax_error=syntax_error)


def config_validation_error(
    path: str, violations: Sequence[ValidationViolation]
) -> ConfigValidationFailure:
    return ConfigValidationFailure(path=path, violations=tuple(violations))


def path_validation_error(
    path: str,
    reason: PathErrorReason,
    affected_field: str | None = None,
    *,
    details: str | None = None,
) -> PathValidationFailure:
    return PathValidationFailure(
        path=path, reason=reason, affected_field=affected_field, details=details
    )


def user_config_invalid(
    path: str,
    reason: UserConfigInvalidReason,
    details: str | None = None,
    cause: ConfigError | None = None,
) -> UserConfigInvalid:
    return UserConfigInvalid(path=path, reason=reason, details=details, cause=cause)


def config_not_loaded(requested_operation: str) -> ConfigNotLoaded:
    return ConfigNotLoaded(requested_operation=requested_operation)


def unknown_error(cause: object, context: str | None = None) -> UnknownFailure:
    return UnknownFailure(cause=cause, context=context)


__all__ = [
    "ConfigError",
    "ConfigFileNotFound",
    "ConfigNotLoaded",
    "ConfigParseFailure",
    "ConfigType",
    "ConfigValidationFailure",
    "ConfigurationError",
    "ErrorKind",
    "PathErrorReason",
    "PathValidationFailure",
    "UnknownFailure",
    "UserConfigInvalid",
    "UserConfigInvalidReason",
    "ValidationViolation",
    "config_file_not_found",
    "config_not_loaded",
    "config_parse_error",
    "config_validation_error",
    "format_error",
    "path_validation_error",
    "unknown_error",
    "user_config_invalid",
]
