"""
breakdown-config — read, parse, and validate one YAML config file.

File: src/breakdown_config/loaders/safe_loader.py

Purpose
- Turn a YAML file path into a validated value through three independent stages.

What should be included in this file
- ``read_file``: text read off the event loop; missing file is a typed failure.
- ``parse_yaml``: ``yaml.safe_load`` with line/column extraction on syntax errors.
- ``validate``: a ``Schema``, a type guard, or a Result-returning validator.
- ``load``: the stages composed left to right, stopping at the first failure.

Functional requirements
- Empty input parses to ``None``; it is not a parse error.
- Line/column default to 0/0 when the parser gives no position.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import Final, Generic, TypeAlias, TypeVar, cast

import yaml

from breakdown_config.errors import (
    ConfigFileNotFound,
    ConfigParseFailure,
    ConfigType,
    ConfigValidationFailure,
    UnknownFailure,
    ValidationViolation,
    config_file_not_found,
    config_parse_error,
    config_validation_error,
    unknown_error,
)
from breakdown_config.result import Failure, Result, Success
from breakdown_config.validators import schema_validator
from breakdown_config.validators.schema_validator import ROOT_FIELD, Schema, type_label

T = TypeVar("T")

ConfigValidator: TypeAlias = (
    Schema | Callable[[object], bool] | Callable[[object], Result[object, object]]
)
LoadError: TypeAlias = (
    ConfigFileNotFound | ConfigParseFailure | ConfigValidationFailure | UnknownFailure
)

_POSITION_PATTERN: Final[re.Pattern[str]] = re.compile(r"line (\d+), column (\d+)")

logger = logging.getLogger(__name__)


class SafeConfigLoader(Generic[T]):
    """Three-stage loader for a single config file."""

    def __init__(self, file_path: str | Path, config_type: ConfigType | None = None) -> None:
        self.file_path = Path(file_path)
        self.config_type = config_type

    @property
    def source(self) -> str:
        return str(self.file_path)

    async def read_file(self) -> Result[str, ConfigFileNotFound | UnknownFailure]:
        try:
            content = await asyncio.to_thread(self.file_path.read_text, encoding="utf-8")
        except FileNotFoundError:
            logger.debug("config file not found", extra={"path": self.source})
            return Failure(config_file_not_found(self.source, self.config_type))
        except (OSError, UnicodeDecodeError) as exc:
            return Failure(unknown_error(exc, context=f"reading {self.source}"))
        return Success(content)

    def parse_yaml(self, content: str) -> Result[object, ConfigParseFailure | UnknownFailure]:
        try:
            parsed = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            line, column = _error_position(exc)
            return Failure(config_parse_error(self.source, line, column, str(exc)))
        except Exception as exc:  # noqa: BLE001 - parser internals surface as unknown.
            return Failure(unknown_error(exc, context=f"parsing {self.source}"))
        return Success(parsed)

    def validate(
        self, parsed: object, validator: ConfigValidator
    ) -> Result[T, ConfigValidationFailure]:
        """Check ``parsed`` with a schema, a type guard, or a Result-returning validator."""

        if isinstance(validator, Schema):
            checked = schema_validator.validate(parsed, validator)
            if isinstance(checked, Failure):
                return Failure(config_validation_error(self.source, [checked.error]))
            return Success(cast("T", parsed))

        outcome = validator(parsed)
        if isinstance(outcome, Success):
            return cast("Success[T]", outcome)
        if isinstance(outcome, Failure):
            return Failure(self._as_validation_failure(outcome.error))
        if outcome:
            return Success(cast("T", parsed))
        return Failure(
            config_validation_error(
                self.source,
                [
                    ValidationViolation(
                        field=ROOT_FIELD,
                        value=parsed,
                        expected_type="valid configuration",
                        actual_type=type_label(parsed),
                        constraint="Configuration validation failed",
                    )
                ],
            )
        )

    async def load(self, validator: ConfigValidator) -> Result[T, LoadError]:
        content = await self.read_file()
        if isinstance(content, Failure):
            return content
        parsed = self.parse_yaml(content.data)
        if isinstance(parsed, Failure):
            return parsed
        return self.validate(parsed.data, validator)

    def _as_validation_failure(self, error: object) -> ConfigValidationFailure:
        if isinstance(error, ConfigValidationFailure):
            return error
        if isinstance(error, ValidationViolation):
            return config_validation_error(self.source, [error])
        return config_validation_error(
            self.source,
            [
                ValidationViolation(
                    field=ROOT_FIELD,
                    value=error,
                    expected_type="valid configuration",
                    constraint=str(getattr(error, "message", error)),
                )
            ],
        )


def _error_position(exc: yaml.YAMLError) -> tuple[int, int]:
    mark = getattr(exc, "problem_mark", None) or getattr(exc, "context_mark", None)
    if mark is not None:
        return mark.line + 1, mark.column + 1
    match = _POSITION_PATTERN.search(str(exc))
    if match is not None:
        return int(match.group(1)), int(match.group(2))
    return 0, 0


__all__ = ["ConfigValidator", "LoadError", "SafeConfigLoader"]
