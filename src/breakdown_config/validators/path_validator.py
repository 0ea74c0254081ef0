"""
breakdown-config — path validation and safe path manipulation.

File: src/breakdown_config/validators/path_validator.py

Purpose
- Compose ``ValidPath`` checks into joining, existence, and containment helpers.

What should be included in this file
- ``safe_join`` with per-segment and final validation.
- ``check_exists`` / ``validate_exists`` probing off the event loop.
- ``ensure_within_base`` / ``get_relative_path`` containment helpers.

Functional requirements
- Filesystem faults surface as ``UNKNOWN_ERROR`` results, never as exceptions.

Non-functional requirements
- Containment is a string-prefix test on normalized paths. It does not resolve
  symlinks and treats ``a/bc`` as inside ``a/b``.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import TypeAlias

from breakdown_config.domain.valid_path import ValidPath, is_absolute_path
from breakdown_config.errors import (
    PathErrorReason,
    PathValidationFailure,
    UnknownFailure,
    path_validation_error,
    unknown_error,
)
from breakdown_config.result import Failure, Result, Success

PathInput: TypeAlias = str | ValidPath

logger = logging.getLogger(__name__)


def validate_path(path: object) -> Result[ValidPath, PathValidationFailure]:
    return ValidPath.create(path)


def safe_join(base: PathInput, *segments: str) -> Result[ValidPath, PathValidationFailure]:
    """Join ``segments`` onto ``base`` without allowing traversal."""

    base_result = _coerce(base)
    if isinstance(base_result, Failure):
        return base_result
    base_value = base_result.data.get_value()

    kept = [segment for segment in segments if segment and segment.strip()]
    for segment in kept:
        if ".." in segment or is_absolute_path(segment) or os.path.isabs(segment):
            return Failure(
                path_validation_error(
                    segment,
                    PathErrorReason.PATH_TRAVERSAL,
                    details=f"Invalid segment in path join: {segment}",
                )
            )
        segment_result = ValidPath.create(segment)
        if isinstance(segment_result, Failure):
            return segment_result

    joined = os.path.normpath(os.path.join(base_value, *(segment.strip() for segment in kept)))
    return ValidPath.create(joined)


async def check_exists(path: PathInput) -> Result[bool, PathValidationFailure | UnknownFailure]:
    """Return whether ``path`` exists, validating its format first."""

    validated = _coerce(path)
    if isinstance(validated, Failure):
        return validated
    target = validated.data.get_value()

    try:
        await asyncio.to_thread(Path(target).stat)
    except (FileNotFoundError, NotADirectoryError):
        return Success(False)
    except OSError as exc:
        logger.debug("existence probe failed", extra={"path": target, "error": str(exc)})
        return Failure(unknown_error(exc, context=f"checking existence of {target}"))
    return Success(True)


async def validate_exists(
    path: PathInput,
) -> Result[ValidPath, PathValidationFailure | UnknownFailure]:
    """Return the validated path when it exists, else a path failure."""

    validated = _coerce(path)
    if isinstance(validated, Failure):
        return validated
    valid_path = validated.data

    exists = await check_exists(valid_path)
    if isinstance(exists, Failure):
        return exists
    if not exists.data:
        return Failure(
            path_validation_error(
                valid_path.get_value(),
                PathErrorReason.PATH_TRAVERSAL,
                details=f"Path does not exist: {valid_path.get_value()}",
            )
        )
    return Success(valid_path)


def ensure_within_base(
    base: PathInput, target: PathInput
) -> Result[ValidPath, PathValidationFailure]:
    """Accept ``target`` only when its normalized form starts with the normalized base."""

    base_result = _coerce(base)
    if isinstance(base_result, Failure):
        return base_result
    target_result = _coerce(target)
    if isinstance(target_result, Failure):
        return target_result

    base_value = base_result.data.get_value()
    target_value = target_result.data.get_value()
    if not os.path.normpath(target_value).startswith(os.path.normpath(base_value)):
        return Failure(
            path_validation_error(
                target_value,
                PathErrorReason.PATH_TRAVERSAL,
                details=f"Path '{target_value}' is outside base directory '{base_value}'",
            )
        )
    return target_result


def get_relative_path(
    base: PathInput, target: PathInput
) -> Result[ValidPath, PathValidationFailure]:
    """Strip ``base`` from ``target``; ``.`` when they are the same path."""

    base_result = _coerce(base)
    if isinstance(base_result, Failure):
        return base_result
    target_result = _coerce(target)
    if isinstance(target_result, Failure):
        return target_result

    base_value = base_result.data.get_value()
    target_value = target_result.data.get_value()
    normalized_base = os.path.normpath(base_value)
    normalized_target = os.path.normpath(target_value)
    if not normalized_target.startswith(normalized_base):
        return Failure(
            path_validation_error(
                target_value,
                PathErrorReason.PATH_TRAVERSAL,
                details=f"Cannot get relative path: '{target_value}' is not within '{base_value}'",
            )
        )

    relative = normalized_target[len(normalized_base) :]
    if relative.startswith(("/", "\\")):
        relative = relative[1:]
    return ValidPath.create(relative or ".")


def _coerce(path: PathInput) -> Result[ValidPath, PathValidationFailure]:
    if isinstance(path, ValidPath):
        return Success(path)
    return ValidPath.create(path)


__all__ = [
    "PathInput",
    "check_exists",
    "ensure_within_base",
    "get_relative_path",
    "safe_join",
    "validate_exists",
    "validate_path",
]
