"""
breakdown-config — app/user config validation.

File: src/breakdown_config/validators/config_validator.py

Purpose
- Validate the concrete app and user config shapes, reporting every problem in one pass.

What should be included in this file
- ``validate_app_config``: required structure plus path-safety checks on every string field.
- ``validate_user_config``: total over input type; only present sections and base dirs are checked.

Functional requirements
- Violations accumulate; nothing here stops at the first failure.
- A ``None`` user config is rejected; any other non-mapping is an empty user config.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from breakdown_config.constants import (
    APP_PROMPT_KEY,
    APP_SCHEMA_KEY,
    BASE_DIR_KEY,
    WORKING_DIR_KEY,
)
from breakdown_config.domain.models import (
    AppConfig,
    BaseDirSection,
    EmptyUserConfig,
    UserConfig,
    extract_custom_fields,
    user_config_from_mapping,
)
from breakdown_config.domain.valid_path import first_forbidden_character, is_absolute_path
from breakdown_config.errors import (
    ConfigValidationFailure,
    ValidationViolation,
    config_validation_error,
)
from breakdown_config.result import Failure, Result, Success
from breakdown_config.validators.schema_validator import ROOT_FIELD, type_label

DEFAULT_APP_SOURCE: Final[str] = "app config"
DEFAULT_USER_SOURCE: Final[str] = "user config"

_SECTION_KEYS: Final[tuple[str, ...]] = (APP_PROMPT_KEY, APP_SCHEMA_KEY)


class _ViolationCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[ValidationViolation] = []

    def add(
        self,
        field: str,
        value: object,
        expected_type: str,
        constraint: str,
    ) -> None:
        self._items.append(
            ValidationViolation(
                field=field,
                value=value,
                expected_type=expected_type,
                actual_type=type_label(value),
                constraint=constraint,
            )
        )

    def items(self) -> tuple[ValidationViolation, ...]:
        return tuple(self._items)

    def count(self) -> int:
        return len(self._items)

    @property
    def has_violations(self) -> bool:
        return bool(self._items)


def validate_app_config(
    config: object, source: str = DEFAULT_APP_SOURCE
) -> Result[AppConfig, ConfigValidationFailure]:
    """Validate a parsed app config, collecting every violation."""

    collector = _ViolationCollector()
    if not isinstance(config, Mapping):
        collector.add(ROOT_FIELD, config, "object", "App config must be an object")
        return Failure(config_validation_error(source, collector.items()))

    working_dir = config.get(WORKING_DIR_KEY)
    validated_working_dir = working_dir if isinstance(working_dir, str) else None
    if validated_working_dir is not None:
        _check_path_safety(collector, WORKING_DIR_KEY, validated_working_dir)
    else:
        collector.add(
            WORKING_DIR_KEY, working_dir, "string", f"'{WORKING_DIR_KEY}' must be a string"
        )

    sections: dict[str, BaseDirSection] = {}
    for key in _SECTION_KEYS:
        section = _validate_section(collector, key, config.get(key))
        if section is not None:
            sections[key] = section

    if collector.has_violations or validated_working_dir is None:
        return Failure(config_validation_error(source, collector.items()))

    return Success(
        AppConfig(
            working_dir=validated_working_dir,
            app_prompt=sections[APP_PROMPT_KEY],
            app_schema=sections[APP_SCHEMA_KEY],
            extra_fields=extract_custom_fields(config),
        )
    )


def validate_user_config(
    config: object, source: str = DEFAULT_USER_SOURCE
) -> Result[UserConfig, ConfigValidationFailure]:
    """Validate a parsed user config.

    ``None`` is rejected. Strings, numbers, booleans and lists are treated as
    "no overrides" and yield an ``EmptyUserConfig``. For mappings, a section is
    checked only when it is present.
    """

    collector = _ViolationCollector()
    if config is None:
        collector.add(ROOT_FIELD, config, "object", "User config must be an object")
        return Failure(config_validation_error(source, collector.items()))
    if not isinstance(config, Mapping):
        return Success(EmptyUserConfig())

    if _is_present(config, WORKING_DIR_KEY):
        working_dir = config[WORKING_DIR_KEY]
        if isinstance(working_dir, str):
            _check_path_safety(collector, WORKING_DIR_KEY, working_dir)
        else:
            collector.add(
                WORKING_DIR_KEY, working_dir, "string", f"'{WORKING_DIR_KEY}' must be a string"
            )

    for key in _SECTION_KEYS:
        if _is_present(config, key):
            _validate_section(collector, key, config[key], required=False)

    if collector.has_violations:
        return Failure(config_validation_error(source, collector.items()))
    return Success(user_config_from_mapping(config))


def _is_present(config: Mapping[str, object], key: str) -> bool:
    return config.get(key) is not None


def _validate_section(
    collector: _ViolationCollector, key: str, value: object, *, required: bool = True
) -> BaseDirSection | None:
    if not isinstance(value, Mapping):
        collector.add(key, value, "object", f"'{key}' must be an object with a '{BASE_DIR_KEY}'")
        return None

    field_path = f"{key}.{BASE_DIR_KEY}"
    base_dir = value.get(BASE_DIR_KEY)
    if base_dir is None and not required:
        return None
    if not isinstance(base_dir, str):
        collector.add(field_path, base_dir, "string", f"'{field_path}' must be a string")
        return None

    before = collector.count()
    _check_path_safety(collector, field_path, base_dir)
    if collector.count() != before:
        return None
    return BaseDirSection(base_dir=base_dir)


def _check_path_safety(collector: _ViolationCollector, field: str, value: str) -> None:
    if not value.strip():
        collector.add(field, value, "string", "must not be empty")
    bad_char = first_forbidden_character(value)
    if bad_char is not None:
        collector.add(field, value, "string", f"contains invalid character {bad_char!r}")
    if ".." in value:
        collector.add(field, value, "string", "must not contain path traversal ('..')")
    if is_absolute_path(value):
        collector.add(field, value, "string", "must be a relative path")


__all__ = [
    "DEFAULT_APP_SOURCE",
    "DEFAULT_USER_SOURCE",
    "validate_app_config",
    "validate_user_config",
]
