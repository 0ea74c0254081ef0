"""
breakdown-config — declarative schema validator.

File: src/breakdown_config/validators/schema_validator.py

Purpose
- Check a parsed YAML value against a small whitelist of field descriptors.

What should be included in this file
- ``SchemaField`` / ``Schema`` descriptors with optional nesting and custom validators.
- ``validate`` returning the FIRST violation found, in declared field order.
- Canned app-config and user-config schemas.

Functional requirements
- Total over any input: non-mapping roots produce a ``root`` violation.
- Optional absent fields are skipped entirely, including their custom validator.
- Nested violations are re-prefixed ``parent.child``.
- Keys missing from the schema are ignored.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Final, Literal, TypeAlias

from breakdown_config.constants import (
    APP_PROMPT_KEY,
    APP_SCHEMA_KEY,
    BASE_DIR_KEY,
    WORKING_DIR_KEY,
)
from breakdown_config.errors import ValidationViolation
from breakdown_config.result import Failure, Result, Success

FieldType = Literal["string", "number", "boolean", "object", "array"]
SchemaCheck: TypeAlias = Result[Literal[True], ValidationViolation]
FieldValidator: TypeAlias = Callable[[object], SchemaCheck]

ROOT_FIELD: Final[str] = "root"


@dataclass(frozen=True, slots=True)
class SchemaField:
    name: str
    type: FieldType
    required: bool
    schema: Schema | None = None
    validator: FieldValidator | None = None


@dataclass(frozen=True, slots=True)
class Schema:
    fields: tuple[SchemaField, ...]

    @classmethod
    def of(cls, *fields: SchemaField) -> Schema:
        return cls(fields=tuple(fields))


def validate(value: object, schema: Schema) -> SchemaCheck:
    """Validate ``value`` against ``schema``; return the first violation, if any."""

    if not isinstance(value, Mapping):
        return Failure(
            ValidationViolation(
                field=ROOT_FIELD,
                value=value,
                expected_type="object",
                actual_type=type_label(value),
                constraint="Value must be an object",
            )
        )

    for schema_field in schema.fields:
        field_value = value.get(schema_field.name)

        if field_value is None:
            if schema_field.required:
                return Failure(
                    ValidationViolation(
                        field=schema_field.name,
                        value=field_value,
                        expected_type=schema_field.type,
                        actual_type=type_label(field_value),
                        constraint=f"Required field '{schema_field.name}' is missing",
                    )
                )
            continue

        actual = type_label(field_value)
        if actual != schema_field.type:
            return Failure(
                ValidationViolation(
                    field=schema_field.name,
                    value=field_value,
                    expected_type=schema_field.type,
                    actual_type=actual,
                    constraint=f"Expected {schema_field.type} but got {actual}",
                )
            )

        if schema_field.type == "object" and schema_field.schema is not None:
            nested = validate(field_value, schema_field.schema)
            if isinstance(nested, Failure):
                inner = nested.error
                return Failure(
                    ValidationViolation(
                        field=f"{schema_field.name}.{inner.field}",
                        value=inner.value,
                        expected_type=inner.expected_type,
                        actual_type=inner.actual_type,
                        constraint=inner.constraint
                        or f"Validation failed for field '{schema_field.name}'",
                    )
                )

        if schema_field.validator is not None:
            custom = schema_field.validator(field_value)
            if isinstance(custom, Failure):
                return custom

    return Success(True)


def type_label(value: object) -> str:
    """Return the YAML-level type name used in violation messages."""

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def non_empty_string(field_name: str) -> FieldValidator:
    """Build a custom validator rejecting blank strings."""

    def check(value: object) -> SchemaCheck:
        if not isinstance(value, str) or not value.strip():
            return Failure(
                ValidationViolation(
                    field=field_name,
                    value=value,
                    expected_type="string",
                    actual_type=type_label(value),
                    constraint=f"Field '{field_name}' must be a non-empty string",
                )
            )
        return Success(True)

    return check


def create_app_config_schema() -> Schema:
    return _config_schema(required=True)


def create_user_config_schema() -> Schema:
    return _config_schema(required=False)


def _config_schema(*, required: bool) -> Schema:
    return Schema.of(
        SchemaField(
            name=WORKING_DIR_KEY,
            type="string",
            required=required,
            validator=non_empty_string(WORKING_DIR_KEY),
        ),
        *(_section_field(name, required=required) for name in (APP_PROMPT_KEY, APP_SCHEMA_KEY)),
    )


def _section_field(name: str, *, required: bool) -> SchemaField:
    return SchemaField(
        name=name,
        type="object",
        required=required,
        schema=Schema.of(
            SchemaField(
                name=BASE_DIR_KEY,
                type="string",
                required=required,
                validator=non_empty_string(BASE_DIR_KEY),
            )
        ),
    )


__all__ = [
    "ROOT_FIELD",
    "FieldType",
    "FieldValidator",
    "Schema",
    "SchemaCheck",
    "SchemaField",
    "create_app_config_schema",
    "create_user_config_schema",
    "non_empty_string",
    "type_label",
    "validate",
]
