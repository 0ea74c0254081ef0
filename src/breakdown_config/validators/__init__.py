"""Structural, domain, and path validators for breakdown-config."""

from breakdown_config.validators.config_validator import validate_app_config, validate_user_config
from breakdown_config.validators.path_validator import (
    check_exists,
    ensure_within_base,
    get_relative_path,
    safe_join,
    validate_exists,
    validate_path,
)
from breakdown_config.validators.schema_validator import (
    Schema,
    SchemaField,
    create_app_config_schema,
    create_user_config_schema,
    validate,
)

__all__ = [
    "Schema",
    "SchemaField",
    "check_exists",
    "create_app_config_schema",
    "create_user_config_schema",
    "ensure_within_base",
    "get_relative_path",
    "safe_join",
    "validate",
    "validate_app_config",
    "validate_exists",
    "validate_path",
    "validate_user_config",
]
