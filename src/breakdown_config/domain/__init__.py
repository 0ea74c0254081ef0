"""
breakdown-config domain package.

File: src/breakdown_config/domain/__init__.py

Purpose
- Value objects and config shapes shared by validators, loaders, and the manager.

Functional requirements
- Domain layer stays free of I/O side effects.
"""

from breakdown_config.domain.models import (
    AppConfig,
    BaseDirSection,
    CompleteUserConfig,
    EmptyUserConfig,
    MergedConfig,
    PromptOnlyUserConfig,
    SchemaOnlyUserConfig,
    UserConfig,
    has_prompt_override,
    has_schema_override,
    is_empty_user_config,
    user_config_from_mapping,
)
from breakdown_config.domain.profile_prefix import ValidProfilePrefix, is_valid_profile_prefix
from breakdown_config.domain.valid_path import ValidPath, is_valid_path

__all__ = [
    "AppConfig",
    "BaseDirSection",
    "CompleteUserConfig",
    "EmptyUserConfig",
    "MergedConfig",
    "PromptOnlyUserConfig",
    "SchemaOnlyUserConfig",
    "UserConfig",
    "ValidPath",
    "ValidProfilePrefix",
    "has_prompt_override",
    "has_schema_override",
    "is_empty_user_config",
    "is_valid_path",
    "is_valid_profile_prefix",
    "user_config_from_mapping",
]
