"""
breakdown-config — configuration domain models.

File: src/breakdown_config/domain/models.py

Purpose
- Typed shapes for the app layer, the optional user layer, and the merged result.

What should be included in this file
- ``AppConfig`` with its two ``BaseDirSection`` entries and pass-through extra fields.
- ``UserConfig`` as a tagged union of four independent variants.
- Guards/accessors over the union and normalization from a plain mapping.
- ``MergedConfig`` plus its plain-mapping view.

Functional requirements
- Custom fields never shadow the structural keys.
- Normalization keeps a section only when it carries a string ``base_dir``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar, Literal, TypeAlias, TypeGuard

from breakdown_config.constants import (
    APP_PROMPT_KEY,
    APP_SCHEMA_KEY,
    BASE_DIR_KEY,
    CORE_CONFIG_KEYS,
    WORKING_DIR_KEY,
)

UserConfigKind = Literal["empty", "prompt-only", "schema-only", "complete"]


@dataclass(frozen=True, slots=True)
class BaseDirSection:
    base_dir: str

    def to_dict(self) -> dict[str, object]:
        return {BASE_DIR_KEY: self.base_dir}


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Required application layer."""

    working_dir: str
    app_prompt: BaseDirSection
    app_schema: BaseDirSection
    extra_fields: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class EmptyUserConfig:
    working_dir: str | None = None
    custom_fields: dict[str, object] = field(default_factory=dict)
    kind: ClassVar[UserConfigKind] = "empty"


@dataclass(frozen=True, slots=True)
class PromptOnlyUserConfig:
    app_prompt: BaseDirSection
    working_dir: str | None = None
    custom_fields: dict[str, object] = field(default_factory=dict)
    kind: ClassVar[UserConfigKind] = "prompt-only"


@dataclass(frozen=True, slots=True)
class SchemaOnlyUserConfig:
    app_schema: BaseDirSection
    working_dir: str | None = None
    custom_fields: dict[str, object] = field(default_factory=dict)
    kind: ClassVar[UserConfigKind] = "schema-only"


@dataclass(frozen=True, slots=True)
class CompleteUserConfig:
    app_prompt: BaseDirSection
    app_schema: BaseDirSection
    working_dir: str | None = None
    custom_fields: dict[str, object] = field(default_factory=dict)
    kind: ClassVar[UserConfigKind] = "complete"


UserConfig: TypeAlias = (
    EmptyUserConfig | PromptOnlyUserConfig | SchemaOnlyUserConfig | CompleteUserConfig
)


def is_empty_user_config(config: UserConfig) -> TypeGuard[EmptyUserConfig]:
    return isinstance(config, EmptyUserConfig)


def has_prompt_override(
    config: UserConfig,
) -> TypeGuard[PromptOnlyUserConfig | CompleteUserConfig]:
    return isinstance(config, (PromptOnlyUserConfig, CompleteUserConfig))


def has_schema_override(
    config: UserConfig,
) -> TypeGuard[SchemaOnlyUserConfig | CompleteUserConfig]:
    return isinstance(config, (SchemaOnlyUserConfig, CompleteUserConfig))


def prompt_base_dir(config: UserConfig) -> str | None:
    if has_prompt_override(config):
        return config.app_prompt.base_dir
    return None


def schema_base_dir(config: UserConfig) -> str | None:
    if has_schema_override(config):
        return config.app_schema.base_dir
    return None


def build_user_config(
    *,
    app_prompt: BaseDirSection | None = None,
    app_schema: BaseDirSection | None = None,
    working_dir: str | None = None,
    custom_fields: Mapping[str, object] | None = None,
) -> UserConfig:
    """Pick the union variant matching which sections are present."""

    extras = dict(custom_fields or {})
    if app_prompt is not None and app_schema is not None:
        return CompleteUserConfig(app_prompt, app_schema, working_dir, extras)
    if app_prompt is not None:
        return PromptOnlyUserConfig(app_prompt, working_dir, extras)
    if app_schema is not None:
        return SchemaOnlyUserConfig(app_schema, working_dir, extras)
    return EmptyUserConfig(working_dir, extras)


def user_config_from_mapping(data: Mapping[str, object]) -> UserConfig:
    """Normalize a loosely-shaped mapping into the ``UserConfig`` union.

    Sections without a string ``base_dir`` are dropped. Keys other than the
    structural ones are carried as custom fields.
    """

    raw_working_dir = data.get(WORKING_DIR_KEY)
    return build_user_config(
        app_prompt=_section_from(data.get(APP_PROMPT_KEY)),
        app_schema=_section_from(data.get(APP_SCHEMA_KEY)),
        working_dir=raw_working_dir if isinstance(raw_working_dir, str) else None,
        custom_fields=extract_custom_fields(data),
    )


def extract_custom_fields(data: Mapping[str, object]) -> dict[str, object]:
    return {
        str(key): value for key, value in data.items() if str(key) not in CORE_CONFIG_KEYS
    }


def user_config_to_dict(config: UserConfig) -> dict[str, object]:
    output: dict[str, object] = dict(config.custom_fields)
    if config.working_dir is not None:
        output[WORKING_DIR_KEY] = config.working_dir
    if has_prompt_override(config):
        output[APP_PROMPT_KEY] = config.app_prompt.to_dict()
    if has_schema_override(config):
        output[APP_SCHEMA_KEY] = config.app_schema.to_dict()
    return output


@dataclass(frozen=True, slots=True)
class MergedConfig:
    """Effective configuration after applying the user layer over the app layer."""

    working_dir: str
    app_prompt: BaseDirSection
    app_schema: BaseDirSection
    custom_fields: dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        output: dict[str, object] = {
            key: value
            for key, value in self.custom_fields.items()
            if key not in CORE_CONFIG_KEYS
        }
        output[WORKING_DIR_KEY] = self.working_dir
        output[APP_PROMPT_KEY] = self.app_prompt.to_dict()
        output[APP_SCHEMA_KEY] = self.app_schema.to_dict()
        return output


def json_ready(value: object) -> object:
    """Return ``value`` with every mapping key stringified and tuples as lists.

    YAML allows non-string and mixed-type keys; ``json.dumps`` does not.
    """

    if isinstance(value, Mapping):
        return {str(key): json_ready(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_ready(item) for item in value]
    return value


def _section_from(value: object) -> BaseDirSection | None:
    if not isinstance(value, Mapping):
        return None
    base_dir = value.get(BASE_DIR_KEY)
    if not isinstance(base_dir, str):
        return None
    return BaseDirSection(base_dir=base_dir)


__all__ = [
    "AppConfig",
    "BaseDirSection",
    "CompleteUserConfig",
    "EmptyUserConfig",
    "MergedConfig",
    "PromptOnlyUserConfig",
    "SchemaOnlyUserConfig",
    "UserConfig",
    "UserConfigKind",
    "build_user_config",
    "extract_custom_fields",
    "has_prompt_override",
    "has_schema_override",
    "is_empty_user_config",
    "json_ready",
    "prompt_base_dir",
    "schema_base_dir",
    "user_config_from_mapping",
    "user_config_to_dict",
]
