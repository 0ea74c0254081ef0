"""Unit tests for the app/user/merged configuration models."""

from __future__ import annotations

from breakdown_config.domain.models import (
    BaseDirSection,
    CompleteUserConfig,
    EmptyUserConfig,
    MergedConfig,
    PromptOnlyUserConfig,
    SchemaOnlyUserConfig,
    build_user_config,
    extract_custom_fields,
    has_prompt_override,
    has_schema_override,
    is_empty_user_config,
    json_ready,
    prompt_base_dir,
    schema_base_dir,
    user_config_from_mapping,
    user_config_to_dict,
)


def test_build_user_config_selects_variant_from_present_sections() -> None:
    prompt = BaseDirSection("./p")
    schema = BaseDirSection("./s")

    assert isinstance(build_user_config(), EmptyUserConfig)
    assert isinstance(build_user_config(app_prompt=prompt), PromptOnlyUserConfig)
    assert isinstance(build_user_config(app_schema=schema), SchemaOnlyUserConfig)
    assert isinstance(build_user_config(app_prompt=prompt, app_schema=schema), CompleteUserConfig)


def test_guards_and_accessors_reflect_the_variant() -> None:
    empty = EmptyUserConfig()
    prompt_only = PromptOnlyUserConfig(BaseDirSection("./custom"))
    complete = CompleteUserConfig(BaseDirSection("./p"), BaseDirSection("./s"))

    assert is_empty_user_config(empty)
    assert not is_empty_user_config(prompt_only)
    assert has_prompt_override(prompt_only) and not has_schema_override(prompt_only)
    assert has_prompt_override(complete) and has_schema_override(complete)
    assert prompt_base_dir(prompt_only) == "./custom"
    assert schema_base_dir(prompt_only) is None
    assert prompt_base_dir(empty) is None
    assert schema_base_dir(complete) == "./s"
    assert (empty.kind, prompt_only.kind, complete.kind) == ("empty", "prompt-only", "complete")


def test_mapping_normalization_drops_malformed_sections_and_keeps_extras() -> None:
    config = user_config_from_mapping(
        {
            "app_prompt": {"base_dir": "./custom"},
            "app_schema": {"base_dir": 7},
            "working_dir": "./mine",
            "editor": "vim",
        }
    )

    assert isinstance(config, PromptOnlyUserConfig)
    assert config.app_prompt.base_dir == "./custom"
    assert config.working_dir == "./mine"
    assert config.custom_fields == {"editor": "vim"}


def test_mapping_without_sections_is_empty_variant() -> None:
    config = user_config_from_mapping({"app_prompt": "not-a-mapping", "theme": "dark"})
    assert isinstance(config, EmptyUserConfig)
    assert config.custom_fields == {"theme": "dark"}


def test_extract_custom_fields_excludes_core_keys() -> None:
    data = {"working_dir": ".", "app_prompt": {}, "app_schema": {}, "x": 1, "y": [2]}
    assert extract_custom_fields(data) == {"x": 1, "y": [2]}


def test_user_config_to_dict_emits_present_parts_only() -> None:
    config = SchemaOnlyUserConfig(BaseDirSection("./s"), custom_fields={"k": "v"})
    assert user_config_to_dict(config) == {"k": "v", "app_schema": {"base_dir": "./s"}}
    assert user_config_to_dict(EmptyUserConfig()) == {}


def test_merged_config_to_dict_never_lets_custom_fields_shadow_core_keys() -> None:
    merged = MergedConfig(
        working_dir="./work",
        app_prompt=BaseDirSection("./p"),
        app_schema=BaseDirSection("./s"),
        custom_fields={"working_dir": "/evil", "flag": True},
    )

    assert merged.to_dict() == {
        "flag": True,
        "working_dir": "./work",
        "app_prompt": {"base_dir": "./p"},
        "app_schema": {"base_dir": "./s"},
    }


def test_json_ready_stringifies_nested_keys() -> None:
    value = {"m": {1: "a", "b": [{True: None}]}, "t": (1, 2)}
    assert json_ready(value) == {"m": {"1": "a", "b": [{"True": None}]}, "t": [1, 2]}
