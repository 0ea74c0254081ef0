"""
breakdown-config — unit tests for the three-stage YAML loader

File: tests/unit/loaders/test_safe_loader.py

Purpose
- read_file / parse_yaml / validate / load behave independently and compose left to right.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from breakdown_config.errors import (
    ConfigFileNotFound,
    ConfigParseFailure,
    ConfigType,
    ConfigValidationFailure,
    ErrorKind,
    ValidationViolation,
    config_validation_error,
)
from breakdown_config.loaders.safe_loader import SafeConfigLoader
from breakdown_config.result import Failure, Success
from breakdown_config.validators.schema_validator import create_app_config_schema


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.mark.asyncio
async def test_read_file_returns_content(tmp_path: Path) -> None:
    loader: SafeConfigLoader[object] = SafeConfigLoader(_write(tmp_path / "a.yml", "key: value\n"))
    assert await loader.read_file() == Success("key: value\n")


@pytest.mark.asyncio
async def test_read_file_missing_is_typed_failure(tmp_path: Path) -> None:
    loader: SafeConfigLoader[object] = SafeConfigLoader(tmp_path / "absent.yml", ConfigType.APP)
    result = await loader.read_file()
    assert isinstance(result, Failure)
    assert isinstance(result.error, ConfigFileNotFound)
    assert result.error.config_type is ConfigType.APP
    assert result.error.path == str(tmp_path / "absent.yml")


@pytest.mark.asyncio
async def test_read_file_other_os_errors_are_unknown(tmp_path: Path) -> None:
    directory = tmp_path / "dir.yml"
    directory.mkdir()
    result = await SafeConfigLoader[object](directory).read_file()
    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.UNKNOWN_ERROR


def test_parse_yaml_success_and_empty_input() -> None:
    loader: SafeConfigLoader[object] = SafeConfigLoader("mem.yml")
    assert loader.parse_yaml("key: value") == Success({"key": "value"})
    assert loader.parse_yaml("") == Success(None)
    assert loader.parse_yaml("   \n") == Success(None)


def test_parse_yaml_syntax_error_carries_position() -> None:
    loader: SafeConfigLoader[object] = SafeConfigLoader("broken.yml")
    result = loader.parse_yaml("first: 1\nkey: [unclosed\n")
    assert isinstance(result, Failure)
    assert isinstance(result.error, ConfigParseFailure)
    assert result.error.path == "broken.yml"
    assert isinstance(result.error.line, int)
    assert isinstance(result.error.column, int)
    assert result.error.line >= 1
    assert result.error.syntax_error


def test_validate_with_schema() -> None:
    loader: SafeConfigLoader[object] = SafeConfigLoader("app.yml")
    schema = create_app_config_schema()
    good = {"working_dir": ".", "app_prompt": {"base_dir": "p"}, "app_schema": {"base_dir": "s"}}

    assert loader.validate(good, schema) == Success(good)

    bad = loader.validate({"working_dir": "."}, schema)
    assert isinstance(bad, Failure)
    assert isinstance(bad.error, ConfigValidationFailure)
    assert bad.error.path == "app.yml"
    assert bad.error.violations[0].field == "app_prompt"


def test_validate_with_type_guard() -> None:
    loader: SafeConfigLoader[object] = SafeConfigLoader("x.yml")

    def is_mapping(value: object) -> bool:
        return isinstance(value, dict)

    assert loader.validate({"a": 1}, is_mapping) == Success({"a": 1})
    rejected = loader.validate([1], is_mapping)
    assert isinstance(rejected, Failure)
    assert rejected.error.violations[0].field == "root"
    assert rejected.error.violations[0].constraint == "Configuration validation failed"


def test_validate_with_result_returning_validator() -> None:
    loader: SafeConfigLoader[object] = SafeConfigLoader("x.yml")
    violation = ValidationViolation("name", None, "string", "null", "name is required")

    assert loader.validate({}, lambda value: Success("typed")) == Success("typed")

    from_violation = loader.validate({}, lambda value: Failure(violation))
    assert isinstance(from_violation, Failure)
    assert from_violation.error.violations == (violation,)

    prebuilt = config_validation_error("other.yml", [violation])
    passthrough = loader.validate({}, lambda value: Failure(prebuilt))
    assert passthrough == Failure(prebuilt)


@pytest.mark.asyncio
async def test_load_composes_stages(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "app.yml",
        "working_dir: ./work\napp_prompt:\n  base_dir: ./p\napp_schema:\n  base_dir: ./s\n",
    )
    loader: SafeConfigLoader[object] = SafeConfigLoader(path)
    result = await loader.load(create_app_config_schema())
    assert isinstance(result, Success)
    assert result.data == {
        "working_dir": "./work",
        "app_prompt": {"base_dir": "./p"},
        "app_schema": {"base_dir": "./s"},
    }


@pytest.mark.asyncio
async def test_load_stops_at_first_failing_stage(tmp_path: Path) -> None:
    calls: list[object] = []

    def guard(value: object) -> bool:
        calls.append(value)
        return True

    missing = await SafeConfigLoader[object](tmp_path / "none.yml").load(guard)
    broken = await SafeConfigLoader[object](_write(tmp_path / "bad.yml", "a: [")).load(guard)

    assert isinstance(missing, Failure) and missing.error.kind is ErrorKind.CONFIG_FILE_NOT_FOUND
    assert isinstance(broken, Failure) and broken.error.kind is ErrorKind.CONFIG_PARSE_ERROR
    assert calls == []


@pytest.mark.asyncio
async def test_unbalanced_flow_mapping_is_parse_error(tmp_path: Path) -> None:
    result = await SafeConfigLoader[object](_write(tmp_path / "x.yml", "{{{{")).load(
        lambda value: True
    )
    assert isinstance(result, Failure)
    assert isinstance(result.error, ConfigParseFailure)
    assert isinstance(result.error.line, int)
    assert isinstance(result.error.column, int)
