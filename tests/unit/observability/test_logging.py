"""
breakdown-config — unit tests for observability logging

File: tests/unit/observability/test_logging.py

Purpose
- Validate JSON-line logging with redaction and correlation metadata.

What this test file should cover
- JSON line validity and redaction guarantees.
- Correlation field propagation and scoping.
- Handler replacement and shutdown behavior.

Non-functional requirements
- Deterministic and non-flaky.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from breakdown_config.observability.logging import (
    LoggingConfig,
    correlation_scope,
    get_correlation_context,
    reset_correlation_fields,
    set_correlation_fields,
    setup_logging,
    shutdown_logging,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _cleanup_logging() -> Iterator[None]:
    yield
    shutdown_logging()


def _logger_name() -> str:
    return f"breakdown_config.tests.logging.{uuid4().hex}"


def _read_json_lines(path: Path) -> list[dict[str, object]]:
    lines = path.read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines]


def test_json_logging_redacts_secrets_and_keeps_correlation(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "config.jsonl"
    logger = setup_logging(
        LoggingConfig(
            level="DEBUG",
            log_file=log_file,
            log_to_stderr=False,
            logger_name=_logger_name(),
        )
    )

    with correlation_scope(config_key="cfg/app.yml", profile="prod"):
        logger.info(
            "config loaded",
            extra={"nested": {"password": "hunter2", "safe": "ok"}, "api_token": "tok"},
        )
    shutdown_logging()

    (event,) = _read_json_lines(log_file)
    assert event["message"] == "config loaded"
    assert event["level"] == "INFO"
    assert event["config_key"] == "cfg/app.yml"
    assert event["profile"] == "prod"
    assert str(event["timestamp"]).endswith("Z")
    assert event["fields"] == {
        "api_token": "***REDACTED***",
        "nested": {"password": "***REDACTED***", "safe": "ok"},
    }
    assert "hunter2" not in log_file.read_text(encoding="utf-8")


def test_level_filters_records(tmp_path: Path) -> None:
    log_file = tmp_path / "warn.jsonl"
    logger = setup_logging(
        LoggingConfig(
            level="warning", log_file=log_file, log_to_stderr=False, logger_name=_logger_name()
        )
    )
    logger.info("hidden")
    logger.warning("shown")
    shutdown_logging()

    assert [event["message"] for event in _read_json_lines(log_file)] == ["shown"]


def test_exceptions_are_serialized(tmp_path: Path) -> None:
    log_file = tmp_path / "exc.jsonl"
    logger = setup_logging(
        LoggingConfig(
            level="ERROR", log_file=log_file, log_to_stderr=False, logger_name=_logger_name()
        )
    )
    try:
        raise RuntimeError("broken config")
    except RuntimeError:
        logger.exception("load failed")
    shutdown_logging()

    (event,) = _read_json_lines(log_file)
    assert "RuntimeError: broken config" in str(event["exception"])


def test_text_format_writes_plain_lines(tmp_path: Path) -> None:
    log_file = tmp_path / "plain.log"
    logger = setup_logging(
        LoggingConfig(
            level="INFO",
            log_format="text",
            log_file=log_file,
            log_to_stderr=False,
            logger_name=_logger_name(),
        )
    )
    logger.info("hello")
    shutdown_logging()

    line = log_file.read_text(encoding="utf-8").strip()
    assert line.endswith("INFO " + logger.name + ": hello")


def test_setup_replaces_previous_handlers(tmp_path: Path) -> None:
    name = _logger_name()
    setup_logging(LoggingConfig(log_file=tmp_path / "a.log", log_to_stderr=False, logger_name=name))
    logger = setup_logging(
        LoggingConfig(log_file=tmp_path / "b.log", log_to_stderr=False, logger_name=name)
    )
    assert len(logger.handlers) == 1
    assert logger.propagate is False

    shutdown_logging()
    assert logger.handlers == []


@pytest.mark.parametrize(
    "config",
    [
        LoggingConfig(level="LOUD"),
        LoggingConfig(logger_name="  "),
        LoggingConfig(log_format="xml"),  # type: ignore[arg-type]
    ],
)
def test_invalid_configuration_is_rejected(config: LoggingConfig) -> None:
    with pytest.raises(ValueError):
        setup_logging(config)


def test_correlation_fields_nest_and_reset() -> None:
    assert get_correlation_context() == {}
    with correlation_scope(config_key="a"):
        with correlation_scope(profile="dev", config_key=None):
            assert get_correlation_context() == {"profile": "dev"}
        assert get_correlation_context() == {"config_key": "a"}
    assert get_correlation_context() == {}

    token = set_correlation_fields(profile="  staging  ", blank="   ")
    assert get_correlation_context() == {"profile": "staging"}
    reset_correlation_fields(token)
    assert get_correlation_context() == {}

    with pytest.raises(ValueError):
        set_correlation_fields(**{" ": "x"})


def test_records_do_not_propagate_to_root(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    logger = setup_logging(
        LoggingConfig(log_file=tmp_path / "x.log", log_to_stderr=False, logger_name=_logger_name())
    )
    with caplog.at_level(logging.DEBUG):
        logger.error("isolated")
    assert "isolated" not in caplog.text
