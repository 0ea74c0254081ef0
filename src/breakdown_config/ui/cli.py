"""Command-line interface router for breakdown-config."""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from breakdown_config.breakdown import BreakdownConfig
from breakdown_config.domain.models import MergedConfig, json_ready
from breakdown_config.errors import (
    ConfigError,
    ConfigurationError,
    ConfigValidationFailure,
    UserConfigInvalid,
    ValidationViolation,
    format_error,
)
from breakdown_config.manager import ConfigManager
from breakdown_config.observability.logging import LoggingConfig, setup_logging, shutdown_logging
from breakdown_config.result import Failure
from breakdown_config.ui.render import CLIRenderer, create_renderer
from breakdown_config.utils.cache import ConfigCache

LOG_LEVEL_ENV: Final[str] = "BREAKDOWN_CONFIG_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
CONFIG_ERROR_EXIT_CODE: Final[int] = 2


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 1

    def __str__(self) -> str:
        return self.message


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router."""

    parser = argparse.ArgumentParser(
        prog="breakdown-config",
        description=(
            "breakdown-config — load, validate, and merge layered YAML configuration.\n\n"
            "Common workflows:\n"
            "  breakdown-config show                 Print the merged config\n"
            "  breakdown-config validate -p prod     Check prod-app.yml / prod-user.yml\n"
            "  breakdown-config paths                Print resolved directories\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--base-dir",
        default="",
        help="Directory containing breakdown/config/ (default: current working directory).",
    )
    common.add_argument(
        "--profile",
        "-p",
        default=None,
        help="Profile prefix selecting <profile>-app.yml and <profile>-user.yml.",
    )
    common.add_argument(
        "--app-config",
        dest="app_config",
        default=None,
        help="Explicit app config path (overrides --base-dir/--profile lookup).",
    )
    common.add_argument(
        "--user-config",
        dest="user_config",
        default=None,
        help="Explicit user config path; only used together with --app-config.",
    )
    common.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Emit machine-readable JSON.",
    )
    common.add_argument(
        "--log-level",
        default=None,
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or {DEFAULT_LOG_LEVEL}).",
    )
    common.add_argument(
        "--log-format",
        choices=("json", "text"),
        default="json",
        help="Log record format written to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser(
        "show", parents=[common], help="Print the merged configuration"
    )
    show_parser.set_defaults(handler=_cmd_show)

    validate_parser = subparsers.add_parser(
        "validate", parents=[common], help="Validate the app and user config files"
    )
    validate_parser.set_defaults(handler=_cmd_validate)

    paths_parser = subparsers.add_parser(
        "paths", parents=[common], help="Print resolved working, prompt, and schema directories"
    )
    paths_parser.set_defaults(handler=_cmd_paths)

    return parser


# ---------------------------------------------------------------------------
# Entrypoints
# ---------------------------------------------------------------------------


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return 2

    setup_logging(
        LoggingConfig(level=_log_level(namespace), log_format=namespace.log_format)
    )
    try:
        result = handler(namespace)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    finally:
        shutdown_logging()
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_show(args: argparse.Namespace) -> int:
    config = _build_config(args)
    merged = _load(config)

    if args.json:
        _emit_json({"command": "show", "profile": config.profile_name, "config": merged.to_dict()})
        return 0

    renderer = create_renderer()
    renderer.kv("Profile", config.profile_name or "(default)")
    payload = json_ready(merged.to_dict())
    renderer.text(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    config = _build_config(args)
    result = asyncio.run(config.load_config_safe())

    if isinstance(result, Failure):
        violations = _violations_of(result.error)
        if args.json:
            _emit_json(
                {
                    "command": "validate",
                    "valid": False,
                    "error_kind": str(result.error.kind),
                    "message": result.error.message,
                    "violations": [_violation_payload(item) for item in violations],
                }
            )
        else:
            renderer = create_renderer()
            renderer.fail(format_error(result.error))
            if violations:
                renderer.section("Violations:")
                renderer.items([item.describe() for item in violations])
        return CONFIG_ERROR_EXIT_CODE

    if args.json:
        _emit_json({"command": "validate", "valid": True, "violations": []})
    else:
        create_renderer().ok(f"configuration is valid ({config.manager.cache_key})")
    return 0


def _cmd_paths(args: argparse.Namespace) -> int:
    config = _build_config(args)
    _load(config)
    payload = {
        "working_dir": config.get_working_dir(),
        "prompt_dir": config.get_prompt_dir(),
        "schema_dir": config.get_schema_dir(),
    }

    if args.json:
        _emit_json({"command": "paths", **payload})
        return 0

    renderer = create_renderer()
    _render_paths(renderer, payload)
    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _emit_json(payload: Mapping[str, object]) -> None:
    """Emit a JSON payload to stdout with deterministic formatting."""

    print(
        json.dumps(
            json_ready(payload),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
    )


def _render_paths(renderer: CLIRenderer, payload: Mapping[str, str]) -> None:
    renderer.kv("Working dir", payload["working_dir"])
    renderer.kv("Prompt dir", payload["prompt_dir"])
    renderer.kv("Schema dir", payload["schema_dir"])


def _build_config(args: argparse.Namespace) -> BreakdownConfig:
    base_dir = args.base_dir or ""
    cache = ConfigCache()

    if args.app_config:
        manager = ConfigManager(args.app_config, args.user_config, cache=cache)
        return BreakdownConfig(manager, base_dir=base_dir)
    if args.user_config:
        raise CLIError("--user-config requires --app-config", exit_code=CONFIG_ERROR_EXIT_CODE)

    created = BreakdownConfig.create(args.profile, base_dir, cache=cache)
    if isinstance(created, Failure):
        raise CLIError(format_error(created.error), exit_code=CONFIG_ERROR_EXIT_CODE)
    return created.data


def _load(config: BreakdownConfig) -> MergedConfig:
    try:
        return asyncio.run(config.load_config())
    except ConfigurationError as exc:
        raise CLIError(str(exc), exit_code=CONFIG_ERROR_EXIT_CODE) from exc


def _violations_of(error: ConfigError) -> tuple[ValidationViolation, ...]:
    if isinstance(error, ConfigValidationFailure):
        return error.violations
    if isinstance(error, UserConfigInvalid) and error.cause is not None:
        return _violations_of(error.cause)
    return ()


def _violation_payload(violation: ValidationViolation) -> dict[str, object]:
    return {
        "field": violation.field,
        "expected_type": violation.expected_type,
        "actual_type": violation.actual_type,
        "constraint": violation.constraint,
    }


def _log_level(args: argparse.Namespace) -> str:
    raw = args.log_level or os.environ.get(LOG_LEVEL_ENV, "") or DEFAULT_LOG_LEVEL
    return raw.strip().upper()


__all__ = ["CLIError", "build_parser", "run_cli"]
