"""Executable CLI entrypoint for ``breakdown_config``."""

from __future__ import annotations

import sys
import traceback
from enum import IntEnum
from typing import TYPE_CHECKING, Final

import yaml

from breakdown_config.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


class ExitCode(IntEnum):
    """Process exit-code contract."""

    SUCCESS = 0
    FAILURE = 1
    CONFIG_ERROR = 2
    INTERNAL_ERROR = 4


# Exceptions that mean "the configuration on disk is unusable", wherever they surface.
_CONFIG_ERROR_TYPES: Final[tuple[type[BaseException], ...]] = (
    ConfigurationError,
    yaml.YAMLError,
    FileNotFoundError,
    NotADirectoryError,
    PermissionError,
    ValueError,
)


def cli_entrypoint(argv: Sequence[str] | None = None) -> int:
    """Entrypoint used by ``python -m breakdown_config`` and the console script."""

    try:
        from breakdown_config.ui.cli import run_cli

        return _normalize_exit_code(run_cli(argv))
    except SystemExit as exc:
        # argparse exits with 2 on usage errors.
        return _normalize_exit_code(exc.code)
    except BaseException as exc:  # noqa: BLE001 - CLI boundary normalization.
        exit_code = _route_exception(exc)
        _report(exc, exit_code)
        return int(exit_code)


def _normalize_exit_code(raw_code: object) -> int:
    if raw_code is None:
        return int(ExitCode.SUCCESS)
    if isinstance(raw_code, int) and raw_code in {code.value for code in ExitCode}:
        return raw_code
    if isinstance(raw_code, str) and raw_code.strip():
        _write_stderr(raw_code.strip())
    return int(ExitCode.INTERNAL_ERROR)


def _route_exception(exc: BaseException) -> ExitCode:
    if any(isinstance(item, _CONFIG_ERROR_TYPES) for item in _exception_chain(exc)):
        return ExitCode.CONFIG_ERROR
    return ExitCode.INTERNAL_ERROR


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield ``exc`` followed by its explicit causes and unsuppressed contexts."""

    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def _report(exc: BaseException, exit_code: ExitCode) -> None:
    if exit_code is ExitCode.CONFIG_ERROR:
        _write_stderr(f"error: {str(exc).strip() or type(exc).__name__}")
        return
    traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)


def _write_stderr(message: str) -> None:
    sys.stderr.write(message.rstrip("\n") + "\n")


__all__ = ["ExitCode", "cli_entrypoint"]
