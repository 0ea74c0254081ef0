"""
breakdown-config — layered YAML configuration with explicit results.

File: src/breakdown_config/__init__.py

Purpose
- Package root. Exposes the small public API: the facade, the manager, results, and errors.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

from breakdown_config.breakdown import BreakdownConfig
from breakdown_config.domain.models import AppConfig, MergedConfig, UserConfig
from breakdown_config.errors import ConfigError, ConfigurationError, ErrorKind, format_error
from breakdown_config.manager import ConfigManager, merge_configs
from breakdown_config.result import Failure, Result, Success, err, ok

__version__ = "1.0.0"

__all__ = [
    "AppConfig",
    "BreakdownConfig",
    "ConfigError",
    "ConfigManager",
    "ConfigurationError",
    "ErrorKind",
    "Failure",
    "MergedConfig",
    "Result",
    "Success",
    "UserConfig",
    "__version__",
    "err",
    "format_error",
    "merge_configs",
    "ok",
]
