"""Stable constants shared across the config pipeline."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Final

# Default file locations (relative to the base directory).
CONFIG_DIR: Final[PurePosixPath] = PurePosixPath("breakdown/config")
APP_CONFIG_FILENAME: Final[str] = "app.yml"
USER_CONFIG_FILENAME: Final[str] = "user.yml"
APP_CONFIG_SUFFIX: Final[str] = "-app.yml"
USER_CONFIG_SUFFIX: Final[str] = "-user.yml"

# Top-level keys with structural meaning; everything else is a custom field.
WORKING_DIR_KEY: Final[str] = "working_dir"
APP_PROMPT_KEY: Final[str] = "app_prompt"
APP_SCHEMA_KEY: Final[str] = "app_schema"
BASE_DIR_KEY: Final[str] = "base_dir"
CORE_CONFIG_KEYS: Final[frozenset[str]] = frozenset(
    {WORKING_DIR_KEY, APP_PROMPT_KEY, APP_SCHEMA_KEY}
)

# Cache.
DEFAULT_CACHE_TTL_SECONDS: Final[float] = 300.0

# Path validation.
MAX_PATH_LENGTH: Final[int] = 4096
PATH_FORBIDDEN_CHARACTERS: Final[str] = '<>:"|?*'

__all__ = [
    "APP_CONFIG_FILENAME",
    "APP_CONFIG_SUFFIX",
    "APP_PROMPT_KEY",
    "APP_SCHEMA_KEY",
    "BASE_DIR_KEY",
    "CONFIG_DIR",
    "CORE_CONFIG_KEYS",
    "DEFAULT_CACHE_TTL_SECONDS",
    "MAX_PATH_LENGTH",
    "PATH_FORBIDDEN_CHARACTERS",
    "USER_CONFIG_FILENAME",
    "USER_CONFIG_SUFFIX",
    "WORKING_DIR_KEY",
]
