"""Pure helpers for locating config files and resolving configured directories."""

from __future__ import annotations

import os
from pathlib import Path

from breakdown_config.constants import (
    APP_CONFIG_FILENAME,
    APP_CONFIG_SUFFIX,
    CONFIG_DIR,
    USER_CONFIG_FILENAME,
    USER_CONFIG_SUFFIX,
)

PathLike = str | os.PathLike[str]


def config_dir(base_dir: PathLike = "") -> Path:
    return Path(base_dir or ".") / CONFIG_DIR


def app_config_path(base_dir: PathLike = "", profile: str | None = None) -> Path:
    """``<base>/breakdown/config/app.yml`` or ``<profile>-app.yml``."""

    filename = f"{profile}{APP_CONFIG_SUFFIX}" if profile else APP_CONFIG_FILENAME
    return config_dir(base_dir) / filename


def user_config_path(base_dir: PathLike = "", profile: str | None = None) -> Path:
    """``<base>/breakdown/config/user.yml`` or ``<profile>-user.yml``."""

    filename = f"{profile}{USER_CONFIG_SUFFIX}" if profile else USER_CONFIG_FILENAME
    return config_dir(base_dir) / filename


def resolve_path(base_dir: PathLike, relative: str) -> str:
    """Return ``relative`` as an absolute, normalized path anchored at ``base_dir``."""

    anchor = os.fspath(base_dir) or os.getcwd()
    if os.path.isabs(relative):
        return os.path.normpath(relative)
    return os.path.normpath(os.path.join(os.path.abspath(anchor), relative))


__all__ = [
    "PathLike",
    "app_config_path",
    "config_dir",
    "resolve_path",
    "user_config_path",
]
