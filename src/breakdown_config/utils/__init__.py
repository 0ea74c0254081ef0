"""Cache and path helpers for breakdown-config."""

from breakdown_config.utils.cache import (
    CacheEntry,
    CacheStats,
    ConfigCache,
    default_cache,
    reset_default_cache,
)
from breakdown_config.utils.paths import (
    app_config_path,
    config_dir,
    resolve_path,
    user_config_path,
)

__all__ = [
    "CacheEntry",
    "CacheStats",
    "ConfigCache",
    "app_config_path",
    "config_dir",
    "default_cache",
    "reset_default_cache",
    "resolve_path",
    "user_config_path",
]
