"""YAML config loaders: the generic safe pipeline plus app/user layer loaders."""

from breakdown_config.loaders.app_loader import AppConfigLoader
from breakdown_config.loaders.safe_loader import ConfigValidator, LoadError, SafeConfigLoader
from breakdown_config.loaders.user_loader import UserConfigLoader

__all__ = [
    "AppConfigLoader",
    "ConfigValidator",
    "LoadError",
    "SafeConfigLoader",
    "UserConfigLoader",
]
