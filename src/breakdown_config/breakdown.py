"""
breakdown-config — profile-aware facade over ``ConfigManager``.

File: src/breakdown_config/breakdown.py

Purpose
- Entry point for applications: pick the profile, load once, then read resolved directories.

What should be included in this file
- ``BreakdownConfig.create``: validates the profile prefix and locates the config files.
- Safe (Result) and raising variants of load and get.
- Absolute working directory, with prompt/schema directories resolved beneath it.

Functional requirements
- Reading the config before a successful load is a ``CONFIG_NOT_LOADED`` failure.
"""

from __future__ import annotations

from pathlib import Path

from breakdown_config.domain.models import MergedConfig
from breakdown_config.domain.profile_prefix import ValidProfilePrefix
from breakdown_config.errors import (
    ConfigError,
    ConfigNotLoaded,
    ConfigurationError,
    config_not_loaded,
)
from breakdown_config.manager import ConfigManager
from breakdown_config.observability.logging import correlation_scope
from breakdown_config.result import Failure, Result, Success
from breakdown_config.utils.cache import ConfigCache
from breakdown_config.utils.paths import PathLike, app_config_path, resolve_path, user_config_path


class BreakdownConfig:
    """Loaded-once view of the merged configuration for one profile."""

    def __init__(
        self,
        manager: ConfigManager,
        *,
        base_dir: PathLike = "",
        profile: ValidProfilePrefix | None = None,
    ) -> None:
        self._manager = manager
        self._base_dir = Path(base_dir) if base_dir else Path.cwd()
        self._profile = profile
        self._config: MergedConfig | None = None

    @classmethod
    def create(
        cls,
        profile_prefix: str | None = None,
        base_dir: PathLike = "",
        *,
        cache: ConfigCache | None = None,
        use_cache: bool = True,
    ) -> Result[BreakdownConfig, ConfigError]:
        profile: ValidProfilePrefix | None = None
        if profile_prefix is not None:
            validated = ValidProfilePrefix.create(profile_prefix)
            if isinstance(validated, Failure):
                return validated
            profile = validated.data

        prefix = profile.get_value() if profile is not None else None
        manager = ConfigManager(
            app_config_path(base_dir, prefix),
            user_config_path(base_dir, prefix),
            cache=cache,
            use_cache=use_cache,
        )
        return Success(cls(manager, base_dir=base_dir, profile=profile))

    @property
    def profile_name(self) -> str | None:
        return self._profile.get_value() if self._profile is not None else None

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    @property
    def manager(self) -> ConfigManager:
        return self._manager

    async def load_config_safe(self) -> Result[MergedConfig, ConfigError]:
        with correlation_scope(profile=self.profile_name):
            result = await self._manager.load_config_safe()
        if isinstance(result, Success):
            self._config = result.data
        return result

    async def load_config(self) -> MergedConfig:
        result = await self.load_config_safe()
        if isinstance(result, Failure):
            raise ConfigurationError(result.error)
        return result.data

    def get_config_safe(self) -> Result[MergedConfig, ConfigNotLoaded]:
        if self._config is None:
            return Failure(config_not_loaded("get_config"))
        return Success(self._config)

    def get_config(self) -> MergedConfig:
        result = self.get_config_safe()
        if isinstance(result, Failure):
            raise ConfigurationError(result.error)
        return result.data

    def get_working_dir(self) -> str:
        return resolve_path(self._base_dir, self._require("get_working_dir").working_dir)

    def get_prompt_dir(self) -> str:
        config = self._require("get_prompt_dir")
        return resolve_path(self.get_working_dir(), config.app_prompt.base_dir)

    def get_schema_dir(self) -> str:
        config = self._require("get_schema_dir")
        return resolve_path(self.get_working_dir(), config.app_schema.base_dir)

    def _require(self, operation: str) -> MergedConfig:
        if self._config is None:
            raise ConfigurationError(config_not_loaded(operation))
        return self._config


__all__ = ["BreakdownConfig"]
