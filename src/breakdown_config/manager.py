"""
breakdown-config — load, merge, and cache the app and user layers.

File: src/breakdown_config/manager.py

Purpose
- Produce one ``MergedConfig`` from a required app file and an optional user file.

What should be included in this file
- ``merge_configs``: pure field-wise merge, user wins where it says something.
- ``ConfigManager.load_config_safe``: cache lookup, app load, user load, merge, cache store.
- ``ConfigManager.get_config``: the same, raising ``ConfigurationError`` on failure.

Functional requirements
- The user layer never removes an app field.
- Expected failures come back as ``Failure`` values from ``load_config_safe``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from breakdown_config.constants import DEFAULT_CACHE_TTL_SECONDS
from breakdown_config.domain.models import (
    AppConfig,
    EmptyUserConfig,
    MergedConfig,
    UserConfig,
    has_prompt_override,
    has_schema_override,
)
from breakdown_config.errors import ConfigError, ConfigurationError
from breakdown_config.loaders.app_loader import AppConfigLoader
from breakdown_config.loaders.user_loader import UserConfigLoader
from breakdown_config.observability.logging import correlation_scope
from breakdown_config.result import Failure, Result, Success
from breakdown_config.utils.cache import ConfigCache, default_cache
from breakdown_config.utils.paths import PathLike

logger = logging.getLogger(__name__)


def merge_configs(app: AppConfig, user: UserConfig) -> MergedConfig:
    """Overlay ``user`` on ``app``; absent user fields fall back to the app values."""

    working_dir = user.working_dir if user.working_dir else app.working_dir
    app_prompt = user.app_prompt if has_prompt_override(user) else app.app_prompt
    app_schema = user.app_schema if has_schema_override(user) else app.app_schema
    custom_fields = {**app.extra_fields, **user.custom_fields}
    return MergedConfig(
        working_dir=working_dir,
        app_prompt=app_prompt,
        app_schema=app_schema,
        custom_fields=custom_fields,
    )


class ConfigManager:
    """Orchestrates loading of one app/user file pair."""

    def __init__(
        self,
        app_config_path: PathLike,
        user_config_path: PathLike | None = None,
        *,
        cache: ConfigCache | None = None,
        cache_ttl: float = DEFAULT_CACHE_TTL_SECONDS,
        use_cache: bool = True,
    ) -> None:
        self.app_config_path = Path(app_config_path)
        self.user_config_path = Path(user_config_path) if user_config_path is not None else None
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._use_cache = use_cache

    @property
    def cache(self) -> ConfigCache:
        if self._cache is None:
            self._cache = default_cache()
        return self._cache

    @property
    def cache_key(self) -> str:
        user = str(self.user_config_path) if self.user_config_path is not None else None
        return ConfigCache.create_key(str(self.app_config_path), user)

    async def load_config_safe(self) -> Result[MergedConfig, ConfigError]:
        key = self.cache_key
        with correlation_scope(config_key=key):
            if self._use_cache:
                cached = self.cache.get(key)
                if cached is not None:
                    logger.debug("config cache hit")
                    return cached
                logger.debug("config cache miss")

            app_result = await AppConfigLoader(config_path=self.app_config_path).load()
            if isinstance(app_result, Failure):
                return app_result

            user_result = await self._load_user()
            if isinstance(user_result, Failure):
                logger.info(
                    "user config rejected", extra={"error_kind": str(user_result.error.kind)}
                )
                return user_result

            merged = merge_configs(app_result.data, user_result.data)
            if self._use_cache:
                self.cache.set(key, merged, self._cache_ttl)
            logger.info(
                "config loaded",
                extra={"user_layer": user_result.data.kind, "working_dir": merged.working_dir},
            )
            return Success(merged)

    async def get_config(self) -> MergedConfig:
        """Load the merged config or raise ``ConfigurationError``."""

        result = await self.load_config_safe()
        if isinstance(result, Failure):
            raise ConfigurationError(result.error)
        return result.data

    def invalidate(self) -> bool:
        return self.cache.delete(self.cache_key)

    async def _load_user(self) -> Result[UserConfig, ConfigError]:
        if self.user_config_path is None:
            return Success(EmptyUserConfig())
        return await UserConfigLoader(config_path=self.user_config_path).load()


__all__ = ["ConfigManager", "merge_configs"]
