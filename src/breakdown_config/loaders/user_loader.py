"""Loader for the optional user override layer."""

from __future__ import annotations

import logging
from pathlib import Path

from breakdown_config.domain.models import EmptyUserConfig, UserConfig
from breakdown_config.errors import (
    ConfigFileNotFound,
    ConfigType,
    UserConfigInvalid,
    UserConfigInvalidReason,
    user_config_invalid,
)
from breakdown_config.loaders.safe_loader import SafeConfigLoader
from breakdown_config.result import Failure, Result, Success
from breakdown_config.utils.paths import PathLike, user_config_path
from breakdown_config.validators.config_validator import validate_user_config

logger = logging.getLogger(__name__)


class UserConfigLoader:
    """Load ``user.yml`` (or ``<profile>-user.yml``).

    A missing or empty file means "no overrides" and yields ``EmptyUserConfig``.
    Every other failure is reported as ``USER_CONFIG_INVALID`` with the
    underlying error attached as ``cause``.
    """

    def __init__(
        self,
        base_dir: PathLike = "",
        profile: str | None = None,
        *,
        config_path: PathLike | None = None,
    ) -> None:
        self.path = Path(config_path) if config_path is not None else user_config_path(
            base_dir, profile
        )
        self._loader: SafeConfigLoader[UserConfig] = SafeConfigLoader(self.path, ConfigType.USER)

    async def load(self) -> Result[UserConfig, UserConfigInvalid]:
        source = self._loader.source

        content = await self._loader.read_file()
        if isinstance(content, Failure):
            if isinstance(content.error, ConfigFileNotFound):
                logger.debug("no user config, using app values", extra={"path": source})
                return Success(EmptyUserConfig())
            return Failure(
                user_config_invalid(
                    source, UserConfigInvalidReason.UNKNOWN_ERROR, cause=content.error
                )
            )

        parsed = self._loader.parse_yaml(content.data)
        if isinstance(parsed, Failure):
            return Failure(
                user_config_invalid(
                    source, UserConfigInvalidReason.PARSE_ERROR, cause=parsed.error
                )
            )
        if parsed.data is None:
            return Success(EmptyUserConfig())

        validated = validate_user_config(parsed.data, source)
        if isinstance(validated, Failure):
            return Failure(
                user_config_invalid(
                    source, UserConfigInvalidReason.VALIDATION_ERROR, cause=validated.error
                )
            )
        return validated


__all__ = ["UserConfigLoader"]
