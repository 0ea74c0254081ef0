"""Loader for the required application config layer."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

from breakdown_config.domain.models import AppConfig
from breakdown_config.errors import ConfigType
from breakdown_config.loaders.safe_loader import LoadError, SafeConfigLoader
from breakdown_config.result import Failure, Result
from breakdown_config.utils.paths import PathLike, app_config_path
from breakdown_config.validators.config_validator import validate_app_config

logger = logging.getLogger(__name__)


class AppConfigLoader:
    """Load and validate ``app.yml`` (or ``<profile>-app.yml``).

    A missing file is a ``CONFIG_FILE_NOT_FOUND`` failure; the app layer is mandatory.
    """

    def __init__(
        self,
        base_dir: PathLike = "",
        profile: str | None = None,
        *,
        config_path: PathLike | None = None,
    ) -> None:
        self.path = Path(config_path) if config_path is not None else app_config_path(
            base_dir, profile
        )
        self._loader: SafeConfigLoader[AppConfig] = SafeConfigLoader(self.path, ConfigType.APP)

    async def load(self) -> Result[AppConfig, LoadError]:
        result = await self._loader.load(
            functools.partial(validate_app_config, source=self._loader.source)
        )
        if isinstance(result, Failure):
            logger.info(
                "app config rejected",
                extra={"path": self._loader.source, "error_kind": str(result.error.kind)},
            )
        return result


__all__ = ["AppConfigLoader"]
