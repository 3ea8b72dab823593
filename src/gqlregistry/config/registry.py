"""Registry configuration values."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .env import env_flag, load_env_file, optional_env_var
from .errors import InvalidConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Behavioural switches for a schema registry."""

    warn_on_duplicates: bool = True
    cache_executable: bool = True
    apply_default_naming: bool = True
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def log_level_number(self) -> int:
        level = logging.getLevelNamesMapping().get(self.log_level.upper())
        if level is None:
            raise InvalidConfigurationError(f"Unknown log level: {self.log_level!r}")
        return level


def get_registry_config(*, env_file: Path | str | None = None) -> RegistryConfig:
    if env_file is not None:
        load_env_file(env_file)
    return RegistryConfig(
        warn_on_duplicates=env_flag("GQLREGISTRY_WARN_ON_DUPLICATES", default=True),
        cache_executable=env_flag("GQLREGISTRY_CACHE_EXECUTABLE", default=True),
        apply_default_naming=env_flag("GQLREGISTRY_DEFAULT_NAMING", default=True),
        log_level=optional_env_var("GQLREGISTRY_LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )
