"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, load_env_file, optional_env_var
from .errors import ConfigurationError, InvalidConfigurationError
from .logging import configure_logging
from .registry import RegistryConfig, get_registry_config

__all__ = [
    "ConfigurationError",
    "InvalidConfigurationError",
    "RegistryConfig",
    "configure_logging",
    "env_flag",
    "get_registry_config",
    "load_env_file",
    "optional_env_var",
]
