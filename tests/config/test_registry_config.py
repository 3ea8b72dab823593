from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from gqlregistry.config import (
    InvalidConfigurationError,
    RegistryConfig,
    configure_logging,
    env_flag,
    get_registry_config,
    optional_env_var,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_defaults_when_environment_is_empty() -> None:
    assert get_registry_config() == RegistryConfig()


def test_flags_are_read_from_the_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GQLREGISTRY_WARN_ON_DUPLICATES", "off")
    monkeypatch.setenv("GQLREGISTRY_CACHE_EXECUTABLE", " No ")
    monkeypatch.setenv("GQLREGISTRY_DEFAULT_NAMING", "0")
    monkeypatch.setenv("GQLREGISTRY_LOG_LEVEL", "debug")

    config = get_registry_config()

    assert config == RegistryConfig(
        warn_on_duplicates=False,
        cache_executable=False,
        apply_default_naming=False,
        log_level="debug",
    )
    assert config.log_level_number == logging.DEBUG


def test_env_file_does_not_override_set_variables(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "GQLREGISTRY_CACHE_EXECUTABLE=false\nGQLREGISTRY_LOG_LEVEL=WARNING\n", encoding="utf-8"
    )
    monkeypatch.setenv("GQLREGISTRY_LOG_LEVEL", "ERROR")

    config = get_registry_config(env_file=env_file)

    assert config.cache_executable is False
    assert config.log_level == "ERROR"


def test_invalid_flag_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GQLREGISTRY_DEFAULT_NAMING", "sometimes")

    with pytest.raises(InvalidConfigurationError, match="GQLREGISTRY_DEFAULT_NAMING"):
        get_registry_config()


def test_unknown_log_level_raises() -> None:
    with pytest.raises(InvalidConfigurationError, match="Unknown log level"):
        _ = RegistryConfig(log_level="chatty").log_level_number


def test_blank_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", "   ")
    monkeypatch.setenv("EXAMPLE_VALUE", "")

    assert env_flag("EXAMPLE_FLAG", default=True) is True
    assert optional_env_var("EXAMPLE_VALUE", "fallback") == "fallback"


def test_configure_logging_sets_the_package_level() -> None:
    package_logger = logging.getLogger("gqlregistry")
    try:
        configure_logging(level="DEBUG")
        assert package_logger.level == logging.DEBUG
        assert logging.getLogger("gqlregistry.domain.registry").isEnabledFor(logging.DEBUG)
    finally:
        package_logger.setLevel(logging.NOTSET)
