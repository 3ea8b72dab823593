from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gqlregistry.app import create_registry, reset_shared_registry
from gqlregistry.config import RegistryConfig

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gqlregistry.domain.registry import SchemaRegistry

REGISTRY_ENV_VARS = (
    "GQLREGISTRY_WARN_ON_DUPLICATES",
    "GQLREGISTRY_CACHE_EXECUTABLE",
    "GQLREGISTRY_DEFAULT_NAMING",
    "GQLREGISTRY_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_registry_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    # undo must also remove values loaded from .env files
    for name in REGISTRY_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    reset_shared_registry()
    yield
    reset_shared_registry()


@pytest.fixture
def registry() -> SchemaRegistry:
    return create_registry(RegistryConfig())
