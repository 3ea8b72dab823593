"""Application wiring entry points."""

from __future__ import annotations

from logging import getLogger

from gqlregistry.adapters.graphql_core import (
    GraphQLCoreCompiler,
    GraphQLCoreComposer,
    GraphQLCoreSchemaWrapper,
    default_naming_rules,
)
from gqlregistry.config import RegistryConfig, configure_logging, get_registry_config
from gqlregistry.domain.registry import SchemaRegistry

log = getLogger(__name__)

_shared: SchemaRegistry | None = None


def create_registry(
    config: RegistryConfig | None = None, *, setup_logging: bool = False
) -> SchemaRegistry:
    """Build a registry wired to the graphql-core engines.

    Without ``config`` the configuration is read from the environment.
    """

    effective_config = config or get_registry_config()
    if setup_logging:
        configure_logging(level=effective_config.log_level_number)
    rewrite_rules = default_naming_rules() if effective_config.apply_default_naming else ()
    log.debug(
        "Creating registry: warn_on_duplicates=%s, cache_executable=%s, default_naming=%s",
        effective_config.warn_on_duplicates,
        effective_config.cache_executable,
        effective_config.apply_default_naming,
    )
    return SchemaRegistry(
        compiler=GraphQLCoreCompiler(),
        wrapper=GraphQLCoreSchemaWrapper(),
        composer=GraphQLCoreComposer(),
        config=effective_config,
        rewrite_rules=rewrite_rules,
    )


def shared_registry() -> SchemaRegistry:
    """Return the process-wide registry, creating it on first use."""

    global _shared
    if _shared is None:
        _shared = create_registry()
    return _shared


def reset_shared_registry() -> None:
    global _shared
    _shared = None
