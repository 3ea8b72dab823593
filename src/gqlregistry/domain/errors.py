"""Domain-level exceptions raised by the registry."""

from __future__ import annotations


class RegistryError(RuntimeError):
    """Base class for registry failures."""


class PluginNotFoundError(RegistryError, LookupError):
    """Raised when a plugin lookup names a plugin that was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"plugin {name!r} is not registered")
        self.name = name


class ResolverBindingError(RegistryError):
    """Raised when a resolver map names a type or field the schema does not define."""


class RemoteSchemaError(RegistryError):
    """Raised when a remote source cannot produce a usable schema."""
