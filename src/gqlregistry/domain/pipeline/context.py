"""Mutable context shared across pipeline phases."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gqlregistry.domain.declarations import is_type_like
from gqlregistry.domain.documents import SchemaDocuments, assemble_documents

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graphql import TypeDefinitionNode

    from gqlregistry.domain.plugins import RegistryPlugin
    from gqlregistry.domain.store import DeclarationStore


@dataclass(slots=True)
class PipelineContext:
    """Store, plugins and run counters threaded through every phase.

    Documents are never cached here: :meth:`documents` re-assembles them from
    the store on each call so every hook observes the merges that preceded it.
    """

    store: DeclarationStore
    plugins: Sequence[RegistryPlugin] = field(default_factory=tuple)
    hook_calls: int = 0
    contributions: int = 0
    rebroadcasts: int = 0

    def documents(self) -> SchemaDocuments:
        return assemble_documents(self.store)

    async def call(self, plugin: RegistryPlugin, hook: str, *args: object) -> object | None:
        """Invoke ``hook`` on ``plugin`` if it defines it, awaiting async results."""

        method = getattr(plugin, hook, None)
        if method is None:
            return None
        self.hook_calls += 1
        result = method(*args)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def rebroadcast(self) -> None:
        """Notify every plugin, in order, with freshly assembled documents."""

        self.rebroadcasts += 1
        for plugin in self.plugins:
            documents = self.documents()
            await self.call(plugin, "schema_updated", documents.schema, documents.extensions)


def type_like_definitions(documents: SchemaDocuments) -> list[TypeDefinitionNode]:
    return [node for node in documents.schema.definitions if is_type_like(node)]  # type: ignore[misc]
