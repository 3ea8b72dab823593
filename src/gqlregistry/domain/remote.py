"""Remote source registry: named external schemas and how to wrap them."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graphql import GraphQLSchema

    from gqlregistry.domain.ports import Executor, RewriteRule, SchemaSupplier, SchemaWrapper

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class RemoteSchemaDescriptor:
    """An external schema, the executor that reaches it and its naming rules.

    ``schema_supplier`` takes precedence over ``schema`` when both are set.
    ``wrapped`` is filled in on build.
    """

    name: str
    executor: Executor
    schema: GraphQLSchema | None = None
    schema_supplier: SchemaSupplier | None = None
    rewrite_rules: Sequence[RewriteRule] = ()
    wrapped: GraphQLSchema | None = None

    async def resolve_source(self) -> GraphQLSchema | None:
        if self.schema_supplier is not None:
            return await self.schema_supplier()
        return self.schema


@dataclass(slots=True)
class RemoteSourceRegistry:
    """Descriptors keyed by name, in registration order. First registration wins."""

    descriptors: dict[str, RemoteSchemaDescriptor] = field(
        default_factory=dict[str, RemoteSchemaDescriptor]
    )

    def register(self, descriptor: RemoteSchemaDescriptor) -> bool:
        if descriptor.name in self.descriptors:
            log.debug("Remote schema %s already registered; keeping the first", descriptor.name)
            return False
        self.descriptors[descriptor.name] = descriptor
        return True

    def get(self, name: str) -> RemoteSchemaDescriptor | None:
        return self.descriptors.get(name)

    def executor_for(self, name: str) -> Executor | None:
        descriptor = self.descriptors.get(name)
        return descriptor.executor if descriptor is not None else None

    def __len__(self) -> int:
        return len(self.descriptors)

    async def resolve_all(
        self, wrapper: SchemaWrapper, rewrite_rules: Sequence[RewriteRule] = ()
    ) -> list[GraphQLSchema]:
        """Fetch every source concurrently, then wrap them one by one.

        ``rewrite_rules`` are applied before each descriptor's own rules.
        Descriptors whose source resolves to ``None`` are skipped.
        """

        descriptors = list(self.descriptors.values())
        sources = await asyncio.gather(*(d.resolve_source() for d in descriptors))

        wrapped: list[GraphQLSchema] = []
        for descriptor, source in zip(descriptors, sources, strict=True):
            if source is None:
                log.debug("Remote schema %s has no source; skipping", descriptor.name)
                continue
            descriptor.wrapped = wrapper.wrap(
                source,
                descriptor.executor,
                (*rewrite_rules, *descriptor.rewrite_rules),
            )
            wrapped.append(descriptor.wrapped)
        return wrapped

    def clear(self) -> None:
        self.descriptors.clear()
