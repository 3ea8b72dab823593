from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from graphql import build_schema

from gqlregistry.domain.ports import RewriteRule
from gqlregistry.domain.remote import RemoteSchemaDescriptor, RemoteSourceRegistry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graphql import GraphQLSchema

    from gqlregistry.domain.ports import Executor


async def _executor(_request: Any) -> dict[str, Any]:
    return {"data": None}


class _RecordingWrapper:
    def __init__(self) -> None:
        self.calls: list[tuple[GraphQLSchema, Executor, tuple[RewriteRule, ...]]] = []

    def wrap(
        self,
        schema: GraphQLSchema,
        executor: Executor,
        rewrite_rules: Sequence[RewriteRule] = (),
    ) -> GraphQLSchema:
        self.calls.append((schema, executor, tuple(rewrite_rules)))
        return schema


def test_supplier_takes_precedence_over_schema() -> None:
    eager = build_schema("type Query { eager: Int }")
    supplied = build_schema("type Query { supplied: Int }")

    async def supplier() -> GraphQLSchema:
        return supplied

    descriptor = RemoteSchemaDescriptor(
        name="books", executor=_executor, schema=eager, schema_supplier=supplier
    )

    assert asyncio.run(descriptor.resolve_source()) is supplied


def test_resolve_all_applies_shared_rules_before_descriptor_rules() -> None:
    shared = RewriteRule()
    own = RewriteRule()
    schema = build_schema("type Query { books: Int }")
    registry = RemoteSourceRegistry()
    registry.register(
        RemoteSchemaDescriptor(
            name="books", executor=_executor, schema=schema, rewrite_rules=(own,)
        )
    )
    wrapper = _RecordingWrapper()

    wrapped = asyncio.run(registry.resolve_all(wrapper, (shared,)))

    assert wrapped == [schema]
    assert wrapper.calls == [(schema, _executor, (shared, own))]
    descriptor = registry.get("books")
    assert descriptor is not None
    assert descriptor.wrapped is schema


def test_resolve_all_keeps_registration_order_and_skips_empty_sources() -> None:
    slow_schema = build_schema("type Query { slow: Int }")
    fast_schema = build_schema("type Query { fast: Int }")
    finished: list[str] = []

    async def slow() -> GraphQLSchema:
        await asyncio.sleep(0.01)
        finished.append("slow")
        return slow_schema

    async def fast() -> GraphQLSchema:
        finished.append("fast")
        return fast_schema

    registry = RemoteSourceRegistry()
    registry.register(RemoteSchemaDescriptor(name="slow", executor=_executor, schema_supplier=slow))
    registry.register(RemoteSchemaDescriptor(name="empty", executor=_executor))
    registry.register(RemoteSchemaDescriptor(name="fast", executor=_executor, schema_supplier=fast))

    wrapped = asyncio.run(registry.resolve_all(_RecordingWrapper()))

    assert finished == ["fast", "slow"]
    assert wrapped == [slow_schema, fast_schema]
    assert len(registry) == 3


def test_first_registration_wins() -> None:
    async def other(_request: Any) -> dict[str, Any]:
        return {"data": None}

    registry = RemoteSourceRegistry()

    assert registry.register(RemoteSchemaDescriptor(name="books", executor=_executor)) is True
    assert registry.register(RemoteSchemaDescriptor(name="books", executor=other)) is False
    assert registry.executor_for("books") is _executor

    registry.clear()
    assert len(registry) == 0
