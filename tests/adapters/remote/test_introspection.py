from __future__ import annotations

import asyncio
from typing import Any

import pytest
from graphql import graphql_sync, get_introspection_query

from gqlregistry.adapters.remote import (
    GraphQLResponsePayload,
    IntrospectionPayload,
    introspection_supplier,
    schema_from_introspection,
)
from gqlregistry.domain.errors import RemoteSchemaError
from tests.support.remote import RecordingExecutor, RemoteService


def test_supplier_builds_schema_through_the_executor() -> None:
    executor = RecordingExecutor(RemoteService())

    schema = asyncio.run(introspection_supplier(executor)())

    assert schema.query_type is not None
    assert schema.query_type.name == "query_root"
    assert schema.get_type("author_filter") is not None
    (request,) = executor.requests
    assert request.operation_name == "IntrospectionQuery"


def test_supplier_raises_on_remote_errors() -> None:
    async def failing(_request: Any) -> dict[str, Any]:
        return {"data": None, "errors": [{"message": "forbidden", "path": ["__schema"]}]}

    with pytest.raises(RemoteSchemaError, match="Introspection failed: forbidden"):
        asyncio.run(introspection_supplier(failing)())


def test_supplier_raises_without_data() -> None:
    async def empty(_request: Any) -> dict[str, Any]:
        return {}

    with pytest.raises(RemoteSchemaError, match="no data"):
        asyncio.run(introspection_supplier(empty)())


def test_introspection_payload_accepts_data_envelope() -> None:
    service = RemoteService()
    result = graphql_sync(service.schema, get_introspection_query())

    bare = IntrospectionPayload.model_validate(result.data)
    wrapped = IntrospectionPayload.model_validate({"data": result.data})

    assert bare.as_introspection() == wrapped.as_introspection()
    schema = schema_from_introspection({"data": result.data})
    assert schema.get_type("author") is not None


def test_response_payload_reads_execution_results() -> None:
    service = RemoteService()
    result = graphql_sync(
        service.schema,
        "{ author_by_pk(author_id: 5) { id } }",
        root_value=service.root_value(),
    )

    payload = GraphQLResponsePayload.from_result(result)

    assert payload.data == {"author_by_pk": None}
    assert payload.errors is not None
    (error,) = payload.errors
    assert error.message == "author 5 not found"
    assert error.path == ["author_by_pk"]
    assert error.locations is not None
    assert error.locations[0].line == 1
