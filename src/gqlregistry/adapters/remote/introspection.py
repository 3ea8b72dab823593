"""Build remote schemas from introspection results."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from graphql import build_client_schema, get_introspection_query, parse

from gqlregistry.adapters.remote.schema import GraphQLResponsePayload, IntrospectionPayload
from gqlregistry.domain.errors import RemoteSchemaError
from gqlregistry.domain.ports import ExecutionRequest

if TYPE_CHECKING:
    from collections.abc import Mapping

    from graphql import GraphQLSchema

    from gqlregistry.domain.ports import Executor, SchemaSupplier

log = getLogger(__name__)

INTROSPECTION_OPERATION = "IntrospectionQuery"


def schema_from_introspection(payload: Mapping[str, Any] | IntrospectionPayload) -> GraphQLSchema:
    model = (
        payload
        if isinstance(payload, IntrospectionPayload)
        else IntrospectionPayload.model_validate(payload)
    )
    return build_client_schema(model.as_introspection())  # type: ignore[arg-type]


def introspection_supplier(executor: Executor, *, descriptions: bool = True) -> SchemaSupplier:
    """Return a supplier that introspects the remote source through ``executor``."""

    async def supply() -> GraphQLSchema:
        request = ExecutionRequest(
            document=parse(get_introspection_query(descriptions=descriptions)),
            operation_name=INTROSPECTION_OPERATION,
        )
        response = GraphQLResponsePayload.from_result(await executor(request))
        if response.errors:
            messages = "; ".join(error.message for error in response.errors)
            raise RemoteSchemaError(f"Introspection failed: {messages}")
        if response.data is None:
            raise RemoteSchemaError("Introspection returned no data")
        log.debug("Loaded remote schema through introspection")
        return schema_from_introspection(response.data)

    return supply
