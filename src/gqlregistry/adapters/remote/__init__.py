"""Public interface for remote GraphQL sources."""

from __future__ import annotations

from .introspection import introspection_supplier, schema_from_introspection
from .schema import (
    ErrorLocation,
    ErrorPayload,
    GraphQLResponsePayload,
    IntrospectionPayload,
)

__all__ = [
    "ErrorLocation",
    "ErrorPayload",
    "GraphQLResponsePayload",
    "IntrospectionPayload",
    "introspection_supplier",
    "schema_from_introspection",
]
