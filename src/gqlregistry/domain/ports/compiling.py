"""Port for turning a declaration document into an executable schema."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from graphql import DocumentNode, GraphQLSchema


@runtime_checkable
class SchemaCompiler(Protocol):
    """Compile engine: document plus resolver map in, schema out.

    Implementations raise when the document is not a valid schema or when the
    resolver map names something the document does not declare.
    """

    def compile(
        self,
        document: DocumentNode,
        resolvers: Mapping[str, object] | None = None,
    ) -> GraphQLSchema: ...
