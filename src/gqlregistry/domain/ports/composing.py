"""Port for merging several schemas into one."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from graphql import DocumentNode, GraphQLSchema


@runtime_checkable
class SchemaComposer(Protocol):
    """Composition engine reconciling types by name across subschemas."""

    def compose(
        self,
        subschemas: Sequence[GraphQLSchema],
        *,
        type_defs: DocumentNode | None = None,
        resolvers: Mapping[str, object] | None = None,
    ) -> GraphQLSchema: ...
