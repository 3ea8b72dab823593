"""Compile engine built on ``graphql.build_ast_schema``."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from graphql import assert_valid_schema, build_ast_schema

from gqlregistry.adapters.graphql_core.binding import bind_resolvers

if TYPE_CHECKING:
    from collections.abc import Mapping

    from graphql import DocumentNode, GraphQLSchema

log = getLogger(__name__)


class GraphQLCoreCompiler:
    """Build a schema from a declaration document and bind a resolver map onto it.

    Invalid declarations raise ``TypeError`` or ``GraphQLError`` from
    graphql-core; unknown resolver targets raise ``ResolverBindingError``.
    """

    def compile(
        self,
        document: DocumentNode,
        resolvers: Mapping[str, object] | None = None,
    ) -> GraphQLSchema:
        schema = build_ast_schema(document)
        assert_valid_schema(schema)
        if resolvers:
            bind_resolvers(schema, resolvers)
        log.debug(
            "Compiled schema with %d definitions and %d resolver entries",
            len(document.definitions),
            len(resolvers or {}),
        )
        return schema
