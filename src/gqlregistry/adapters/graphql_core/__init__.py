"""Default compile, wrap and compose engines built on graphql-core."""

from __future__ import annotations

from .binding import bind_resolvers
from .compiler import GraphQLCoreCompiler
from .composer import GraphQLCoreComposer
from .delegation import NameMapping, SelectionTranslator
from .naming import (
    RenameFields,
    RenameRootFields,
    RenameTypes,
    camel_case,
    default_naming_rules,
    pascal_case,
)
from .wrapper import GraphQLCoreSchemaWrapper, build_name_mapping

__all__ = [
    "GraphQLCoreCompiler",
    "GraphQLCoreComposer",
    "GraphQLCoreSchemaWrapper",
    "NameMapping",
    "RenameFields",
    "RenameRootFields",
    "RenameTypes",
    "SelectionTranslator",
    "bind_resolvers",
    "build_name_mapping",
    "camel_case",
    "default_naming_rules",
    "pascal_case",
]
