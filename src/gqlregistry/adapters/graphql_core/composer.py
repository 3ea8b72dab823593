"""Composition engine: merge several schemas into one by type name."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    GraphQLEnumType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLUnionType,
    TypeDefinitionNode,
    TypeExtensionNode,
    assert_valid_schema,
    build_ast_schema,
)

from gqlregistry.adapters.graphql_core.binding import bind_resolvers, scalar_overrides
from gqlregistry.adapters.graphql_core.sdl import (
    is_custom_type,
    merge_type_nodes,
    schema_directive_definitions,
    schema_type_definitions,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from graphql import DefinitionNode, GraphQLNamedType, GraphQLSchema

log = getLogger(__name__)


class GraphQLCoreComposer:
    """Merge subschemas by name, layer extension definitions and rebuild.

    Later subschemas win per field, enum value and union member. Directive
    definitions are de-duplicated with the first definition kept. Runtime
    behaviour (field resolvers, type resolution, scalar hooks and enum
    values) is copied across from the subschemas in the same order.
    """

    def compose(
        self,
        subschemas: Sequence[GraphQLSchema],
        *,
        type_defs: DocumentNode | None = None,
        resolvers: Mapping[str, object] | None = None,
    ) -> GraphQLSchema:
        types: dict[str, TypeDefinitionNode] = {}
        directives: dict[str, DirectiveDefinitionNode] = {}

        for subschema in subschemas:
            for node in schema_type_definitions(subschema):
                _merge_into(types, node)
            for directive in schema_directive_definitions(subschema):
                directives.setdefault(directive.name.value, directive)

        unmatched: list[DefinitionNode] = []
        for definition in type_defs.definitions if type_defs is not None else ():
            match definition:
                case DirectiveDefinitionNode():
                    directives.setdefault(definition.name.value, definition)
                case TypeDefinitionNode():
                    _merge_into(types, definition)
                case TypeExtensionNode() if definition.name.value in types:
                    _merge_into(types, definition)
                case _:
                    unmatched.append(definition)

        document = DocumentNode(
            definitions=(*directives.values(), *types.values(), *unmatched)
        )
        composed = build_ast_schema(document)
        assert_valid_schema(composed)

        for subschema in subschemas:
            _copy_runtime(subschema, composed)
        if resolvers:
            bind_resolvers(composed, resolvers)

        log.debug(
            "Composed %d subschemas into %d types", len(subschemas), len(types)
        )
        return composed


def _merge_into(
    types: dict[str, TypeDefinitionNode], node: TypeDefinitionNode | TypeExtensionNode
) -> None:
    name = node.name.value
    existing = types.get(name)
    if existing is None:
        types[name] = node  # type: ignore[assignment]
    else:
        types[name] = merge_type_nodes(existing, node)


def _copy_runtime(source: GraphQLSchema, target: GraphQLSchema) -> None:
    for name, source_type in source.type_map.items():
        if not is_custom_type(source_type):
            continue
        target_type = target.get_type(name)
        if target_type is None or type(target_type) is not type(source_type):
            continue
        _copy_type_runtime(source_type, target_type)


def _copy_type_runtime(source: GraphQLNamedType, target: GraphQLNamedType) -> None:
    match source:
        case GraphQLObjectType() | GraphQLInterfaceType():
            target_fields = target.fields  # type: ignore[union-attr]
            for field_name, field in source.fields.items():
                target_field = target_fields.get(field_name)
                if target_field is None:
                    continue
                if field.resolve is not None:
                    target_field.resolve = field.resolve
                if field.subscribe is not None:
                    target_field.subscribe = field.subscribe
            if isinstance(source, GraphQLObjectType) and source.is_type_of is not None:
                target.is_type_of = source.is_type_of  # type: ignore[union-attr]
            if isinstance(source, GraphQLInterfaceType) and source.resolve_type is not None:
                target.resolve_type = source.resolve_type  # type: ignore[union-attr]
        case GraphQLUnionType():
            if source.resolve_type is not None:
                target.resolve_type = source.resolve_type  # type: ignore[union-attr]
        case GraphQLScalarType():
            for hook, function in scalar_overrides(source).items():
                setattr(target, hook, function)
        case GraphQLEnumType():
            target_values = target.values  # type: ignore[union-attr]
            for value_name, enum_value in source.values.items():
                if value_name in target_values:
                    target_values[value_name].value = enum_value.value
            target.__dict__.pop("_value_lookup", None)
        case _:
            pass
