"""Conversions between schema objects and SDL definition nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from graphql import (
    DirectiveDefinitionNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    TypeDefinitionNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    is_introspection_type,
    is_specified_directive,
    is_specified_scalar_type,
    parse,
    print_type,
)
from graphql.utilities.print_schema import print_directive

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graphql import (
        GraphQLDirective,
        GraphQLNamedType,
        GraphQLSchema,
        Node,
        TypeExtensionNode,
    )

_DEFINITION_FOR_EXTENSION: dict[type[Node], type[TypeDefinitionNode]] = {
    ScalarTypeExtensionNode: ScalarTypeDefinitionNode,
    ObjectTypeExtensionNode: ObjectTypeDefinitionNode,
    InterfaceTypeExtensionNode: InterfaceTypeDefinitionNode,
    UnionTypeExtensionNode: UnionTypeDefinitionNode,
    EnumTypeExtensionNode: EnumTypeDefinitionNode,
    InputObjectTypeExtensionNode: InputObjectTypeDefinitionNode,
}

_MERGED_LISTS = ("interfaces", "fields", "types", "values")


def is_custom_type(named_type: GraphQLNamedType) -> bool:
    return not (is_introspection_type(named_type) or is_specified_scalar_type(named_type))


def type_definition(named_type: GraphQLNamedType) -> TypeDefinitionNode:
    """Return the definition of ``named_type`` with its extensions folded in."""

    node = named_type.ast_node
    if node is None:
        return cast("TypeDefinitionNode", parse(print_type(named_type)).definitions[0])
    for extension in named_type.extension_ast_nodes:
        node = merge_type_nodes(node, extension)
    return node


def directive_definition(directive: GraphQLDirective) -> DirectiveDefinitionNode:
    if directive.ast_node is not None:
        return directive.ast_node
    return cast("DirectiveDefinitionNode", parse(print_directive(directive)).definitions[0])


def schema_type_definitions(schema: GraphQLSchema) -> list[TypeDefinitionNode]:
    return [
        type_definition(named_type)
        for named_type in schema.type_map.values()
        if is_custom_type(named_type)
    ]


def schema_directive_definitions(schema: GraphQLSchema) -> list[DirectiveDefinitionNode]:
    return [
        directive_definition(directive)
        for directive in schema.directives
        if not is_specified_directive(directive)
    ]


def merge_type_nodes(
    existing: TypeDefinitionNode, incoming: TypeDefinitionNode | TypeExtensionNode
) -> TypeDefinitionNode:
    """Merge ``incoming`` into ``existing`` by member name; ``incoming`` wins per member.

    A base definition of a different kind replaces ``existing`` outright.
    Neither node is modified.
    """

    incoming_kind = _DEFINITION_FOR_EXTENSION.get(type(incoming), type(incoming))
    if incoming_kind is not type(existing):
        if isinstance(incoming, TypeDefinitionNode):
            return incoming
        raise TypeError(
            f"Cannot extend {existing.kind} {existing.name.value} with {incoming.kind}"
        )

    values = {key: getattr(existing, key) for key in existing.keys}
    for key in _MERGED_LISTS:
        if key in existing.keys:
            values[key] = _merge_named(getattr(existing, key), getattr(incoming, key))
    values["directives"] = _merge_named(existing.directives, incoming.directives)
    description = getattr(incoming, "description", None)
    if description is not None:
        values["description"] = description
    values["loc"] = None
    return type(existing)(**values)


def _merge_named(
    existing: Sequence[Node] | None, incoming: Sequence[Node] | None
) -> tuple[Node, ...]:
    merged: dict[str, Node] = {}
    for node in (*(existing or ()), *(incoming or ())):
        merged[node.name.value] = node  # type: ignore[attr-defined]
    return tuple(merged.values())
