"""Translate a local field selection into a document in the remote schema's names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, cast

from graphql import (
    ArgumentNode,
    DocumentNode,
    FieldNode,
    FragmentSpreadNode,
    GraphQLError,
    GraphQLIncludeDirective,
    GraphQLSkipDirective,
    InlineFragmentNode,
    ListValueNode,
    NamedTypeNode,
    NameNode,
    ObjectFieldNode,
    ObjectValueNode,
    OperationDefinitionNode,
    SelectionSetNode,
    ast_from_value,
    get_named_type,
    is_input_object_type,
    is_list_type,
    is_non_null_type,
)
from graphql.execution.values import get_argument_values, get_directive_values

if TYPE_CHECKING:
    from graphql import (
        GraphQLField,
        GraphQLInputObjectType,
        GraphQLInputType,
        GraphQLNamedType,
        GraphQLResolveInfo,
        SelectionNode,
        ValueNode,
    )

TYPENAME_FIELD = "__typename"


@dataclass(slots=True)
class NameMapping:
    """Type and field names of one wrapped schema, in both directions.

    Field keys are ``(type name, field name)`` pairs, with the type name on
    the same side as the field name.
    """

    local_types: dict[str, str] = field(default_factory=dict[str, str])
    remote_types: dict[str, str] = field(default_factory=dict[str, str])
    local_fields: dict[tuple[str, str], str] = field(default_factory=dict[tuple[str, str], str])
    remote_fields: dict[tuple[str, str], str] = field(default_factory=dict[tuple[str, str], str])

    def add_type(self, remote_name: str, local_name: str) -> None:
        self.local_types[remote_name] = local_name
        self.remote_types[local_name] = remote_name

    def add_field(self, remote_type: str, remote_field: str, local_field: str) -> None:
        self.local_fields[(remote_type, remote_field)] = local_field
        self.remote_fields[(self.local_type(remote_type), local_field)] = remote_field

    def local_type(self, remote_name: str) -> str:
        return self.local_types.get(remote_name, remote_name)

    def remote_type(self, local_name: str) -> str:
        return self.remote_types.get(local_name, local_name)

    def local_field(self, remote_type: str, remote_field: str) -> str:
        return self.local_fields.get((remote_type, remote_field), remote_field)

    def remote_field(self, local_type: str, local_field: str) -> str:
        return self.remote_fields.get((local_type, local_field), local_field)

    def has_type(self, local_name: str) -> bool:
        return local_name in self.remote_types

    def has_field(self, local_type: str, local_field: str) -> bool:
        return (local_type, local_field) in self.remote_fields


def response_key(info: GraphQLResolveInfo) -> str:
    node = info.field_nodes[0]
    return (node.alias or node.name).value


@dataclass(slots=True)
class SelectionTranslator:
    """Rebuild the selection under ``info`` with remote names.

    Every field is aliased to its local response key so results can be read
    back without renaming. Argument values are inlined, fragments become
    inline fragments, ``@skip``/``@include`` are evaluated locally and each
    selection set asks for ``__typename``. Fields and type conditions the
    remote schema does not know are left out.
    """

    mapping: NameMapping
    info: GraphQLResolveInfo

    def operation_document(self) -> DocumentNode:
        root = SelectionSetNode(selections=tuple(self.info.field_nodes))
        operation = OperationDefinitionNode(
            operation=self.info.operation.operation,
            name=None,
            variable_definitions=(),
            directives=(),
            selection_set=self.selection_set(root, self.info.parent_type),
        )
        return DocumentNode(definitions=(operation,))

    def selection_set(
        self, selection_set: SelectionSetNode, parent_type: GraphQLNamedType
    ) -> SelectionSetNode:
        selections: list[SelectionNode] = []
        for selection in selection_set.selections:
            if not self._included(selection):
                continue
            match selection:
                case FieldNode():
                    translated = self._field(selection, parent_type)
                case InlineFragmentNode():
                    translated = self._fragment(
                        selection.type_condition, selection.selection_set, parent_type
                    )
                case FragmentSpreadNode():
                    fragment = self.info.fragments[selection.name.value]
                    translated = self._fragment(
                        fragment.type_condition, fragment.selection_set, parent_type
                    )
                case _:
                    translated = None
            if translated is not None:
                selections.append(translated)
        selections.append(
            FieldNode(
                alias=None,
                name=NameNode(value=TYPENAME_FIELD),
                arguments=(),
                directives=(),
                selection_set=None,
            )
        )
        return SelectionSetNode(selections=tuple(selections))

    def _included(self, node: SelectionNode) -> bool:
        variables = self.info.variable_values
        skip = get_directive_values(GraphQLSkipDirective, node, variables)
        if skip is not None and skip.get("if") is True:
            return False
        include = get_directive_values(GraphQLIncludeDirective, node, variables)
        return not (include is not None and include.get("if") is False)

    def _field(self, node: FieldNode, parent_type: GraphQLNamedType) -> FieldNode | None:
        key = (node.alias or node.name).value
        name = node.name.value
        if name == TYPENAME_FIELD:
            return FieldNode(
                alias=NameNode(value=key),
                name=node.name,
                arguments=(),
                directives=(),
                selection_set=None,
            )
        if not self.mapping.has_field(parent_type.name, name):
            return None

        field_def: GraphQLField = parent_type.fields[name]  # type: ignore[attr-defined]
        selection_set = None
        if node.selection_set is not None:
            selection_set = self.selection_set(node.selection_set, get_named_type(field_def.type))
        return FieldNode(
            alias=NameNode(value=key),
            name=NameNode(value=self.mapping.remote_field(parent_type.name, name)),
            arguments=self._arguments(field_def, node),
            directives=(),
            selection_set=selection_set,
        )

    def _fragment(
        self,
        type_condition: NamedTypeNode | None,
        selection_set: SelectionSetNode,
        parent_type: GraphQLNamedType,
    ) -> InlineFragmentNode | None:
        fragment_type = parent_type
        remote_condition = None
        if type_condition is not None:
            condition_name = type_condition.name.value
            if not self.mapping.has_type(condition_name):
                return None
            fragment_type = self.info.schema.get_type(condition_name) or parent_type
            remote_condition = NamedTypeNode(
                name=NameNode(value=self.mapping.remote_type(condition_name))
            )
        return InlineFragmentNode(
            type_condition=remote_condition,
            directives=(),
            selection_set=self.selection_set(selection_set, fragment_type),
        )

    def _arguments(self, field_def: GraphQLField, node: FieldNode) -> tuple[ArgumentNode, ...]:
        values = get_argument_values(field_def, node, self.info.variable_values)
        return tuple(
            ArgumentNode(
                name=NameNode(value=name),
                value=self._value(value, field_def.args[name].type),
            )
            for name, value in values.items()
        )

    def _value(self, value: Any, type_: GraphQLInputType) -> ValueNode:
        node = ast_from_value(value, type_)
        if node is None:
            raise GraphQLError(f"Cannot forward argument value {value!r} as {type_}")
        return self._remote_value(node, type_)

    def _remote_value(self, node: ValueNode, type_: GraphQLInputType) -> ValueNode:
        if is_non_null_type(type_):
            type_ = type_.of_type  # type: ignore[union-attr]
        if is_list_type(type_):
            item_type = type_.of_type  # type: ignore[union-attr]
            if isinstance(node, ListValueNode):
                return ListValueNode(
                    values=tuple(self._remote_value(item, item_type) for item in node.values)
                )
            return self._remote_value(node, item_type)
        if is_input_object_type(type_) and isinstance(node, ObjectValueNode):
            input_type = cast("GraphQLInputObjectType", type_)
            input_fields = input_type.fields
            return ObjectValueNode(
                fields=tuple(
                    ObjectFieldNode(
                        name=NameNode(
                            value=self.mapping.remote_field(input_type.name, item.name.value)
                        ),
                        value=self._remote_value(item.value, input_fields[item.name.value].type),
                    )
                    for item in node.fields
                )
            )
        return node
