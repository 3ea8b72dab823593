"""Wrapping engine: adapt a remote schema to local names and delegate execution."""

from __future__ import annotations

from collections.abc import Mapping
from functools import reduce
from logging import getLogger
from typing import TYPE_CHECKING, Any

from graphql import (
    DocumentNode,
    GraphQLError,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLUnionType,
    NamedTypeNode,
    NameNode,
    OperationType,
    Visitor,
    build_ast_schema,
    default_field_resolver,
    visit,
)

from gqlregistry.adapters.graphql_core.delegation import (
    TYPENAME_FIELD,
    NameMapping,
    SelectionTranslator,
    response_key,
)
from gqlregistry.adapters.graphql_core.sdl import (
    is_custom_type,
    schema_directive_definitions,
    schema_type_definitions,
)
from gqlregistry.adapters.remote.schema import GraphQLResponsePayload
from gqlregistry.domain.ports import ExecutionRequest

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from graphql import GraphQLResolveInfo, GraphQLSchema, Node

    from gqlregistry.domain.ports import Executor, RewriteRule

log = getLogger(__name__)

LOCAL_ROOT_NAMES: Mapping[OperationType, str] = {
    OperationType.QUERY: "Query",
    OperationType.MUTATION: "Mutation",
    OperationType.SUBSCRIPTION: "Subscription",
}


class GraphQLCoreSchemaWrapper:
    """Rename a remote schema with rewrite rules and delegate its root fields.

    Root types always become ``Query``, ``Mutation`` and ``Subscription``.
    Query and mutation root fields send the translated selection to the
    executor; subscriptions are declared but not delegated.
    """

    def wrap(
        self,
        schema: GraphQLSchema,
        executor: Executor,
        rewrite_rules: Sequence[RewriteRule] = (),
    ) -> GraphQLSchema:
        mapping = build_name_mapping(schema, rewrite_rules)
        document = DocumentNode(
            definitions=(
                *schema_directive_definitions(schema),
                *schema_type_definitions(schema),
            )
        )
        wrapped = build_ast_schema(visit(document, RenameVisitor(mapping)))
        _install_resolvers(wrapped, mapping, executor)
        log.debug("Wrapped remote schema with %d types", len(mapping.local_types))
        return wrapped


def build_name_mapping(schema: GraphQLSchema, rules: Sequence[RewriteRule]) -> NameMapping:
    roots: dict[str, OperationType] = {}
    for operation, root in (
        (OperationType.QUERY, schema.query_type),
        (OperationType.MUTATION, schema.mutation_type),
        (OperationType.SUBSCRIPTION, schema.subscription_type),
    ):
        if root is not None:
            roots[root.name] = operation

    mapping = NameMapping()
    custom_types = [t for t in schema.type_map.values() if is_custom_type(t)]
    for named_type in custom_types:
        operation = roots.get(named_type.name)
        if operation is not None:
            mapping.add_type(named_type.name, LOCAL_ROOT_NAMES[operation])
        else:
            mapping.add_type(named_type.name, _apply(rules, "rename_type", named_type.name))

    for named_type in custom_types:
        if not isinstance(
            named_type, GraphQLObjectType | GraphQLInterfaceType | GraphQLInputObjectType
        ):
            continue
        operation = roots.get(named_type.name)
        for field_name in named_type.fields:
            if operation is not None:
                local = _apply(rules, "rename_root_field", field_name, operation.value)
            else:
                local = _apply(rules, "rename_field", field_name, named_type.name)
            mapping.add_field(named_type.name, field_name, local)
    return mapping


def _apply(rules: Sequence[RewriteRule], method: str, name: str, *context: str) -> str:
    return reduce(lambda current, rule: getattr(rule, method)(*context, current), rules, name)


class RenameVisitor(Visitor):
    """Rewrite type references, type names and field names to their local form."""

    def __init__(self, mapping: NameMapping) -> None:
        super().__init__()
        self.mapping = mapping

    def enter_named_type(self, node: NamedTypeNode, *_args: object) -> NamedTypeNode | None:
        local = self.mapping.local_type(node.name.value)
        if local == node.name.value:
            return None
        return NamedTypeNode(name=NameNode(value=local))

    def leave_object_type_definition(self, node: Node, *_args: object) -> Node:
        return self._rename(node, with_fields=True)

    def leave_interface_type_definition(self, node: Node, *_args: object) -> Node:
        return self._rename(node, with_fields=True)

    def leave_input_object_type_definition(self, node: Node, *_args: object) -> Node:
        return self._rename(node, with_fields=True)

    def leave_union_type_definition(self, node: Node, *_args: object) -> Node:
        return self._rename(node, with_fields=False)

    def leave_enum_type_definition(self, node: Node, *_args: object) -> Node:
        return self._rename(node, with_fields=False)

    def leave_scalar_type_definition(self, node: Node, *_args: object) -> Node:
        return self._rename(node, with_fields=False)

    def _rename(self, node: Node, *, with_fields: bool) -> Node:
        remote_name: str = node.name.value  # type: ignore[attr-defined]
        values = {key: getattr(node, key) for key in node.keys}
        values["name"] = NameNode(value=self.mapping.local_type(remote_name))
        if with_fields:
            values["fields"] = tuple(
                _with_name(field, self.mapping.local_field(remote_name, field.name.value))
                for field in values["fields"] or ()
            )
        return type(node)(**values)


def _with_name(node: Node, name: str) -> Node:
    values = {key: getattr(node, key) for key in node.keys}
    values["name"] = NameNode(value=name)
    return type(node)(**values)


def _install_resolvers(schema: GraphQLSchema, mapping: NameMapping, executor: Executor) -> None:
    resolve_type = _typename_resolver(mapping)
    for named_type in schema.type_map.values():
        if not is_custom_type(named_type):
            continue
        match named_type:
            case GraphQLObjectType() if (
                named_type is schema.query_type or named_type is schema.mutation_type
            ):
                delegate = _delegating_resolver(mapping, executor)
                for root_field in named_type.fields.values():
                    root_field.resolve = delegate
            case GraphQLObjectType() if named_type is schema.subscription_type:
                continue
            case GraphQLObjectType() | GraphQLInterfaceType():
                for nested_field in named_type.fields.values():
                    nested_field.resolve = resolve_by_response_key
                if isinstance(named_type, GraphQLInterfaceType):
                    named_type.resolve_type = resolve_type
            case GraphQLUnionType():
                named_type.resolve_type = resolve_type
            case _:
                continue


def resolve_by_response_key(source: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
    """Read a delegated result, which is keyed by the local response key."""

    if isinstance(source, Mapping):
        key = response_key(info)
        if key in source:
            return source[key]
    return default_field_resolver(source, info, **args)


def _typename_resolver(mapping: NameMapping) -> Callable[..., str | None]:
    def resolve_type(value: Any, _info: GraphQLResolveInfo, _abstract_type: Any) -> str | None:
        if isinstance(value, Mapping) and TYPENAME_FIELD in value:
            return mapping.local_type(value[TYPENAME_FIELD])
        return None

    return resolve_type


def _delegating_resolver(
    mapping: NameMapping, executor: Executor
) -> Callable[..., Awaitable[Any]]:
    async def resolve(_root: Any, info: GraphQLResolveInfo, **_args: Any) -> Any:
        document = SelectionTranslator(mapping, info).operation_document()
        raw = await executor(ExecutionRequest(document=document, context=info.context))
        payload = GraphQLResponsePayload.from_result(raw)
        if payload.errors:
            raise GraphQLError("; ".join(error.message for error in payload.errors))
        return (payload.data or {}).get(response_key(info))

    return resolve
