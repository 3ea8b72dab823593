"""Reusable plugin fakes for registry and pipeline tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from graphql import ObjectTypeDefinitionNode, parse

from gqlregistry.domain.plugins import RegistryPlugin

if TYPE_CHECKING:
    from collections.abc import Mapping

    from graphql import DocumentNode, TypeDefinitionNode


def type_names(document: DocumentNode) -> list[str]:
    return [definition.name.value for definition in document.definitions]  # type: ignore[attr-defined]


def parse_definitions(sdl: str) -> list[Any]:
    if not sdl.strip():
        return []
    return list(parse(sdl).definitions)


class RecordingPlugin(RegistryPlugin):
    """Records the name of every lifecycle hook it receives, in order."""

    def __init__(self, name: str = "recording") -> None:
        super().__init__(name)
        self.calls: list[str] = []
        self.cleared = 0

    def set_initial_schema(self, schema: DocumentNode, extensions: DocumentNode) -> None:
        self.calls.append("set_initial_schema")

    def schema_updated(self, schema: DocumentNode, extensions: DocumentNode) -> None:
        self.calls.append("schema_updated")

    def validate_schema(self, schema: DocumentNode, extensions: DocumentNode) -> None:
        self.calls.append("validate_schema")

    def set_final_schema(self, schema: DocumentNode, extensions: DocumentNode) -> None:
        self.calls.append("set_final_schema")

    def clear(self) -> None:
        self.cleared += 1


class TypeAddingPlugin(RegistryPlugin):
    """Adds the type definitions in ``sdl`` from its global type hook."""

    def __init__(self, name: str, sdl: str) -> None:
        super().__init__(name)
        self.sdl = sdl
        self.type_hook_calls = 0

    def add_type_definitions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> list[Any]:
        self.type_hook_calls += 1
        return parse_definitions(self.sdl)


class AsyncTypeAddingPlugin(TypeAddingPlugin):
    async def add_type_definitions(  # type: ignore[override]
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> list[Any]:
        self.type_hook_calls += 1
        return parse_definitions(self.sdl)


class ObservingPlugin(RegistryPlugin):
    """Captures the type names visible when its global type hook runs."""

    def __init__(self, name: str = "observer") -> None:
        super().__init__(name)
        self.seen: list[list[str]] = []

    def add_type_definitions(self, schema: DocumentNode, extensions: DocumentNode) -> None:
        self.seen.append(type_names(schema))


class RejectingPlugin(RegistryPlugin):
    """Rejects the final documents until ``accept`` is set."""

    def __init__(self, name: str = "rejecting") -> None:
        super().__init__(name)
        self.accept = False
        self.validations = 0

    def validate_schema(self, schema: DocumentNode, extensions: DocumentNode) -> None:
        self.validations += 1
        if not self.accept:
            raise ValueError("schema rejected")


class QueryFieldPlugin(RegistryPlugin):
    """Adds a ``<type>Count: Int!`` query field and resolver for every object type."""

    def __init__(self, name: str = "counts") -> None:
        super().__init__(name)

    def add_query_definitions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> list[Any] | None:
        if not isinstance(definition, ObjectTypeDefinitionNode):
            return None
        type_name = definition.name.value
        if type_name in {"Query", "Mutation", "Subscription"}:
            return None
        field_name = f"{type_name[0].lower()}{type_name[1:]}Count"
        return list(parse(f"type Query {{ {field_name}: Int! }}").definitions[0].fields)  # type: ignore[attr-defined]

    def add_query_resolvers_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> Mapping[str, Any] | None:
        if not isinstance(definition, ObjectTypeDefinitionNode):
            return None
        type_name = definition.name.value
        if type_name in {"Query", "Mutation", "Subscription"}:
            return None
        field_name = f"{type_name[0].lower()}{type_name[1:]}Count"
        return {field_name: lambda _root, _info: 7}


class EchoingPlugin(RegistryPlugin):
    """Hands every declaration, root containers included, back unchanged after contributions."""

    def __init__(self, name: str = "echo") -> None:
        super().__init__(name)

    def add_post_properties_to_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> TypeDefinitionNode:
        return definition
