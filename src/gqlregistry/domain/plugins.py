"""Plugin protocol: one hook family per pipeline phase, every hook a no-op by default.

Any hook may be overridden with a plain or an ``async`` method. Returning
``None`` means "no contribution"; any other value, an empty list included, is
merged into the registry.
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from graphql import (
        DirectiveDefinitionNode,
        DocumentNode,
        FieldDefinitionNode,
        TypeDefinitionNode,
        TypeExtensionNode,
    )

    from gqlregistry.domain.declarations import DirectiveTransform
    from gqlregistry.domain.registry import SchemaRegistry


type HookResult[T] = T | None | Awaitable[T | None]
type TypeDeclarations = Sequence[TypeDefinitionNode | TypeExtensionNode]
type FieldDeclarations = Sequence[FieldDefinitionNode]
type Resolvers = Mapping[str, Any]


class LifecycleHooks:
    """Notifications that carry no contribution."""

    def set_initial_schema(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[None]:
        return None

    def schema_updated(self, schema: DocumentNode, extensions: DocumentNode) -> HookResult[None]:
        return None

    def validate_schema(self, schema: DocumentNode, extensions: DocumentNode) -> HookResult[None]:
        """Raise to reject the final documents."""

        return None

    def set_final_schema(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[None]:
        return None


class TypeRewriteHooks:
    """Replace a type-like declaration before or after the contribution phase."""

    def add_pre_properties_to_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[TypeDefinitionNode]:
        return None

    def add_post_properties_to_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[TypeDefinitionNode]:
        return None


class TypeContributionHooks:
    def add_type_definitions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[TypeDeclarations]:
        return None

    def add_type_definitions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[TypeDeclarations]:
        return None

    def add_type_definition_extensions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[TypeDeclarations]:
        return None

    def add_type_definition_extensions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[TypeDeclarations]:
        return None

    def add_type_resolvers(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_type_resolvers_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_type_resolver_extensions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_type_resolver_extensions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None


class QueryContributionHooks:
    def add_query_definitions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_query_definitions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_query_definition_extensions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_query_definition_extensions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_query_resolvers(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_query_resolvers_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_query_resolver_extensions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_query_resolver_extensions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None


class MutationContributionHooks:
    def add_mutation_definitions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_mutation_definitions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_mutation_definition_extensions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_mutation_definition_extensions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_mutation_resolvers(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_mutation_resolvers_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_mutation_resolver_extensions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_mutation_resolver_extensions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None


class SubscriptionContributionHooks:
    """Subscription resolvers map a field name to ``{"subscribe": ..., "resolve": ...}``."""

    def add_subscription_definitions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_subscription_definitions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_subscription_definition_extensions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_subscription_definition_extensions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[FieldDeclarations]:
        return None

    def add_subscription_resolvers(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_subscription_resolvers_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_subscription_resolver_extensions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None

    def add_subscription_resolver_extensions_for_type_definition(
        self, definition: TypeDefinitionNode, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Resolvers]:
        return None


class DirectiveHooks:
    def add_directive_definitions(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Sequence[DirectiveDefinitionNode]]:
        return None

    def add_directive_resolvers(
        self, schema: DocumentNode, extensions: DocumentNode
    ) -> HookResult[Mapping[str, DirectiveTransform]]:
        return None


class RegistryPlugin(
    LifecycleHooks,
    TypeRewriteHooks,
    TypeContributionHooks,
    QueryContributionHooks,
    MutationContributionHooks,
    SubscriptionContributionHooks,
    DirectiveHooks,
):
    """Base class for registry plugins.

    Subclasses set ``name`` (or pass it to the constructor) and override the
    hooks they need. The registry binds itself on registration.
    """

    name: str = ""

    def __init__(self, name: str | None = None) -> None:
        if name is not None:
            self.name = name
        self.registry: SchemaRegistry | None = None

    def get_registry(self) -> SchemaRegistry:
        if self.registry is None:
            raise RuntimeError(f"plugin {self.name!r} is not registered with a registry")
        return self.registry

    def clear(self) -> None:
        """Called when the owning registry is cleared."""

        return None
