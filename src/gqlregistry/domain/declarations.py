"""Declaration categories, variants and kind routing.

Declarations are graphql-core AST nodes. The node class is the tag: routing
an incoming node into a store is an exhaustive ``match`` over the accepted
node kinds for the requested category and variant.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from graphql import (
    DirectiveDefinitionNode,
    FieldDefinitionNode,
    GraphQLSchema,
    TypeDefinitionNode,
    TypeExtensionNode,
)


class DeclarationCategory(StrEnum):
    TYPE = "type"
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"
    DIRECTIVE = "directive"


class Variant(StrEnum):
    BASE = "base"
    EXTENSION = "extension"


type Declaration = (
    TypeDefinitionNode | TypeExtensionNode | FieldDefinitionNode | DirectiveDefinitionNode
)
type StoreKey = tuple[DeclarationCategory, Variant]
type ResolverMap = dict[str, Any]
type DirectiveTransform = Callable[[GraphQLSchema], GraphQLSchema]

FIELD_CATEGORIES: tuple[DeclarationCategory, ...] = (
    DeclarationCategory.QUERY,
    DeclarationCategory.MUTATION,
    DeclarationCategory.SUBSCRIPTION,
)

# Order in which the contribution phase walks the categories.
CONTRIBUTION_CATEGORIES: tuple[DeclarationCategory, ...] = (
    DeclarationCategory.TYPE,
    *FIELD_CATEGORIES,
)

ROOT_TYPE_NAMES: Mapping[DeclarationCategory, str] = {
    DeclarationCategory.QUERY: "Query",
    DeclarationCategory.MUTATION: "Mutation",
    DeclarationCategory.SUBSCRIPTION: "Subscription",
}

ROOT_CATEGORIES: Mapping[str, DeclarationCategory] = {
    name: category for category, name in ROOT_TYPE_NAMES.items()
}

DECLARATION_STORES: tuple[StoreKey, ...] = (
    (DeclarationCategory.TYPE, Variant.BASE),
    (DeclarationCategory.TYPE, Variant.EXTENSION),
    (DeclarationCategory.QUERY, Variant.BASE),
    (DeclarationCategory.QUERY, Variant.EXTENSION),
    (DeclarationCategory.MUTATION, Variant.BASE),
    (DeclarationCategory.MUTATION, Variant.EXTENSION),
    (DeclarationCategory.SUBSCRIPTION, Variant.BASE),
    (DeclarationCategory.SUBSCRIPTION, Variant.EXTENSION),
    (DeclarationCategory.DIRECTIVE, Variant.BASE),
)

RESOLVER_STORES: tuple[StoreKey, ...] = DECLARATION_STORES


def route_declaration(
    category: DeclarationCategory, variant: Variant, node: object
) -> StoreKey | None:
    """Return the store ``node`` belongs in, or ``None`` when its kind is not accepted.

    Base type definitions offered to the type-extension store are routed to
    the base type store.
    """

    match node:
        case TypeDefinitionNode() if category is DeclarationCategory.TYPE:
            return (DeclarationCategory.TYPE, Variant.BASE)
        case TypeExtensionNode() if (
            category is DeclarationCategory.TYPE and variant is Variant.EXTENSION
        ):
            return (DeclarationCategory.TYPE, Variant.EXTENSION)
        case FieldDefinitionNode() if category in FIELD_CATEGORIES:
            return (category, variant)
        case DirectiveDefinitionNode() if category is DeclarationCategory.DIRECTIVE:
            return (DeclarationCategory.DIRECTIVE, Variant.BASE)
        case _:
            return None


def declaration_name(node: Declaration) -> str:
    return node.name.value


def is_type_like(node: object) -> bool:
    """Type-like declarations are the ones per-declaration hooks are offered."""

    return isinstance(node, TypeDefinitionNode)
