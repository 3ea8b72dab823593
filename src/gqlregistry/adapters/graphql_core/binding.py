"""Attach resolver maps to a schema built from SDL."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from graphql import (
    GraphQLEnumType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLUnionType,
)

from gqlregistry.domain.errors import ResolverBindingError

if TYPE_CHECKING:
    from graphql import GraphQLSchema

RESOLVE_TYPE_KEY = "__resolveType"
IS_TYPE_OF_KEY = "__isTypeOf"
_SCALAR_HOOKS = ("serialize", "parse_value", "parse_literal")


def bind_resolvers(schema: GraphQLSchema, resolvers: Mapping[str, Any]) -> GraphQLSchema:
    """Bind ``resolvers`` onto ``schema`` in place and return it.

    Top-level keys are type names. Object and interface entries map field
    names to a resolver, or to a ``{"subscribe": ..., "resolve": ...}``
    mapping. Scalars take a ``GraphQLScalarType`` or a mapping of its
    hooks; enums map value names to internal values.
    """

    for type_name, value in resolvers.items():
        named_type = schema.get_type(type_name)
        if named_type is None:
            raise ResolverBindingError(f"{type_name} defined in resolvers, but not in schema")
        match named_type:
            case GraphQLScalarType():
                _bind_scalar(named_type, value)
            case GraphQLEnumType():
                _bind_enum(named_type, _as_mapping(type_name, value))
            case GraphQLObjectType() | GraphQLInterfaceType():
                _bind_fields(named_type, _as_mapping(type_name, value))
            case GraphQLUnionType():
                _bind_union(named_type, _as_mapping(type_name, value))
            case _:
                raise ResolverBindingError(f"{type_name} cannot have resolvers")
    return schema


def _as_mapping(type_name: str, value: object) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ResolverBindingError(f"Resolvers for {type_name} must be a mapping")
    return value  # type: ignore[return-value]


def _bind_fields(
    named_type: GraphQLObjectType | GraphQLInterfaceType, resolvers: Mapping[str, Any]
) -> None:
    fields = named_type.fields
    for field_name, resolver in resolvers.items():
        if field_name == RESOLVE_TYPE_KEY and isinstance(named_type, GraphQLInterfaceType):
            named_type.resolve_type = resolver
            continue
        if field_name == IS_TYPE_OF_KEY and isinstance(named_type, GraphQLObjectType):
            named_type.is_type_of = resolver
            continue
        field = fields.get(field_name)
        if field is None:
            raise ResolverBindingError(
                f"{named_type.name}.{field_name} defined in resolvers, but not in schema"
            )
        if isinstance(resolver, Mapping):
            field.subscribe = resolver.get("subscribe", field.subscribe)
            field.resolve = resolver.get("resolve", field.resolve)
        elif callable(resolver):
            field.resolve = resolver
        else:
            raise ResolverBindingError(
                f"Resolver for {named_type.name}.{field_name} must be callable"
            )


def _bind_union(named_type: GraphQLUnionType, resolvers: Mapping[str, Any]) -> None:
    for key, resolver in resolvers.items():
        if key != RESOLVE_TYPE_KEY:
            raise ResolverBindingError(
                f"{named_type.name}.{key} defined in resolvers, but unions have no fields"
            )
        named_type.resolve_type = resolver


def _bind_scalar(named_type: GraphQLScalarType, value: object) -> None:
    if isinstance(value, GraphQLScalarType):
        hooks: Mapping[str, Any] = scalar_overrides(value)
        if value.specified_by_url is not None:
            named_type.specified_by_url = value.specified_by_url
    else:
        hooks = _as_mapping(named_type.name, value)
    for hook, function in hooks.items():
        if hook not in _SCALAR_HOOKS:
            raise ResolverBindingError(f"Unknown scalar hook {named_type.name}.{hook}")
        setattr(named_type, hook, _ensure_callable(named_type.name, hook, function))


def _bind_enum(named_type: GraphQLEnumType, values: Mapping[str, Any]) -> None:
    for value_name, internal in values.items():
        enum_value = named_type.values.get(value_name)
        if enum_value is None:
            raise ResolverBindingError(
                f"{named_type.name}.{value_name} defined in resolvers, but not in schema"
            )
        enum_value.value = internal
    # internal value lookup is cached on first use
    named_type.__dict__.pop("_value_lookup", None)


def _ensure_callable(
    type_name: str, hook: str, function: object
) -> Callable[..., Any]:
    if not callable(function):
        raise ResolverBindingError(f"Scalar hook {type_name}.{hook} must be callable")
    return function


def scalar_overrides(scalar: GraphQLScalarType) -> dict[str, Callable[..., Any]]:
    """Return the hooks ``scalar`` was constructed with, leaving out the class defaults."""

    return {hook: scalar.__dict__[hook] for hook in _SCALAR_HOOKS if hook in scalar.__dict__}
