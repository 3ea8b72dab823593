from __future__ import annotations

from typing import Any

import pytest
from graphql import GraphQLScalarType, build_schema, graphql_sync

from gqlregistry.adapters.graphql_core import bind_resolvers
from gqlregistry.domain.errors import ResolverBindingError

SDL = """
scalar Upper

enum Color { RED GREEN }

interface Named { name: String! }

type Book implements Named { name: String! }

type Query {
  shout(word: Upper!): Upper
  favorite: Color
  isRed(color: Color!): Boolean
  named: Named
}
"""


def test_field_resolvers_are_bound() -> None:
    schema = build_schema(SDL)

    bind_resolvers(schema, {"Query": {"named": lambda *_: {"kind": "book", "name": "Kindred"}}})
    bind_resolvers(schema, {"Named": {"__resolveType": lambda value, *_: "Book"}})

    result = graphql_sync(schema, "{ named { name __typename } }")
    assert result.data == {"named": {"name": "Kindred", "__typename": "Book"}}


def test_enum_internal_values_round_trip() -> None:
    schema = build_schema(SDL)
    received: list[str] = []

    def is_red(_root: Any, _info: Any, color: str) -> bool:
        received.append(color)
        return color == "#f00"

    bind_resolvers(
        schema,
        {
            "Color": {"RED": "#f00", "GREEN": "#0f0"},
            "Query": {"favorite": lambda *_: "#0f0", "isRed": is_red},
        },
    )

    result = graphql_sync(schema, "{ favorite isRed(color: RED) }")
    assert result.data == {"favorite": "GREEN", "isRed": True}
    assert received == ["#f00"]


def test_scalar_hooks_from_mapping() -> None:
    schema = build_schema(SDL)

    bind_resolvers(
        schema,
        {
            "Upper": {"serialize": lambda value: str(value).upper()},
            "Query": {"shout": lambda _root, _info, word: word},
        },
    )

    assert graphql_sync(schema, '{ shout(word: "hi") }').data == {"shout": "HI"}


def test_scalar_hooks_from_scalar_type() -> None:
    schema = build_schema(SDL)
    upper = GraphQLScalarType("Upper", serialize=lambda value: str(value).upper())

    bind_resolvers(schema, {"Upper": upper, "Query": {"shout": lambda *_, word: word}})

    assert graphql_sync(schema, '{ shout(word: "hey") }').data == {"shout": "HEY"}


@pytest.mark.parametrize(
    ("resolvers", "message"),
    [
        ({"Missing": {}}, "Missing defined in resolvers, but not in schema"),
        ({"Query": {"missing": lambda *_: None}}, "Query.missing defined in resolvers"),
        ({"Query": lambda *_: None}, "must be a mapping"),
        ({"Query": {"favorite": "not callable"}}, "must be callable"),
        ({"Color": {"BLUE": "#00f"}}, "Color.BLUE defined in resolvers"),
        ({"Upper": {"coerce": str}}, "Unknown scalar hook Upper.coerce"),
    ],
)
def test_invalid_resolver_maps_raise(resolvers: dict[str, Any], message: str) -> None:
    schema = build_schema(SDL)

    with pytest.raises(ResolverBindingError, match=message):
        bind_resolvers(schema, resolvers)
