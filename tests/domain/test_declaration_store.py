from __future__ import annotations

from graphql import parse

from gqlregistry.domain.declarations import DeclarationCategory, Variant
from gqlregistry.domain.store import DeclarationStore


def _definitions(sdl: str) -> list[object]:
    return list(parse(sdl).definitions)


def _fields(sdl: str) -> list[object]:
    return list(parse(sdl).definitions[0].fields)  # type: ignore[attr-defined]


def test_reregistering_keeps_a_single_entry_at_the_tail() -> None:
    store = DeclarationStore()
    store.upsert_declarations(DeclarationCategory.TYPE, _definitions("type A { x: Int }"))
    store.upsert_declarations(DeclarationCategory.TYPE, _definitions("type B { x: Int }"))
    store.upsert_declarations(DeclarationCategory.TYPE, _definitions("type A { y: Int }"))

    assert store.names_for(DeclarationCategory.TYPE) == ["B", "A"]
    (_, latest) = store.declarations_for(DeclarationCategory.TYPE)
    assert [f.name.value for f in latest.fields] == ["y"]  # type: ignore[union-attr]


def test_same_name_twice_then_new_name_appends_after_it() -> None:
    store = DeclarationStore()
    for sdl in ("type A { x: Int }", "type A { x: Int }", "type B { x: Int }"):
        store.upsert_declarations(DeclarationCategory.TYPE, _definitions(sdl))

    assert store.names_for(DeclarationCategory.TYPE) == ["A", "B"]


def test_mismatched_kinds_are_dropped() -> None:
    store = DeclarationStore()

    accepted = store.upsert_declarations(
        DeclarationCategory.TYPE,
        _definitions("type A { x: Int } directive @tag on FIELD_DEFINITION extend type B { y: Int }"),
    )

    assert accepted == 1
    assert store.names_for(DeclarationCategory.TYPE) == ["A"]
    assert store.names_for(DeclarationCategory.DIRECTIVE) == []
    assert store.names_for(DeclarationCategory.TYPE, Variant.EXTENSION) == []


def test_base_definitions_offered_as_extensions_land_in_the_base_store() -> None:
    store = DeclarationStore()

    store.upsert_declarations(
        DeclarationCategory.TYPE,
        _definitions("type Fresh { x: Int } extend type Book { rating: Int }"),
        variant=Variant.EXTENSION,
    )

    assert store.names_for(DeclarationCategory.TYPE) == ["Fresh"]
    assert store.names_for(DeclarationCategory.TYPE, Variant.EXTENSION) == ["Book"]


def test_field_categories_keep_base_and_extension_apart() -> None:
    store = DeclarationStore()

    store.upsert_declarations(DeclarationCategory.QUERY, _fields("type Query { a: Int b: Int }"))
    store.upsert_declarations(
        DeclarationCategory.QUERY,
        _fields("type Query { c: Int }"),
        variant=Variant.EXTENSION,
    )

    assert store.names_for(DeclarationCategory.QUERY) == ["a", "b"]
    assert store.names_for(DeclarationCategory.QUERY, Variant.EXTENSION) == ["c"]
    assert store.names_for(DeclarationCategory.MUTATION) == []


def test_find_duplicates_reports_present_names_only() -> None:
    store = DeclarationStore()
    store.upsert_declarations(DeclarationCategory.TYPE, _definitions("type A { x: Int }"))

    duplicates = store.find_duplicates(
        DeclarationCategory.TYPE, _definitions("type A { x: Int } type B { x: Int }")
    )

    assert duplicates == ["A"]


def test_resolvers_merge_shallowly_with_last_write_winning() -> None:
    store = DeclarationStore()
    first = object()
    second = object()

    store.upsert_resolvers(DeclarationCategory.QUERY, {"a": first, "b": first})
    store.upsert_resolvers(DeclarationCategory.QUERY, {"b": second})

    assert store.resolvers_for(DeclarationCategory.QUERY) == {"a": first, "b": second}
    assert store.resolvers_for(DeclarationCategory.QUERY, Variant.EXTENSION) == {}


def test_directive_resolvers_ignore_the_variant() -> None:
    store = DeclarationStore()

    store.upsert_resolvers(
        DeclarationCategory.DIRECTIVE, {"upper": len}, variant=Variant.EXTENSION
    )

    assert store.resolvers_for(DeclarationCategory.DIRECTIVE) == {"upper": len}


def test_clear_empties_every_store() -> None:
    store = DeclarationStore()
    store.upsert_declarations(DeclarationCategory.TYPE, _definitions("type A { x: Int }"))
    store.upsert_resolvers(DeclarationCategory.TYPE, {"A": {}})
    store.merge_internal_values({"JSON": object()})

    store.clear()

    assert store.names_for(DeclarationCategory.TYPE) == []
    assert store.resolvers_for(DeclarationCategory.TYPE) == {}
    assert store.internal_values == {}
