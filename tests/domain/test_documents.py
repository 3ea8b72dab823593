from __future__ import annotations

from graphql import ObjectTypeDefinitionNode, ObjectTypeExtensionNode, parse, print_ast

from gqlregistry.domain.declarations import DeclarationCategory, Variant
from gqlregistry.domain.documents import assemble_document, assemble_documents
from gqlregistry.domain.store import DeclarationStore


def _store() -> DeclarationStore:
    store = DeclarationStore()
    store.upsert_declarations(DeclarationCategory.TYPE, parse("type Book { id: ID! }").definitions)
    store.upsert_declarations(
        DeclarationCategory.DIRECTIVE, parse("directive @upper on FIELD_DEFINITION").definitions
    )
    store.upsert_declarations(
        DeclarationCategory.QUERY,
        parse("type Query { oneBook(id: ID!): Book }").definitions[0].fields,  # type: ignore[attr-defined]
    )
    return store


def test_base_document_orders_types_directives_then_containers() -> None:
    document = assemble_document(_store())

    names = [definition.name.value for definition in document.definitions]  # type: ignore[attr-defined]
    assert names == ["Book", "upper", "Query"]
    assert isinstance(document.definitions[-1], ObjectTypeDefinitionNode)


def test_empty_categories_emit_no_containers() -> None:
    store = DeclarationStore()
    store.upsert_declarations(DeclarationCategory.TYPE, parse("type Book { id: ID! }").definitions)

    documents = assemble_documents(store)

    for document in (documents.schema, documents.extensions):
        names = {definition.name.value for definition in document.definitions}  # type: ignore[attr-defined]
        assert names.isdisjoint({"Query", "Mutation", "Subscription"})


def test_extension_document_uses_extension_containers_and_shares_directives() -> None:
    store = _store()
    store.upsert_declarations(
        DeclarationCategory.MUTATION,
        parse("type Mutation { touch: Int }").definitions[0].fields,  # type: ignore[attr-defined]
        variant=Variant.EXTENSION,
    )

    document = assemble_document(store, Variant.EXTENSION)

    assert [type(definition) for definition in document.definitions][-1] is ObjectTypeExtensionNode
    printed = print_ast(document)
    assert "directive @upper on FIELD_DEFINITION" in printed
    assert "extend type Mutation" in printed
    assert "Book" not in printed


def test_documents_reflect_the_store_at_call_time() -> None:
    store = _store()
    before = assemble_documents(store)

    store.upsert_declarations(DeclarationCategory.TYPE, parse("type Author { id: ID! }").definitions)

    assert "Author" not in print_ast(before.schema)
    assert "Author" in print_ast(assemble_documents(store).schema)
