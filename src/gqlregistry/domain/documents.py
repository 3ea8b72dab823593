"""Synthesis of the base and extension documents from the declaration store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from graphql import (
    DefinitionNode,
    DocumentNode,
    NameNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
)

from gqlregistry.domain.declarations import (
    FIELD_CATEGORIES,
    ROOT_TYPE_NAMES,
    DeclarationCategory,
    Variant,
)

if TYPE_CHECKING:
    from graphql import FieldDefinitionNode

    from gqlregistry.domain.store import DeclarationStore


@dataclass(frozen=True, slots=True)
class SchemaDocuments:
    """The two documents plugins observe at every hook."""

    schema: DocumentNode
    extensions: DocumentNode


def assemble_document(store: DeclarationStore, variant: Variant = Variant.BASE) -> DocumentNode:
    """Concatenate types, directives and the operation containers for ``variant``.

    Directive definitions appear in both documents. A container is only
    emitted when its category holds at least one field.
    """

    definitions: list[DefinitionNode] = []
    definitions.extend(store.declarations_for(DeclarationCategory.TYPE, variant))
    definitions.extend(store.declarations_for(DeclarationCategory.DIRECTIVE))
    for category in FIELD_CATEGORIES:
        fields = store.declarations_for(category, variant)
        if not fields:
            continue
        definitions.append(
            _container(ROOT_TYPE_NAMES[category], fields, variant)  # type: ignore[arg-type]
        )
    return DocumentNode(definitions=tuple(definitions))


def assemble_documents(store: DeclarationStore) -> SchemaDocuments:
    return SchemaDocuments(
        schema=assemble_document(store, Variant.BASE),
        extensions=assemble_document(store, Variant.EXTENSION),
    )


def _container(
    name: str, fields: tuple[FieldDefinitionNode, ...], variant: Variant
) -> ObjectTypeDefinitionNode | ObjectTypeExtensionNode:
    if variant is Variant.EXTENSION:
        return ObjectTypeExtensionNode(
            name=NameNode(value=name),
            interfaces=(),
            directives=(),
            fields=fields,
        )
    return ObjectTypeDefinitionNode(
        description=None,
        name=NameNode(value=name),
        interfaces=(),
        directives=(),
        fields=fields,
    )
