"""Declaration store and the name-keyed merge engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from gqlregistry.domain.declarations import (
    DECLARATION_STORES,
    RESOLVER_STORES,
    Declaration,
    DeclarationCategory,
    ResolverMap,
    StoreKey,
    Variant,
    declaration_name,
    route_declaration,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def _empty_declarations() -> dict[StoreKey, list[Declaration]]:
    return {key: [] for key in DECLARATION_STORES}


def _empty_resolvers() -> dict[StoreKey, ResolverMap]:
    return {key: {} for key in RESOLVER_STORES}


def _resolver_key(category: DeclarationCategory, variant: Variant) -> StoreKey:
    if category is DeclarationCategory.DIRECTIVE:
        return (category, Variant.BASE)
    return (category, variant)


@dataclass(slots=True)
class DeclarationStore:
    """Ordered declaration sequences and resolver maps, keyed by category and variant.

    Every write goes through :meth:`upsert_declarations` or
    :meth:`upsert_resolvers`. Re-registering a declaration name evicts the
    previous entry and appends the new one, so an update moves the name to
    the tail of its sequence.
    """

    declarations: dict[StoreKey, list[Declaration]] = field(default_factory=_empty_declarations)
    resolvers: dict[StoreKey, ResolverMap] = field(default_factory=_empty_resolvers)
    internal_values: dict[str, Any] = field(default_factory=dict[str, Any])

    def declarations_for(
        self, category: DeclarationCategory, variant: Variant = Variant.BASE
    ) -> tuple[Declaration, ...]:
        return tuple(self.declarations.get((category, variant), ()))

    def names_for(
        self, category: DeclarationCategory, variant: Variant = Variant.BASE
    ) -> list[str]:
        return [declaration_name(node) for node in self.declarations_for(category, variant)]

    def upsert_declarations(
        self,
        category: DeclarationCategory,
        items: Iterable[object],
        *,
        variant: Variant = Variant.BASE,
    ) -> int:
        """Merge ``items`` into the store and return how many were accepted."""

        accepted = 0
        for item in items:
            key = route_declaration(category, variant, item)
            if key is None:
                continue
            _upsert(self.declarations[key], item)  # type: ignore[arg-type]
            accepted += 1
        return accepted

    def find_duplicates(
        self,
        category: DeclarationCategory,
        items: Iterable[object],
        *,
        variant: Variant = Variant.BASE,
    ) -> list[str]:
        """Return the names in ``items`` that are already present in their target store."""

        duplicates: list[str] = []
        for item in items:
            key = route_declaration(category, variant, item)
            if key is None:
                continue
            name = declaration_name(item)  # type: ignore[arg-type]
            if _index_of(self.declarations[key], name) is not None:
                duplicates.append(name)
        return duplicates

    def resolvers_for(
        self, category: DeclarationCategory, variant: Variant = Variant.BASE
    ) -> ResolverMap:
        return dict(self.resolvers[_resolver_key(category, variant)])

    def upsert_resolvers(
        self,
        category: DeclarationCategory,
        resolvers: Mapping[str, Any],
        *,
        variant: Variant = Variant.BASE,
    ) -> None:
        self.resolvers[_resolver_key(category, variant)].update(resolvers)

    def merge_internal_values(self, values: Mapping[str, Any]) -> None:
        self.internal_values.update(values)

    def clear(self) -> None:
        self.declarations = _empty_declarations()
        self.resolvers = _empty_resolvers()
        self.internal_values = {}


def _index_of(sequence: list[Declaration], name: str) -> int | None:
    for index, existing in enumerate(sequence):
        if declaration_name(existing) == name:
            return index
    return None


def _upsert(sequence: list[Declaration], item: Declaration) -> None:
    index = _index_of(sequence, declaration_name(item))
    if index is not None:
        del sequence[index]
    sequence.append(item)
