"""Contribution step table for the per-category phase.

Each category contributes through four steps, always in this order: base
definitions, extension definitions, base resolvers, extension resolvers. A
step offers the plugin its global hook first and then its per-declaration
hook once for every type-like declaration of the base document.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, cast

from gqlregistry.domain.declarations import CONTRIBUTION_CATEGORIES, DeclarationCategory, Variant
from gqlregistry.domain.pipeline.context import type_like_definitions

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from gqlregistry.domain.pipeline.context import PipelineContext
    from gqlregistry.domain.plugins import RegistryPlugin


class StepKind(StrEnum):
    DEFINITIONS = "definition"
    RESOLVERS = "resolver"


@dataclass(frozen=True, slots=True)
class ContributionStep:
    category: DeclarationCategory
    kind: StepKind
    variant: Variant

    @property
    def global_hook(self) -> str:
        if self.variant is Variant.EXTENSION:
            return f"add_{self.category}_{self.kind}_extensions"
        return f"add_{self.category}_{self.kind}s"

    @property
    def per_declaration_hook(self) -> str:
        return f"{self.global_hook}_for_type_definition"

    async def apply(self, plugin: RegistryPlugin, context: PipelineContext) -> bool:
        """Run both hooks of this step for ``plugin``; return whether anything was merged."""

        # global and per-declaration hooks share this snapshot; no rebroadcast between them
        documents = context.documents()
        merged = False

        result = await context.call(
            plugin, self.global_hook, documents.schema, documents.extensions
        )
        if result is not None:
            self._merge(context, result)
            merged = True

        for definition in type_like_definitions(documents):
            result = await context.call(
                plugin,
                self.per_declaration_hook,
                definition,
                documents.schema,
                documents.extensions,
            )
            if result is not None:
                self._merge(context, result)
                merged = True

        if merged and self.kind is StepKind.DEFINITIONS:
            await context.rebroadcast()
        return merged

    def _merge(self, context: PipelineContext, result: object) -> None:
        context.contributions += 1
        if self.kind is StepKind.DEFINITIONS:
            context.store.upsert_declarations(
                self.category, cast("Iterable[object]", result), variant=self.variant
            )
        else:
            context.store.upsert_resolvers(
                self.category, cast("Mapping[str, Any]", result), variant=self.variant
            )


_STEP_ORDER: tuple[tuple[StepKind, Variant], ...] = (
    (StepKind.DEFINITIONS, Variant.BASE),
    (StepKind.DEFINITIONS, Variant.EXTENSION),
    (StepKind.RESOLVERS, Variant.BASE),
    (StepKind.RESOLVERS, Variant.EXTENSION),
)

_REGISTRY: dict[DeclarationCategory, tuple[ContributionStep, ...]] = {
    category: tuple(
        ContributionStep(category=category, kind=kind, variant=variant)
        for kind, variant in _STEP_ORDER
    )
    for category in CONTRIBUTION_CATEGORIES
}


def steps_for(category: DeclarationCategory) -> tuple[ContributionStep, ...]:
    try:
        return _REGISTRY[category]
    except KeyError as exc:
        raise RuntimeError(f"No contribution steps registered for {category}") from exc


def contribution_steps() -> tuple[ContributionStep, ...]:
    """All steps in execution order."""

    return tuple(step for category in CONTRIBUTION_CATEGORIES for step in steps_for(category))
