"""Pipeline phase implementations, in execution order."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, cast

from graphql import ObjectTypeDefinitionNode

from gqlregistry.domain.declarations import ROOT_CATEGORIES, DeclarationCategory
from gqlregistry.domain.pipeline.context import PipelineContext, type_like_definitions
from gqlregistry.domain.pipeline.contributions import contribution_steps
from gqlregistry.domain.pipeline.orchestrator import PipelinePhase

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from gqlregistry.domain.declarations import DirectiveTransform

log = getLogger(__name__)


class InitialNotificationPhase(PipelinePhase):
    """Hand every plugin the documents as registered, before any contribution."""

    name: str = "initial-notification"

    async def run(self, context: PipelineContext) -> None:
        documents = context.documents()
        for plugin in context.plugins:
            await context.call(
                plugin, "set_initial_schema", documents.schema, documents.extensions
            )


class TypeRewritePhase(PipelinePhase):
    """Offer each type-like declaration to a rewrite hook and merge the replacements."""

    def __init__(self, hook: str, name: str) -> None:
        self.hook = hook
        self.name = name

    async def run(self, context: PipelineContext) -> None:
        for plugin in context.plugins:
            documents = context.documents()
            replacements: list[object] = []
            for definition in type_like_definitions(documents):
                replacement = await context.call(
                    plugin, self.hook, definition, documents.schema, documents.extensions
                )
                if replacement is not None:
                    replacements.append(replacement)
            if not replacements:
                continue
            context.contributions += len(replacements)
            _merge_replacements(context, replacements)
            await context.rebroadcast()


def _merge_replacements(context: PipelineContext, replacements: list[object]) -> None:
    """Merge rewritten declarations; a rewritten root container merges its fields."""

    types: list[object] = []
    for replacement in replacements:
        match replacement:
            case ObjectTypeDefinitionNode() if replacement.name.value in ROOT_CATEGORIES:
                context.store.upsert_declarations(
                    ROOT_CATEGORIES[replacement.name.value], replacement.fields or ()
                )
            case _:
                types.append(replacement)
    context.store.upsert_declarations(DeclarationCategory.TYPE, types)


class ContributionPhase(PipelinePhase):
    """Walk every plugin through the type, query, mutation and subscription steps."""

    name: str = "contribution"

    async def run(self, context: PipelineContext) -> None:
        steps = contribution_steps()
        for plugin in context.plugins:
            for step in steps:
                await step.apply(plugin, context)


class DirectivePhase(PipelinePhase):
    name: str = "directives"

    async def run(self, context: PipelineContext) -> None:
        for plugin in context.plugins:
            documents = context.documents()
            definitions = await context.call(
                plugin, "add_directive_definitions", documents.schema, documents.extensions
            )
            if definitions is not None:
                context.contributions += 1
                context.store.upsert_declarations(
                    DeclarationCategory.DIRECTIVE, cast("Iterable[object]", definitions)
                )
                await context.rebroadcast()

            documents = context.documents()
            transforms = await context.call(
                plugin, "add_directive_resolvers", documents.schema, documents.extensions
            )
            if transforms is not None:
                context.contributions += 1
                context.store.upsert_resolvers(
                    DeclarationCategory.DIRECTIVE,
                    cast("Mapping[str, DirectiveTransform]", transforms),
                )


class FinalizationPhase(PipelinePhase):
    """Validate and publish the final documents; a raising validator aborts the run."""

    name: str = "finalization"

    async def run(self, context: PipelineContext) -> None:
        documents = context.documents()
        for plugin in context.plugins:
            await context.call(plugin, "validate_schema", documents.schema, documents.extensions)
            await context.call(plugin, "set_final_schema", documents.schema, documents.extensions)
        log.debug(
            "Finalized %d type definitions for %d plugins",
            len(type_like_definitions(documents)),
            len(context.plugins),
        )


def default_phases() -> tuple[PipelinePhase, ...]:
    return (
        InitialNotificationPhase(),
        TypeRewritePhase("add_pre_properties_to_type_definition", name="pre-properties"),
        ContributionPhase(),
        DirectivePhase(),
        TypeRewritePhase("add_post_properties_to_type_definition", name="post-properties"),
        FinalizationPhase(),
    )
