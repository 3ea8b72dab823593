"""The schema registry aggregate: registration, views and the finalization entry points."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any

from graphql import DocumentNode, ObjectTypeDefinitionNode, ObjectTypeExtensionNode, parse

from gqlregistry.config import RegistryConfig
from gqlregistry.domain.declarations import (
    FIELD_CATEGORIES,
    ROOT_TYPE_NAMES,
    DeclarationCategory,
    DirectiveTransform,
    ResolverMap,
    Variant,
)
from gqlregistry.domain.documents import assemble_document
from gqlregistry.domain.errors import PluginNotFoundError
from gqlregistry.domain.pipeline import PipelineContext, PluginPipeline, default_phases
from gqlregistry.domain.remote import RemoteSchemaDescriptor, RemoteSourceRegistry
from gqlregistry.domain.store import DeclarationStore

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from graphql import FieldDefinitionNode, GraphQLSchema

    from gqlregistry.domain.pipeline import PipelinePhase
    from gqlregistry.domain.plugins import RegistryPlugin
    from gqlregistry.domain.ports import (
        Executor,
        RewriteRule,
        SchemaCompiler,
        SchemaComposer,
        SchemaSupplier,
        SchemaWrapper,
    )

log = getLogger(__name__)

type Source = DocumentNode | str
type SetupFunction = Callable[[SchemaRegistry], None | Awaitable[None]]


@dataclass(slots=True)
class PipelineRunState:
    """One-shot flags and the cached executable schema.

    Flags are only set once their step has completed without raising, and
    only :meth:`reset` clears them.
    """

    setup_executed: bool = False
    pipeline_processed: bool = False
    executable_schema: GraphQLSchema | None = None

    def reset(self) -> None:
        self.setup_executed = False
        self.pipeline_processed = False
        self.executable_schema = None


class SchemaRegistry:
    """Collects declarations, runs the plugin pipeline once and builds schemas.

    Registration is synchronous and cheap: declarations go straight through
    the merge engine into the store. The ``build_*`` coroutines run the setup
    functions and the plugin pipeline on first use, then hand the assembled
    documents to the compile, wrap and compose collaborators.
    """

    def __init__(
        self,
        *,
        compiler: SchemaCompiler,
        wrapper: SchemaWrapper,
        composer: SchemaComposer,
        config: RegistryConfig | None = None,
        rewrite_rules: Sequence[RewriteRule] = (),
        phases: Sequence[PipelinePhase] | None = None,
    ) -> None:
        self.compiler = compiler
        self.wrapper = wrapper
        self.composer = composer
        self.config = config or RegistryConfig()
        self.rewrite_rules = tuple(rewrite_rules)
        self.pipeline = PluginPipeline(phases=default_phases() if phases is None else phases)
        self.store = DeclarationStore()
        self.remote_sources = RemoteSourceRegistry()
        self.plugins: list[RegistryPlugin] = []
        self.setup_functions: list[SetupFunction] = []
        self.data_sources: dict[str, object] = {}
        self.state = PipelineRunState()

    # Registration

    def register_type(
        self,
        type_definitions: Source | None = None,
        *,
        query_definitions: Source | None = None,
        mutation_definitions: Source | None = None,
        subscription_definitions: Source | None = None,
        type_resolvers: Mapping[str, Any] | None = None,
        query_resolvers: Mapping[str, Any] | None = None,
        mutation_resolvers: Mapping[str, Any] | None = None,
        subscription_resolvers: Mapping[str, Any] | None = None,
    ) -> None:
        """Register base types, operation fields and their resolvers.

        Operation fields are read from the ``Query``, ``Mutation`` and
        ``Subscription`` object types of the corresponding documents.
        """

        self._register(
            Variant.BASE,
            type_definitions,
            {
                DeclarationCategory.QUERY: query_definitions,
                DeclarationCategory.MUTATION: mutation_definitions,
                DeclarationCategory.SUBSCRIPTION: subscription_definitions,
            },
            {
                DeclarationCategory.TYPE: type_resolvers,
                DeclarationCategory.QUERY: query_resolvers,
                DeclarationCategory.MUTATION: mutation_resolvers,
                DeclarationCategory.SUBSCRIPTION: subscription_resolvers,
            },
        )

    def register_type_extension(
        self,
        type_definitions: Source | None = None,
        *,
        query_definitions: Source | None = None,
        mutation_definitions: Source | None = None,
        subscription_definitions: Source | None = None,
        type_resolvers: Mapping[str, Any] | None = None,
        query_resolvers: Mapping[str, Any] | None = None,
        mutation_resolvers: Mapping[str, Any] | None = None,
        subscription_resolvers: Mapping[str, Any] | None = None,
    ) -> None:
        """Register extension declarations, layered on top at composition time.

        Base type definitions found in ``type_definitions`` are merged into the
        base type store. Extensions are never checked for duplicates.
        """

        self._register(
            Variant.EXTENSION,
            type_definitions,
            {
                DeclarationCategory.QUERY: query_definitions,
                DeclarationCategory.MUTATION: mutation_definitions,
                DeclarationCategory.SUBSCRIPTION: subscription_definitions,
            },
            {
                DeclarationCategory.TYPE: type_resolvers,
                DeclarationCategory.QUERY: query_resolvers,
                DeclarationCategory.MUTATION: mutation_resolvers,
                DeclarationCategory.SUBSCRIPTION: subscription_resolvers,
            },
        )

    def register_directives(
        self,
        directive_definitions: Source | None = None,
        directive_resolvers: Mapping[str, DirectiveTransform] | None = None,
    ) -> None:
        if directive_definitions is not None:
            definitions = _parse(directive_definitions).definitions
            self._warn_on_duplicates(DeclarationCategory.DIRECTIVE, definitions)
            self.store.upsert_declarations(DeclarationCategory.DIRECTIVE, definitions)
        if directive_resolvers:
            self.store.upsert_resolvers(DeclarationCategory.DIRECTIVE, directive_resolvers)

    def register_internal_values(self, internal_values: Mapping[str, Any]) -> None:
        self.store.merge_internal_values(internal_values)

    def register_setup_function(self, function: SetupFunction) -> None:
        self.setup_functions.append(function)

    def register_plugin(self, plugin: RegistryPlugin) -> bool:
        """Register ``plugin`` unless a plugin with the same name is already present."""

        if any(existing.name == plugin.name for existing in self.plugins):
            log.debug("Plugin %s already registered; ignoring", plugin.name)
            return False
        plugin.registry = self
        self.plugins.append(plugin)
        return True

    def register_remote_schema(
        self,
        name: str,
        *,
        executor: Executor,
        schema: GraphQLSchema | None = None,
        schema_supplier: SchemaSupplier | None = None,
        rewrite_rules: Sequence[RewriteRule] = (),
    ) -> bool:
        return self.remote_sources.register(
            RemoteSchemaDescriptor(
                name=name,
                executor=executor,
                schema=schema,
                schema_supplier=schema_supplier,
                rewrite_rules=tuple(rewrite_rules),
            )
        )

    def register_data_source(self, name: str, data_source: object) -> None:
        self.data_sources[name] = data_source

    # Lookups

    def get_plugin(self, name: str) -> RegistryPlugin:
        for plugin in self.plugins:
            if plugin.name == name:
                return plugin
        raise PluginNotFoundError(name)

    def get_remote_schema(self, name: str) -> RemoteSchemaDescriptor | None:
        return self.remote_sources.get(name)

    def get_executor(self, name: str) -> Executor | None:
        return self.remote_sources.executor_for(name)

    def get_data_source(self, name: str) -> object | None:
        return self.data_sources.get(name)

    # Views

    def definitions_document(self) -> DocumentNode:
        return assemble_document(self.store, Variant.BASE)

    def extension_definitions_document(self) -> DocumentNode:
        return assemble_document(self.store, Variant.EXTENSION)

    def get_resolvers(self) -> ResolverMap:
        resolvers: ResolverMap = {
            **self.store.internal_values,
            **self.store.resolvers_for(DeclarationCategory.TYPE),
        }
        resolvers.update(self._root_resolvers(Variant.BASE))
        return resolvers

    def get_extension_resolvers(self) -> ResolverMap:
        resolvers = self.store.resolvers_for(DeclarationCategory.TYPE, Variant.EXTENSION)
        resolvers.update(self._root_resolvers(Variant.EXTENSION))
        return resolvers

    def get_directive_resolvers(self) -> dict[str, DirectiveTransform]:
        return self.store.resolvers_for(DeclarationCategory.DIRECTIVE)

    # Lifecycle

    async def process_plugins(self) -> PipelineContext | None:
        """Run the plugin pipeline unless it already completed.

        Returns the run's context, or ``None`` when nothing ran.
        """

        if self.state.pipeline_processed:
            return None
        context = PipelineContext(store=self.store, plugins=tuple(self.plugins))
        await self.pipeline.run(context)
        self.state.pipeline_processed = True
        log.info(
            "Processed %d plugins: hook_calls=%d, contributions=%d, rebroadcasts=%d",
            len(self.plugins),
            context.hook_calls,
            context.contributions,
            context.rebroadcasts,
        )
        return context

    def clear(self) -> None:
        """Drop every declaration, resolver, remote source and data source.

        Plugins and setup functions stay registered; each plugin's ``clear``
        hook is called.
        """

        self.store.clear()
        self.remote_sources.clear()
        self.data_sources.clear()
        self.state.reset()
        for plugin in self.plugins:
            plugin.clear()

    # Finalization

    async def build_schema(self) -> GraphQLSchema:
        """Compile the base declarations alone, without resolvers or remote sources."""

        await self._prepare()
        return self.compiler.compile(self.definitions_document())

    async def build_local_schema(self) -> GraphQLSchema:
        """Compile the local declarations with resolvers and directive transforms applied."""

        await self._prepare()
        schema = self.compiler.compile(self.definitions_document(), self.get_resolvers())
        return self._apply_directive_transforms(schema)

    async def build_gateway_schema(self) -> GraphQLSchema:
        """Compose the local schema with every remote source. Never cached."""

        await self._prepare()
        return await self._compose(extension_resolvers=None)

    async def build_executable_schema(self) -> GraphQLSchema:
        """Compose, bind extension resolvers and apply directive transforms.

        The result is cached after the first success when caching is enabled.
        """

        await self._prepare()
        if self.state.executable_schema is not None:
            return self.state.executable_schema

        schema = await self._compose(extension_resolvers=self.get_extension_resolvers())
        schema = self._apply_directive_transforms(schema)
        if self.config.cache_executable:
            self.state.executable_schema = schema
        return schema

    async def _prepare(self) -> None:
        await self._run_setup()
        await self.process_plugins()

    async def _run_setup(self) -> None:
        if self.state.setup_executed:
            return
        for function in self.setup_functions:
            result = function(self)
            if inspect.isawaitable(result):
                await result
        self.state.setup_executed = True

    async def _compose(self, *, extension_resolvers: ResolverMap | None) -> GraphQLSchema:
        """Compose the local declarations with every remote source.

        Without local query fields the local part cannot compile on its own, so
        its declarations and resolvers are layered on like extensions instead.
        """

        definitions = self.definitions_document()
        extensions = self.extension_definitions_document()
        if self.store.declarations_for(DeclarationCategory.QUERY):
            local = [self.compiler.compile(definitions, self.get_resolvers())]
            type_defs = extensions
            resolvers = extension_resolvers
        else:
            local = []
            type_defs = DocumentNode(
                definitions=(*definitions.definitions, *extensions.definitions)
            )
            resolvers = _merge_resolver_maps(self.get_resolvers(), extension_resolvers or {})

        remotes = await self.remote_sources.resolve_all(self.wrapper, self.rewrite_rules)
        log.debug(
            "Composing %d local and %d remote schemas", len(local), len(remotes)
        )
        return self.composer.compose(
            [*local, *remotes], type_defs=type_defs, resolvers=resolvers
        )

    def _apply_directive_transforms(self, schema: GraphQLSchema) -> GraphQLSchema:
        for transform in self.get_directive_resolvers().values():
            schema = transform(schema)
        return schema

    def _register(
        self,
        variant: Variant,
        type_definitions: Source | None,
        field_sources: Mapping[DeclarationCategory, Source | None],
        resolvers: Mapping[DeclarationCategory, Mapping[str, Any] | None],
    ) -> None:
        if type_definitions is not None:
            definitions = _parse(type_definitions).definitions
            if variant is Variant.BASE:
                self._warn_on_duplicates(DeclarationCategory.TYPE, definitions)
            self.store.upsert_declarations(DeclarationCategory.TYPE, definitions, variant=variant)

        for category, source in field_sources.items():
            if source is None:
                continue
            fields = _root_fields(_parse(source), ROOT_TYPE_NAMES[category])
            if variant is Variant.BASE:
                self._warn_on_duplicates(category, fields)
            self.store.upsert_declarations(category, fields, variant=variant)

        for category, mapping in resolvers.items():
            if mapping:
                self.store.upsert_resolvers(category, mapping, variant=variant)

    def _warn_on_duplicates(
        self, category: DeclarationCategory, definitions: Iterable[object]
    ) -> None:
        if not self.config.warn_on_duplicates:
            return
        for name in self.store.find_duplicates(category, definitions):
            log.warning(
                "Duplicate %s declaration %s; the latest registration replaces it",
                category,
                name,
            )

    def _root_resolvers(self, variant: Variant) -> ResolverMap:
        roots: ResolverMap = {}
        for category in FIELD_CATEGORIES:
            mapping = self.store.resolvers_for(category, variant)
            if mapping:
                roots[ROOT_TYPE_NAMES[category]] = mapping
        return roots


def _merge_resolver_maps(base: ResolverMap, layered: Mapping[str, Any]) -> ResolverMap:
    merged = dict(base)
    for type_name, value in layered.items():
        existing = merged.get(type_name)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[type_name] = {**existing, **value}
        else:
            merged[type_name] = value
    return merged


def _parse(source: Source) -> DocumentNode:
    if isinstance(source, DocumentNode):
        return source
    return parse(source)


def _root_fields(document: DocumentNode, root_name: str) -> tuple[FieldDefinitionNode, ...]:
    for definition in document.definitions:
        match definition:
            case ObjectTypeDefinitionNode() | ObjectTypeExtensionNode() if (
                definition.name.value == root_name
            ):
                return tuple(definition.fields or ())
            case _:
                continue
    return ()
