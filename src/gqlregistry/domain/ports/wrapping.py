"""Ports for adapting a foreign schema to the local naming conventions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graphql import DocumentNode, GraphQLSchema


@dataclass(slots=True, kw_only=True)
class ExecutionRequest:
    """A document to run against a remote source, already in remote names."""

    document: DocumentNode
    variables: Mapping[str, Any] = field(default_factory=dict[str, Any])
    operation_name: str | None = None
    context: object | None = None


# Returns the raw response: an ``ExecutionResult`` or a ``{"data", "errors"}`` mapping.
type Executor = Callable[[ExecutionRequest], Awaitable[object]]

type SchemaSupplier = Callable[[], Awaitable[GraphQLSchema | None]]


class RewriteRule:
    """Naming rule applied when a remote schema is wrapped.

    Every method defaults to the identity, so a rule only overrides the
    names it cares about. Rules are applied in sequence.
    """

    def rename_type(self, name: str) -> str:
        return name

    def rename_field(self, type_name: str, field_name: str) -> str:
        return field_name

    def rename_root_field(self, operation: str, field_name: str) -> str:
        return field_name


@runtime_checkable
class SchemaWrapper(Protocol):
    """Wrapping engine: foreign schema, executor and rules in, local schema out."""

    def wrap(
        self,
        schema: GraphQLSchema,
        executor: Executor,
        rewrite_rules: Sequence[RewriteRule] = (),
    ) -> GraphQLSchema: ...
