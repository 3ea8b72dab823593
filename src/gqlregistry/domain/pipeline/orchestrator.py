"""Phase-based orchestrator for the plugin pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from gqlregistry.domain.pipeline.context import PipelineContext

log = getLogger(__name__)


class PipelinePhase(Protocol):
    """One step of a plugin pipeline run."""

    name: str

    async def run(self, context: PipelineContext) -> None: ...


@dataclass(slots=True)
class PluginPipeline:
    """Await phases strictly one after another against a shared context.

    A phase never starts while an earlier one still has hooks outstanding.
    Pipelines are immutable; :meth:`with_phase` and :meth:`extend` return
    new instances.
    """

    phases: Sequence[PipelinePhase] = field(default_factory=tuple)

    def with_phase(self, phase: PipelinePhase) -> PluginPipeline:
        return PluginPipeline(phases=(*self.phases, phase))

    def extend(self, phases: Iterable[PipelinePhase]) -> PluginPipeline:
        return PluginPipeline(phases=(*self.phases, *phases))

    @property
    def phase_names(self) -> list[str]:
        return [phase.name for phase in self.phases]

    async def run(self, context: PipelineContext) -> PipelineContext:
        for phase in self.phases:
            log.debug("Running pipeline phase %s for %d plugins", phase.name, len(context.plugins))
            await phase.run(context)
        return context
