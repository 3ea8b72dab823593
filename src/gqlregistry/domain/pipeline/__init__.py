"""Plugin pipeline: ordered phases over the declaration store."""

from __future__ import annotations

from .context import PipelineContext
from .contributions import ContributionStep, StepKind, contribution_steps, steps_for
from .orchestrator import PipelinePhase, PluginPipeline
from .phases import (
    ContributionPhase,
    DirectivePhase,
    FinalizationPhase,
    InitialNotificationPhase,
    TypeRewritePhase,
    default_phases,
)

__all__ = [
    "ContributionPhase",
    "ContributionStep",
    "DirectivePhase",
    "FinalizationPhase",
    "InitialNotificationPhase",
    "PipelineContext",
    "PipelinePhase",
    "PluginPipeline",
    "StepKind",
    "TypeRewritePhase",
    "contribution_steps",
    "default_phases",
    "steps_for",
]
