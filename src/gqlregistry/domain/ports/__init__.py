"""Domain port definitions for adapters."""

from __future__ import annotations

from .compiling import SchemaCompiler
from .composing import SchemaComposer
from .wrapping import ExecutionRequest, Executor, RewriteRule, SchemaSupplier, SchemaWrapper

__all__ = [
    "ExecutionRequest",
    "Executor",
    "RewriteRule",
    "SchemaCompiler",
    "SchemaComposer",
    "SchemaSupplier",
    "SchemaWrapper",
]
