"""
Pipeline - OpenAPI schemas to Go types.

1. Phase 1 (Loader): Decode the document into SchemaNode trees
2. Phase 2 (Emitter): Emit every top-level schema in parallel, registering
   global types (tagged unions, nested constant sets) on the way
3. Phase 3 (Assembly): Prefix, registered types and top-level types in name order
"""

from __future__ import annotations

from .config import CodeGeneratorConfig
from .emitter import TypeEmitter
from .generator import GenerationResult, PipelineGenerator
from .path import SchemaPath
from .scheduler import parallel_generate
from .state import ErrorAggregator, GenerationContext, NameRegistry

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "CodeGeneratorConfig",
    "TypeEmitter",
    "SchemaPath",
    "parallel_generate",
    "ErrorAggregator",
    "GenerationContext",
    "NameRegistry",
]
