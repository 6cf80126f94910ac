"""OpenAPI to Code Generator

A Python package for generating Go types from the component schemas of an
OpenAPI document. Snowflake IDs are typed by entity, and fields can be
documented from API documentation tables.
"""

__version__ = "1.0.0"

from .errors import GenerationError, GenerationFailed, SchemaLoadError  # noqa: E402
from .pipeline import CodeGeneratorConfig, GenerationResult, PipelineGenerator  # noqa: E402
from .schema_model import SchemaDocument, load_document  # noqa: E402

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "CodeGeneratorConfig",
    "GenerationError",
    "GenerationFailed",
    "SchemaLoadError",
    "SchemaDocument",
    "load_document",
]
