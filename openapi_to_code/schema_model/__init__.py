"""
Schema document model consumed by the generator.
"""

from __future__ import annotations

from .loader import SchemaLoader, load_document
from .nodes import RESPONSES_PREFIX, SCHEMAS_PREFIX, SchemaDocument, SchemaNode
from .primary import PrimaryType, PrimitiveKind, extract_primary_type

__all__ = [
    "PrimaryType",
    "PrimitiveKind",
    "extract_primary_type",
    "SchemaNode",
    "SchemaDocument",
    "SchemaLoader",
    "load_document",
    "SCHEMAS_PREFIX",
    "RESPONSES_PREFIX",
]
