"""
Pipeline generator: emits one Go source file for a whole schema document.

1. Select the top-level schemas (ignored names dropped, "Response" suffix trimmed)
2. Emit every schema on a worker pool, each into its own buffer
3. Collect the global types registered while emitting nested schemas
4. Assemble prefix, registered types and top-level types in name order
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any

from .. import __version__
from ..cli_utils import reconstruct_command_line
from ..docread import DocCorrelator, ObjectTable
from ..errors import GenerationFailed, NameCollision
from ..heuristics import SnowflakeHeuristics
from ..logging import get_logger
from ..schema_model import SchemaDocument, SchemaNode, load_document
from ..utils import pascal_to_go
from .config import CodeGeneratorConfig
from .emitter import TypeEmitter
from .path import SchemaPath
from .scheduler import parallel_generate
from .state import ErrorAggregator, GenerationContext

logger = get_logger("generator")

RESPONSE_SUFFIX = "Response"


@dataclass
class GenerationResult:
    """Output of one generation run.

    The code is always produced, even when errors were recorded.
    """

    code: str
    errors: list[Exception] = field(default_factory=list)
    error_count: int = 0

    @property
    def ok(self) -> bool:
        return self.error_count == 0

    def raise_for_errors(self) -> None:
        if not self.ok:
            raise GenerationFailed(self.error_count, self.errors)


class PipelineGenerator:
    """
    Go type generator for OpenAPI component schemas.

    Args:
        document: Loaded schema document
        config: Generation options (defaults to CodeGeneratorConfig())
        doc_tables: Documentation tables used for field comments
        heuristics: Snowflake tables (defaults to the bundled ones)
    """

    def __init__(
        self,
        document: SchemaDocument,
        config: CodeGeneratorConfig | None = None,
        doc_tables: list[ObjectTable] | None = None,
        heuristics: SnowflakeHeuristics | None = None,
    ):
        self.document = document
        self.config = config or CodeGeneratorConfig()
        self.doc_tables = list(doc_tables or [])

        heuristics = heuristics or SnowflakeHeuristics.load_default()
        if self.config.snowflake_kinds or self.config.snowflake_fields:
            heuristics = heuristics.with_overrides(self.config.snowflake_kinds, self.config.snowflake_fields)
        self.heuristics = heuristics

    @classmethod
    def from_dict(cls, raw: dict[str, Any], config: CodeGeneratorConfig | None = None, **kwargs) -> PipelineGenerator:
        """Create a generator for a decoded OpenAPI document."""
        return cls(load_document(raw), config, **kwargs)

    def create_context(self) -> GenerationContext:
        """Fresh state for one run; runs never share registries or errors."""
        return GenerationContext(
            document=self.document,
            config=self.config,
            errors=ErrorAggregator(self.config.max_reported_errors),
            correlator=DocCorrelator(self.doc_tables, resolve=self.document.deref),
            heuristics=self.heuristics,
            schema_names=self.schema_names(),
        )

    def schema_names(self) -> dict[str, str]:
        """Schema name -> emitted name, for schemas that are renamed."""
        if not self.config.trim_response_suffix:
            return {}
        renames = {}
        for name in self.document.schemas:
            trimmed = name.removesuffix(RESPONSE_SUFFIX)
            if trimmed and trimmed != name and trimmed not in self.document.schemas:
                renames[name] = trimmed
        return renames

    def schema_entries(self, context: GenerationContext) -> list[tuple[str, SchemaNode]]:
        """Top-level (emitted name, node) pairs ordered by name."""
        ignored = set(self.config.ignore_schemas)
        entries = []
        seen: dict[str, str] = {}
        for name, node in sorted(self.document.schemas.items()):
            if name in ignored:
                logger.debug("ignoring schema %s", name)
                continue

            emitted = context.schema_names.get(name, name)
            go_name = pascal_to_go(emitted)
            if go_name in seen:
                context.errors.add(NameCollision(f"schemas {seen[go_name]!r} and {name!r} both map to {go_name}"))
                continue
            seen[go_name] = name
            entries.append((emitted, node))

        return sorted(entries, key=lambda entry: entry[0])

    def generate(self) -> GenerationResult:
        """Generate the Go file for every top-level schema."""
        context = self.create_context()
        entries = self.schema_entries(context)
        logger.info("generating %d schemas", len(entries))

        def generate_one(name: str, node: SchemaNode, out: io.StringIO) -> None:
            TypeEmitter(context, out).emit_named(SchemaPath.root(name, node))

        top_level = parallel_generate(entries, generate_one, context.errors, self.config.worker_count())
        top_level_names = {pascal_to_go(name) for name, _ in top_level}

        synthesized = []
        for name, text in context.registry.items():
            if name in top_level_names:
                context.errors.add(NameCollision(f"generated type {name} collides with a top-level schema"))
                continue
            synthesized.append(text)

        body = "".join(synthesized) + "".join(text for _, text in top_level)
        prefix = context.templates.prefix(
            package_name=self.config.package_name,
            imports=context.imports,
            generation_comment=self._generate_command_comment(),
        )
        code = prefix.rstrip("\n") + "\n\n" + body.rstrip("\n") + "\n"

        if not context.errors.ok:
            logger.error(context.errors.summary())

        return GenerationResult(code=code, errors=context.errors.errors, error_count=context.errors.count)

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        # Reconstruct command line using CLI utilities
        try:
            from ..openapi_to_code import openapi_to_code as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            # Fallback if Click command not available
            command_line = "openapi_to_code"

        return f"// Code generated by openapi_to_code v{__version__} : {command_line}. DO NOT EDIT."
