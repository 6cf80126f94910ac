"""
Shared, lock-guarded state of a single generation run.

Every worker of a run shares one `GenerationContext`; the registry and the
error aggregator are the only mutable pieces and each has its own lock.
"""

from __future__ import annotations

import difflib
import threading
from dataclasses import dataclass, field

from ..docread import DocCorrelator
from ..errors import NameCollision
from ..heuristics import SnowflakeHeuristics
from ..logging import get_logger
from ..schema_model import SchemaDocument
from ..utils import pascal_to_go
from .config import CodeGeneratorConfig
from .go_templates import GoTemplates

logger = get_logger("state")

DEFAULT_ERROR_LIMIT = 10


class ErrorAggregator:
    """Collects errors from all workers.

    Only the first `limit` errors are retained, but every error is counted.
    """

    def __init__(self, limit: int = DEFAULT_ERROR_LIMIT):
        self.limit = limit
        self._lock = threading.Lock()
        self._errors: list[Exception] = []
        self._count = 0

    def add(self, error: Exception) -> None:
        logger.error("generate error occurred: %s", error)
        with self._lock:
            self._count += 1
            if len(self._errors) < self.limit:
                self._errors.append(error)

    @property
    def errors(self) -> list[Exception]:
        with self._lock:
            return list(self._errors)

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def ok(self) -> bool:
        return self.count == 0

    def summary(self) -> str:
        errors = self.errors
        lines = [f"encountered {self.count} errors such as:"]
        lines.extend(f"  - {error}" for error in errors)
        return "\n".join(lines)


class NameRegistry:
    """Global-scope types generated while emitting nested schemas.

    Registering a name twice with the same text is a no-op. A different text
    is a collision: it is reported and the first text is kept.
    """

    def __init__(self, errors: ErrorAggregator):
        self._errors = errors
        self._lock = threading.Lock()
        self._generated: dict[str, str] = {}

    def register(self, name: str, text: str) -> bool:
        """Store text under name; returns False if the name collided."""
        with self._lock:
            existing = self._generated.setdefault(name, text)

        if existing == text:
            return True

        diff = "".join(
            difflib.unified_diff(
                existing.splitlines(keepends=True),
                text.splitlines(keepends=True),
                fromfile=f"{name} (kept)",
                tofile=f"{name} (discarded)",
            )
        )
        logger.error("duplicate name generated in the global scope: %s\n%s", name, diff)
        self._errors.add(NameCollision(f"duplicate name generated in the global scope: {name}"))
        return False

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._generated.get(name)

    def discard(self, name: str) -> None:
        with self._lock:
            self._generated.pop(name, None)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._generated)

    def items(self) -> list[tuple[str, str]]:
        """Registered (name, text) pairs ordered by name."""
        with self._lock:
            return sorted(self._generated.items())

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._generated

    def __len__(self) -> int:
        with self._lock:
            return len(self._generated)


@dataclass
class GenerationContext:
    """Everything a `TypeEmitter` needs, created once per run."""

    document: SchemaDocument
    config: CodeGeneratorConfig = field(default_factory=CodeGeneratorConfig)
    errors: ErrorAggregator = field(default_factory=ErrorAggregator)
    registry: NameRegistry | None = None
    correlator: DocCorrelator | None = None
    heuristics: SnowflakeHeuristics | None = None
    templates: GoTemplates | None = None

    # Schema name -> emitted type name, for renamed top-level schemas
    schema_names: dict[str, str] = field(default_factory=dict)

    _imports: set[str] = field(default_factory=set, init=False, repr=False)
    _imports_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self):
        if self.registry is None:
            self.registry = NameRegistry(self.errors)
        if self.heuristics is None:
            self.heuristics = SnowflakeHeuristics.load_default()
        if self.correlator is None:
            self.correlator = DocCorrelator([], resolve=self.document.deref)
        if self.templates is None:
            self.templates = GoTemplates()

    def type_name(self, schema_name: str) -> str:
        """Go type name of a top-level schema."""
        return pascal_to_go(self.schema_names.get(schema_name, schema_name))

    def require_import(self, path: str) -> None:
        """Record a Go import path needed by the emitted code."""
        with self._imports_lock:
            self._imports.add(path)

    @property
    def imports(self) -> list[str]:
        with self._imports_lock:
            return sorted(self._imports)
