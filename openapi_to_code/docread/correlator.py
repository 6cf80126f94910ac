"""
Correlates schema objects with documentation tables.
"""

from __future__ import annotations

import heapq
import logging
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..errors import InvalidTypeDeclaration
from ..logging import get_logger
from ..schema_model import SchemaNode, extract_primary_type
from .likelihood import ObjectLikelihood, calculate_object_likelihood
from .tables import FieldInfo, FieldTable, ObjectTable, to_field_map

if TYPE_CHECKING:
    from ..pipeline.path import SchemaPath

logger = get_logger("correlator")

MAX_LIKELIHOOD_CANDIDATES = 5
MIN_LIKELIHOOD = 5.0

_CAPITAL_LETTER_RE = re.compile(r"[A-Z]")


@dataclass(frozen=True)
class DocLikelihood:
    """A documentation table together with its score against an object."""

    table: ObjectTable
    likelihood: ObjectLikelihood

    @property
    def score(self) -> float:
        return self.likelihood.score


class DocCorrelator:
    """Finds the documentation tables most likely describing a schema object.

    Results are memoized by the structural hash of the schema node. The cache
    may be hit from several workers at once; a race only means the same pure
    computation runs twice.
    """

    def __init__(
        self,
        tables: list[ObjectTable],
        resolve: Callable[[SchemaNode], SchemaNode] | None = None,
    ):
        self.tables = list(tables)
        self._field_tables = [table.field_table() for table in self.tables]
        self._resolve = resolve
        self._cache: dict[str, list[DocLikelihood]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self.tables)

    def object_to_field_table(self, path: SchemaPath, node: SchemaNode) -> FieldTable:
        """Describe a schema object the way documentation tables are described."""
        fields = []
        for name, prop in node.properties.items():
            if self._resolve is not None:
                prop = self._resolve(prop)
            try:
                ptype = extract_primary_type(prop.types)
            except InvalidTypeDeclaration:
                ptype = None
            fields.append(
                FieldInfo(
                    name=name,
                    type=ptype.type if ptype else "",
                    nullable=ptype.nullable if ptype else False,
                    optional=not node.is_required(name),
                )
            )
        return FieldTable(name=_humanize(str(path)), fields=tuple(fields))

    def top_likelihood(self, path: SchemaPath, node: SchemaNode) -> list[DocLikelihood]:
        """Return up to five best-scoring tables, best first.

        Tables scoring below the minimum likelihood are never returned.
        """
        key = node.structural_hash()
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return list(cached)

        fields = self.object_to_field_table(path, node)
        scored = (
            DocLikelihood(table=table, likelihood=calculate_object_likelihood(fields, field_table))
            for table, field_table in zip(self.tables, self._field_tables)
        )
        candidates = heapq.nlargest(
            MAX_LIKELIHOOD_CANDIDATES,
            (candidate for candidate in scored if candidate.score >= MIN_LIKELIHOOD),
            key=lambda candidate: candidate.score,
        )

        if candidates and logger.isEnabledFor(logging.DEBUG):
            _log_likelihoods(path, candidates)

        with self._lock:
            self._cache[key] = candidates
        return list(candidates)

    def top_fields(self, path: SchemaPath, node: SchemaNode) -> dict[str, FieldInfo]:
        """Fields of the most likely table, keyed by name."""
        if not self.tables:
            return {}
        candidates = self.top_likelihood(path, node)
        if not candidates:
            return {}
        return to_field_map(candidates[0].table.field_infos())


def _humanize(path: str) -> str:
    """Turn "GuildMember.joined_at" into "guild member joined at"."""
    name = path.replace(".", " ").replace("_", " ")
    name = _CAPITAL_LETTER_RE.sub(lambda m: " " + m.group(0).lower(), name)
    return " ".join(name.split())


def _log_likelihoods(path: SchemaPath, candidates: list[DocLikelihood]) -> None:
    lines = [f"{path} might correlate to these tables:"]
    lines.extend(f"  - {c.score:.02f}: {c.table.sections!r}" for c in candidates)
    logger.debug("\n".join(lines))
