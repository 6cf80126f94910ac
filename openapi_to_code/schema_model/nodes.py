"""
In-memory model of a pre-parsed OpenAPI schema document.

The generator never looks at raw JSON: it consumes `SchemaNode` trees. Each
node carries its source position (`line`) so that object properties can be
emitted in document order.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any

SCHEMAS_PREFIX = "#/components/schemas"
RESPONSES_PREFIX = "#/components/responses"


@dataclass(eq=False)
class SchemaNode:
    """One node of the schema graph."""

    # Declared types, e.g. ["string"] or ["integer", "null"]
    types: list[str] = field(default_factory=list)

    # `nullable: true` on a node without a declared type
    nullable: bool = False

    # Object shape
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    # Array items
    items: SchemaNode | None = None

    # Combinators
    all_of: list[SchemaNode] = field(default_factory=list)
    one_of: list[SchemaNode] = field(default_factory=list)
    any_of: list[SchemaNode] = field(default_factory=list)
    not_: SchemaNode | None = None

    format: str = ""
    title: str = ""
    description: str = ""

    # Literal value of a const branch
    const: Any = None
    has_const: bool = False

    # Reference path, e.g. "#/components/schemas/User"
    ref: str | None = None

    # Source position in the original document
    line: int = 0

    _hash: str | None = field(default=None, init=False, repr=False)

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    @property
    def ref_name(self) -> str:
        """Last segment of the reference path."""
        if self.ref is None:
            return ""
        return self.ref.rsplit("/", 1)[-1]

    @property
    def ref_namespace(self) -> str:
        """Reference path without its last segment."""
        if self.ref is None:
            return ""
        return self.ref.rsplit("/", 1)[0] if "/" in self.ref else ""

    @property
    def is_schema_reference(self) -> bool:
        """Whether this node references a named top-level schema."""
        return self.ref_namespace == SCHEMAS_PREFIX

    def is_required(self, name: str) -> bool:
        return name in self.required

    def sorted_properties(self) -> list[tuple[str, SchemaNode]]:
        """Properties ordered by source line, then declaration order."""
        indexed = list(enumerate(self.properties.items()))
        indexed.sort(key=lambda item: (item[1][1].line, item[0]))
        return [prop for _, prop in indexed]

    def to_dict(self) -> dict[str, Any]:
        """Canonical dictionary form, without source positions."""
        d: dict[str, Any] = {}
        if self.ref is not None:
            d["$ref"] = self.ref
        if self.types:
            d["type"] = list(self.types)
        if self.nullable:
            d["nullable"] = True
        if self.properties:
            d["properties"] = {name: prop.to_dict() for name, prop in self.properties.items()}
        if self.required:
            d["required"] = list(self.required)
        if self.items is not None:
            d["items"] = self.items.to_dict()
        for key, nodes in (("allOf", self.all_of), ("oneOf", self.one_of), ("anyOf", self.any_of)):
            if nodes:
                d[key] = [node.to_dict() for node in nodes]
        if self.not_ is not None:
            d["not"] = self.not_.to_dict()
        for key, value in (("format", self.format), ("title", self.title), ("description", self.description)):
            if value:
                d[key] = value
        if self.has_const:
            d["const"] = self.const
        return d

    def structural_hash(self) -> str:
        """Stable hash of the node's structure; equal shapes hash equally."""
        if self._hash is None:
            canonical = json.dumps(self.to_dict(), sort_keys=True, default=str)
            self._hash = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
        return self._hash


@dataclass
class SchemaDocument:
    """A schema catalog: named top-level schemas and responses."""

    schemas: dict[str, SchemaNode] = field(default_factory=dict)
    responses: dict[str, SchemaNode] = field(default_factory=dict)

    def resolve(self, ref: str) -> SchemaNode | None:
        """Resolve a local reference to its node, or None if unknown."""
        namespace, _, name = ref.rpartition("/")
        if namespace == SCHEMAS_PREFIX:
            return self.schemas.get(name)
        if namespace == RESPONSES_PREFIX:
            return self.responses.get(name)
        return None

    def deref(self, node: SchemaNode) -> SchemaNode:
        """Follow references until a non-reference node (or a dead end)."""
        seen = set()
        while node.is_reference and node.ref not in seen:
            seen.add(node.ref)
            target = self.resolve(node.ref)
            if target is None:
                break
            node = target
        return node
