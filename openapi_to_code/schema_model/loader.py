"""
Builds a `SchemaDocument` from a decoded OpenAPI document.

Only the subset of the schema language that the generator understands is
read: primitive types, objects, arrays, allOf/oneOf/anyOf/not and $ref.
"""

from __future__ import annotations

import itertools
from typing import Any

from ..errors import SchemaLoadError
from .nodes import SchemaDocument, SchemaNode


class SchemaLoader:
    """Converts raw schema dictionaries into `SchemaNode` trees.

    Nodes are numbered in the order they are encountered, which for a
    document decoded with `json.load` is the order of the source text. The
    numbers stand in for source line numbers.
    """

    def __init__(self):
        self._positions = itertools.count(1)

    def load(self, raw: dict[str, Any]) -> SchemaDocument:
        components = raw.get("components")
        if not isinstance(components, dict) or not isinstance(components.get("schemas"), dict):
            raise SchemaLoadError("document has no components.schemas section")

        document = SchemaDocument()
        for name, schema in components["schemas"].items():
            document.schemas[name] = self.load_node(schema, f"#/components/schemas/{name}")

        for name, response in (components.get("responses") or {}).items():
            document.responses[name] = self.load_node(self._response_schema(response), f"#/components/responses/{name}")

        return document

    @staticmethod
    def _response_schema(response: dict[str, Any]) -> dict[str, Any]:
        """Extract the JSON body schema of a response object, if any."""
        content = response.get("content") or {}
        media = content.get("application/json") or {}
        return media.get("schema") or {}

    def load_node(self, raw: Any, location: str = "") -> SchemaNode:
        if isinstance(raw, bool):
            # `true` / `false` schemas carry no shape
            return SchemaNode(line=next(self._positions))
        if not isinstance(raw, dict):
            raise SchemaLoadError(f"{location or 'schema'} is not an object: {raw!r}")

        node = SchemaNode(line=next(self._positions))

        if "$ref" in raw:
            node.ref = raw["$ref"]
            return node

        node.types = self._load_types(raw, location)
        # A nullable combinator keeps its shape; the flag goes on the node
        node.nullable = raw.get("nullable") is True and not node.types
        node.format = raw.get("format", "") or ""
        node.title = raw.get("title", "") or ""
        node.description = raw.get("description", "") or ""
        node.required = list(raw.get("required") or [])

        if "const" in raw:
            node.const = raw["const"]
            node.has_const = True

        for name, prop in (raw.get("properties") or {}).items():
            node.properties[name] = self.load_node(prop, f"{location}/properties/{name}")

        if "items" in raw:
            node.items = self.load_node(raw["items"], f"{location}/items")

        node.all_of = self._load_list(raw, "allOf", location)
        node.one_of = self._load_list(raw, "oneOf", location)
        node.any_of = self._load_list(raw, "anyOf", location)

        if "not" in raw:
            node.not_ = self.load_node(raw["not"], f"{location}/not")

        return node

    def _load_list(self, raw: dict[str, Any], key: str, location: str) -> list[SchemaNode]:
        values = raw.get(key) or []
        if not isinstance(values, list):
            raise SchemaLoadError(f"{location}/{key} is not a list")
        return [self.load_node(value, f"{location}/{key}/{i}") for i, value in enumerate(values)]

    @staticmethod
    def _load_types(raw: dict[str, Any], location: str) -> list[str]:
        declared = raw.get("type")
        if declared is None:
            types = []
        elif isinstance(declared, str):
            types = [declared]
        elif isinstance(declared, list) and all(isinstance(t, str) for t in declared):
            types = list(declared)
        else:
            raise SchemaLoadError(f"{location}/type must be a string or a list of strings")

        # OpenAPI 3.0 spells nullability as a flag
        if raw.get("nullable") is True and types and "null" not in types:
            types.append("null")
        return types


def load_document(raw: dict[str, Any]) -> SchemaDocument:
    """Build a schema document from a decoded OpenAPI JSON document."""
    return SchemaLoader().load(raw)
