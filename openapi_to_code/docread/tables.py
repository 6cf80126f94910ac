"""
Field tables extracted from API documentation.

An `ObjectTable` is one "Field | Type | Description" table found in the
documentation. It is normalized into a `FieldTable` so that it can be
compared against the fields of a schema object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FieldInfo:
    """A normalized description of one field."""

    name: str = ""
    type: str = ""
    comment: str = ""
    optional: bool = False
    nullable: bool = False


@dataclass(frozen=True)
class FieldTable:
    """A named set of fields: the unit the likelihood engine compares."""

    name: str = ""
    fields: tuple[FieldInfo, ...] = ()


def to_field_map(infos) -> dict[str, FieldInfo]:
    """Key field infos by name."""
    return {info.name: info for info in infos}


@dataclass(frozen=True)
class ObjectTableRow:
    """One row of a documentation field table."""

    field: str = ""
    type: str = ""
    description: str = ""

    def field_info(self) -> FieldInfo:
        # "guild_id?" marks an optional field, "?snowflake" a nullable type
        return FieldInfo(
            name=self.field.removesuffix("?"),
            type=self.type.removeprefix("?"),
            comment=self.description,
            optional=self.field.endswith("?"),
            nullable=self.type.startswith("?"),
        )


@dataclass(frozen=True)
class Source:
    """Where a table was found."""

    path: str = ""
    position: int = 0


@dataclass
class ObjectTable:
    """A documentation table describing the fields of some object."""

    sections: list[str] = field(default_factory=list)
    description: str = ""
    rows: list[ObjectTableRow] = field(default_factory=list)
    source: Source = field(default_factory=Source)

    def field_infos(self) -> list[FieldInfo]:
        return [row.field_info() for row in self.rows]

    def field_table(self) -> FieldTable:
        return FieldTable(name=" ".join(self.sections), fields=tuple(self.field_infos()))

    @staticmethod
    def from_dict(d: dict[str, Any]) -> ObjectTable:
        """Create a table from its JSON form.

        Expected keys: "sectionPath", "description" and "rows", each row
        having "field", "type" and "description".
        """
        rows = [
            ObjectTableRow(
                field=row.get("field", ""),
                type=row.get("type", ""),
                description=row.get("description", ""),
            )
            for row in d.get("rows", [])
        ]
        return ObjectTable(
            sections=list(d.get("sectionPath", [])),
            description=d.get("description", ""),
            rows=rows,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "sectionPath": list(self.sections),
            "description": self.description,
            "rows": [{"field": r.field, "type": r.type, "description": r.description} for r in self.rows],
        }


def load_field_tables(data: list[dict[str, Any]]) -> list[ObjectTable]:
    """Build object tables from a decoded JSON list."""
    return [ObjectTable.from_dict(d) for d in data]
