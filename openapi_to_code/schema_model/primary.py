"""
Classification of a schema node's declared type list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import InvalidTypeDeclaration


class PrimitiveKind(str, Enum):
    """The closed set of primitive types a schema can declare."""

    NONE = ""  # No declared type: a combinator or an unknown shape
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True)
class PrimaryType:
    """The single non-null type of a node and whether null is also allowed."""

    type: str = ""
    nullable: bool = False

    @property
    def kind(self) -> PrimitiveKind | None:
        """The primitive kind, or None for a type name outside the known set."""
        try:
            return PrimitiveKind(self.type)
        except ValueError:
            return None


def extract_primary_type(types: list[str]) -> PrimaryType:
    """Classify a declared type list.

    At most two types may be declared, and if there are two, one of them
    must be "null": nullability is not a union branch.

    Raises:
        InvalidTypeDeclaration: If the combination is not supported
    """
    match len(types):
        case 0:
            return PrimaryType()
        case 1:
            return PrimaryType(type=types[0])
        case 2:
            if "null" not in types:
                raise InvalidTypeDeclaration(f"schema has more than one type: {types}")
            other = types[1 - types.index("null")]
            if other == "null":
                return PrimaryType(type="null")
            return PrimaryType(type=other, nullable=True)
        case _:
            raise InvalidTypeDeclaration(f"schema has more than one type: {types}")
