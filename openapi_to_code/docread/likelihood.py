"""
Scores how likely a documentation table describes a given object.
"""

from __future__ import annotations

from dataclasses import dataclass

from rapidfuzz.distance import Levenshtein

from .tables import FieldInfo, FieldTable, to_field_map

NAME_WEIGHT = 4.0
FIELDS_WEIGHT = 9.0


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings."""
    return Levenshtein.distance(a, b)


def relative_levenshtein(a: str, b: str) -> float:
    """Case-insensitive similarity in [0, 1]; 1 means identical.

    Two empty strings are identical; an empty and a non-empty string share
    nothing.
    """
    a = a.lower()
    b = b.lower()
    max_distance = max(len(a), len(b))
    if max_distance == 0:
        return 1.0
    return 1 - edit_distance(a, b) / max_distance


def calculate_field_likelihood(a: FieldInfo, b: FieldInfo) -> float:
    """Likelihood that two fields are the same field.

    Fields with different names never match. Comments are ignored: them being
    missing from the schema is the whole point.
    """
    if a.name != b.name:
        return 0.0
    return 0.5 + relative_levenshtein(a.type, b.type) / 2


@dataclass(frozen=True)
class ObjectLikelihood:
    """Likelihood that two field tables describe the same object."""

    score: float = 0.0


def calculate_object_likelihood(a: FieldTable, b: FieldTable) -> ObjectLikelihood:
    """Compare two field tables; the higher the score, the better the match."""
    likelihood = relative_levenshtein(a.name, b.name) * NAME_WEIGHT

    field_total = min(len(a.fields), len(b.fields))
    if field_total == 0:
        return ObjectLikelihood(score=likelihood)

    b_fields = to_field_map(b.fields)
    field_count = 0
    field_likelihood = 0.0
    for a_field in a.fields:
        b_field = b_fields.get(a_field.name)
        if b_field is None:
            continue
        field_count += 1
        field_likelihood += calculate_field_likelihood(a_field, b_field)

    if field_count > 0:
        likelihood += field_likelihood / field_total * FIELDS_WEIGHT

    return ObjectLikelihood(score=likelihood)
