"""
Documentation reading: field tables, the markdown scraper and the
likelihood engine that matches tables to schema objects.
"""

from __future__ import annotations

from .correlator import MAX_LIKELIHOOD_CANDIDATES, MIN_LIKELIHOOD, DocCorrelator, DocLikelihood
from .likelihood import (
    ObjectLikelihood,
    calculate_field_likelihood,
    calculate_object_likelihood,
    edit_distance,
    relative_levenshtein,
)
from .scraper import scrape_dir, scrape_text
from .tables import FieldInfo, FieldTable, ObjectTable, ObjectTableRow, Source, load_field_tables, to_field_map

__all__ = [
    "DocCorrelator",
    "DocLikelihood",
    "MAX_LIKELIHOOD_CANDIDATES",
    "MIN_LIKELIHOOD",
    "ObjectLikelihood",
    "calculate_field_likelihood",
    "calculate_object_likelihood",
    "edit_distance",
    "relative_levenshtein",
    "scrape_dir",
    "scrape_text",
    "FieldInfo",
    "FieldTable",
    "ObjectTable",
    "ObjectTableRow",
    "Source",
    "load_field_tables",
    "to_field_map",
]
