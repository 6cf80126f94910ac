"""
Extracts field tables from markdown documentation.
"""

from __future__ import annotations

import re
from pathlib import Path

from ..errors import DocumentationError
from ..logging import get_logger
from .tables import ObjectTable, ObjectTableRow, Source

logger = get_logger("docread")

_TABLE_HEADER_RE = re.compile(r"^\| Field +\| Type +\| Description +\|$", re.MULTILINE)
_ROW_RE = re.compile(r"^\| (.*?) *\| (.*?) *\| (.*?) *\|$")
_HEADING_RE = re.compile(r"^(#{1,6}) +(.*)$", re.MULTILINE)


def scrape_text(text: str, path: str = "") -> list[ObjectTable]:
    """Find every field table in a markdown document.

    Raises:
        DocumentationError: If a table has no section heading above it
    """
    tables = []
    for match in _TABLE_HEADER_RE.finditer(text):
        table = _read_table(text, match.start())
        table.source = Source(path=path, position=match.start())
        tables.append(table)
    return tables


def scrape_dir(directory: str | Path) -> list[ObjectTable]:
    """Scrape every markdown file below a directory, in path order."""
    root = Path(directory)
    tables = []
    for file in sorted(root.rglob("*.md")):
        relative = file.relative_to(root).as_posix()
        found = scrape_text(file.read_text(encoding="utf-8"), relative)
        logger.debug("found %d tables in %s", len(found), relative)
        tables.extend(found)
    return tables


def _read_table(text: str, position: int) -> ObjectTable:
    rows = []
    scanned = 0
    for line in text[position:].splitlines():
        match = _ROW_RE.match(line)
        if match is None:
            break
        if scanned < 2:
            # Header and separator
            scanned += 1
            continue
        field, type_, description = (_clean_cell(col) for col in match.groups())
        rows.append(ObjectTableRow(field=field, type=type_, description=description))

    headings = list(_HEADING_RE.finditer(text, 0, position))
    if not headings:
        raise DocumentationError(f"table at {position} has no section")

    # Walk back through the headings while each one is a parent of the last.
    sections: list[str] = []
    last_depth = 0
    for heading in reversed(headings):
        depth = len(heading.group(1))
        if last_depth and depth >= last_depth:
            break
        sections.insert(0, heading.group(2).strip())
        last_depth = depth

    description = text[headings[-1].end() : position].strip()
    return ObjectTable(sections=sections, description=description, rows=rows)


def _clean_cell(cell: str) -> str:
    return cell.strip().removesuffix(" *").strip()
