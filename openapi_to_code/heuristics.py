"""
Heuristics for choosing the entity kind of a snowflake field.

Snowflake strings are typed by the entity they identify (UserID, ChannelID,
...). The schema only says "snowflake", so the kind is taken from a curated
path table when possible and guessed from the field name otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from .logging import get_logger
from .utils import DATA_DIR, pascal_to_go, snake_to_go

if TYPE_CHECKING:
    from .pipeline.path import SchemaPath

logger = get_logger("heuristics")

# Type used when no entity kind could be determined
GENERIC_SNOWFLAKE = "Snowflake"


def parse_snowflake_kinds(text: str) -> list[tuple[str, tuple[str, ...]]]:
    """Parse "Kind [alias ...]" lines, keeping file order."""
    kinds = []
    for line in text.splitlines():
        if line.startswith("#"):
            continue
        words = line.split()
        if not words:
            continue
        kinds.append((pascal_to_go(words[0]), tuple(snake_to_go(alias) for alias in words[1:])))
    return kinds


def parse_snowflake_fields(text: str) -> dict[str, str]:
    """Parse "dotted.path Kind" lines; malformed lines are logged and skipped."""
    fields = {}
    for line in text.splitlines():
        if line.startswith("#") or not line.strip():
            continue
        values = line.split()
        if len(values) != 2:
            logger.warning("invalid snowflake field: %r", line)
            continue
        fields[values[0]] = pascal_to_go(values[1])
    return fields


@dataclass
class SnowflakeHeuristics:
    """Curated snowflake tables and the matching rules built on them."""

    # Ordered (kind, aliases) pairs; the first match wins
    kinds: list[tuple[str, tuple[str, ...]]] = field(default_factory=list)

    # Dotted schema path -> kind, overriding the name-based rules
    fields: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def load(kinds_file: Path, fields_file: Path) -> SnowflakeHeuristics:
        return SnowflakeHeuristics(
            kinds=parse_snowflake_kinds(kinds_file.read_text(encoding="utf-8")),
            fields=parse_snowflake_fields(fields_file.read_text(encoding="utf-8")),
        )

    @staticmethod
    def load_default() -> SnowflakeHeuristics:
        return SnowflakeHeuristics.load(DATA_DIR / "snowflakes.txt", DATA_DIR / "snowflake-fields.txt")

    def with_overrides(self, kinds: list[str] | None = None, fields: dict[str, str] | None = None) -> SnowflakeHeuristics:
        """Return a copy extended with configured kinds and field overrides.

        Configured kinds are tried before the curated ones.
        """
        extra_kinds = parse_snowflake_kinds("\n".join(kinds or []))
        merged_fields = dict(self.fields)
        merged_fields.update({path: pascal_to_go(kind) for path, kind in (fields or {}).items()})
        return SnowflakeHeuristics(kinds=extra_kinds + self.kinds, fields=merged_fields)

    def guess(self, path: SchemaPath) -> str:
        """Return the Go type for the snowflake field at path."""
        path = path.pop_private_leaves()

        kind = self.fields.get(str(path))
        if kind is not None:
            return kind + "ID"

        field_name = snake_to_go(path.current_name)
        parent_name = "" if path.is_root else pascal_to_go(path.parent.pop_private_leaves().current_name)

        for kind, aliases in self.kinds:
            for token in (kind, *aliases):
                if _matches(token, field_name, parent_name):
                    return kind + "ID"

        logger.debug("unknown snowflake field %s (field %s, parent %s)", path, field_name, parent_name)
        return GENERIC_SNOWFLAKE


def _matches(token: str, field_name: str, parent_name: str) -> bool:
    return (
        field_name in (token + "ID", token + "IDs")
        or field_name.endswith((token, token + "s", token + "ID", token + "IDs"))
        or (field_name == "ID" and parent_name.startswith(token))
    )
