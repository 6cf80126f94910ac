"""
Jinja2 templates for the fixed-shape Go blocks: file prefix, tagged unions
and constant sets.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from ..comments import format_comment

TEMPLATE_DIR = Path(__file__).parent / "templates" / "go"


class GoTemplates:
    """Loaded Go templates.

    Rendering is thread-safe; one instance is shared by every worker of a run.
    """

    def __init__(self, template_dir: Path = TEMPLATE_DIR):
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        # Add custom filters
        self.jinja_env.filters["comment"] = format_comment

        self.prefix_template = self.jinja_env.get_template("prefix.go.jinja2")
        self.union_template = self.jinja_env.get_template("union.go.jinja2")
        self.consts_template = self.jinja_env.get_template("consts.go.jinja2")

    def prefix(self, package_name: str, imports: list[str], generation_comment: str = "") -> str:
        return self.prefix_template.render(
            package_name=package_name,
            imports=imports,
            generation_comment=generation_comment,
        )

    def union(self, name: str, variants: list[str]) -> str:
        """Interface declaration plus one marker method per variant."""
        return self.union_template.render(name=name, variants=variants)

    def consts(self, type_name: str, consts: list[dict]) -> str:
        """A `const (...)` block; each const is a dict with name, value and comment (prettified text)."""
        return self.consts_template.render(type_name=type_name, consts=consts)
