"""
Paths from a top-level schema down to the node being generated.
"""

from __future__ import annotations

from collections.abc import Iterator

from ..schema_model import SchemaNode
from ..utils import is_exported, pascal_to_go, snake_to_go

# Prefix of synthetic path segments (array items, union branches, allOf parts)
PRIVATE_MARKER = "_"


def is_private(name: str) -> bool:
    """Whether a path segment must never appear in generated identifiers."""
    return name == "" or name.startswith(PRIVATE_MARKER)


class SchemaPath:
    """An immutable path of named schema nodes.

    The path is a persistent linked list: `push` returns a new path that
    shares every step of its parent, so recursion never copies or mutates.
    The last step is the node currently being generated.
    """

    __slots__ = ("name", "node", "_parent", "_depth")

    def __init__(self, name: str, node: SchemaNode, parent: SchemaPath | None = None):
        self.name = name
        self.node = node
        self._parent = parent
        self._depth = 1 if parent is None else parent._depth + 1

    @classmethod
    def root(cls, name: str, node: SchemaNode) -> SchemaPath:
        return cls(name, node)

    def push(self, name: str, node: SchemaNode) -> SchemaPath:
        """Return a new path extended by one step."""
        return SchemaPath(name, node, self)

    def __iter__(self) -> Iterator[SchemaPath]:
        """Iterate over the steps from the root to the current node."""
        steps = []
        step: SchemaPath | None = self
        while step is not None:
            steps.append(step)
            step = step._parent
        return reversed(steps)

    def __len__(self) -> int:
        return self._depth

    def __str__(self) -> str:
        return ".".join(step.name for step in self)

    def __repr__(self) -> str:
        return f"SchemaPath({str(self)!r})"

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def parent(self) -> SchemaPath:
        if self._parent is None:
            raise ValueError(f"path {self} has no parent")
        return self._parent

    @property
    def current(self) -> SchemaNode:
        return self.node

    @property
    def current_name(self) -> str:
        return self.name

    @property
    def root_name(self) -> str:
        step = self
        while step._parent is not None:
            step = step._parent
        return step.name

    def pop_private_leaves(self) -> SchemaPath:
        """Drop trailing synthetic steps; the root step is always kept."""
        path = self
        while path._parent is not None and is_private(path.name):
            path = path._parent
        return path

    def current_is_exported(self) -> bool:
        return is_exported(self.pop_private_leaves().name)

    def exported_name(self) -> str:
        """Go name for a type hoisted out of this path.

        An exported current name is used as is; otherwise every non-private
        segment contributes, e.g. "Widget.shape" gives "WidgetShape".
        """
        if self.current_is_exported():
            return pascal_to_go(self.pop_private_leaves().name)
        return "".join(snake_to_go(step.name) for step in self if not is_private(step.name))
