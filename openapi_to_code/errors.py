"""
Error kinds raised and collected while generating code.

Per-node generation errors are recorded in the run's error aggregator
instead of propagating; the run only fails as a whole once all top-level
schemas have been emitted.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for errors recorded while emitting a schema node.

    Attributes:
        path: Dotted path of the schema node that failed (may be empty)
    """

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        message = super().__str__()
        if self.path:
            return f"schema {self.path}: {message}"
        return message


class InvalidTypeDeclaration(GenerationError):
    """A schema node declares an unsupported combination of primitive types."""


class MissingArrayItemSchema(GenerationError):
    """An array-typed schema node has no item schema."""


class UnsupportedSchemaConstruct(GenerationError):
    """A `not` schema, or another construct that is deliberately unsupported."""


class UnknownReference(GenerationError):
    """A reference points outside the schemas and responses namespaces."""


class NameCollision(GenerationError):
    """Two different bodies were generated under the same global name."""


class GenerationFailed(Exception):
    """Raised when a generation run recorded at least one error.

    Attributes:
        count: Total number of recorded errors
        errors: The retained errors (capped)
    """

    def __init__(self, count: int, errors: list[Exception]):
        self.count = count
        self.errors = list(errors)
        details = "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(f"encountered {count} errors such as:\n{details}")


class SchemaLoadError(Exception):
    """Raised when the input document cannot be turned into a schema model."""


class DocumentationError(Exception):
    """Raised when a documentation table cannot be read."""
