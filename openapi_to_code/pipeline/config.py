"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_OPTION_IMPORT_PATH = "github.com/diamondburned/arikawa/v3/utils/json/option"


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Go package name of the generated file
    package_name: str = "main"

    # Import path of the package providing Optional[T] and Null
    option_import_path: str = DEFAULT_OPTION_IMPORT_PATH

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Number of parallel workers (0 = number of CPUs)
    max_workers: int = 0

    # Number of errors kept for reporting (all errors are still counted)
    max_reported_errors: int = 10

    # Rename "FooResponse" schemas to "Foo" when no "Foo" schema exists
    trim_response_suffix: bool = True

    # Top-level schemas to skip
    ignore_schemas: list[str] = field(default_factory=list)

    # Integer fields with these names should have been enums; a warning is logged
    enum_names: list[str] = field(default_factory=lambda: ["type", "flags"])

    # Add comments taken from the best matching documentation table to fields
    apply_doc_comments: bool = False

    # Extra snowflake kinds ("Kind alias ...") tried before the built-in ones
    snowflake_kinds: list[str] = field(default_factory=list)

    # Extra snowflake path overrides ("Schema.field" -> kind)
    snowflake_fields: dict[str, str] = field(default_factory=dict)

    def worker_count(self) -> int:
        """Resolved number of workers."""
        if self.max_workers > 0:
            return self.max_workers
        return os.cpu_count() or 1

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "package_name": self.package_name,
            "option_import_path": self.option_import_path,
            "add_generation_comment": self.add_generation_comment,
            "max_workers": self.max_workers,
            "max_reported_errors": self.max_reported_errors,
            "trim_response_suffix": self.trim_response_suffix,
            "ignore_schemas": self.ignore_schemas,
            "enum_names": self.enum_names,
            "apply_doc_comments": self.apply_doc_comments,
            "snowflake_kinds": self.snowflake_kinds,
            "snowflake_fields": self.snowflake_fields,
        }
