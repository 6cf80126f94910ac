"""
Type emitter: turns one schema node (and its subtree) into Go type text.

The emitter writes into its own buffer. Nested schemas are emitted by child
emitters so that the text of a subtree can be captured, post-processed
(e.g. wrapped in `option.Optional[...]`) and then written by the parent.
Types that must live in the global scope (tagged unions, their inline
variants, nested constant sets) are handed to the run's name registry.
"""

from __future__ import annotations

import io
import json
from collections.abc import Callable

from ..comments import doc_comment, prettify
from ..errors import (
    GenerationError,
    InvalidTypeDeclaration,
    MissingArrayItemSchema,
    UnknownReference,
    UnsupportedSchemaConstruct,
)
from ..logging import get_logger
from ..schema_model import RESPONSES_PREFIX, SCHEMAS_PREFIX, PrimitiveKind, SchemaNode, extract_primary_type
from ..utils import const_to_go, pascal_to_go, snake_to_go
from .path import SchemaPath
from .state import GenerationContext

logger = get_logger("emitter")

OPTIONAL_TYPE = "option.Optional"
NULL_TYPE = "option.Null"
TIME_TYPE = "time.Time"
NUMBER_TYPE = "float64"

# Number formats with a Go type other than float64
NUMBER_FORMATS = {
    "float": "float32",
    "double": "float64",
}


def placeholder(text: str) -> str:
    """An empty struct carrying a comment, emitted where no type can be."""
    return f"struct{{ /* {text} */ }}"


class TypeEmitter:
    """Emits Go type expressions for schema paths.

    Args:
        context: The shared state of the generation run
        output: Buffer to write into, a fresh one by default
    """

    def __init__(self, context: GenerationContext, output: io.StringIO | None = None):
        self.context = context
        self.output = output if output is not None else io.StringIO()

    @property
    def text(self) -> str:
        return self.output.getvalue()

    def write(self, text: str) -> None:
        self.output.write(text)

    def captured(self, fn: Callable[[TypeEmitter], None]) -> str:
        """Run fn against a child emitter and return what it wrote."""
        child = TypeEmitter(self.context)
        fn(child)
        return child.text

    def emit(self, path: SchemaPath) -> str:
        """Return the Go type expression for the node at the end of path."""
        return self.captured(lambda emitter: emitter.generate_schema(path))

    def emit_named(self, path: SchemaPath) -> str:
        """Write the full declaration of a top-level schema and return it.

        Most schemas become `type Name <expression>`. A root-level tagged
        union is emitted as the union block itself. The declaration is
        written straight into this emitter's buffer, so text produced before
        an unexpected failure stays there.
        """
        name = pascal_to_go(path.current_name)
        node = path.current
        if node.is_reference and node.is_schema_reference:
            node = self.context.document.deref(node)

        branches = self._tagged_union_branches(node)
        if branches is not None:
            self.generate_named_union(SchemaPath.root(path.current_name, node), name, branches)
            return self.text

        self.write(f"type {name} ")
        self.generate_schema(path)
        self.write("\n\n")
        return self.text

    def error(self, error: GenerationError, path: SchemaPath) -> None:
        """Record a per-node error; generation of the rest of the tree goes on."""
        if not error.path:
            error.path = str(path)
        self.context.errors.add(error)

    def require_option(self) -> None:
        self.context.require_import(self.context.config.option_import_path)

    def generate_schema(self, path: SchemaPath) -> None:
        node = path.current
        logger.debug("generating %s", path)

        if node.is_reference:
            if not path.is_root:
                self.generate_reference(path)
                return
            target = self.context.document.resolve(node.ref)
            if target is None:
                self.error(UnknownReference(f"unknown reference {node.ref!r}"), path)
                self.write(placeholder(node.ref))
                return
            path = SchemaPath.root(path.current_name, target)
            node = target

        try:
            ptype = extract_primary_type(node.types)
        except InvalidTypeDeclaration as e:
            self.error(e, path)
            self.write(placeholder(f"invalid type {node.types}"))
            return

        if ptype.nullable or node.nullable:
            self.write("*")

        match ptype.kind:
            case PrimitiveKind.OBJECT:
                self.generate_object(path)
            case PrimitiveKind.ARRAY:
                self.generate_array(path)
            case PrimitiveKind.STRING:
                self.generate_string(path)
            case PrimitiveKind.INTEGER:
                self.generate_integer(path)
            case PrimitiveKind.NUMBER:
                self.write(NUMBER_FORMATS.get(node.format, NUMBER_TYPE))
            case PrimitiveKind.BOOLEAN:
                self.write("bool")
            case PrimitiveKind.NULL:
                self.require_option()
                self.write(NULL_TYPE)
            case PrimitiveKind.NONE:
                self.generate_untyped(path)
            case _:
                self.generate_unknown(path)

    def generate_untyped(self, path: SchemaPath) -> None:
        """Nodes without a declared type: combinators and bare objects."""
        node = path.current
        if node.all_of:
            self.generate_all_of(path)
        elif node.one_of:
            self.generate_union(path, node.one_of, "_oneOf")
        elif node.any_of:
            self.generate_union(path, node.any_of, "_anyOf")
        elif node.not_ is not None:
            self.error(UnsupportedSchemaConstruct("not is not supported"), path)
            self.write(placeholder("not"))
        elif node.properties:
            self.generate_object(path)
        else:
            self.generate_unknown(path)

    def generate_unknown(self, path: SchemaPath) -> None:
        node = path.current
        logger.warning("unknown schema type at %s: %s", path, node.types)
        self.write(placeholder(" ".join(node.types) or "unknown"))

    def generate_reference(self, path: SchemaPath) -> None:
        node = path.current
        namespace = node.ref_namespace
        if namespace == SCHEMAS_PREFIX:
            self.write(self.context.type_name(node.ref_name))
        elif namespace == RESPONSES_PREFIX:
            logger.debug("skipping response reference %s at %s", node.ref, path)
            self.write(placeholder(node.ref))
        else:
            self.error(UnknownReference(f"unknown reference {node.ref!r}"), path)
            self.write(placeholder(node.ref))

    def generate_object(self, path: SchemaPath) -> None:
        node = path.current

        doc_fields = {}
        if self.context.config.apply_doc_comments:
            doc_fields = self.context.correlator.top_fields(path, node)

        self.write("struct {\n")
        for name, prop in node.sorted_properties():
            go_name = snake_to_go(name)
            if not go_name:
                logger.warning("skipping property %r of %s: no usable Go name", name, path)
                continue

            info = doc_fields.get(name)
            if info is not None and info.comment:
                self.write(doc_comment(go_name, info.comment, indent=1, original_name=name))

            type_text = self.emit(path.push(name, prop))
            tag = name
            if not node.is_required(name):
                # Optional already carries nullability
                type_text = f"{OPTIONAL_TYPE}[{type_text.removeprefix('*')}]"
                tag += ",omitempty"
                self.require_option()

            self.write(f'\t{go_name} {type_text} `json:"{tag}"`\n')
        self.write("}")

    def generate_array(self, path: SchemaPath) -> None:
        node = path.current
        if node.items is None:
            self.error(MissingArrayItemSchema("schema has array type but no items"), path)
            self.write(placeholder("array without items"))
            return
        self.write("[]")
        self.write(self.emit(path.push("_[]", node.items)))

    def generate_string(self, path: SchemaPath) -> None:
        node = path.current
        match node.format:
            case "snowflake":
                self.write(self.context.heuristics.guess(path))
            case "date-time":
                self.context.require_import("time")
                self.write(TIME_TYPE)
            case _:
                if node.one_of:
                    self.generate_const_set(path, "string", node.one_of)
                else:
                    self.write("string")

    def generate_integer(self, path: SchemaPath) -> None:
        node = path.current

        int_type = ""
        if len(node.all_of) == 1 and node.all_of[0].is_schema_reference:
            int_type = self.context.type_name(node.all_of[0].ref_name)

        if not int_type and path.current_name in self.context.config.enum_names:
            logger.warning("%s is an integer but should be an enum", path)

        if not int_type:
            int_type = node.format or "int"

        if node.one_of:
            self.generate_const_set(path, int_type, node.one_of)
        else:
            self.write(int_type)

    def generate_const_set(self, path: SchemaPath, base_type: str, branches: list[SchemaNode]) -> None:
        """A named type plus one constant per oneOf branch.

        At the root the constants follow the type inline; a nested set is
        hoisted into the global scope and referenced by name.
        """
        if path.is_root:
            type_name = pascal_to_go(path.current_name)
        else:
            type_name = path.exported_name()

        consts = self.const_block(path, type_name, branches)
        if path.is_root:
            self.write(f"{base_type}\n\n{consts}")
            return

        self.context.registry.register(type_name, f"type {type_name} {base_type}\n\n{consts}\n\n")
        self.write(type_name)

    def const_block(self, path: SchemaPath, type_name: str, branches: list[SchemaNode]) -> str:
        prefix = type_name.removesuffix("s")
        consts = []
        for i, branch in enumerate(branches):
            branch = self.context.document.deref(branch)
            if not branch.has_const:
                self.error(UnsupportedSchemaConstruct(f"oneOf branch {i} has no const value"), path)
                continue

            const_name = prefix + const_to_go(branch.title or str(branch.const))
            consts.append(
                {
                    "name": const_name,
                    "value": json.dumps(branch.const),
                    "comment": prettify(const_name, branch.description),
                }
            )
        return self.context.templates.consts(type_name, consts)

    def generate_all_of(self, path: SchemaPath) -> None:
        """Compose every allOf member as an embedded field."""
        self.write("struct {\n")
        for i, member in enumerate(path.current.all_of):
            self.write("\t" + self.emit(path.push(f"_allOf[{i}]", member)) + "\n")
        self.write("}")

    def generate_union(self, path: SchemaPath, branches: list[SchemaNode], marker: str) -> None:
        """Emit a oneOf/anyOf.

        A pair with one null branch is just a pointer to the other branch;
        anything else becomes a named tagged union in the global scope.
        """
        if len(branches) == 2:
            null_branches = [i for i, branch in enumerate(branches) if self._is_null(branch)]
            if len(null_branches) == 1:
                other = 1 - null_branches[0]
                type_text = self.emit(path.push(f"{marker}[{other}]", branches[other])).removeprefix("*")
                # A nullable node already wrote its pointer
                self.write(type_text if path.current.nullable else "*" + type_text)
                return

        union_name = path.exported_name()
        block = self.captured(lambda emitter: emitter.generate_named_union(path, union_name, branches))
        self.context.registry.register(union_name, block)
        self.write(union_name)

    def generate_named_union(self, path: SchemaPath, union_name: str, branches: list[SchemaNode]) -> None:
        """Write the union block and register every inline variant."""
        logger.debug("generating union %s as %s", path, union_name)
        variants = self.variant_names(union_name, branches)

        self.write(self.context.templates.union(union_name, variants).rstrip("\n") + "\n\n")

        for variant, branch in zip(variants, branches):
            if branch.is_schema_reference:
                continue
            body = self.emit(path.push(variant, branch))
            self.context.registry.register(variant, f"type {variant} {body}\n\n")

    def variant_names(self, union_name: str, branches: list[SchemaNode]) -> list[str]:
        """Referenced branches keep their type name; inline ones are named
        after the union and their primitive type, or their index."""
        names: list[str] = []
        for i, branch in enumerate(branches):
            if branch.is_schema_reference:
                name = self.context.type_name(branch.ref_name)
            else:
                try:
                    ptype = extract_primary_type(branch.types)
                except InvalidTypeDeclaration:
                    ptype = None
                if ptype is not None and ptype.type:
                    name = union_name + snake_to_go(ptype.type)
                else:
                    name = f"{union_name}{i}"

            if name in names:
                name = f"{union_name}{i}"
            names.append(name)
        return names

    def _tagged_union_branches(self, node: SchemaNode) -> list[SchemaNode] | None:
        """Branches of a node that emits as a tagged union, else None."""
        if node.types or node.all_of:
            return None
        branches = node.one_of or node.any_of
        if not branches:
            return None
        if len(branches) == 2 and sum(self._is_null(branch) for branch in branches) == 1:
            return None
        return branches

    def _is_null(self, branch: SchemaNode) -> bool:
        return self.context.document.deref(branch).types == ["null"]
