from unittest import TestCase
from unittest.mock import patch

import pytest

from openapi_to_code import GenerationFailed, PipelineGenerator, load_document
from openapi_to_code.errors import NameCollision
from openapi_to_code.pipeline import CodeGeneratorConfig
from openapi_to_code.pipeline.config import DEFAULT_OPTION_IMPORT_PATH
from openapi_to_code.pipeline.emitter import TypeEmitter


def _document(schemas):
    return load_document({"components": {"schemas": schemas}})


def _generate(schemas, **config):
    config.setdefault("add_generation_comment", False)
    return PipelineGenerator(_document(schemas), CodeGeneratorConfig(**config)).generate()


class TestPipelineGenerator(TestCase):
    def test_file_layout(self):
        schemas = {
            "B": {"type": "boolean"},
            "A": {
                "type": "object",
                "required": ["shape"],
                "properties": {"shape": {"oneOf": [{"type": "string"}, {"type": "integer"}]}},
            },
        }
        result = _generate(schemas, max_workers=2)

        self.assertTrue(result.ok)
        self.assertEqual(
            result.code,
            "package main\n"
            "\n"
            "// AShape is a union of the following types:\n"
            "//   - [AShapeString]\n"
            "//   - [AShapeInteger]\n"
            "type AShape interface {\n"
            "\tisAShape()\n"
            "}\n"
            "\n"
            "func (AShapeString) isAShape() {}\n"
            "func (AShapeInteger) isAShape() {}\n"
            "\n"
            "type AShapeInteger int\n"
            "\n"
            "type AShapeString string\n"
            "\n"
            "type A struct {\n"
            '\tShape AShape `json:"shape"`\n'
            "}\n"
            "\n"
            "type B bool\n",
        )

    def test_imports_and_package(self):
        schemas = {
            "Event": {
                "type": "object",
                "required": ["at"],
                "properties": {"at": {"type": "string", "format": "date-time"}, "note": {"type": "string"}},
            }
        }
        result = _generate(schemas, package_name="discord")

        self.assertTrue(
            result.code.startswith(f'package discord\n\nimport (\n\t"{DEFAULT_OPTION_IMPORT_PATH}"\n\t"time"\n)\n\ntype Event struct {{\n')
        )

    def test_generation_comment(self):
        result = _generate({"B": {"type": "boolean"}}, add_generation_comment=True)

        first_line = result.code.splitlines()[0]
        self.assertTrue(first_line.startswith("// Code generated by openapi_to_code v"))
        self.assertTrue(first_line.endswith("DO NOT EDIT."))
        self.assertIn("\n\npackage main\n", result.code)

    def test_output_is_deterministic(self):
        schemas = {
            f"Schema{i}": {
                "type": "object",
                "required": ["value"],
                "properties": {"value": {"oneOf": [{"type": "string"}, {"type": "number"}]}},
            }
            for i in range(20)
        }
        generator = PipelineGenerator(_document(schemas), CodeGeneratorConfig(add_generation_comment=False, max_workers=8))

        first = generator.generate()
        second = generator.generate()

        self.assertEqual(first.code, second.code)
        self.assertTrue(first.ok)
        self.assertTrue(second.ok)

    def test_ignore_schemas(self):
        result = _generate({"Keep": {"type": "string"}, "Drop": {"type": "string"}}, ignore_schemas=["Drop"])

        self.assertIn("type Keep string", result.code)
        self.assertNotIn("Drop", result.code)

    def test_response_suffix_is_trimmed(self):
        schemas = {
            "GuildResponse": {"type": "object", "required": ["id"], "properties": {"id": {"type": "integer"}}},
            "Invite": {
                "type": "object",
                "required": ["guild"],
                "properties": {"guild": {"$ref": "#/components/schemas/GuildResponse"}},
            },
        }
        result = _generate(schemas)

        self.assertIn("type Guild struct {", result.code)
        self.assertIn('\tGuild Guild `json:"guild"`', result.code)
        self.assertNotIn("GuildResponse", result.code)

    def test_response_suffix_kept_when_name_is_taken(self):
        schemas = {"Guild": {"type": "string"}, "GuildResponse": {"type": "integer"}}
        result = _generate(schemas)

        self.assertIn("type Guild string", result.code)
        self.assertIn("type GuildResponse int", result.code)

    def test_response_suffix_trimming_disabled(self):
        result = _generate({"GuildResponse": {"type": "integer"}}, trim_response_suffix=False)
        self.assertIn("type GuildResponse int", result.code)

    def test_errors_do_not_stop_generation(self):
        schemas = {
            "Bad": {"type": "array"},
            "Good": {"type": "string"},
        }
        result = _generate(schemas)

        self.assertFalse(result.ok)
        self.assertEqual(result.error_count, 1)
        self.assertIn("type Bad struct{ /* array without items */ }", result.code)
        self.assertIn("type Good string", result.code)

        with self.assertRaises(GenerationFailed) as ctx:
            result.raise_for_errors()
        self.assertEqual(ctx.exception.count, 1)
        self.assertIn("encountered 1 errors such as:", str(ctx.exception))

    def test_unexpected_failure_keeps_partial_text(self):
        schemas = {
            "Broken": {
                "type": "object",
                "required": ["count", "tags"],
                "properties": {"count": {"type": "integer"}, "tags": {"type": "array", "items": {"type": "string"}}},
            },
            "Good": {"type": "string"},
        }
        with patch.object(TypeEmitter, "generate_array", side_effect=RuntimeError("boom")):
            result = _generate(schemas)

        self.assertEqual(result.error_count, 1)
        self.assertIn("generation failed: boom", str(result.errors[0]))
        self.assertIn('type Broken struct {\n\tCount int `json:"count"`\n', result.code)
        self.assertIn("type Good string", result.code)

    def test_error_count_beyond_limit(self):
        schemas = {f"Bad{i}": {"type": "array"} for i in range(15)}
        result = _generate(schemas, max_reported_errors=10)

        self.assertEqual(result.error_count, 15)
        self.assertEqual(len(result.errors), 10)

    def test_synthesized_name_colliding_with_top_level(self):
        schemas = {
            "Widget": {
                "type": "object",
                "required": ["shape"],
                "properties": {"shape": {"oneOf": [{"type": "string"}, {"type": "integer"}]}},
            },
            "WidgetShape": {"type": "string"},
        }
        result = _generate(schemas)

        self.assertEqual(result.error_count, 1)
        self.assertIsInstance(result.errors[0], NameCollision)
        self.assertIn("type WidgetShape string", result.code)
        self.assertNotIn("type WidgetShape interface", result.code)

    def test_top_level_names_mapping_to_same_go_name(self):
        result = _generate({"UserId": {"type": "string"}, "UserID": {"type": "integer"}})

        self.assertEqual(result.error_count, 1)
        self.assertIsInstance(result.errors[0], NameCollision)
        self.assertEqual(result.code.count("type UserID "), 1)


def test_from_dict():
    raw = {"components": {"schemas": {"Flag": {"type": "boolean"}}}}
    result = PipelineGenerator.from_dict(raw, CodeGeneratorConfig(add_generation_comment=False)).generate()
    assert result.code == "package main\n\ntype Flag bool\n"


def test_snowflake_overrides_from_config():
    schemas = {
        "Message": {
            "type": "object",
            "required": ["lobby_id"],
            "properties": {"lobby_id": {"type": "string", "format": "snowflake"}},
        }
    }
    result = _generate(schemas, snowflake_kinds=["Lobby"])
    assert '\tLobbyID LobbyID `json:"lobby_id"`' in result.code


@pytest.mark.parametrize("workers", [1, 4])
def test_worker_count_does_not_change_output(workers):
    schemas = {"A": {"type": "integer"}, "B": {"type": "string"}, "C": {"type": "boolean"}}
    result = _generate(schemas, max_workers=workers)
    assert result.code == "package main\n\ntype A int\n\ntype B string\n\ntype C bool\n"
