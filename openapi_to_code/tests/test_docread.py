from pathlib import Path
from unittest import TestCase

import pytest

from openapi_to_code.docread import (
    FieldInfo,
    ObjectTable,
    ObjectTableRow,
    load_field_tables,
    scrape_dir,
    scrape_text,
)
from openapi_to_code.errors import DocumentationError

DOCS_DIR = Path(__file__).parent / "test_data" / "docs"


class TestScraper(TestCase):
    def setUp(self):
        self.text = (DOCS_DIR / "webhook.md").read_text(encoding="utf-8")

    def test_scrape_webhook_table(self):
        tables = scrape_text(self.text, "webhook.md")

        self.assertEqual(len(tables), 1)
        table = tables[0]
        self.assertEqual(table.sections, ["Webhook Resource", "Webhook Object", "Webhook Structure"])
        self.assertEqual(table.description, "")
        self.assertEqual(table.source.path, "webhook.md")
        self.assertEqual(table.source.position, 236)
        self.assertEqual(len(table.rows), 12)
        self.assertEqual(table.rows[0], ObjectTableRow("id", "snowflake", "the id of the webhook"))
        self.assertEqual(
            table.rows[2],
            ObjectTableRow("guild_id?", "?snowflake", "the guild id this webhook is for, if any"),
        )

    def test_footnote_marker_is_removed(self):
        table = scrape_text(self.text)[0]
        fields = [row.field for row in table.rows]

        self.assertIn("source_guild?", fields)
        self.assertIn("source_channel?", fields)
        self.assertEqual(fields[-1], "url?")

    def test_table_without_section(self):
        text = "| Field | Type | Description |\n| --- | --- | --- |\n| id | snowflake | the id |\n"
        with self.assertRaises(DocumentationError):
            scrape_text(text)

    def test_description_between_heading_and_table(self):
        text = (
            "# Guild\n\n## Guild Object\n\nRepresents a guild.\n\n"
            "| Field | Type | Description |\n| --- | --- | --- |\n| id | snowflake | guild id |\n"
        )
        table = scrape_text(text)[0]

        self.assertEqual(table.sections, ["Guild", "Guild Object"])
        self.assertEqual(table.description, "Represents a guild.")

    def test_scrape_dir(self):
        tables = scrape_dir(DOCS_DIR)

        self.assertEqual(len(tables), 1)
        self.assertEqual(tables[0].source.path, "webhook.md")


class TestTables:
    def test_row_field_info(self):
        info = ObjectTableRow("guild_id?", "?snowflake", "the guild id").field_info()
        assert info == FieldInfo(name="guild_id", type="snowflake", comment="the guild id", optional=True, nullable=True)

    def test_field_table_name_joins_sections(self):
        table = ObjectTable(sections=["Webhook Resource", "Webhook Object"], rows=[ObjectTableRow("id", "snowflake", "")])
        field_table = table.field_table()

        assert field_table.name == "Webhook Resource Webhook Object"
        assert field_table.fields == (FieldInfo(name="id", type="snowflake"),)

    def test_dict_form(self):
        data = [
            {
                "sectionPath": ["Channel", "Channel Structure"],
                "description": "",
                "rows": [{"field": "id", "type": "snowflake", "description": "the id of this channel"}],
            }
        ]
        tables = load_field_tables(data)

        assert tables[0].sections == ["Channel", "Channel Structure"]
        assert tables[0].rows[0].description == "the id of this channel"
        assert tables[0].to_dict() == data[0]


def test_scrape_text_without_tables():
    assert scrape_text("# Nothing here\n") == []


@pytest.mark.parametrize("field", ["id", "guild_id?"])
def test_optional_marker(field):
    assert ObjectTableRow(field, "snowflake", "").field_info().optional == field.endswith("?")
