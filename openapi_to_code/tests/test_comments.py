import pytest

from openapi_to_code.comments import COMMENT_WIDTH, doc_comment, format_comment, prettify


@pytest.mark.parametrize(
    "name, comment, expected",
    [
        ("ID", "the id of the webhook", "ID: id of the webhook."),
        ("Name", "is the name", "Name is the name."),
        ("Flags", "contains the flags", "Flags contains the flags."),
        ("Ready", "emitted when the client is ready", "Ready is emitted when the client is ready."),
        ("Token", "this token is secret.", "Token: token is secret."),
        ("Empty", "   ", ""),
    ],
)
def test_prettify(name, comment, expected):
    assert prettify(name, comment) == expected


def test_prettify_with_original_name():
    assert prettify("ID", "the id of the webhook", original_name="id") == "ID is the id of the webhook."


def test_format_comment_wraps():
    text = "word " * 40
    lines = format_comment(text.strip(), indent=1).splitlines()

    assert len(lines) > 1
    assert all(line.startswith("\t// ") for line in lines)
    assert all(len(line) <= COMMENT_WIDTH for line in lines)


def test_format_comment_keeps_short_lines():
    assert format_comment("hello") == "// hello\n"
    assert format_comment("a\n\nb") == "// a\n//\n// b\n"


def test_doc_comment():
    assert doc_comment("Name", "the name of the guild", indent=1) == "\t// Name: name of the guild.\n"
    assert doc_comment("Name", "") == ""
