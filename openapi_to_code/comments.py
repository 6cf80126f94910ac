"""
Documentation comment helpers.

Turns free-form descriptions (usually copied from API documentation) into
Go doc comments that start with the documented identifier.
"""

from __future__ import annotations

import textwrap

COMMENT_WIDTH = 80

_ARTICLES = {"a", "an", "the"}


def _nth_word(paragraph: str, n: int) -> str:
    """Return the nth word, or an empty string if the paragraph is too short."""
    words = paragraph.split(" ", n + 1)
    if len(words) < n + 2:
        return ""
    return words[n]


def _pop_first_word(paragraph: str) -> str:
    parts = paragraph.split(" ", 1)
    if len(parts) < 2:
        return ""
    return parts[1]


def _lower_first_word(paragraph: str) -> str:
    return paragraph[:1].lower() + paragraph[1:]


def _lower_first_letter(paragraph: str) -> str:
    if not paragraph:
        return ""
    # Leave acronyms like "gTK" or "URL" alone
    if len(paragraph) > 1 and paragraph[1].isupper():
        return paragraph
    return paragraph[:1].lower() + paragraph[1:]


def _is_simple_present(word: str) -> bool:
    return word.lower() != "this" and word.endswith("s")


def _add_period(comment: str) -> str:
    if comment and not comment.endswith("."):
        comment += "."
    return comment


def prettify(name: str, comment: str, original_name: str = "") -> str:
    """Rewrite a description so that it reads as a doc comment for `name`.

    Examples:
        prettify("ID", "the id of the webhook") -> "ID: id of the webhook."
        prettify("Name", "is the name") -> "Name is the name."
        prettify("Flags", "contains the flags") -> "Flags contains the flags."
    """
    comment = comment.strip()
    if not comment:
        return ""

    if _nth_word(comment, 0).lower() in _ARTICLES:
        comment = _pop_first_word(comment)

    first = _nth_word(comment, 0)
    type_named = bool(original_name) and first.endswith(original_name)

    if first.lower() in ("is", "will"):
        comment = f"{name} {_lower_first_word(comment)}"
    elif first.lower() == "emitted":
        comment = f"{name} is {_lower_first_word(comment)}"
    elif type_named or (comment.startswith("#") and _nth_word(comment, 1)):
        comment = f"{name} is the {_lower_first_word(comment)}"
    elif _is_simple_present(first):
        comment = f"{name} {_lower_first_word(comment)}"
    else:
        comment = comment.removeprefix("this ")
        comment = f"{name}: {_lower_first_letter(comment)}"

    return _add_period(comment)


def format_comment(text: str, indent: int = 0, wrap: bool = True) -> str:
    """Render text as `//` comment lines, indented by `indent` tabs."""
    prefix = "\t" * indent + "// "
    lines = []
    for paragraph in text.splitlines():
        if wrap and paragraph.strip():
            lines.extend(textwrap.wrap(paragraph, width=COMMENT_WIDTH - len(prefix)) or [""])
        else:
            lines.append(paragraph)
    return "".join((prefix + line).rstrip() + "\n" for line in lines)


def doc_comment(name: str, description: str, indent: int = 0, original_name: str = "") -> str:
    """Prettify a description for `name` and render it as comment lines."""
    comment = prettify(name, description, original_name)
    if not comment:
        return ""
    return format_comment(comment, indent)
