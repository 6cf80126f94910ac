"""
Identifier case conversion for generated Go code.
"""

import re
from pathlib import Path

DATA_DIR = Path(__file__).parent / "data"

# Splits text into words, keeping runs of capitals ("ID", "HTTP") together
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")

# Characters that may appear in schema names but never in Go identifiers
_ILLEGAL_CHARACTERS = str.maketrans("", "", "[]- ")


def _load_initialisms() -> frozenset[str]:
    words = set()
    for line in (DATA_DIR / "initials.txt").read_text(encoding="utf-8").splitlines():
        if line.startswith("#"):
            continue
        words.update(word.upper() for word in line.split())
    return frozenset(words)


INITIALISMS = _load_initialisms()

# Words with a fixed mixed-case spelling
SPECIAL_WORDS = {
    "IDS": "IDs",
    "OAUTH2": "OAuth2",
}


def strip_illegal(text: str) -> str:
    """Remove characters that are not allowed in identifiers."""
    return text.translate(_ILLEGAL_CHARACTERS)


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _go_word(word: str) -> str:
    upper = word.upper()
    if upper in SPECIAL_WORDS:
        return SPECIAL_WORDS[upper]
    if upper in INITIALISMS:
        return upper
    return word[:1].upper() + word[1:].lower()


def _join_go_words(words: list[str]) -> str:
    return "".join(_go_word(word) for word in words if word)


def snake_to_go(text: str) -> str:
    """Convert a snake_case name to an exported Go identifier.

    Examples:
        "author_id" -> "AuthorID"
        "guild_scheduled_event" -> "GuildScheduledEvent"
        "avatar_url" -> "AvatarURL"
    """
    if not text:
        return ""
    return _join_go_words(_split_into_words(strip_illegal(text).replace("_", " ")))


def pascal_to_go(text: str) -> str:
    """Convert a PascalCase (or camelCase) name to a Go identifier.

    Examples:
        "GuildMember" -> "GuildMember"
        "UserId" -> "UserID"
        "Widget[Shape]" -> "WidgetShape"
    """
    if not text:
        return ""
    return _join_go_words(_split_into_words(strip_illegal(text)))


def const_to_go(text: str) -> str:
    """Convert a constant title such as "GUILD_TEXT" to "GuildText"."""
    return snake_to_go(text.lower())


def is_exported(text: str) -> bool:
    """Report whether the first letter of text is upper-case."""
    for char in text:
        if char.isalpha():
            return char.isupper()
    return False
