import pytest

from openapi_to_code.utils import INITIALISMS, const_to_go, is_exported, pascal_to_go, snake_to_go, strip_illegal


class TestGoNames:
    """Identifier case conversion"""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("author_id", "AuthorID"),
            ("guild_scheduled_event", "GuildScheduledEvent"),
            ("avatar_url", "AvatarURL"),
            ("role_ids", "RoleIDs"),
            ("nsfw", "NSFW"),
            ("id", "ID"),
            ("", ""),
        ],
    )
    def test_snake_to_go(self, name, expected):
        assert snake_to_go(name) == expected

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("GuildMember", "GuildMember"),
            ("UserId", "UserID"),
            ("HTTPServer", "HTTPServer"),
            ("Widget[Shape]", "WidgetShape"),
            ("guild-member", "Guildmember"),
            ("", ""),
        ],
    )
    def test_pascal_to_go(self, name, expected):
        assert pascal_to_go(name) == expected

    def test_const_to_go(self):
        assert const_to_go("GUILD_TEXT") == "GuildText"
        assert const_to_go("guild_news_thread") == "GuildNewsThread"
        assert const_to_go("ANNOUNCEMENT") == "Announcement"

    def test_strip_illegal(self):
        assert strip_illegal("a[b]-c d") == "abcd"

    def test_is_exported(self):
        assert is_exported("User")
        assert not is_exported("user")
        assert not is_exported("_[]")
        assert is_exported("_User")
        assert not is_exported("")

    def test_initialisms_loaded(self):
        assert "ID" in INITIALISMS
        assert "URL" in INITIALISMS
        assert "SKU" in INITIALISMS
