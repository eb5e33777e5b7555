"""
Tests for Slack slash command body parsing.
"""

from prbot.integrations.slack.parser import parse_slash_command
from prbot.models.slack import SlashCommandPayload


class TestParseSlashCommand:
    """Test suite for parse_slash_command function."""

    def test_parse_fields(self):
        body = (
            b"command=%2Fpr-status&text=Frontend+"
            b"&response_url=https%3A%2F%2Fhooks.slack.com%2Fcommands%2F1"
            b"&user_id=U123&user_name=alice&channel_id=C42"
        )

        payload = parse_slash_command(body)

        assert isinstance(payload, SlashCommandPayload)
        assert payload.command == "/pr-status"
        assert payload.text == "Frontend "
        assert payload.argument == "frontend"
        assert payload.response_url == "https://hooks.slack.com/commands/1"
        assert payload.user_id == "U123"
        assert payload.user_name == "alice"
        assert payload.channel_id == "C42"

    def test_empty_text(self):
        payload = parse_slash_command(b"command=%2Fpr-status&text=")
        assert payload.argument == ""
        assert payload.response_url == ""

    def test_unknown_fields_ignored(self):
        payload = parse_slash_command(b"text=help&api_app_id=A1&is_enterprise_install=false")
        assert payload.argument == "help"

    def test_empty_body(self):
        payload = parse_slash_command(b"")
        assert payload == SlashCommandPayload()
