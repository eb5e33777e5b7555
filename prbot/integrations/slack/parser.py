"""
Slash Command Parser

Parses the application/x-www-form-urlencoded body Slack posts for a slash
command. The raw body is read once for signature verification, so it is
parsed here instead of through a form dependency.
"""

from urllib.parse import parse_qs

from prbot.models.slack import SlashCommandPayload


def parse_slash_command(body: bytes) -> SlashCommandPayload:
    """
    Parse a slash command request body.

    Examples:
        b"command=%2Fpr-status&text=frontend&response_url=https%3A%2F%2Fhooks..."
        -> command: /pr-status
        -> text: frontend

    Args:
        body: Raw request body

    Returns:
        SlashCommandPayload; absent fields default to empty strings
    """
    fields = parse_qs(body.decode("utf-8"), keep_blank_values=True)
    values = {key: items[0] for key, items in fields.items() if items}
    return SlashCommandPayload.model_validate(values)
