# Slack integration module
from prbot.integrations.slack.client import SlackResponder
from prbot.integrations.slack.verification import SlackRequestVerifier
from prbot.integrations.slack.parser import parse_slash_command
from prbot.integrations.slack.formatter import (
    format_status_message,
    format_error_message,
    format_help_message,
    format_loading_message,
)

__all__ = [
    "SlackResponder",
    "SlackRequestVerifier",
    "parse_slash_command",
    "format_status_message",
    "format_error_message",
    "format_help_message",
    "format_loading_message",
]
