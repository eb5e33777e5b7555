"""
Slack Message Formatter

Renders categorized PR results, errors and help text as Block Kit payloads
suitable for a slash command response.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from prbot.models.pull_request import CategorizedResult, PullRequestState
from prbot.utils.helpers import time_ago

Block = Dict[str, Any]
Message = Dict[str, Any]

EMPTY_STATE_TEXT = "_No open PRs found for the specified authors._"
NOTHING_ACTIONABLE_TEXT = "_None of the open PRs need action right now._"
LOADING_TEXT = "Fetching PR status... :hourglass_flowing_sand:"

# (result attribute, emoji, section title)
SECTIONS = [
    ("needs_attention", "\U0001F4AC", "Has Unresolved Comments (Not Draft)"),
    ("needs_reviewers", "\U0001F440", "Needs Reviewers (Not Draft)"),
    ("failing_ci", "\U0001F534", "Failing Checks"),
    ("ready_to_merge", "\U0001F7E2", "Ready to Merge"),
]


def _mrkdwn_section(text: str) -> Block:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def _divider() -> Block:
    return {"type": "divider"}


def _escape(text: str) -> str:
    """Escape the characters Slack treats as control sequences."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def format_pr_item(pr: PullRequestState, now: Optional[datetime] = None) -> str:
    age = time_ago(pr.created_at, now)
    return (
        f"<{pr.url}|#{pr.number}> {_escape(pr.title)}\n"
        f"      _by {pr.author} • {age}_"
    )


def create_section(
    emoji: str, title: str, prs: List[PullRequestState], now: Optional[datetime] = None
) -> List[Block]:
    """Header, PR list and divider for one category; nothing if it is empty."""
    if not prs:
        return []

    pr_list = "\n\n".join(format_pr_item(pr, now) for pr in prs)
    return [
        _mrkdwn_section(f"{emoji} *{title}* ({len(prs)})"),
        _mrkdwn_section(pr_list),
        _divider(),
    ]


def format_status_message(
    result: CategorizedResult,
    team_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Message:
    """
    Build the PR status report.

    Args:
        result: Categorized PRs
        team_name: Team label for the summary line, None for all teams
        now: Reference time for relative ages (defaults to current UTC time)

    Returns:
        Slack message payload posted in channel
    """
    team_label = f" for team *{team_name}*" if team_name else ""

    blocks: List[Block] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": "PR Status Report", "emoji": True},
        },
        _mrkdwn_section(f"Found *{result.total}* open PRs{team_label}"),
        _divider(),
    ]

    for attribute, emoji, title in SECTIONS:
        blocks.extend(create_section(emoji, title, getattr(result, attribute), now))

    if result.total == 0 and not result.errors:
        blocks.append(_mrkdwn_section(EMPTY_STATE_TEXT))
    elif result.is_empty and result.total > 0:
        blocks.append(_mrkdwn_section(NOTHING_ACTIONABLE_TEXT))

    if result.errors:
        failed = ", ".join(f"#{error.number}" for error in result.errors)
        blocks.append(
            {
                "type": "context",
                "elements": [
                    {
                        "type": "mrkdwn",
                        "text": f":warning: Could not load {len(result.errors)} PR(s): {failed}",
                    }
                ],
            }
        )

    return {
        "blocks": blocks,
        "text": f"PR Status Report: {result.total} open PRs",
        "response_type": "in_channel",
    }


def format_error_message(error: str) -> Message:
    return {
        "blocks": [_mrkdwn_section(f"❌ *Error:* {error}")],
        "text": f"Error: {error}",
        "response_type": "ephemeral",
    }


def format_help_message(available_teams: List[str], command: str = "/pr-status") -> Message:
    teams_text = (
        "\n".join(f"• {team}" for team in available_teams)
        if available_teams
        else "_No teams configured._"
    )
    return {
        "blocks": [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": "PR Status Bot Help", "emoji": True},
            },
            _mrkdwn_section(
                "*Usage:*\n"
                f"`{command}` - Show all team members' PRs\n"
                f"`{command} [team]` - Show specific team's PRs\n"
                f"`{command} help` - Show this help message"
            ),
            _mrkdwn_section(f"*Available Teams:*\n{teams_text}"),
        ],
        "text": "PR Status Bot Help",
        "response_type": "ephemeral",
    }


def format_loading_message() -> Message:
    return {"text": LOADING_TEXT, "response_type": "ephemeral"}
