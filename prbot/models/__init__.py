# Shared data models
from prbot.models.pull_request import (
    TriState,
    PullRequestState,
    PRFetchError,
    CategorizedResult,
)
from prbot.models.slack import SlashCommandPayload

__all__ = [
    "TriState",
    "PullRequestState",
    "PRFetchError",
    "CategorizedResult",
    "SlashCommandPayload",
]
