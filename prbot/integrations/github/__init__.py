"""
GitHub Integration Module

Read-only GitHub access for the PR status report.
"""

from prbot.integrations.github.client import GitHubClient
from prbot.integrations.github.pull_requests import (
    PullRequestReader,
    CISignal,
    filter_by_authors,
    summarize_ci_runs,
    summarize_reviews,
)
from prbot.integrations.github.models import (
    CIRun,
    CISource,
    PullRequestDetail,
    PullRequestSummary,
)

__all__ = [
    "GitHubClient",
    "PullRequestReader",
    "CISignal",
    "filter_by_authors",
    "summarize_ci_runs",
    "summarize_reviews",
    "CIRun",
    "CISource",
    "PullRequestDetail",
    "PullRequestSummary",
]
