"""
GitHub Data Models

Plain snapshots of the GitHub objects the PR status pipeline reads, detached
from PyGithub so the rest of the code never triggers lazy API calls.
"""

from pydantic import BaseModel
from datetime import datetime
from enum import Enum
from typing import Optional


class CISource(str, Enum):
    """Where CI results are read from."""

    CHECKS = "checks"  # Checks API: check runs for a commit
    WORKFLOW_RUNS = "workflow_runs"  # Actions API: workflow runs for a head SHA


class PullRequestSummary(BaseModel):
    """Open PR as returned by the listing call."""

    number: int
    author: str
    head_sha: str


class PullRequestDetail(BaseModel):
    """Full PR detail as returned by the single-PR call."""

    number: int
    title: str
    url: str
    author: str
    is_draft: bool = False
    created_at: datetime
    requested_reviewers: list[str] = []
    requested_teams: list[str] = []
    mergeable: Optional[bool] = None  # None while GitHub is still computing it
    mergeable_state: str = "unknown"
    head_sha: str


class CIRun(BaseModel):
    """A check run or workflow run attached to a commit."""

    name: str
    status: str  # queued, in_progress, completed, ...
    conclusion: Optional[str] = None  # success, failure, ... once completed
