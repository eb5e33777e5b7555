"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from datetime import datetime, timezone

import pytest

from prbot.config import Settings
from prbot.models.pull_request import PullRequestState, TriState

CREATED_AT = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)


def make_pr(number: int = 1, **overrides) -> PullRequestState:
    """PullRequestState with neutral defaults: open, not draft, no activity, CI unknown."""
    fields = {
        "number": number,
        "title": f"PR {number}",
        "url": f"https://github.com/acme/widgets/pull/{number}",
        "author": "alice",
        "is_draft": False,
        "created_at": CREATED_AT,
        "has_unresolved_comments": False,
        "has_requested_reviewers": False,
        "has_approved_review": False,
        "ci_failure": TriState.UNKNOWN,
        "ci_passing": TriState.UNKNOWN,
        "is_mergeable": False,
        "mergeable_state": "unknown",
    }
    fields.update(overrides)
    return PullRequestState(**fields)


@pytest.fixture
def settings():
    """Settings with a configured repository and no .env influence."""
    return Settings(
        _env_file=None,
        github_token="ghp_test",
        github_repo_owner="acme",
        github_repo_name="widgets",
        team_names="frontend,backend",
        orchestration_timeout=5,
        slack_signing_secret="test-signing-secret",
    )
