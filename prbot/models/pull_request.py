"""
Pull Request State Models

Canonical per-PR record produced by GitHub data access and consumed by the
categorization engine, plus the categorized report handed to presentation.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum
from typing import List


class TriState(str, Enum):
    """
    Three-valued signal for CI state.

    UNKNOWN means the signal could not be observed (e.g. no permission to
    read check runs). It is a distinct value, never an alias for FALSE, so
    always compare against a member instead of relying on truthiness.
    """

    TRUE = "true"
    FALSE = "false"
    UNKNOWN = "unknown"

    @classmethod
    def from_bool(cls, value: bool) -> "TriState":
        return cls.TRUE if value else cls.FALSE


class PullRequestState(BaseModel):
    """Immutable snapshot of one open pull request."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    url: str
    author: str
    is_draft: bool = False
    created_at: datetime

    # Review state
    has_unresolved_comments: bool = False  # Unresolved thread or changes requested
    has_requested_reviewers: bool = False
    has_approved_review: bool = False

    # CI state
    ci_failure: TriState = TriState.UNKNOWN
    ci_passing: TriState = TriState.UNKNOWN

    # Merge state
    is_mergeable: bool = False
    mergeable_state: str = "unknown"


class PRFetchError(BaseModel):
    """A pull request whose state could not be fetched."""

    model_config = ConfigDict(frozen=True)

    number: int
    message: str


class CategorizedResult(BaseModel):
    """
    Pull requests grouped into actionable categories.

    Categories are independent views over the same input: a PR may appear
    in several lists, or in none.
    """

    needs_attention: List[PullRequestState] = Field(default_factory=list)
    needs_reviewers: List[PullRequestState] = Field(default_factory=list)
    failing_ci: List[PullRequestState] = Field(default_factory=list)
    ready_to_merge: List[PullRequestState] = Field(default_factory=list)

    total: int = 0  # Matched PRs that were fetched successfully
    errors: List[PRFetchError] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when no PR landed in any category."""
        return not (
            self.needs_attention
            or self.needs_reviewers
            or self.failing_ci
            or self.ready_to_merge
        )
