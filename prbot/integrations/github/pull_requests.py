"""
Pull Request State Reader

Assembles one PullRequestState per open PR from four independent GitHub
reads (detail, reviews, unresolved review threads, CI) issued concurrently.

Degradation rules:
- Review thread query fails: treated as "no unresolved threads", logged.
- CI endpoint answers 403: both CI fields become UNKNOWN, logged.
- Any other failure propagates and fails this PR's fetch.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from prbot.exceptions import UpstreamAuthorizationError
from prbot.integrations.github.client import GitHubClient
from prbot.integrations.github.models import CIRun, CISource, PullRequestSummary
from prbot.models.pull_request import PullRequestState, TriState

logger = logging.getLogger(__name__)

FAILURE_CONCLUSIONS = frozenset({"failure", "timed_out", "startup_failure"})
PASSING_CONCLUSIONS = frozenset({"success", "neutral", "skipped"})


@dataclass(frozen=True)
class CISignal:
    """CI failure/passing pair for one commit."""

    failure: TriState
    passing: TriState


UNKNOWN_CI = CISignal(failure=TriState.UNKNOWN, passing=TriState.UNKNOWN)


def summarize_ci_runs(runs: Iterable[CIRun]) -> CISignal:
    """
    Reduce CI runs to a failure/passing signal.

    Runs that have not completed are ignored. Passing requires at least one
    completed run, all of them with a passing conclusion.
    """
    completed = [run for run in runs if run.status == "completed"]
    failed = any(run.conclusion in FAILURE_CONCLUSIONS for run in completed)
    passed = bool(completed) and all(
        run.conclusion in PASSING_CONCLUSIONS for run in completed
    )
    return CISignal(
        failure=TriState.from_bool(failed),
        passing=TriState.from_bool(passed),
    )


def summarize_reviews(states: Iterable[str]) -> Tuple[bool, bool]:
    """Return (has_approved_review, has_changes_requested)."""
    normalized = {state.upper() for state in states}
    return "APPROVED" in normalized, "CHANGES_REQUESTED" in normalized


def filter_by_authors(
    pulls: Iterable[PullRequestSummary], authors: Iterable[str]
) -> List[PullRequestSummary]:
    """Keep PRs opened by one of the given logins (case-insensitive), in order."""
    wanted = {author.lower() for author in authors}
    return [pr for pr in pulls if pr.author.lower() in wanted]


class PullRequestReader:
    """Builds PullRequestState records from GitHub."""

    def __init__(self, client: GitHubClient, ci_source: CISource = CISource.CHECKS):
        self.client = client
        self.ci_source = CISource(ci_source)

    async def fetch_state(self, summary: PullRequestSummary) -> PullRequestState:
        """
        Fetch and normalize the state of one PR.

        Args:
            summary: The PR as returned by the open PR listing

        Returns:
            Immutable PullRequestState

        Raises:
            UpstreamError: If detail, reviews or CI (other than 403) fail
        """
        detail, review_states, unresolved_threads, ci = await asyncio.gather(
            self.client.get_pull(summary.number),
            self.client.list_review_states(summary.number),
            self._unresolved_threads(summary.number),
            self._ci_signal(summary),
        )

        approved, changes_requested = summarize_reviews(review_states)

        return PullRequestState(
            number=detail.number,
            title=detail.title,
            url=detail.url,
            author=detail.author,
            is_draft=detail.is_draft,
            created_at=detail.created_at,
            has_unresolved_comments=unresolved_threads or changes_requested,
            has_requested_reviewers=bool(
                detail.requested_reviewers or detail.requested_teams
            ),
            has_approved_review=approved,
            ci_failure=ci.failure,
            ci_passing=ci.passing,
            is_mergeable=detail.mergeable is True,
            mergeable_state=detail.mergeable_state,
        )

    async def _unresolved_threads(self, number: int) -> bool:
        try:
            return await self.client.has_unresolved_threads(number)
        except Exception as e:
            logger.warning(
                f"Review thread query failed for PR #{number}, "
                f"assuming no unresolved threads: {e}"
            )
            return False

    async def _ci_signal(self, summary: PullRequestSummary) -> CISignal:
        try:
            if self.ci_source == CISource.WORKFLOW_RUNS:
                runs = await self.client.list_workflow_runs(summary.head_sha)
            else:
                runs = await self.client.list_check_runs(summary.head_sha)
        except UpstreamAuthorizationError as e:
            logger.warning(f"No permission to read CI for PR #{summary.number}: {e}")
            return UNKNOWN_CI

        return summarize_ci_runs(runs)
