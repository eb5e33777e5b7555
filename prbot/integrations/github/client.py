"""
GitHub API Client

Responsibilities:
- Open PR listing and single-PR detail
- Review, check run and workflow run listing
- Unresolved review thread lookup (GraphQL)
- Organization team membership lookup

PyGithub is synchronous, so every call runs in a worker thread and can be
awaited concurrently. GithubException is translated into UpstreamError, or
UpstreamAuthorizationError for 403 responses other than rate limits.
Network failures (requests exceptions) become UpstreamError as well.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional, TypeVar

import requests
from github import Auth, Github
from github.GithubException import GithubException, RateLimitExceededException
from github.Repository import Repository

from prbot.config import Settings, get_settings
from prbot.exceptions import (
    ConfigurationError,
    UpstreamAuthorizationError,
    UpstreamError,
)
from prbot.integrations.github.models import (
    CIRun,
    PullRequestDetail,
    PullRequestSummary,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNRESOLVED_THREADS_QUERY = """
query($owner: String!, $repo: String!, $number: Int!, $after: String) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $number) {
      reviewThreads(first: 100, after: $after) {
        nodes {
          isResolved
        }
        pageInfo {
          hasNextPage
          endCursor
        }
      }
    }
  }
}
""".strip()


def _error_message(error: GithubException) -> str:
    if isinstance(error.data, dict) and error.data.get("message"):
        return str(error.data["message"])
    return str(error)


def translate_github_error(error: GithubException, action: str) -> UpstreamError:
    """Map a PyGithub exception onto the pipeline's upstream error kinds."""
    message = f"GitHub API error while {action}: {_error_message(error)}"
    # Rate limits also arrive as 403 but say nothing about permissions
    if isinstance(error, RateLimitExceededException):
        return UpstreamError(message, status=error.status)
    if error.status == 403:
        return UpstreamAuthorizationError(message)
    return UpstreamError(message, status=error.status)


class GitHubClient:
    """Read-only GitHub API client for one repository."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        if not settings.github_token:
            raise ConfigurationError("GITHUB_TOKEN is not set")
        if not settings.github_repo_owner or not settings.github_repo_name:
            raise ConfigurationError(
                "GITHUB_REPO_OWNER and GITHUB_REPO_NAME must be set"
            )

        self.owner = settings.github_repo_owner
        self.repo_name = settings.github_repo_name
        # Bounded per request: worker threads outlive an expired deadline
        self.client = Github(
            auth=Auth.Token(settings.github_token),
            per_page=100,
            timeout=settings.github_request_timeout,
            retry=settings.github_max_retries,
        )
        # Lazy: no request until the first real call
        self.repo: Repository = self.client.get_repo(
            settings.repo_full_name, lazy=True
        )
        logger.info(f"GitHub client initialized for {settings.repo_full_name}")

    async def _call(self, action: str, func: Callable[..., T], *args: Any) -> T:
        try:
            return await asyncio.to_thread(func, *args)
        except GithubException as e:
            error = translate_github_error(e, action)
            logger.debug(f"{error} (status={e.status})")
            raise error from e
        except requests.exceptions.RequestException as e:
            logger.debug(f"GitHub request failed while {action}: {e}")
            raise UpstreamError(f"GitHub request failed while {action}: {e}") from e

    # ------------------------------------------------------------------
    # Pull requests
    # ------------------------------------------------------------------

    async def list_open_pulls(self) -> List[PullRequestSummary]:
        """List every open PR in the repository (all pages)."""
        pulls = await self._call("listing open pull requests", self._fetch_open_pulls)
        logger.info(f"Found {len(pulls)} open PRs in {self.owner}/{self.repo_name}")
        return pulls

    def _fetch_open_pulls(self) -> List[PullRequestSummary]:
        return [
            PullRequestSummary(
                number=pr.number,
                author=pr.user.login if pr.user else "unknown",
                head_sha=pr.head.sha,
            )
            for pr in self.repo.get_pulls(state="open")
        ]

    async def get_pull(self, number: int) -> PullRequestDetail:
        return await self._call(
            f"fetching PR #{number}", self._fetch_pull_detail, number
        )

    def _fetch_pull_detail(self, number: int) -> PullRequestDetail:
        pr = self.repo.get_pull(number)
        return PullRequestDetail(
            number=pr.number,
            title=pr.title,
            url=pr.html_url,
            author=pr.user.login if pr.user else "unknown",
            is_draft=bool(pr.draft),
            created_at=pr.created_at,
            requested_reviewers=[user.login for user in pr.requested_reviewers],
            requested_teams=[team.slug for team in pr.requested_teams],
            mergeable=pr.mergeable,
            mergeable_state=pr.mergeable_state or "unknown",
            head_sha=pr.head.sha,
        )

    async def list_review_states(self, number: int) -> List[str]:
        """Return the state of every review on a PR (APPROVED, CHANGES_REQUESTED, ...)."""
        return await self._call(
            f"listing reviews for PR #{number}", self._fetch_review_states, number
        )

    def _fetch_review_states(self, number: int) -> List[str]:
        return [review.state for review in self.repo.get_pull(number).get_reviews()]

    async def has_unresolved_threads(self, number: int) -> bool:
        """Check whether any review thread on a PR is still unresolved."""
        return await self._call(
            f"querying review threads for PR #{number}",
            self._fetch_unresolved_threads,
            number,
        )

    def _fetch_unresolved_threads(self, number: int) -> bool:
        cursor: Optional[str] = None

        while True:
            _, payload = self.client.requester.graphql_query(
                UNRESOLVED_THREADS_QUERY,
                {
                    "owner": self.owner,
                    "repo": self.repo_name,
                    "number": number,
                    "after": cursor,
                },
            )
            threads = payload["data"]["repository"]["pullRequest"]["reviewThreads"]

            for node in threads.get("nodes") or []:
                if not node.get("isResolved", False):
                    return True

            page_info = threads.get("pageInfo") or {}
            cursor = page_info.get("endCursor")
            if not page_info.get("hasNextPage") or not cursor:
                return False

    # ------------------------------------------------------------------
    # CI
    # ------------------------------------------------------------------

    async def list_check_runs(self, sha: str) -> List[CIRun]:
        """List check runs for a commit (Checks API)."""
        return await self._call(
            f"listing check runs for {sha[:7]}", self._fetch_check_runs, sha
        )

    def _fetch_check_runs(self, sha: str) -> List[CIRun]:
        return [
            CIRun(name=run.name, status=run.status, conclusion=run.conclusion)
            for run in self.repo.get_commit(sha).get_check_runs()
        ]

    async def list_workflow_runs(self, sha: str) -> List[CIRun]:
        """List Actions workflow runs whose head commit is sha."""
        return await self._call(
            f"listing workflow runs for {sha[:7]}", self._fetch_workflow_runs, sha
        )

    def _fetch_workflow_runs(self, sha: str) -> List[CIRun]:
        return [
            CIRun(name=run.name or "", status=run.status, conclusion=run.conclusion)
            for run in self.repo.get_workflow_runs(head_sha=sha)
        ]

    # ------------------------------------------------------------------
    # Organization teams
    # ------------------------------------------------------------------

    async def list_org_team_slugs(self, org: str) -> List[str]:
        return await self._call(
            f"listing teams of {org}", self._fetch_org_team_slugs, org
        )

    def _fetch_org_team_slugs(self, org: str) -> List[str]:
        return [team.slug for team in self.client.get_organization(org).get_teams()]

    async def list_team_members(self, org: str, slug: str) -> List[str]:
        return await self._call(
            f"listing members of {org}/{slug}", self._fetch_team_members, org, slug
        )

    def _fetch_team_members(self, org: str, slug: str) -> List[str]:
        team = self.client.get_organization(org).get_team_by_slug(slug)
        return [member.login for member in team.get_members()]
