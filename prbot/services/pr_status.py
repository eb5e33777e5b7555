"""
PR Status Service

Drives the full fetch for one report:
open PR listing -> author filter -> concurrent per-PR fetch -> categorization

One listing call serves every author; filtering happens client-side.
"""

import asyncio
import logging
from typing import Iterable, Optional, Union

from prbot.config import Settings, get_settings
from prbot.exceptions import ConfigurationError, FetchTimeoutError, UpstreamError
from prbot.integrations.github import (
    CISource,
    GitHubClient,
    PullRequestReader,
    PullRequestSummary,
    filter_by_authors,
)
from prbot.models.pull_request import CategorizedResult, PRFetchError, PullRequestState
from prbot.services.categorization import categorize

logger = logging.getLogger(__name__)


class PRStatusService:
    """
    Builds the categorized PR report for a set of authors.

    Failure policy:
    - Missing GitHub configuration raises ConfigurationError.
    - A failed open PR listing raises UpstreamError for the whole request.
    - A failed single-PR fetch is logged and reported in result.errors;
      the remaining PRs are still categorized.
    - Exceeding the deadline cancels pending fetches and raises FetchTimeoutError.
    """

    def __init__(
        self,
        github_client: Optional[GitHubClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        # Lazy so that a missing token surfaces as ConfigurationError per request
        self._github_client = github_client
        self._reader: Optional[PullRequestReader] = None

    @property
    def github_client(self) -> GitHubClient:
        """Lazy initialization of GitHub client."""
        if self._github_client is None:
            self._github_client = GitHubClient(self.settings)
        return self._github_client

    @property
    def reader(self) -> PullRequestReader:
        """Lazy initialization of PR state reader."""
        if self._reader is None:
            try:
                ci_source = CISource(self.settings.ci_source.lower())
            except ValueError as e:
                raise ConfigurationError(
                    f'Unknown CI_SOURCE "{self.settings.ci_source}". '
                    f"Expected one of: {', '.join(s.value for s in CISource)}"
                ) from e
            self._reader = PullRequestReader(self.github_client, ci_source=ci_source)
        return self._reader

    async def get_status_for_authors(
        self, authors: Iterable[str], timeout: Optional[float] = None
    ) -> CategorizedResult:
        """
        Fetch and categorize all open PRs authored by the given logins.

        Args:
            authors: GitHub logins (case-insensitive)
            timeout: Deadline in seconds; defaults to ORCHESTRATION_TIMEOUT.
                     Zero or negative disables the deadline.

        Returns:
            CategorizedResult, with per-PR failures in result.errors
        """
        if timeout is None:
            timeout = self.settings.orchestration_timeout

        authors = list(authors)
        reader = self.reader  # Raises ConfigurationError before any request

        if not timeout or timeout <= 0:
            return await self._collect(reader, authors)

        try:
            return await asyncio.wait_for(self._collect(reader, authors), timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"PR status fetch exceeded {timeout}s deadline")
            raise FetchTimeoutError(
                f"Fetching PR status took longer than {timeout} seconds"
            ) from e

    async def _collect(
        self, reader: PullRequestReader, authors: list
    ) -> CategorizedResult:
        # Listing failures are fatal for the whole request
        pulls = await self.github_client.list_open_pulls()
        matched = filter_by_authors(pulls, authors)
        logger.info(
            f"{len(matched)} of {len(pulls)} open PRs authored by "
            f"{len(authors)} requested authors"
        )

        semaphore = asyncio.Semaphore(max(1, self.settings.max_concurrent_fetches))
        outcomes = await asyncio.gather(
            *(self._fetch_one(reader, summary, semaphore) for summary in matched)
        )

        states = [item for item in outcomes if isinstance(item, PullRequestState)]
        errors = [item for item in outcomes if isinstance(item, PRFetchError)]

        result = categorize(
            states, require_ci_passing=self.settings.require_ci_passing
        )
        result.errors = errors

        if errors:
            logger.warning(f"{len(errors)} PR(s) could not be fetched")
        logger.info(
            f"Categorized {result.total} PRs: "
            f"{len(result.needs_attention)} need attention, "
            f"{len(result.needs_reviewers)} need reviewers, "
            f"{len(result.failing_ci)} failing CI, "
            f"{len(result.ready_to_merge)} ready to merge"
        )
        return result

    async def _fetch_one(
        self,
        reader: PullRequestReader,
        summary: PullRequestSummary,
        semaphore: asyncio.Semaphore,
    ) -> Union[PullRequestState, PRFetchError]:
        async with semaphore:
            try:
                return await reader.fetch_state(summary)
            except UpstreamError as e:
                logger.warning(f"Failed to fetch PR #{summary.number}: {e}")
                return PRFetchError(number=summary.number, message=str(e))
