"""
Error kinds raised by the PR status pipeline.

Every error derives from PRStatusError so the transport layer can turn it
into a user-facing message in one place.
"""

from typing import List, Optional


class PRStatusError(Exception):
    """Base class for all expected PR status failures."""


class ConfigurationError(PRStatusError):
    """Repository identity, credentials or team configuration is missing."""


class UpstreamError(PRStatusError):
    """A GitHub API call failed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class UpstreamAuthorizationError(UpstreamError):
    """A GitHub API call was rejected with 403 (missing permission)."""

    def __init__(self, message: str, status: Optional[int] = 403):
        super().__init__(message, status=status)


class FetchTimeoutError(PRStatusError):
    """The fetch did not finish before the configured deadline."""


class TeamResolutionError(PRStatusError):
    """Base class for team lookup failures."""


class NoAuthorsError(TeamResolutionError):
    """The selected team (or all teams) has no members configured."""


class UnknownTeamError(TeamResolutionError):
    """The requested team name is not configured."""

    def __init__(self, team_name: str, available_teams: List[str]):
        self.team_name = team_name
        self.available_teams = available_teams
        available = ", ".join(available_teams) if available_teams else "none"
        super().__init__(
            f'Unknown team "{team_name}". Available teams: {available}'
        )
