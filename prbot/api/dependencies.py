"""
Shared service instances for the API routes.

Services are created lazily on first use so that importing the app never
talks to GitHub. The team membership cache lives for the whole process.
"""

import logging
from typing import Optional

from prbot.config import get_settings
from prbot.integrations.slack import SlackResponder
from prbot.services.pr_status import PRStatusService
from prbot.services.teams import TeamDirectory, TeamMembershipCache, build_team_directory

logger = logging.getLogger(__name__)

team_membership_cache = TeamMembershipCache()

_status_service: Optional[PRStatusService] = None
_team_directory: Optional[TeamDirectory] = None
_slack_responder: Optional[SlackResponder] = None


def get_status_service() -> PRStatusService:
    """Get PRStatusService instance with lazy initialization."""
    global _status_service
    if _status_service is None:
        _status_service = PRStatusService(settings=get_settings())
    return _status_service


def get_team_directory() -> TeamDirectory:
    """
    Get the configured TeamDirectory with lazy initialization.

    A ConfigurationError is raised (and nothing cached) while teams are not
    configured, so fixing the environment does not require a restart of
    the cache.
    """
    global _team_directory
    if _team_directory is None:
        settings = get_settings()
        github_client = None
        if settings.team_source.strip().lower() == "github":
            github_client = get_status_service().github_client
        _team_directory = build_team_directory(
            settings, cache=team_membership_cache, github_client=github_client
        )
    return _team_directory


def get_slack_responder() -> SlackResponder:
    global _slack_responder
    if _slack_responder is None:
        _slack_responder = SlackResponder()
    return _slack_responder
