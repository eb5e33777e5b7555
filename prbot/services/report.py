"""
Team Status Report

Full report flow for one command argument:
team resolution -> PR fetch + categorization
"""

import logging
from dataclasses import dataclass

from prbot.models.pull_request import CategorizedResult
from prbot.services.pr_status import PRStatusService
from prbot.services.teams import ResolvedTeam, TeamDirectory

logger = logging.getLogger(__name__)


@dataclass
class TeamStatusReport:
    """Categorized PRs for a resolved team."""

    team: ResolvedTeam
    result: CategorizedResult


async def build_team_report(
    argument: str,
    team_directory: TeamDirectory,
    status_service: PRStatusService,
) -> TeamStatusReport:
    """
    Resolve the requested team and fetch its PR status.

    Args:
        argument: "" / "all" for every team, otherwise a team name
        team_directory: Source of team members
        status_service: PR fetch orchestrator

    Returns:
        TeamStatusReport

    Raises:
        PRStatusError: Any configuration, team or upstream failure
    """
    team = await team_directory.resolve(argument)
    result = await status_service.get_status_for_authors(team.authors)
    logger.info(
        f"Report for {team.name or 'all teams'}: {result.total} PRs, "
        f"{len(result.errors)} fetch errors"
    )
    return TeamStatusReport(team=team, result=result)
