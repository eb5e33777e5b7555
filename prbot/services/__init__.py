"""
PR status services: categorization, fetch orchestration and team resolution.
"""

from prbot.services.categorization import categorize
from prbot.services.pr_status import PRStatusService
from prbot.services.report import TeamStatusReport, build_team_report
from prbot.services.teams import (
    ResolvedTeam,
    TeamDirectory,
    StaticTeamDirectory,
    GitHubTeamDirectory,
    TeamMembershipCache,
    build_team_directory,
)

__all__ = [
    "categorize",
    "PRStatusService",
    "TeamStatusReport",
    "build_team_report",
    "ResolvedTeam",
    "TeamDirectory",
    "StaticTeamDirectory",
    "GitHubTeamDirectory",
    "TeamMembershipCache",
    "build_team_directory",
]
