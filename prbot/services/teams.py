"""
Team Resolution

Turns a slash command argument ("", "all" or a team name) into the list of
GitHub logins whose PRs should be reported.

Sources:
- static: TEAM_NAMES plus TEAM_<NAME> environment variables, or a YAML file
- github: organization teams, memberships cached for the process lifetime
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Mapping, Optional

import yaml

from prbot.config import Settings
from prbot.exceptions import ConfigurationError, NoAuthorsError, UnknownTeamError
from prbot.integrations.github import GitHubClient
from prbot.utils.helpers import parse_member_list

logger = logging.getLogger(__name__)

ALL_TEAMS = "all"
ORG_TEAMS_KEY = "__org_teams__"


@dataclass
class ResolvedTeam:
    """Authors selected by a command argument."""

    name: Optional[str]  # None when every team was selected
    authors: List[str]


class TeamDirectory(ABC):
    """Source of team names and their members."""

    @abstractmethod
    async def available_teams(self) -> List[str]:
        """Return configured team names."""

    @abstractmethod
    async def fetch_members(self, team_name: str) -> List[str]:
        """Return members of a team, by its exact configured name."""

    async def find_team(self, team_name: str) -> str:
        """Return the configured spelling of a team name (case-insensitive)."""
        teams = await self.available_teams()
        for name in teams:
            if name.lower() == team_name.lower():
                return name
        raise UnknownTeamError(team_name, teams)

    async def members(self, team_name: str) -> List[str]:
        return await self.fetch_members(await self.find_team(team_name))

    async def all_members(self) -> List[str]:
        """Members of every team, de-duplicated case-insensitively, in order."""
        seen = set()
        members = []
        for team in await self.available_teams():
            for member in await self.fetch_members(team):
                if member.lower() not in seen:
                    seen.add(member.lower())
                    members.append(member)
        return members

    async def resolve(self, argument: str) -> ResolvedTeam:
        """
        Resolve a command argument to a set of authors.

        Args:
            argument: "" or "all" for everyone, otherwise a team name

        Raises:
            UnknownTeamError: If the team is not configured
            NoAuthorsError: If the selection has no members
        """
        argument = argument.strip()

        if argument == "" or argument.lower() == ALL_TEAMS:
            resolved = ResolvedTeam(name=None, authors=await self.all_members())
        else:
            name = await self.find_team(argument)
            resolved = ResolvedTeam(name=name, authors=await self.fetch_members(name))

        if not resolved.authors:
            raise NoAuthorsError("No team members configured.")

        logger.info(
            f"Resolved team {resolved.name or ALL_TEAMS!r} to "
            f"{len(resolved.authors)} authors"
        )
        return resolved


class StaticTeamDirectory(TeamDirectory):
    """Teams defined in configuration."""

    def __init__(self, teams: Mapping[str, List[str]]):
        self.teams: Dict[str, List[str]] = {
            name: list(members) for name, members in teams.items()
        }

    @classmethod
    def from_env(
        cls, team_names: str, environ: Optional[Mapping[str, str]] = None
    ) -> "StaticTeamDirectory":
        """
        Build teams from TEAM_NAMES and one TEAM_<NAME> variable per team.

        Example:
            TEAM_NAMES=frontend,backend
            TEAM_FRONTEND=alice,bob
            TEAM_BACKEND=carol
        """
        if environ is None:
            environ = os.environ

        names = parse_member_list(team_names)
        if not names:
            raise ConfigurationError("TEAM_NAMES environment variable is not set")

        teams: Dict[str, List[str]] = {}
        for name in names:
            env_key = f"TEAM_{name.upper()}"
            members = environ.get(env_key)
            if not members:
                logger.warning(f"Warning: {env_key} environment variable is not set")
                teams[name] = []
                continue
            teams[name] = parse_member_list(members)

        return cls(teams)

    @classmethod
    def from_yaml(cls, path: str) -> "StaticTeamDirectory":
        """
        Build teams from a YAML mapping of team name to members.

        Members may be a list or a comma-separated string:
            frontend: [alice, bob]
            backend: carol, dave
        """
        file_path = Path(path)
        try:
            data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigurationError(f"Teams file not found: {path}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Teams file {path} is not valid YAML: {e}") from e

        if not isinstance(data, dict) or not data:
            raise ConfigurationError(
                f"Teams file {path} must map team names to member lists"
            )

        teams = {str(name): parse_member_list(members) for name, members in data.items()}
        logger.info(f"Loaded {len(teams)} teams from {path}")
        return cls(teams)

    async def available_teams(self) -> List[str]:
        return list(self.teams)

    async def fetch_members(self, team_name: str) -> List[str]:
        return list(self.teams[team_name])


class TeamMembershipCache:
    """
    Process-lifetime cache of team lookups.

    Entries are populated by the first caller that needs them and never
    expire. Two concurrent first lookups may both fetch; the second write
    stores the same read-only result, so no locking is needed.
    """

    def __init__(self):
        self._entries: Dict[str, List[str]] = {}

    async def get_or_load(
        self, key: str, loader: Callable[[], Awaitable[List[str]]]
    ) -> List[str]:
        if key in self._entries:
            return list(self._entries[key])

        value = list(await loader())
        self._entries[key] = value
        logger.debug(f"Cached {len(value)} entries for {key}")
        return list(value)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def clear(self) -> None:
        """Drop all cached entries to force fresh lookups."""
        self._entries.clear()
        logger.info("Team membership cache cleared")


class GitHubTeamDirectory(TeamDirectory):
    """Teams of a GitHub organization, looked up by slug."""

    def __init__(
        self,
        client: GitHubClient,
        org: str,
        cache: TeamMembershipCache,
        team_slugs: Optional[List[str]] = None,
    ):
        self.client = client
        self.org = org
        self.cache = cache
        self.team_slugs = team_slugs

    async def available_teams(self) -> List[str]:
        if self.team_slugs:
            return list(self.team_slugs)
        return await self.cache.get_or_load(
            ORG_TEAMS_KEY, lambda: self.client.list_org_team_slugs(self.org)
        )

    async def fetch_members(self, team_name: str) -> List[str]:
        return await self.cache.get_or_load(
            f"{self.org}/{team_name}",
            lambda: self.client.list_team_members(self.org, team_name),
        )


def build_team_directory(
    settings: Settings,
    cache: Optional[TeamMembershipCache] = None,
    github_client: Optional[GitHubClient] = None,
) -> TeamDirectory:
    """
    Create the team directory selected by TEAM_SOURCE.

    Args:
        settings: Application settings
        cache: Membership cache for the github source (kept by the caller
               for the process lifetime)
        github_client: Client for the github source; created when omitted

    Raises:
        ConfigurationError: If the source is unknown or not configured
    """
    source = settings.team_source.strip().lower()

    if source == "static":
        if settings.teams_file:
            return StaticTeamDirectory.from_yaml(settings.teams_file)
        return StaticTeamDirectory.from_env(settings.team_names)

    if source == "github":
        org = settings.github_org or settings.github_repo_owner
        if not org:
            raise ConfigurationError("GITHUB_ORG or GITHUB_REPO_OWNER must be set")
        return GitHubTeamDirectory(
            client=github_client or GitHubClient(settings),
            org=org,
            cache=cache if cache is not None else TeamMembershipCache(),
            team_slugs=parse_member_list(settings.team_names) or None,
        )

    raise ConfigurationError(
        f'Unknown TEAM_SOURCE "{settings.team_source}". Expected "static" or "github"'
    )
