from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "PR Status Bot"
    debug: bool = False

    # Slack
    slack_signing_secret: str = ""

    # GitHub
    github_token: str = ""
    github_repo_owner: str = ""
    github_repo_name: str = ""
    github_org: str = ""  # Defaults to github_repo_owner for team lookups
    github_request_timeout: int = 10  # Seconds per HTTP request
    github_max_retries: int = 1  # Connection retries per request

    # CI signal source: "checks" (Checks API) or "workflow_runs" (Actions API)
    ci_source: str = "checks"

    # Teams
    team_source: str = "static"  # "static" (env/YAML) or "github" (org teams)
    team_names: str = ""  # Comma-separated, e.g. "frontend,backend"
    teams_file: str = ""  # Optional YAML mapping of team -> members

    # Processing Configuration
    orchestration_timeout: int = 25  # Seconds
    max_concurrent_fetches: int = 10
    require_ci_passing: bool = False  # Strict ready-to-merge when True

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def repo_full_name(self) -> str:
        return f"{self.github_repo_owner}/{self.github_repo_name}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
