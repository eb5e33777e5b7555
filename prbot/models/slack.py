"""
Slack Data Models
"""

from pydantic import BaseModel


class SlashCommandPayload(BaseModel):
    """Form fields Slack posts for a slash command invocation."""

    command: str = ""
    text: str = ""
    response_url: str = ""
    user_id: str = ""
    user_name: str = ""
    channel_id: str = ""
    channel_name: str = ""
    team_id: str = ""
    team_domain: str = ""
    trigger_id: str = ""

    @property
    def argument(self) -> str:
        """Normalized command argument (e.g. a team name, "all" or "help")."""
        return self.text.strip().lower()
