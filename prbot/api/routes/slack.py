"""
Slack API Routes

Slash command endpoint. Slack expects an answer within three seconds, so
the command is acknowledged immediately and the report is delivered later
through the command's response_url.
"""

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
import logging

from prbot.api.dependencies import (
    get_slack_responder,
    get_status_service,
    get_team_directory,
)
from prbot.config import get_settings
from prbot.exceptions import ConfigurationError, PRStatusError
from prbot.integrations.slack import (
    SlackRequestVerifier,
    format_error_message,
    format_help_message,
    format_loading_message,
    format_status_message,
    parse_slash_command,
)
from prbot.models.slack import SlashCommandPayload
from prbot.services.report import build_team_report

logger = logging.getLogger(__name__)
router = APIRouter()

HELP_COMMAND = "help"


async def build_help_response(command: str) -> dict:
    """Help message listing available teams, or an error if teams are not configured."""
    try:
        teams = await get_team_directory().available_teams()
    except PRStatusError as e:
        logger.warning(f"Could not list teams for help: {e}")
        return format_error_message(str(e))
    return format_help_message(teams, command=command or "/pr-status")


async def build_status_response(argument: str) -> dict:
    """Run the report pipeline and render it, turning failures into error messages."""
    try:
        report = await build_team_report(
            argument, get_team_directory(), get_status_service()
        )
        return format_status_message(report.result, team_name=report.team.name)
    except PRStatusError as e:
        logger.warning(f"PR status command failed: {e}")
        return format_error_message(str(e))
    except Exception as e:
        logger.exception(f"Error handling slash command: {e}")
        return format_error_message("An unexpected error occurred")


async def process_status_command(payload: SlashCommandPayload) -> None:
    """Background task: build the report and post it to response_url."""
    logger.info(
        f"Processing {payload.command or '/pr-status'} {payload.argument!r} "
        f"from {payload.user_name or payload.user_id}"
    )
    message = await build_status_response(payload.argument)

    try:
        await get_slack_responder().respond(payload.response_url, message)
    except Exception as e:
        logger.error(f"Error sending delayed response: {e}")


@router.post("/command")
async def slash_command(request: Request, background_tasks: BackgroundTasks):
    """
    Handle the PR status slash command.

    Usage:
    - /pr-status          (all teams)
    - /pr-status frontend (one team)
    - /pr-status help
    """
    body = await request.body()

    try:
        verifier = SlackRequestVerifier(get_settings().slack_signing_secret)
    except ConfigurationError as e:
        logger.error(f"{e}")
        raise HTTPException(status_code=500, detail="Server configuration error")

    if not verifier.is_valid_request(body, request.headers):
        raise HTTPException(status_code=401, detail="Invalid signature")

    payload = parse_slash_command(body)

    if payload.argument == HELP_COMMAND:
        return await build_help_response(payload.command)

    background_tasks.add_task(process_status_command, payload)
    return format_loading_message()
