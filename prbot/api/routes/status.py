"""
PR Status API Routes

JSON access to the same report the slash command renders, e.g. for
dashboards or scheduled jobs.
"""

import logging
from fastapi import APIRouter, HTTPException, Query

from prbot.api.dependencies import get_status_service, get_team_directory
from prbot.exceptions import (
    ConfigurationError,
    FetchTimeoutError,
    NoAuthorsError,
    UnknownTeamError,
    UpstreamError,
)
from prbot.services.report import build_team_report

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/status")
async def get_pr_status(
    team: str = Query("all", description="Team name, or 'all' for every team"),
):
    """
    Get categorized open PRs for a team.

    Returns the four categories, the total number of matched PRs and any
    PRs that could not be fetched.
    """
    try:
        logger.info(f"Getting PR status for team: {team}")
        report = await build_team_report(
            team, get_team_directory(), get_status_service()
        )

    except UnknownTeamError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NoAuthorsError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except FetchTimeoutError as e:
        raise HTTPException(status_code=504, detail=str(e))
    except UpstreamError as e:
        logger.error(f"GitHub error getting PR status: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return {
        "team": report.team.name,
        "authors": report.team.authors,
        **report.result.model_dump(mode="json"),
    }


@router.get("/teams")
async def list_teams():
    """List configured team names."""
    try:
        teams = await get_team_directory().available_teams()
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except UpstreamError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"teams": teams}
