import logging
from dotenv import load_dotenv
from fastapi import FastAPI

# TEAM_<NAME> variables are read from the process environment
load_dotenv()

from prbot.config import get_settings
from prbot.api.routes import slack, status

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for app modules
logger = logging.getLogger("prbot")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title=settings.app_name,
    description="Slack slash command reporting open GitHub PR status",
    version="0.1.0",
)

# Include routers
app.include_router(slack.router, prefix="/slack", tags=["Slack"])
app.include_router(status.router, prefix="/api/prs", tags=["PR Status"])


@app.get("/")
async def root():
    return {
        "message": "Welcome to PR Status Bot",
        "version": "0.1.0",
        "endpoints": {
            "slash_command": "/slack/command",
            "status": "/api/prs/status",
            "teams": "/api/prs/teams",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name}
