import logging
from contextlib import asynccontextmanager
from importlib import metadata

from fastapi import FastAPI

from src.pr_bot import dependencies
from src.pr_bot.api.router import router as pull_request_router
from src.pr_bot.clients.github_client import create_github_client
from src.pr_bot.logging_config import configure_logging

logger = logging.getLogger(__name__)

try:
    version = metadata.version("github-pr-bot")
except metadata.PackageNotFoundError:
    version = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the GitHub HTTP client and the pull request service for the process."""
    settings = dependencies.get_app_settings()
    github_settings = dependencies.get_github_settings()
    configure_logging(settings.log_level, debug=settings.debug)

    client = None
    if not settings.use_mock_github:
        client = create_github_client(github_settings)
    try:
        app.state.pull_request_service = dependencies.create_pull_request_service(
            settings, github_settings, client
        )
        logger.info(
            "pr-bot started (mock GitHub: %s, base branch: %s)",
            settings.use_mock_github,
            github_settings.github_base_branch,
        )
        yield
    finally:
        if client is not None:
            await client.aclose()


app = FastAPI(
    title="GitHub PR Bot API",
    version=version,
    description="Commits a file to a working branch and opens a pull request.",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(pull_request_router, prefix="/api", tags=["pull-requests"])
app.include_router(pull_request_router, prefix="/api/v1", tags=["pull-requests"])
