"""Central dependency injection hub for pr-bot using FastAPI's Depends mechanism."""

from functools import lru_cache

import httpx
from fastapi import Request

from src.pr_bot.config import GitHubSettings, PrBotSettings
from src.pr_bot.errors import GitHubConfigurationError
from src.pr_bot.services.github_pr_service import (
    GitHubPullRequestService,
    GitHubPullRequestServiceProtocol,
    MockGitHubPullRequestService,
)

# ============================================================================
# Configuration Providers
# ============================================================================


@lru_cache()
def get_app_settings() -> PrBotSettings:
    """Get the application settings singleton."""
    return PrBotSettings()


@lru_cache()
def get_github_settings() -> GitHubSettings:
    """Get the GitHub settings singleton."""
    return GitHubSettings()


# ============================================================================
# Service Providers
# ============================================================================


def create_pull_request_service(
    settings: PrBotSettings,
    github_settings: GitHubSettings,
    client: httpx.AsyncClient | None,
) -> GitHubPullRequestServiceProtocol:
    """
    Build the pull request service for the lifetime of the process.

    Args:
        settings: Application settings for mock configuration.
        github_settings: GitHub integration configuration.
        client: Shared GitHub HTTP client; unused in mock mode.

    Returns:
        GitHubPullRequestServiceProtocol implementation (mock or real based on settings).

    Raises:
        GitHubConfigurationError: If the real service is requested without a
            client or with an incomplete repository setting.
    """
    if settings.use_mock_github:
        return MockGitHubPullRequestService()

    if client is None:
        raise GitHubConfigurationError(
            "A GitHub HTTP client is required when mock mode is disabled."
        )
    return GitHubPullRequestService.from_settings(github_settings, client)


def get_pull_request_service(request: Request) -> GitHubPullRequestServiceProtocol:
    """
    Get the pull request service created during application startup.

    Raises:
        GitHubConfigurationError: If the application lifespan has not run.
    """
    service = getattr(request.app.state, "pull_request_service", None)
    if service is None:
        raise GitHubConfigurationError(
            "Pull request service is not initialised; start the app with its lifespan."
        )
    return service
