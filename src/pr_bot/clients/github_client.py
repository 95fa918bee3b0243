"""Client for GitHub API operations."""

import httpx

from src.pr_bot.config import GitHubSettings
from src.pr_bot.errors import GitHubConfigurationError


def build_github_headers(settings: GitHubSettings) -> dict[str, str]:
    """
    Build the headers attached to every GitHub request.

    Args:
        settings: GitHub integration configuration.

    Returns:
        Authorization, user agent, media type and API version headers.

    Raises:
        GitHubConfigurationError: If the GitHub token is not configured.
    """
    token_secret = settings.github_token
    if token_secret is None or not token_secret.get_secret_value():
        raise GitHubConfigurationError(
            "GitHub token is not configured. Set GITHUB_TOKEN."
        )

    return {
        "Authorization": f"Bearer {token_secret.get_secret_value()}",
        "User-Agent": settings.github_user_agent,
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": settings.github_api_version,
    }


def create_github_client(
    settings: GitHubSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Create the shared HTTP client used for all GitHub calls.

    The client is meant to live for the whole process; callers own it and
    must close it with ``aclose()``.

    Args:
        settings: GitHub integration configuration.
        transport: Optional transport override, mainly for tests.

    Returns:
        An ``httpx.AsyncClient`` bound to the GitHub API base URL.
    """
    return httpx.AsyncClient(
        base_url=str(settings.github_api_url).rstrip("/"),
        headers=build_github_headers(settings),
        timeout=settings.github_api_timeout_seconds,
        transport=transport,
    )
