"""Unit test specific fixtures."""

import httpx
import pytest

from src.pr_bot import dependencies
from src.pr_bot.clients.github_client import create_github_client
from src.pr_bot.config import GitHubSettings
from src.pr_bot.services.github_pr_service import GitHubPullRequestService
from tests.fixtures.github_api import FakeGitHubApi

GITHUB_ENV_VARS = [
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_BASE_BRANCH",
    "GITHUB_API_URL",
    "GITHUB_API_VERSION",
    "GITHUB_USER_AGENT",
    "GITHUB_API_TIMEOUT_SECONDS",
    "GITHUB_STRICT_BRANCH_CHECK",
]


@pytest.fixture(autouse=True)
def set_unit_test_env(monkeypatch):
    """Run unit tests in mock mode with no GitHub settings leaking in from the host."""
    for name in GITHUB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PR_BOT_USE_MOCK_GITHUB", "true")

    dependencies.get_app_settings.cache_clear()
    dependencies.get_github_settings.cache_clear()
    yield
    dependencies.get_app_settings.cache_clear()
    dependencies.get_github_settings.cache_clear()


@pytest.fixture
def github_settings() -> GitHubSettings:
    return GitHubSettings(
        github_token="test-token",
        github_repository="octo/docs",
        github_base_branch="main",
    )


@pytest.fixture
def github_api() -> FakeGitHubApi:
    return FakeGitHubApi(owner="octo", repo="docs", base_branch="main")


@pytest.fixture
async def github_client(github_settings, github_api):
    """Shared GitHub client whose requests are served by the fake API."""
    client = create_github_client(
        github_settings, transport=httpx.MockTransport(github_api)
    )
    async with client:
        yield client


@pytest.fixture
def service(github_settings, github_client) -> GitHubPullRequestService:
    return GitHubPullRequestService.from_settings(github_settings, github_client)
