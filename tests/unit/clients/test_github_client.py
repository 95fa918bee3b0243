"""Unit tests for the shared GitHub HTTP client."""

import httpx
import pytest

from src.pr_bot.clients import build_github_headers, create_github_client
from src.pr_bot.config import GitHubSettings
from src.pr_bot.errors import GitHubConfigurationError


def test_headers_include_auth_and_api_metadata(github_settings):
    headers = build_github_headers(github_settings)

    assert headers == {
        "Authorization": "Bearer test-token",
        "User-Agent": "ChatBot",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }


def test_headers_follow_settings():
    settings = GitHubSettings(
        github_token="t",
        github_user_agent="docs-bot",
        github_api_version="2024-01-01",
    )

    headers = build_github_headers(settings)

    assert headers["User-Agent"] == "docs-bot"
    assert headers["X-GitHub-Api-Version"] == "2024-01-01"


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token_raises(token):
    settings = GitHubSettings(github_token=token, github_repository="octo/docs")

    with pytest.raises(GitHubConfigurationError, match="GITHUB_TOKEN"):
        build_github_headers(settings)

    with pytest.raises(GitHubConfigurationError):
        create_github_client(settings)


@pytest.mark.asyncio
async def test_client_is_bound_to_api_url(github_settings):
    async with create_github_client(github_settings) as client:
        request = client.build_request("GET", "/repos/octo/docs")
        assert request.url == httpx.URL("https://api.github.com/repos/octo/docs")
        assert client.timeout == httpx.Timeout(30.0)
        assert client.headers["Authorization"] == "Bearer test-token"


@pytest.mark.asyncio
async def test_client_uses_enterprise_url_and_timeout():
    settings = GitHubSettings(
        github_token="t",
        github_api_url="https://ghe.example.com/api/v3/",
        github_api_timeout_seconds=5,
    )

    async with create_github_client(settings) as client:
        request = client.build_request("GET", "/repos/octo/docs")
        assert request.url == httpx.URL(
            "https://ghe.example.com/api/v3/repos/octo/docs"
        )
        assert client.timeout == httpx.Timeout(5.0)


@pytest.mark.asyncio
async def test_injected_transport_receives_requests(github_settings):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    client = create_github_client(github_settings, transport=httpx.MockTransport(handler))
    async with client:
        await client.get("/repos/octo/docs")

    (request,) = seen
    assert str(request.url) == "https://api.github.com/repos/octo/docs"
    assert request.headers["Accept"] == "application/vnd.github+json"
