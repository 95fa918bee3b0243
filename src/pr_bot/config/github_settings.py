"""GitHub-specific settings for pr-bot."""

from __future__ import annotations

from pydantic import Field, HttpUrl, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitHubSettings(BaseSettings):
    """Configuration values for GitHub API integration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    github_token: SecretStr | None = Field(
        default=None,
        alias="GITHUB_TOKEN",
        description="Personal Access Token for GitHub API operations.",
    )
    github_repository: str | None = Field(
        default=None,
        alias="GITHUB_REPOSITORY",
        description="GitHub repository in format 'owner/repo'.",
    )
    github_base_branch: str = Field(
        default="main",
        alias="GITHUB_BASE_BRANCH",
        description="Branch that new working branches start from and pull requests target.",
    )
    github_api_url: HttpUrl = Field(
        default="https://api.github.com",
        alias="GITHUB_API_URL",
        description="Base URL for the GitHub API.",
    )
    github_api_version: str = Field(
        default="2022-11-28",
        alias="GITHUB_API_VERSION",
        description="GitHub API version to use for requests.",
    )
    github_user_agent: str = Field(
        default="ChatBot",
        alias="GITHUB_USER_AGENT",
        description="User-Agent header sent with every GitHub request.",
    )
    github_api_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        alias="GITHUB_API_TIMEOUT_SECONDS",
        description="Timeout applied to each GitHub API request.",
    )
    strict_branch_check: bool = Field(
        default=False,
        alias="GITHUB_STRICT_BRANCH_CHECK",
        description=(
            "Only treat a 404 from the branch lookup as a missing branch. "
            "Other failures abort the workflow instead of attempting creation."
        ),
    )

    @property
    def github_repo_owner(self) -> str | None:
        """Return the owner portion of the repository."""

        if self.github_repository:
            return self.github_repository.split("/", 1)[0] or None
        return None

    @property
    def github_repo_name(self) -> str | None:
        """Return the repository name portion of the repository."""

        if self.github_repository:
            parts = self.github_repository.split("/", 1)
            if len(parts) == 2 and parts[1]:
                return parts[1]
        return None
