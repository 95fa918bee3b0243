"""Main application configuration for the pr-bot project."""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PrBotSettings(BaseSettings):
    """The configurable fields for the pr-bot application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    debug: bool = Field(
        default=False,
        title="Debug Mode",
        description="Enable verbose logging for development.",
        alias="PR_BOT_DEBUG_MODE",
    )
    use_mock_github: bool = Field(
        default=False,
        title="Use Mock GitHub",
        description="Return a mocked pull request service when enabled.",
        alias="PR_BOT_USE_MOCK_GITHUB",
    )
    log_level: str = Field(
        default="INFO",
        title="Log Level",
        description="Root log level for the service.",
        alias="PR_BOT_LOG_LEVEL",
    )
    branch_prefix: str = Field(
        default="chatbot",
        title="Generated Branch Prefix",
        description="Prefix for branch names generated when a request omits one.",
        alias="PR_BOT_BRANCH_PREFIX",
    )

    @field_validator("debug", "use_mock_github", mode="before")
    @classmethod
    def parse_bool(cls, value: Any) -> bool:
        """Ensure toggles are parsed as booleans from strings."""
        if isinstance(value, str):
            return value.lower() in {"true", "1", "yes", "on"}
        return bool(value)

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"
