"""Configuration module for the pr-bot project."""

from .github_settings import GitHubSettings
from .pr_bot_settings import PrBotSettings

__all__ = [
    "GitHubSettings",
    "PrBotSettings",
]
