from .github_client import build_github_headers, create_github_client

__all__ = ["build_github_headers", "create_github_client"]
