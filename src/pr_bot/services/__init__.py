"""Service modules for pull request automation."""

from .github_pr_service import (
    BranchRef,
    FileBlobState,
    GitHubPullRequestService,
    GitHubPullRequestServiceProtocol,
    MockGitHubPullRequestService,
    PullRequestDraft,
    PullRequestInfo,
    PullRequestResult,
)

__all__ = [
    "BranchRef",
    "FileBlobState",
    "GitHubPullRequestService",
    "GitHubPullRequestServiceProtocol",
    "MockGitHubPullRequestService",
    "PullRequestDraft",
    "PullRequestInfo",
    "PullRequestResult",
]
