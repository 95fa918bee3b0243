"""GitHub integration for committing a file and opening a pull request."""

from __future__ import annotations

import base64
import json
import logging
import uuid
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from src.pr_bot.config.github_settings import GitHubSettings
from src.pr_bot.errors import (
    BaseBranchLookupError,
    BranchCreateError,
    BranchLookupError,
    CommitError,
    GitHubAPIError,
    GitHubConfigurationError,
    PrCreateError,
    StepResult,
    WorkflowError,
)

logger = logging.getLogger(__name__)

DEFAULT_BRANCH_PREFIX = "chatbot"
MOCK_PULL_REQUEST_URL = "https://github.com/mock-owner/mock-repo/pull/1"


def generate_branch_name(prefix: str = DEFAULT_BRANCH_PREFIX) -> str:
    """Return a fresh branch name that cannot collide with other requests."""

    return f"{prefix}-{uuid.uuid4()}"


def encode_content(content: str) -> str:
    """Encode file content the way the contents API expects it."""

    return base64.b64encode(content.encode("utf-8")).decode("ascii")


def extract_error_message(response: httpx.Response) -> str | None:
    """Return the ``message`` of a GitHub error body, else the raw text."""

    message = _json_object(response).get("message")
    if isinstance(message, str) and message:
        return message
    return response.text.strip() or None


def _json_object(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def _nested_str(data: dict[str, Any], *keys: str) -> str | None:
    value: Any = data
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True, slots=True)
class PullRequestDraft:
    """Immutable description of the change a caller wants proposed."""

    branch_name: str
    file_path: str
    file_content: str
    commit_message: str
    title: str
    body: str = ""


@dataclass(frozen=True, slots=True)
class BranchRef:
    name: str
    sha: str


@dataclass(frozen=True, slots=True)
class FileBlobState:
    exists: bool
    sha: str | None = None


@dataclass(frozen=True, slots=True)
class PullRequestInfo:
    url: str
    branch_name: str
    number: int | None = None


@dataclass(frozen=True, slots=True)
class PullRequestResult:
    """Outcome of a full workflow run."""

    branch_name: str
    pull_request: PullRequestInfo | None = None
    error: WorkflowError | None = None

    def __post_init__(self) -> None:
        if (self.pull_request is None) == (self.error is None):
            raise ValueError(
                "PullRequestResult needs exactly one of pull_request or error."
            )

    @property
    def success(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> PullRequestInfo:
        """Return the pull request, or raise the workflow error."""

        if self.error is not None:
            raise self.error
        return self.pull_request


class GitHubPullRequestServiceProtocol(Protocol):
    """Protocol for services that turn a draft into a GitHub pull request."""

    async def create_pull_request(self, draft: PullRequestDraft) -> PullRequestResult:
        """Ensure the branch, commit the file and open the pull request."""


@dataclass(slots=True)
class GitHubPullRequestService(GitHubPullRequestServiceProtocol):
    """Creates a branch, commits one file to it and opens a pull request.

    ``client`` is the shared, pre-configured GitHub transport. It is owned by
    the caller and is not closed here.
    """

    owner: str
    repo: str
    base_branch: str
    client: httpx.AsyncClient
    strict_branch_check: bool = False

    @classmethod
    def from_settings(
        cls, settings: GitHubSettings, client: httpx.AsyncClient
    ) -> GitHubPullRequestService:
        """Create a service instance from GitHub settings."""

        owner = settings.github_repo_owner
        if not owner:
            raise GitHubConfigurationError(
                "GitHub repository owner is not configured. Set GITHUB_REPOSITORY in format 'owner/repo'."
            )

        repo = settings.github_repo_name
        if not repo:
            raise GitHubConfigurationError(
                "GitHub repository name is not configured. Set GITHUB_REPOSITORY in format 'owner/repo'."
            )

        return cls(
            owner=owner,
            repo=repo,
            base_branch=settings.github_base_branch or "main",
            client=client,
            strict_branch_check=settings.strict_branch_check,
        )

    async def create_pull_request(self, draft: PullRequestDraft) -> PullRequestResult:
        """Run branch, commit and pull request steps, stopping at the first failure.

        Nothing is rolled back: a branch or commit created before a later
        failure stays on GitHub.
        """

        logger.info(
            "Creating pull request for '%s' on branch '%s'",
            draft.file_path,
            draft.branch_name,
        )

        branch = await self.ensure_branch(draft.branch_name)
        if branch.error is not None:
            return self._fail(draft, branch.error)

        commit = await self.commit_file(
            draft.file_path,
            draft.branch_name,
            draft.file_content,
            draft.commit_message,
        )
        if commit.error is not None:
            return self._fail(draft, commit.error)

        pull_request = await self.open_pull_request(
            draft.title, draft.body, draft.branch_name
        )
        if pull_request.error is not None:
            return self._fail(draft, pull_request.error)

        return PullRequestResult(
            branch_name=draft.branch_name, pull_request=pull_request.value
        )

    async def ensure_branch(self, branch_name: str) -> StepResult[BranchRef]:
        """Make sure ``branch_name`` exists, creating it from the base branch."""

        try:
            response = await self.client.get(self._ref_path(branch_name))
        except httpx.RequestError as exc:
            return StepResult.failure(
                BranchLookupError(f"Failed to look up branch '{branch_name}': {exc}")
            )

        if response.is_success:
            logger.info("Branch %s already exists.", branch_name)
            sha = _nested_str(_json_object(response), "object", "sha") or ""
            return StepResult.success(BranchRef(name=branch_name, sha=sha))

        if response.status_code != HTTPStatus.NOT_FOUND:
            if self.strict_branch_check:
                return StepResult.failure(
                    BranchLookupError.from_response(
                        f"Failed to look up branch '{branch_name}'", response
                    )
                )
            logger.warning(
                "Lookup of branch '%s' returned %s (%s); treating it as missing",
                branch_name,
                response.status_code,
                extract_error_message(response),
            )

        base_sha = await self._fetch_base_branch_sha()
        if base_sha.error is not None:
            return StepResult.failure(base_sha.error)

        return await self._create_branch(branch_name, base_sha.value)

    async def commit_file(
        self, file_path: str, branch_name: str, content: str, message: str
    ) -> StepResult[FileBlobState]:
        """Create or update ``file_path`` on ``branch_name`` with ``content``."""

        current = await self._fetch_file_state(file_path, branch_name)

        payload = {
            "message": message,
            "content": encode_content(content),
            "branch": branch_name,
        }
        # GitHub rejects updates without the blob SHA and creates with one.
        if current.exists and current.sha:
            payload["sha"] = current.sha

        result = await self._send(
            CommitError,
            f"Failed to commit file '{file_path}'",
            "PUT",
            self._contents_path(file_path),
            json=payload,
        )
        if result.error is not None:
            return StepResult.failure(result.error)

        new_sha = _nested_str(_json_object(result.value), "content", "sha")
        logger.info(
            "%s '%s' on branch '%s'",
            "Updated" if current.exists else "Created",
            file_path,
            branch_name,
        )
        return StepResult.success(FileBlobState(exists=True, sha=new_sha))

    async def open_pull_request(
        self, title: str, body: str, branch_name: str
    ) -> StepResult[PullRequestInfo]:
        """Open a pull request from ``branch_name`` into the base branch."""

        result = await self._send(
            PrCreateError,
            "Failed to create pull request",
            "POST",
            f"{self._repo_path}/pulls",
            json={
                "title": title,
                "body": body,
                "head": f"{self.owner}:{branch_name}",
                "base": self.base_branch,
            },
        )
        if result.error is not None:
            return StepResult.failure(result.error)

        response = result.value
        data = _json_object(response)
        url = data.get("html_url")
        if not isinstance(url, str) or not url:
            return StepResult.failure(
                PrCreateError(
                    "GitHub response missing pull request URL.",
                    response.status_code,
                    response.text,
                )
            )

        number = data.get("number")
        logger.info("Pull Request created: %s", url)
        return StepResult.success(
            PullRequestInfo(
                url=url,
                branch_name=branch_name,
                number=number if isinstance(number, int) else None,
            )
        )

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    def _ref_path(self, branch_name: str) -> str:
        return f"{self._repo_path}/git/ref/heads/{quote(branch_name, safe='/')}"

    def _contents_path(self, file_path: str) -> str:
        return f"{self._repo_path}/contents/{quote(file_path.lstrip('/'), safe='/')}"

    async def _fetch_base_branch_sha(self) -> StepResult[str]:
        result = await self._send(
            BaseBranchLookupError,
            "Failed to get base branch SHA",
            "GET",
            self._ref_path(self.base_branch),
        )
        if result.error is not None:
            return StepResult.failure(result.error)

        response = result.value
        sha = _nested_str(_json_object(response), "object", "sha")
        if sha is None:
            return StepResult.failure(
                BaseBranchLookupError(
                    "GitHub response missing base branch reference.",
                    response.status_code,
                    response.text,
                )
            )
        return StepResult.success(sha)

    async def _create_branch(self, branch_name: str, base_sha: str) -> StepResult[BranchRef]:
        result = await self._send(
            BranchCreateError,
            f"Failed to create branch '{branch_name}'",
            "POST",
            f"{self._repo_path}/git/refs",
            json={"ref": f"refs/heads/{branch_name}", "sha": base_sha},
        )
        if result.error is not None:
            return StepResult.failure(result.error)

        logger.info(
            "Created branch %s from %s at %s", branch_name, self.base_branch, base_sha
        )
        return StepResult.success(BranchRef(name=branch_name, sha=base_sha))

    async def _fetch_file_state(self, file_path: str, branch_name: str) -> FileBlobState:
        # Any failure here means "create": the commit step reports real problems.
        try:
            response = await self.client.get(
                self._contents_path(file_path), params={"ref": branch_name}
            )
        except httpx.RequestError as exc:
            logger.warning(
                "Lookup of '%s' on '%s' failed (%s); committing as a new file",
                file_path,
                branch_name,
                exc,
            )
            return FileBlobState(exists=False)

        if not response.is_success:
            if response.status_code != HTTPStatus.NOT_FOUND:
                logger.warning(
                    "Lookup of '%s' on '%s' returned %s (%s); committing as a new file",
                    file_path,
                    branch_name,
                    response.status_code,
                    extract_error_message(response),
                )
            return FileBlobState(exists=False)

        sha = _nested_str(_json_object(response), "sha")
        if sha is None:
            logger.warning(
                "'%s' on '%s' has no blob SHA; committing as a new file",
                file_path,
                branch_name,
            )
            return FileBlobState(exists=False)
        return FileBlobState(exists=True, sha=sha)

    async def _send(
        self,
        error_type: type[GitHubAPIError],
        message: str,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> StepResult[httpx.Response]:
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            return StepResult.failure(error_type(f"{message}: {exc}"))

        if not response.is_success:
            return StepResult.failure(error_type.from_response(message, response))
        return StepResult.success(response)

    def _fail(self, draft: PullRequestDraft, error: GitHubAPIError) -> PullRequestResult:
        kind = error.kind.value if error.kind else "unknown"
        logger.error(
            "Pull request workflow for branch '%s' failed at %s (status %s): %s",
            draft.branch_name,
            kind,
            error.status_code,
            error.message,
        )
        return PullRequestResult(
            branch_name=draft.branch_name,
            error=WorkflowError(error, branch_name=draft.branch_name),
        )


class MockGitHubPullRequestService(GitHubPullRequestServiceProtocol):
    """Mock pull request service used for local development and tests."""

    async def create_pull_request(self, draft: PullRequestDraft) -> PullRequestResult:
        logger.info(
            "Mock GitHub pull request service called for '%s' on branch '%s'",
            draft.file_path,
            draft.branch_name,
        )
        return PullRequestResult(
            branch_name=draft.branch_name,
            pull_request=PullRequestInfo(
                url=MOCK_PULL_REQUEST_URL, branch_name=draft.branch_name, number=1
            ),
        )
