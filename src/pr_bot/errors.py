"""Error taxonomy and step results for the pull request workflow."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    """Workflow step that produced an error."""

    BASE_BRANCH_LOOKUP = "base_branch_lookup"
    BRANCH_LOOKUP = "branch_lookup"
    BRANCH_CREATE = "branch_create"
    COMMIT = "commit"
    PR_CREATE = "pr_create"


class GitHubConfigurationError(RuntimeError):
    """Raised when required GitHub configuration values are missing."""


class GitHubAPIError(RuntimeError):
    """Raised when an error occurs while communicating with the GitHub API."""

    kind: ErrorKind | None = None

    def __init__(
        self, message: str, status_code: int | None = None, body: str = ""
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_response(cls, message: str, response: httpx.Response) -> GitHubAPIError:
        """Build an error that carries the response status and raw body."""

        body = response.text
        return cls(f"{message}: {response.status_code} - {body}", response.status_code, body)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "kind": self.kind.value if self.kind else None,
            "status_code": self.status_code,
            "body": self.body,
        }


class BaseBranchLookupError(GitHubAPIError):
    """The configured base branch could not be resolved to a commit SHA."""

    kind = ErrorKind.BASE_BRANCH_LOOKUP


class BranchLookupError(GitHubAPIError):
    """The working branch lookup failed for a reason other than absence."""

    kind = ErrorKind.BRANCH_LOOKUP


class BranchCreateError(GitHubAPIError):
    """The working branch ref could not be created."""

    kind = ErrorKind.BRANCH_CREATE


class CommitError(GitHubAPIError):
    """The file could not be created or updated on the working branch."""

    kind = ErrorKind.COMMIT


class PrCreateError(GitHubAPIError):
    """The pull request could not be opened."""

    kind = ErrorKind.PR_CREATE


class WorkflowError(GitHubAPIError):
    """Top-level failure of the pull request workflow.

    Wraps the error of the step that failed. The step error stays reachable
    through ``cause`` and ``__cause__`` and its kind, status and body are
    copied onto the wrapper.
    """

    def __init__(self, cause: GitHubAPIError, branch_name: str | None = None) -> None:
        super().__init__(
            f"GitHub PR creation failed: {cause.message}",
            cause.status_code,
            cause.body,
        )
        self.kind = cause.kind
        self.cause = cause
        self.branch_name = branch_name
        self.__cause__ = cause

    @classmethod
    def from_response(cls, message: str, response: httpx.Response) -> GitHubAPIError:
        raise TypeError(
            "WorkflowError wraps a step error; build it with WorkflowError(cause)."
        )

    def to_dict(self) -> dict[str, Any]:
        detail = super().to_dict()
        detail["branch_name"] = self.branch_name
        return detail


@dataclass(frozen=True, slots=True)
class StepResult(Generic[T]):
    """Outcome of a single remote step: a value or an error, never both."""

    value: T | None = None
    error: GitHubAPIError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> StepResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: GitHubAPIError) -> StepResult[T]:
        return cls(error=error)
