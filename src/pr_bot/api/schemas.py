"""Pydantic models for API request and response schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.pr_bot.services.github_pr_service import (
    PullRequestDraft,
    generate_branch_name,
)


class PullRequestCreateRequest(BaseModel):
    """Request body for proposing a single-file change as a pull request.

    Keys are accepted in camelCase (``branchName``) or snake_case
    (``branch_name``). Apart from branch name defaulting nothing is validated
    here; GitHub rejects missing paths or messages itself.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    branch_name: Optional[str] = Field(
        None,
        description="Working branch. A unique name is generated when omitted.",
    )
    file_path: Optional[str] = Field(
        None, description="Repository-relative path of the file to write."
    )
    file_content: Optional[str] = Field(
        None, description="Full new content of the file."
    )
    commit_message: Optional[str] = Field(None, description="Commit message.")
    pr_title: Optional[str] = Field(None, description="Pull request title.")
    pr_body: Optional[str] = Field(None, description="Pull request description.")

    def to_draft(self, branch_prefix: str) -> PullRequestDraft:
        """Resolve the branch name and freeze the request for the workflow."""

        branch_name = self.branch_name
        if not branch_name or not branch_name.strip():
            branch_name = generate_branch_name(branch_prefix)

        return PullRequestDraft(
            branch_name=branch_name,
            file_path=(self.file_path or "").lstrip("/"),
            file_content=self.file_content or "",
            commit_message=self.commit_message or "",
            title=self.pr_title or "",
            body=self.pr_body or "",
        )


class PullRequestCreateResponse(BaseModel):
    """Response for the pull request endpoint."""

    message: str
    pull_request_url: str
    pull_request_number: Optional[int] = None
    branch_name: str


class PullRequestErrorDetail(BaseModel):
    """Structured failure reported in ``detail`` of a 500 response."""

    message: str
    kind: Optional[str] = None
    status_code: Optional[int] = None
    body: str = ""
    branch_name: Optional[str] = None


class PullRequestErrorResponse(BaseModel):
    detail: PullRequestErrorDetail
