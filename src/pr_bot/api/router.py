"""API endpoint for pull request creation."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from src.pr_bot import dependencies
from src.pr_bot.api.schemas import (
    PullRequestCreateRequest,
    PullRequestCreateResponse,
    PullRequestErrorDetail,
    PullRequestErrorResponse,
)
from src.pr_bot.config import PrBotSettings
from src.pr_bot.services.github_pr_service import GitHubPullRequestServiceProtocol

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Pull Request created successfully"

router = APIRouter()


@router.post(
    "/pull-request",
    response_model=PullRequestCreateResponse,
    responses={500: {"model": PullRequestErrorResponse}},
)
async def create_pull_request(
    request: PullRequestCreateRequest,
    settings: PrBotSettings = Depends(dependencies.get_app_settings),
    service: GitHubPullRequestServiceProtocol = Depends(
        dependencies.get_pull_request_service
    ),
) -> PullRequestCreateResponse:
    """
    Commit a file to a working branch and open a pull request for it.

    Args:
        request: File change and pull request metadata
        settings: Application settings providing the generated branch prefix
        service: Pull request workflow service

    Returns:
        PullRequestCreateResponse with the pull request URL and branch name

    Raises:
        HTTPException: 500 with a structured detail naming the failed step,
            the GitHub status code and the raw response body
    """
    draft = request.to_draft(settings.branch_prefix)

    try:
        result = await service.create_pull_request(draft)
    except Exception as e:
        logger.exception("Unexpected failure on branch '%s'", draft.branch_name)
        detail = PullRequestErrorDetail(
            message=f"Failed to create pull request: {e}",
            branch_name=draft.branch_name,
        )
        raise HTTPException(status_code=500, detail=detail.model_dump()) from e

    if result.error is not None:
        raise HTTPException(status_code=500, detail=result.error.to_dict())

    pull_request = result.raise_for_error()
    return PullRequestCreateResponse(
        message=SUCCESS_MESSAGE,
        pull_request_url=pull_request.url,
        pull_request_number=pull_request.number,
        branch_name=result.branch_name,
    )
