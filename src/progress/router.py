"""Learner progress API endpoints.

Provides routes for:
- The learner's chapter/lesson progress
- Recording a module completion
"""

import asyncio

import structlog
from fastapi import APIRouter, HTTPException, status

from src.auth.dependencies import CurrentUserId
from src.config import get_settings

from .dependencies import ProgressServiceDep, handle_progress_error
from .schemas import (
    ChapterSummaryResponse,
    CompleteModuleRequest,
    CompletionRecordResponse,
)
from .service import ProgressError


logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1/progress", tags=["progress"])


@router.get(
    "/chapters",
    response_model=list[ChapterSummaryResponse],
    summary="Get my chapter progress",
)
async def get_my_chapters(
    progress_service: ProgressServiceDep,
    user_id: CurrentUserId,
) -> list[ChapterSummaryResponse]:
    """Get published chapters with lock/unlock/completion state for the caller."""
    timeout = get_settings().progress_request_timeout_seconds
    try:
        summaries = await asyncio.wait_for(
            progress_service.get_user_chapters(user_id), timeout=timeout
        )
    except ProgressError as e:
        raise handle_progress_error(e) from e
    except TimeoutError as e:
        logger.warning("user_progress_timeout", timeout_seconds=timeout)
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail="Progress computation timed out",
        ) from e

    return [ChapterSummaryResponse.from_summary(s) for s in summaries]


@router.post(
    "/modules/{module_id}/complete",
    response_model=CompletionRecordResponse,
    status_code=status.HTTP_200_OK,
    summary="Record module completion",
)
async def complete_module(
    module_id: str,
    progress_service: ProgressServiceDep,
    user_id: CurrentUserId,
    data: CompleteModuleRequest | None = None,
) -> CompletionRecordResponse:
    """Record the caller's latest completion state for a game module."""
    is_completed = data.is_completed if data is not None else True
    try:
        result = await progress_service.complete_module(
            user_id=user_id,
            module_id=module_id,
            is_completed=is_completed,
        )
    except ProgressError as e:
        raise handle_progress_error(e) from e

    return CompletionRecordResponse.from_result(result)
