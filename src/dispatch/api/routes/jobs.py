"""Job status endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from ...schemas.jobs import StatusDescriptionModel, StatusTransitionRequest, StatusTransitionResponse
from ...services.jobs.service import (
    InvalidTransitionError,
    check_status_change,
    describe_all_statuses,
    describe_status_by_name,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/statuses", response_model=List[StatusDescriptionModel], status_code=status.HTTP_200_OK)
def list_statuses() -> List[StatusDescriptionModel]:
    return describe_all_statuses()


@router.get("/statuses/{job_status}/next", response_model=StatusDescriptionModel, status_code=status.HTTP_200_OK)
def next_statuses(job_status: str) -> StatusDescriptionModel:
    try:
        return describe_status_by_name(job_status)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("/status/validate", response_model=StatusTransitionResponse, status_code=status.HTTP_200_OK)
def validate_transition(payload: StatusTransitionRequest) -> StatusTransitionResponse:
    """Check a status change before the caller persists it.

    Answers 409 Conflict with the allowed alternatives when the change is illegal.
    """
    try:
        return check_status_change(payload)
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message) from exc
    except Exception as exc:
        logger.exception("Error validating status transition: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to validate status transition: {str(exc)}"
        ) from exc
