"""Technician dispatch endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from ...schemas.dispatch import SuggestionModel, SuggestionRequest
from ...services.dispatch.service import suggest_for_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dispatch", tags=["dispatch"])


@router.post("/suggestions", response_model=List[SuggestionModel], status_code=status.HTTP_200_OK)
def suggestions(payload: SuggestionRequest) -> List[SuggestionModel]:
    try:
        return suggest_for_request(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Error computing technician suggestions: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compute technician suggestions: {str(exc)}"
        ) from exc
