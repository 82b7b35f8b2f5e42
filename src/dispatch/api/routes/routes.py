"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, status

from ...schemas.routing import RouteOptimizationRequest, RouteOptimizationResponse
from ...services.routing.service import export_job_route_csv, optimize_job_route

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=RouteOptimizationResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RouteOptimizationRequest) -> RouteOptimizationResponse:
    try:
        return optimize_job_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Error optimizing route: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}"
        ) from exc


@router.post("/optimize/csv", status_code=status.HTTP_200_OK)
def optimize_csv(payload: RouteOptimizationRequest) -> Response:
    """Optimized route as a CSV itinerary; jobs without coordinates come last."""
    try:
        content = export_job_route_csv(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Error exporting route: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export route: {str(exc)}"
        ) from exc
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="route.csv"'},
    )
