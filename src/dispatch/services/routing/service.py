"""Routing orchestration service."""

from __future__ import annotations

from ...models.domain import Coordinate
from ...schemas.routing import (
    RouteLegModel,
    RouteOptimizationRequest,
    RouteOptimizationResponse,
    RouteOverlayModel,
)
from ..outputs.routing_formatter import route_overlay, route_result_to_csv, route_result_to_json
from .models import RouteResult, RouteStop
from .optimizer import optimize_route


def _resolve(payload: RouteOptimizationRequest) -> tuple[list[RouteStop], Coordinate | None]:
    stops = [
        RouteStop(job_id=stop.job_id, location=stop.location.to_domain() if stop.location else None)
        for stop in payload.stops
    ]
    start = payload.start.to_domain() if payload.start else None
    return stops, start


def _solve(payload: RouteOptimizationRequest) -> tuple[RouteResult, list[RouteStop], Coordinate | None]:
    stops, start = _resolve(payload)
    return optimize_route(stops, start=start), stops, start


def optimize_job_route(payload: RouteOptimizationRequest) -> RouteOptimizationResponse:
    result, stops, start = _solve(payload)
    body = route_result_to_json(result)
    overlay = route_overlay(result, stops, start)
    return RouteOptimizationResponse(
        optimized_order=body["optimized_order"],
        total_distance_miles=body["total_distance_miles"],
        missing_location=body["missing_location"],
        message=body["message"],
        legs=[RouteLegModel(**leg) for leg in body["legs"]],
        overlay=RouteOverlayModel(**overlay) if overlay else None,
    )


def export_job_route_csv(payload: RouteOptimizationRequest) -> str:
    result, stops, _ = _solve(payload)
    return route_result_to_csv(result, stops)
