"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .common import CoordinateModel


class RouteStopModel(BaseModel):
    job_id: Union[int, str]
    location: Optional[CoordinateModel] = None


class RouteOptimizationRequest(BaseModel):
    stops: List[RouteStopModel] = Field(..., min_length=2, description="Jobs to sequence, at least two.")
    start: Optional[CoordinateModel] = Field(
        default=None,
        description="Fixed starting point. If omitted, the route starts at the first located job.",
    )


class RouteLegModel(BaseModel):
    job_id: Union[int, str]
    sequence: int
    distance_from_prev_miles: float


class RouteOverlayModel(BaseModel):
    coordinates: List[List[float]]
    bounds: List[float]


class RouteOptimizationResponse(BaseModel):
    optimized_order: List[Union[int, str]]
    total_distance_miles: Optional[float] = None
    missing_location: List[Union[int, str]] = Field(default_factory=list)
    message: Optional[str] = None
    legs: List[RouteLegModel] = Field(default_factory=list)
    overlay: Optional[RouteOverlayModel] = None
