"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ...models.domain import Coordinate, JobId


@dataclass(frozen=True, slots=True)
class RouteStop:
    job_id: JobId
    location: Optional[Coordinate] = None

    @property
    def is_located(self) -> bool:
        return self.location is not None and self.location.is_known


@dataclass(slots=True)
class RouteLeg:
    job_id: JobId
    sequence: int
    distance_from_prev_miles: float


@dataclass(slots=True)
class RouteResult:
    order: List[JobId]
    total_distance_miles: Optional[float]
    missing_location: List[JobId] = field(default_factory=list)
    message: Optional[str] = None
    legs: List[RouteLeg] = field(default_factory=list)

    @property
    def optimized(self) -> bool:
        return self.total_distance_miles is not None
