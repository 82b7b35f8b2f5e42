"""Nearest-neighbour sequencing for single-vehicle routes.

This is a greedy heuristic rather than a TSP solver: from the current position
it always drives to the closest unvisited stop. Ties go to the stop listed
first. Stops without coordinates cannot be placed geometrically and are
reported back separately instead of being dropped.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import Coordinate
from ..geospatial import haversine_miles
from .models import RouteLeg, RouteResult, RouteStop

logger = logging.getLogger(__name__)


def _leg_miles(origin: Coordinate, target: Coordinate) -> float:
    return haversine_miles(origin.latitude, origin.longitude, target.latitude, target.longitude)


def _check_preconditions(stops: Sequence[RouteStop]) -> None:
    if stops is None or len(stops) < 2:
        raise ValueError("At least 2 jobs are required to optimize a route.")
    seen = set()
    for stop in stops:
        if stop.job_id in seen:
            raise ValueError(f"Duplicate job id in route: {stop.job_id}")
        seen.add(stop.job_id)


def _nearest_neighbor(start: Coordinate, remaining: list[RouteStop]) -> list[RouteStop]:
    route: list[RouteStop] = []
    current = start
    while remaining:
        best_index = 0
        best_distance = _leg_miles(current, remaining[0].location)
        for index in range(1, len(remaining)):
            distance = _leg_miles(current, remaining[index].location)
            if distance < best_distance:
                best_index = index
                best_distance = distance
        nearest = remaining.pop(best_index)
        route.append(nearest)
        current = nearest.location
    return route


def _build_legs(route: Sequence[RouteStop], start: Coordinate | None) -> tuple[list[RouteLeg], float]:
    legs: list[RouteLeg] = []
    total = 0.0
    previous = start
    for sequence, stop in enumerate(route, start=1):
        distance = _leg_miles(previous, stop.location) if previous is not None else 0.0
        total += distance
        legs.append(RouteLeg(job_id=stop.job_id, sequence=sequence, distance_from_prev_miles=round(distance, 1)))
        previous = stop.location
    return legs, total


def optimize_route(stops: Sequence[RouteStop], start: Coordinate | None = None) -> RouteResult:
    """Order jobs into an approximately shortest visiting sequence.

    Args:
        stops: At least two stops with distinct job ids, in the caller's order.
        start: Optional fixed starting point (e.g. the technician's position).
            When omitted the first located stop is visited first.

    Returns:
        RouteResult with the visiting order of located stops and the total
        distance in miles rounded to 0.1. With fewer than two located stops the
        input order is returned unchanged and the total is None.
    """

    _check_preconditions(stops)

    located = [stop for stop in stops if stop.is_located]
    missing = [stop.job_id for stop in stops if not stop.is_located]

    if len(located) < 2:
        logger.info(
            "Route not optimized: %d of %d job(s) have coordinates",
            len(located),
            len(stops),
        )
        return RouteResult(
            order=[stop.job_id for stop in stops],
            total_distance_miles=None,
            missing_location=missing,
            message=(
                "Not enough jobs with location data to optimize route "
                f"({len(missing)} job(s) missing coordinates)"
            ),
        )

    explicit_start = start if start is not None and start.is_known else None
    if start is not None and explicit_start is None:
        logger.warning("Ignoring start coordinate without latitude/longitude")

    remaining = list(located)
    if explicit_start is not None:
        route = _nearest_neighbor(explicit_start, remaining)
    else:
        first = remaining.pop(0)
        route = [first] + _nearest_neighbor(first.location, remaining)

    legs, total = _build_legs(route, explicit_start)

    message = None
    if missing:
        message = f"{len(missing)} job(s) excluded from optimization: missing location coordinates"
        logger.info("Excluded %d job(s) without coordinates: %s", len(missing), missing)

    logger.debug("Optimized route of %d stop(s), %.1f mi", len(route), total)
    return RouteResult(
        order=[stop.job_id for stop in route],
        total_distance_miles=round(total, 1),
        missing_location=missing,
        message=message,
        legs=legs,
    )
