"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict
from typing import Sequence

from shapely.geometry import LineString

from ...models.domain import Coordinate
from ..routing.models import RouteResult, RouteStop


def route_result_to_json(result: RouteResult) -> dict:
    return {
        "optimized_order": list(result.order),
        "total_distance_miles": result.total_distance_miles,
        "missing_location": list(result.missing_location),
        "message": result.message,
        "legs": [asdict(leg) for leg in result.legs],
    }


def route_overlay(
    result: RouteResult,
    stops: Sequence[RouteStop],
    start: Coordinate | None = None,
) -> dict | None:
    """Polyline and bounding box for drawing the route on a map.

    Coordinates are ``[lat, lng]`` pairs in visiting order, prefixed with the
    start point when one was used. Returns None when the route was not optimized.
    """

    if not result.optimized:
        return None

    by_id = {stop.job_id: stop for stop in stops}
    points: list[tuple[float, float]] = []
    if start is not None and start.is_known:
        points.append(start.as_pair())
    points.extend(by_id[job_id].location.as_pair() for job_id in result.order)

    # shapely works in x/y, i.e. lng/lat
    line = LineString([(lng, lat) for lat, lng in points])
    min_lng, min_lat, max_lng, max_lat = line.bounds
    return {
        "coordinates": [[lat, lng] for lat, lng in points],
        "bounds": [min_lat, min_lng, max_lat, max_lng],
    }


def route_result_to_csv(result: RouteResult, stops: Sequence[RouteStop]) -> str:
    """Render the route as an itinerary; jobs without coordinates are listed last."""

    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "job_id",
        "latitude",
        "longitude",
        "distance_from_prev_miles",
        "total_distance_miles",
        "status",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()

    by_id = {stop.job_id: stop for stop in stops}
    legs = {leg.job_id: leg for leg in result.legs}
    for sequence, job_id in enumerate(result.order, start=1):
        location = by_id[job_id].location
        leg = legs.get(job_id)
        writer.writerow(
            {
                "sequence": sequence,
                "job_id": job_id,
                "latitude": location.latitude if location else "",
                "longitude": location.longitude if location else "",
                "distance_from_prev_miles": leg.distance_from_prev_miles if leg else "",
                "total_distance_miles": result.total_distance_miles if result.optimized else "",
                "status": "optimized" if result.optimized else "original_order",
            }
        )
    if result.optimized:
        for job_id in result.missing_location:
            writer.writerow(
                {
                    "sequence": "",
                    "job_id": job_id,
                    "latitude": "",
                    "longitude": "",
                    "distance_from_prev_miles": "",
                    "total_distance_miles": result.total_distance_miles,
                    "status": "missing_location",
                }
            )
    return buffer.getvalue()
