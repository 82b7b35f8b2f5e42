import csv
import io

from src.dispatch.models.domain import Coordinate
from src.dispatch.services.outputs.routing_formatter import route_overlay, route_result_to_csv, route_result_to_json
from src.dispatch.services.routing.models import RouteStop
from src.dispatch.services.routing.optimizer import optimize_route


def _stops():
    return [
        RouteStop(job_id=1, location=Coordinate(34.05, -118.24)),
        RouteStop(job_id=2, location=None),
        RouteStop(job_id=3, location=Coordinate(34.02, -118.20)),
    ]


def test_route_result_to_json():
    result = optimize_route(_stops())

    payload = route_result_to_json(result)

    assert payload["optimized_order"] == [1, 3]
    assert payload["missing_location"] == [2]
    assert payload["legs"][1] == {"job_id": 3, "sequence": 2, "distance_from_prev_miles": result.legs[1].distance_from_prev_miles}


def test_route_overlay_includes_start_and_bounds():
    stops = _stops()
    start = Coordinate(34.00, -118.30)
    result = optimize_route(stops, start=start)

    overlay = route_overlay(result, stops, start)

    assert overlay["coordinates"][0] == [34.00, -118.30]
    assert len(overlay["coordinates"]) == 3
    assert overlay["bounds"] == [34.00, -118.30, 34.05, -118.20]


def test_route_overlay_is_none_when_not_optimized():
    stops = [RouteStop(job_id=1, location=Coordinate(34.05, -118.24)), RouteStop(job_id=2)]
    result = optimize_route(stops)

    assert route_overlay(result, stops) is None


def test_route_result_to_csv_appends_missing_jobs():
    stops = _stops()
    result = optimize_route(stops)

    rows = list(csv.DictReader(io.StringIO(route_result_to_csv(result, stops))))

    assert [row["job_id"] for row in rows] == ["1", "3", "2"]
    assert [row["status"] for row in rows] == ["optimized", "optimized", "missing_location"]
    assert rows[0]["sequence"] == "1"
    assert rows[2]["sequence"] == ""
    assert rows[0]["total_distance_miles"] == str(result.total_distance_miles)


def test_route_result_to_csv_keeps_original_order_when_not_optimized():
    stops = [RouteStop(job_id="a"), RouteStop(job_id="b", location=Coordinate(1.0, 2.0))]
    result = optimize_route(stops)

    rows = list(csv.DictReader(io.StringIO(route_result_to_csv(result, stops))))

    assert [row["job_id"] for row in rows] == ["a", "b"]
    assert {row["status"] for row in rows} == {"original_order"}
    assert rows[1]["latitude"] == "1.0"
