import csv
import io
import logging
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from src.dispatch.main import create_app


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_statuses(api_client: TestClient):
    response = api_client.get("/api/jobs/statuses")

    assert response.status_code == 200
    payload = {item["status"]: item for item in response.json()}
    assert len(payload) == 7
    assert payload["completed"]["terminal"] is True
    assert payload["in_progress"]["label"] == "In Progress"
    assert payload["cancelled"]["next_statuses"] == ["scheduled"]


def test_next_statuses_endpoint(api_client: TestClient):
    ok = api_client.get("/api/jobs/statuses/scheduled/next")
    missing = api_client.get("/api/jobs/statuses/on_hold/next")

    assert ok.status_code == 200
    assert ok.json()["next_statuses"] == ["assigned", "en_route", "cancelled"]
    assert missing.status_code == 404


def test_validate_transition_accepts_legal_change(api_client: TestClient):
    response = api_client.post(
        "/api/jobs/status/validate",
        json={"current_status": "en_route", "requested_status": "arrived"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["valid"] is True
    assert payload["timestamp_field"] == "arrived_at"
    assert payload["allowed_next"] == ["in_progress", "en_route", "cancelled"]


def test_validate_transition_conflict(api_client: TestClient):
    response = api_client.post(
        "/api/jobs/status/validate",
        json={"current_status": "scheduled", "requested_status": "completed"},
    )

    assert response.status_code == 409
    assert "Allowed transitions: assigned, en_route, cancelled" in response.json()["detail"]


def test_suggestions_endpoint(api_client: TestClient):
    recent = (datetime.now(timezone.utc) - timedelta(minutes=5)).isoformat()
    body = {
        "service_type": "hvac_repair",
        "scheduled_date": "2026-03-02",
        "customer_location": {"latitude": 34.05, "longitude": -118.24},
        "technicians": [
            {"id": 1, "name": "Ana", "specialties": ["plumbing"], "location": {"latitude": 34.5, "longitude": -118.24}},
            {
                "id": 2,
                "name": "Ben",
                "specialties": ["hvac", "electrical"],
                "location": {"latitude": 34.06, "longitude": -118.25},
                "location_updated_at": recent,
            },
            {"id": 3, "name": "Cy", "specialties": ["hvac"], "is_active": False},
        ],
        "jobs": [
            {"id": 100, "technician_id": 1, "status": "scheduled", "scheduled_date": "2026-03-02"},
            {"id": 101, "technician_id": 1, "status": "cancelled", "scheduled_date": "2026-03-02"},
            {"id": 102, "technician_id": 2, "status": "assigned", "scheduled_date": "2026-03-03"},
        ],
    }

    response = api_client.post("/api/dispatch/suggestions", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert [item["technician_id"] for item in payload] == [2, 1]
    assert payload[0]["score"] == 155
    assert payload[0]["name"] == "Ben"
    assert payload[0]["jobs_scheduled"] == 0
    assert payload[1]["score"] == 90
    assert payload[1]["jobs_scheduled"] == 1
    assert payload[1]["distance_miles"] > 15


def test_suggestions_with_empty_roster(api_client: TestClient):
    body = {"service_type": "hvac_repair", "scheduled_date": "2026-03-02", "technicians": []}

    response = api_client.post("/api/dispatch/suggestions", json=body)

    assert response.status_code == 200
    assert response.json() == []


def test_optimize_endpoint(api_client: TestClient):
    body = {
        "stops": [
            {"job_id": 1, "location": {"latitude": 34.05, "longitude": -118.24}},
            {"job_id": 2, "location": {"latitude": 34.10, "longitude": -118.30}},
            {"job_id": 3, "location": {"latitude": 34.02, "longitude": -118.20}},
            {"job_id": 4},
        ]
    }

    response = api_client.post("/api/routes/optimize", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert payload["optimized_order"] == [1, 3, 2]
    assert payload["total_distance_miles"] > 0
    assert payload["missing_location"] == [4]
    assert payload["message"]
    assert len(payload["overlay"]["coordinates"]) == 3


def test_optimize_endpoint_without_enough_locations(api_client: TestClient):
    body = {"stops": [{"job_id": 1}, {"job_id": 2, "location": {"latitude": 34.1, "longitude": -118.3}}]}

    response = api_client.post("/api/routes/optimize", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert payload["optimized_order"] == [1, 2]
    assert payload["total_distance_miles"] is None
    assert payload["overlay"] is None


def test_optimize_endpoint_rejects_duplicates(api_client: TestClient):
    body = {
        "stops": [
            {"job_id": 1, "location": {"latitude": 34.05, "longitude": -118.24}},
            {"job_id": 1, "location": {"latitude": 34.10, "longitude": -118.30}},
        ]
    }

    response = api_client.post("/api/routes/optimize", json=body)

    assert response.status_code == 400


def test_optimize_endpoint_requires_two_stops(api_client: TestClient):
    response = api_client.post("/api/routes/optimize", json={"stops": [{"job_id": 1}]})
    assert response.status_code == 422


def test_optimize_csv_endpoint(api_client: TestClient):
    body = {
        "stops": [
            {"job_id": "J-1", "location": {"latitude": 34.05, "longitude": -118.24}},
            {"job_id": "J-2"},
            {"job_id": "J-3", "location": {"latitude": 34.02, "longitude": -118.20}},
        ],
        "start": {"latitude": 34.0, "longitude": -118.3},
    }

    response = api_client.post("/api/routes/optimize/csv", json=body)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert [row["job_id"] for row in rows] == ["J-1", "J-3", "J-2"]
    assert rows[-1]["status"] == "missing_location"


def test_unexpected_route_error_is_logged(api_client: TestClient, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    from src.dispatch.api.routes import routes as routes_module

    def broken(payload):
        raise RuntimeError("boom")

    monkeypatch.setattr(routes_module, "optimize_job_route", broken)
    body = {"stops": [{"job_id": 1}, {"job_id": 2}]}

    with caplog.at_level(logging.ERROR, logger=routes_module.__name__):
        response = api_client.post("/api/routes/optimize", json=body)

    assert response.status_code == 500
    assert "boom" in response.json()["detail"]
    assert any(record.name == routes_module.__name__ for record in caplog.records)


def test_validate_transition_normalizes_case(api_client: TestClient):
    response = api_client.post(
        "/api/jobs/status/validate",
        json={"current_status": "ASSIGNED", "requested_status": "assigned"},
    )

    assert response.status_code == 200
    assert response.json()["timestamp_field"] is None
