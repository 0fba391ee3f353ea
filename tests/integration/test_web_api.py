"""Integration tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from cutplan.web import create_app


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(create_app())


@pytest.fixture
def job() -> dict:
    return {
        "schema_version": "1.0",
        "board": {"width": 1000, "height": 1000},
        "kerf": 0,
        "parts": [
            {"width": 500, "height": 500, "quantity": 4, "label": "Door"},
        ],
    }


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestPackEndpoint:
    """Tests for POST /api/v1/pack."""

    def test_pack(self, client: TestClient, job: dict) -> None:
        response = client.post("/api/v1/pack", json=job)

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "auto:baseline"
        assert data["sheet_count"] == 1
        assert data["placed_count"] == 4
        assert data["total_efficiency"] == 100.0
        assert data["unplaced"] == []
        assert len(data["sheets"][0]["placed"]) == 4
        assert {p["label"] for p in data["sheets"][0]["placed"]} == {"Door"}

    def test_mode_override(self, client: TestClient, job: dict) -> None:
        response = client.post("/api/v1/pack?mode=horizontal", json=job)

        assert response.status_code == 200
        assert response.json()["mode"] == "horizontal"

    def test_unplaced_parts_are_reported(self, client: TestClient, job: dict) -> None:
        job["parts"].append({"width": 2000, "height": 100})
        response = client.post("/api/v1/pack", json=job)

        assert response.status_code == 200
        unplaced = response.json()["unplaced"]
        assert unplaced == [
            {"id": "1-0", "width": 2000.0, "height": 100.0, "label": None}
        ]

    def test_invalid_job(self, client: TestClient, job: dict) -> None:
        job["kerf"] = 25
        response = client.post("/api/v1/pack", json=job)
        assert response.status_code == 422

    def test_invalid_mode(self, client: TestClient, job: dict) -> None:
        response = client.post("/api/v1/pack?mode=diagonal", json=job)
        assert response.status_code == 422


class TestValidateEndpoint:
    """Tests for POST /api/v1/validate."""

    def test_valid_job(self, client: TestClient, job: dict) -> None:
        response = client.post("/api/v1/validate", json={"config": job})

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is True
        assert data["warnings"] == []

    def test_warnings(self, client: TestClient, job: dict) -> None:
        job["parts"].append({"width": 5, "height": 300})
        response = client.post("/api/v1/validate", json={"config": job})

        assert response.status_code == 200
        warnings = response.json()["warnings"]
        assert [w["path"] for w in warnings] == ["parts[1]"]

    def test_schema_error(self, client: TestClient, job: dict) -> None:
        job["parts"] = []
        response = client.post("/api/v1/validate", json={"config": job})

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "validation"
        assert data["details"][0]["path"] == "parts"
