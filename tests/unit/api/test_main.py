"""Tests for the application factory."""

from __future__ import annotations

from fastapi.testclient import TestClient

from api.main import create_app


class TestCreateApp:
    """Wiring of routers and health check."""

    def test_health(self):
        client = TestClient(create_app())

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "rooming-api"}

    def test_reconcile_route_registered(self):
        client = TestClient(create_app())

        response = client.post("/api/solutions/reconcile", json={"partitions": []})

        assert response.status_code == 200
        assert response.json()["swap_groups"] == []

    def test_analysis_route_registered(self):
        client = TestClient(create_app())

        response = client.get("/api/trips/not-a-trip/analysis")

        assert response.status_code == 404
        assert "not-a-trip" in response.json()["detail"]
