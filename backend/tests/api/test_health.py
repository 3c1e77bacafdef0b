"""Tests for the health check endpoint."""

from fastapi.testclient import TestClient

from api.app import create_app


class TestHealthEndpoint:
    """Tests for GET /api/health."""

    def test_health_check(self):
        """Health endpoint should return 200 with status."""
        client = TestClient(create_app())

        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "0.1.0"}

    def test_health_needs_no_session(self):
        """Health is reachable without credentials or a configured store."""
        client = TestClient(create_app())
        assert client.get("/api/health").status_code == 200

    def test_unknown_route_uses_error_body(self):
        client = TestClient(create_app())

        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json()["title"] == "Not Found"
