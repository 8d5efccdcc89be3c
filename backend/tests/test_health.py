"""
Tests for health checks and HTTP middlewares.
"""


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_realtime_health(self, client):
        data = client.get("/ws/health").json()
        assert data["connections"] == 0
        assert data["rooms"] == 0


class TestMiddlewares:
    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_request_id_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_generated(self, client):
        assert client.get("/api/health").headers["X-Request-ID"]

    def test_rejects_non_json_body(self, client):
        response = client.post(
            "/api/orders",
            content="tableCode=T1",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 415
