"""
Tests for health probes and the Prometheus metrics endpoint.
"""

from prometheus_client import REGISTRY

from message_service.storage import Base, engine


def sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestHealth:

    def test_live(self, client):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_ready(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_not_ready_without_schema(self, client):
        Base.metadata.drop_all(bind=engine)

        response = client.get("/health/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["reason"]


class TestMetrics:

    def test_metrics_exposition(self, client):
        client.get("/")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "http_requests_total" in response.text
        assert "request_latency_seconds" in response.text

    def test_post_outcomes_counted(self, client):
        created = sample("messages_posted_total", {"result": "created"})
        invalid = sample("messages_posted_total", {"result": "validation_error"})

        client.post("/", json={"text": "Hello!"})
        client.post("/", json={})

        assert sample("messages_posted_total", {"result": "created"}) == created + 1
        assert sample("messages_posted_total", {"result": "validation_error"}) == invalid + 1

    def test_http_requests_counted(self, client):
        labels = {"method": "GET", "path": "/", "status": "200"}
        before = sample("http_requests_total", labels)

        client.get("/")

        assert sample("http_requests_total", labels) == before + 1
