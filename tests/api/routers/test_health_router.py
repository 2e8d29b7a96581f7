"""Tests for the /health endpoint."""

from postsmith import __version__
from postsmith.clients.litellm_client import LiteLLMClient
from postsmith.services.rate_limiter import RequestRateLimiter


class TestHealthRouter:
    def test_ok(self, unauthenticated_client):
        response = unauthenticated_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__
        assert data["services"]["store"]["status"] == "healthy"
        assert data["services"]["llm"]["details"] == {"model": "gemini/gemini-test"}
        assert data["timestamp"].endswith("Z")

    def test_degraded_without_api_key(self, unauthenticated_client, components):
        components.llm = LiteLLMClient(api_key="")

        data = unauthenticated_client.get("/api/health").json()

        assert data["status"] == "degraded"
        assert data["services"]["llm"]["status"] == "unhealthy"
        assert data["services"]["llm"]["details"] == {}

    def test_not_rate_limited(self, unauthenticated_client, components):
        components.rate_limiter = RequestRateLimiter(requests_per_minute=1)

        statuses = {unauthenticated_client.get("/api/health").status_code for _ in range(3)}

        assert statuses == {200}
