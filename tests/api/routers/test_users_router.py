"""Tests for the /me endpoint."""


class TestUsersRouter:
    def test_requires_token(self, unauthenticated_client):
        response = unauthenticated_client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "Unauthorized"

    def test_invalid_token(self, unauthenticated_client, mock_auth_service):
        response = unauthenticated_client.get(
            "/api/me", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Token has expired"
        mock_auth_service.verify_token.assert_awaited_once_with("Bearer not-a-jwt")

    def test_creates_record_on_first_call(self, client):
        response = client.get("/api/me")

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["uid"] == "uid-123"
        assert user["name"] == "Ada Lovelace"
        assert user["email"] == "ada@example.com"
        assert user["dailyGenerations"] == 0
        assert user["totalGenerations"] == 0
        assert user["dailyLimit"] == 10
        assert user["lastResetDate"] == "2026-03-02"
        assert user["cooldownUntil"] is None

    def test_reflects_cooldown_after_generation(self, client, valid_body):
        client.post("/api/generate", json=valid_body)

        user = client.get("/api/me").json()["user"]

        assert user["dailyGenerations"] == 1
        assert user["cooldownUntil"].startswith("2026-03-02T09:00:10")
