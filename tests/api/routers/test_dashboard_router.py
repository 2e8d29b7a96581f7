"""Tests for the /dashboard endpoint."""


class TestDashboardRouter:
    def test_requires_token(self, unauthenticated_client):
        assert unauthenticated_client.get("/api/dashboard").status_code == 401

    def test_unknown_account_is_404(self, client):
        response = client.get("/api/dashboard")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "UserNotFound"

    def test_fresh_account_reports_not_available(self, client):
        client.get("/api/me")

        response = client.get("/api/dashboard")

        assert response.status_code == 200
        assert response.json() == {
            "totalPosts": 0,
            "dailyUsage": 0,
            "limit": 10,
            "mostUsedPlatform": "N/A",
            "mostUsedTone": "N/A",
            "platformBreakdown": {},
            "toneBreakdown": {},
        }

    def test_breakdowns_after_generations(self, client, clock, valid_body):
        for body in (
            valid_body,
            {**valid_body, "platform": "Twitter/X", "topic": "Shipping v2"},
            {**valid_body, "tone": "Casual", "topic": "Team offsite"},
        ):
            assert client.post("/api/generate", json=body).status_code == 200
            clock.advance(seconds=11)

        data = client.get("/api/dashboard").json()

        assert data["totalPosts"] == 3
        assert data["dailyUsage"] == 3
        assert data["mostUsedPlatform"] == "LinkedIn"
        assert data["mostUsedTone"] == "Professional"
        assert data["platformBreakdown"] == {"LinkedIn": 2, "Twitter/X": 1}
        assert data["toneBreakdown"] == {"Casual": 1, "Professional": 2}

    def test_daily_usage_resets_next_day(self, client, clock, valid_body):
        client.post("/api/generate", json=valid_body)
        clock.advance(days=1)

        data = client.get("/api/dashboard").json()

        assert data["dailyUsage"] == 0
        assert data["totalPosts"] == 1
