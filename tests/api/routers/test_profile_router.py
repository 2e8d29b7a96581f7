"""Tests for the /profile endpoint."""


class TestProfileRouter:
    def test_requires_token(self, unauthenticated_client):
        response = unauthenticated_client.post("/api/profile", json={"bio": "x"})

        assert response.status_code == 401

    def test_sanitizes_and_echoes(self, client):
        response = client.post(
            "/api/profile",
            json={
                "displayName": "  Ada   <b>Lovelace</b> ",
                "bio": "Writes about\n\nengines",
                "writingStyle": "Plain",
            },
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "profile": {
                "displayName": "Ada bLovelace/b",
                "bio": "Writes about engines",
                "writingStyle": "Plain",
                "targetAudience": "",
            },
        }

    def test_profile_feeds_generation_prompt(self, client, valid_body, scripted_llm):
        client.post("/api/profile", json={"targetAudience": "Startup founders"})

        client.post("/api/generate", json=valid_body)

        assert "Startup founders" in scripted_llm.generation_prompts[0]

    def test_profile_does_not_touch_usage(self, client, clock, valid_body):
        client.post("/api/generate", json=valid_body)

        client.post("/api/profile", json={"bio": "Updated"})

        me = client.get("/api/me").json()["user"]
        assert me["dailyGenerations"] == 1
        assert me["totalGenerations"] == 1
        assert me["brandProfile"]["bio"] == "Updated"

    def test_long_padded_fields_accepted_after_sanitizing(self, client):
        long_bio = "engines " * 400

        response = client.post(
            "/api/profile",
            json={"displayName": "Ada" + " " * 500, "bio": long_bio},
        )

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["displayName"] == "Ada"
        assert profile["bio"] == long_bio.strip()
