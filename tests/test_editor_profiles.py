"""
Tests for editor profile endpoints.
"""

from conftest import login, profile_body


class TestEditorProfileCreation:

    def test_create_profile(self, client, editor):
        response = client.post("/api/editor-profiles", json=profile_body(editor["id"]))

        assert response.status_code == 201
        data = response.json()
        assert data["userId"] == editor["id"]
        assert data["hourlyRate"] == 25
        assert data["isAvailable"] is True
        assert data["portfolioUrl"] == "https://portfolio.example.com"

    def test_create_profile_for_missing_user(self, client):
        response = client.post("/api/editor-profiles", json=profile_body(999))

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_second_profile_rejected(self, client, editor):
        """Test an editor can own only one profile"""
        client.post("/api/editor-profiles", json=profile_body(editor["id"]))

        response = client.post("/api/editor-profiles", json=profile_body(editor["id"], title="Another profile"))

        assert response.status_code == 400
        assert response.json()["message"] == "User already has an editor profile"
        assert len(client.get("/api/editor-profiles").json()) == 1

    def test_invalid_portfolio_url(self, client, editor):
        response = client.post("/api/editor-profiles", json=profile_body(editor["id"], portfolioUrl="portfolio"))

        assert response.status_code == 400
        assert "Please enter a valid URL" in response.json()["message"]

    def test_empty_portfolio_url_means_none(self, client, editor):
        response = client.post("/api/editor-profiles", json=profile_body(editor["id"], portfolioUrl=""))

        assert response.status_code == 201
        assert response.json()["portfolioUrl"] is None

    def test_negative_rate_rejected(self, client, editor):
        response = client.post("/api/editor-profiles", json=profile_body(editor["id"], hourlyRate=-5))

        assert response.status_code == 400


class TestEditorProfileRetrieval:

    def test_get_profile(self, client, editor):
        created = client.post("/api/editor-profiles", json=profile_body(editor["id"])).json()

        response = client.get(f"/api/editor-profiles/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing_profile(self, client):
        response = client.get("/api/editor-profiles/999")

        assert response.status_code == 404

    def test_filter_available(self, client, editor, creator):
        client.post("/api/editor-profiles", json=profile_body(editor["id"]))
        client.post("/api/editor-profiles", json=profile_body(creator["id"], isAvailable=False))

        available = client.get("/api/editor-profiles", params={"isAvailable": "true"}).json()
        everyone = client.get("/api/editor-profiles").json()

        assert [p["userId"] for p in available] == [editor["id"]]
        assert len(everyone) == 2


class TestEditorProfileUpdate:

    def test_owner_can_update(self, client, editor):
        created = client.post("/api/editor-profiles", json=profile_body(editor["id"])).json()
        login(client, "bob")

        response = client.patch(f"/api/editor-profiles/{created['id']}", json={
            "hourlyRate": 40,
            "isAvailable": False,
        })

        assert response.status_code == 200
        assert response.json()["hourlyRate"] == 40
        assert response.json()["isAvailable"] is False
        assert response.json()["title"] == created["title"]

    def test_clear_portfolio_url(self, client, editor):
        created = client.post("/api/editor-profiles", json=profile_body(editor["id"])).json()
        login(client, "bob")

        response = client.patch(f"/api/editor-profiles/{created['id']}", json={"portfolioUrl": None})

        assert response.status_code == 200
        assert response.json()["portfolioUrl"] is None

    def test_non_owner_forbidden(self, client, editor, creator):
        created = client.post("/api/editor-profiles", json=profile_body(editor["id"])).json()
        login(client, "alice")

        response = client.patch(f"/api/editor-profiles/{created['id']}", json={"hourlyRate": 1})

        assert response.status_code == 403

    def test_update_requires_login(self, client, editor):
        created = client.post("/api/editor-profiles", json=profile_body(editor["id"])).json()

        response = client.patch(f"/api/editor-profiles/{created['id']}", json={"hourlyRate": 1})

        assert response.status_code == 401

    def test_update_missing_profile(self, client):
        response = client.patch("/api/editor-profiles/999", json={"hourlyRate": 1})

        assert response.status_code == 404
