"""
API tests for the feature endpoints.
"""
import uuid

import pytest
from httpx import AsyncClient


class TestFeaturesCreate:
    """Tests for POST /api/features."""

    @pytest.mark.api
    async def test_create_feature_returns_persisted_row(self, client: AsyncClient):
        response = await client.post(
            "/api/features",
            json={"label": "  Priority support ", "description": "24/7 help"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["label"] == "Priority support"
        assert data["description"] == "24/7 help"
        assert uuid.UUID(data["id"])
        assert data["created_at"]

        fetched = await client.get(f"/api/features/{data['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == data

    @pytest.mark.api
    async def test_blank_description_is_stored_as_null(self, client: AsyncClient):
        response = await client.post("/api/features", json={"label": "Sandbox", "description": "   "})

        assert response.status_code == 201
        assert response.json()["description"] is None

    @pytest.mark.api
    @pytest.mark.parametrize("body", [{}, {"label": ""}, {"label": "   "}, {"description": "no label"}])
    async def test_missing_label_is_rejected(self, client: AsyncClient, body):
        response = await client.post("/api/features", json=body)

        assert response.status_code == 400
        assert "label" in response.json()["error"]

    @pytest.mark.api
    async def test_duplicate_label_conflicts(self, client: AsyncClient):
        await client.post("/api/features", json={"label": "Unlimited projects"})

        response = await client.post("/api/features", json={"label": "Unlimited projects"})

        assert response.status_code == 409
        assert response.json() == {"error": "A feature with this label already exists."}

    @pytest.mark.api
    async def test_duplicate_label_is_logged(self, client: AsyncClient, caplog):
        await client.post("/api/features", json={"label": "Dedicated sandbox"})

        with caplog.at_level("INFO", logger="catalog_admin.api.endpoints.features"):
            await client.post("/api/features", json={"label": "Dedicated sandbox"})

        assert "Feature label already taken: Dedicated sandbox" in caplog.text


class TestFeaturesRead:
    """Tests for GET /api/features."""

    @pytest.mark.api
    async def test_list_is_newest_first(self, client: AsyncClient, features):
        response = await client.get("/api/features")

        assert response.status_code == 200
        labels = [f["label"] for f in response.json()]
        assert labels == [f["label"] for f in reversed(features)]

    @pytest.mark.api
    async def test_list_empty(self, client: AsyncClient):
        response = await client.get("/api/features")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.api
    async def test_get_unknown_feature_is_404(self, client: AsyncClient):
        response = await client.get(f"/api/features/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"error": "Feature not found."}

    @pytest.mark.api
    async def test_malformed_id_is_400(self, client: AsyncClient):
        response = await client.get("/api/features/not-a-uuid")

        assert response.status_code == 400


class TestFeaturesDelete:
    """Tests for DELETE /api/features and /api/features/{id}."""

    @pytest.mark.api
    async def test_delete_by_path(self, client: AsyncClient, features):
        target = features[0]["id"]

        response = await client.delete(f"/api/features/{target}")

        assert response.status_code == 200
        assert response.json() == {"message": "Feature deleted successfully.", "id": target}
        assert (await client.get(f"/api/features/{target}")).status_code == 404

        again = await client.delete(f"/api/features/{target}")
        assert again.status_code == 404

    @pytest.mark.api
    async def test_delete_with_json_body(self, client: AsyncClient, features):
        target = features[1]["id"]

        response = await client.request("DELETE", "/api/features", json={"id": target})

        assert response.status_code == 200
        remaining = [f["id"] for f in (await client.get("/api/features")).json()]
        assert target not in remaining
        assert len(remaining) == 2

    @pytest.mark.api
    async def test_delete_with_query_param(self, client: AsyncClient, features):
        target = features[2]["id"]

        response = await client.delete("/api/features", params={"id": target})

        assert response.status_code == 200
        assert response.json()["id"] == target

    @pytest.mark.api
    async def test_delete_without_id_is_400(self, client: AsyncClient):
        response = await client.delete("/api/features")

        assert response.status_code == 400
        assert response.json() == {"error": "Feature ID is required for deletion."}

    @pytest.mark.api
    async def test_delete_with_malformed_id_is_400(self, client: AsyncClient):
        response = await client.delete("/api/features", params={"id": "abc"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid feature ID."}

    @pytest.mark.api
    async def test_deleting_linked_feature_drops_the_link(self, client: AsyncClient, features, plan_payload):
        plan_payload["feature_ids"] = [features[0]["id"], features[1]["id"]]
        plan = (await client.post("/api/subscription_plans", json=plan_payload)).json()

        response = await client.delete(f"/api/features/{features[0]['id']}")

        assert response.status_code == 200
        reloaded = (await client.get(f"/api/subscription_plans/{plan['id']}")).json()
        assert [f["id"] for f in reloaded["features"]] == [features[1]["id"]]
