"""
API tests for the plan type endpoints.
"""
import uuid

import pytest
from httpx import AsyncClient


class TestPlanTypesCreate:
    """Tests for POST /api/plan_types."""

    @pytest.mark.api
    async def test_create_plan_type(self, client: AsyncClient):
        response = await client.post("/api/plan_types", json={"name": "Starter"})

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Starter"
        assert data["description"] is None

    @pytest.mark.api
    async def test_name_is_required(self, client: AsyncClient):
        response = await client.post("/api/plan_types", json={"description": "nameless"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("name")

    @pytest.mark.api
    async def test_duplicate_name_conflicts(self, client: AsyncClient, plan_type):
        response = await client.post("/api/plan_types", json={"name": plan_type["name"]})

        assert response.status_code == 409
        assert response.json() == {"error": "Plan Type name must be unique."}


class TestPlanTypesRead:
    """Tests for GET /api/plan_types."""

    @pytest.mark.api
    async def test_list_is_sorted_by_name(self, client: AsyncClient):
        for name in ("Starter", "Free", "Pro"):
            await client.post("/api/plan_types", json={"name": name})

        response = await client.get("/api/plan_types")

        assert response.status_code == 200
        assert [pt["name"] for pt in response.json()] == ["Free", "Pro", "Starter"]

    @pytest.mark.api
    async def test_get_by_id(self, client: AsyncClient, plan_type):
        response = await client.get(f"/api/plan_types/{plan_type['id']}")

        assert response.status_code == 200
        assert response.json()["name"] == "Pro"

    @pytest.mark.api
    async def test_get_unknown_is_404(self, client: AsyncClient):
        response = await client.get(f"/api/plan_types/{uuid.uuid4()}")

        assert response.status_code == 404


class TestPlanTypesDelete:
    """Tests for DELETE /api/plan_types."""

    @pytest.mark.api
    async def test_delete_unreferenced_plan_type(self, client: AsyncClient, plan_type):
        response = await client.delete("/api/plan_types", params={"id": plan_type["id"]})

        assert response.status_code == 200
        assert response.json() == {"message": "Plan Type deleted.", "id": plan_type["id"]}
        assert (await client.get("/api/plan_types")).json() == []

    @pytest.mark.api
    async def test_delete_unknown_is_404(self, client: AsyncClient):
        response = await client.delete(f"/api/plan_types/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"error": "Plan Type not found."}

    @pytest.mark.api
    async def test_delete_referenced_plan_type_is_rejected(self, client: AsyncClient, plan_type, plan_payload):
        created = await client.post("/api/subscription_plans", json=plan_payload)
        assert created.status_code == 201

        response = await client.delete(f"/api/plan_types/{plan_type['id']}")

        assert response.status_code == 409
        assert response.json() == {"error": "Cannot delete plan type: it is linked to Subscription Plans."}
        still_there = await client.get(f"/api/plan_types/{plan_type['id']}")
        assert still_there.status_code == 200

    @pytest.mark.api
    async def test_delete_after_plans_are_gone(self, client: AsyncClient, plan_type, plan_payload):
        plan = (await client.post("/api/subscription_plans", json=plan_payload)).json()
        await client.delete(f"/api/subscription_plans/{plan['id']}")

        response = await client.delete(f"/api/plan_types/{plan_type['id']}")

        assert response.status_code == 200
