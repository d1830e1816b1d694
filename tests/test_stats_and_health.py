"""
Tests for the catalog stats endpoint and the health check.
"""
import pytest

from catalog_admin import main


class TestStats:

    @pytest.mark.api
    async def test_empty_catalog(self, client):
        response = await client.get("/api/stats")

        assert response.status_code == 200
        assert response.json() == {
            "total_features": 0,
            "total_plan_types": 0,
            "total_plans": 0,
            "active_plans": 0,
        }

    @pytest.mark.api
    async def test_counts_follow_the_catalog(self, client, plan_payload, features):
        await client.post("/api/subscription_plans", json=plan_payload)
        await client.post(
            "/api/subscription_plans",
            json={**plan_payload, "label_suffix": "yearly", "duration_months": 12, "is_active": False},
        )

        data = (await client.get("/api/stats")).json()

        assert data["total_features"] == 3
        assert data["total_plan_types"] == 1
        assert data["total_plans"] == 2
        assert data["active_plans"] == 1


class TestHealth:

    @pytest.mark.api
    async def test_healthy(self, client, session_factory, monkeypatch):
        monkeypatch.setattr(main, "AsyncSessionLocal", session_factory)

        response = await client.get("/healthz")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.api
    async def test_unreachable_database_is_503(self, client, monkeypatch):
        def broken_session():
            raise ConnectionError("database is down")

        monkeypatch.setattr(main, "AsyncSessionLocal", broken_session)

        response = await client.get("/healthz")

        assert response.status_code == 503
        assert response.json() == {"error": "Service unhealthy"}
