"""
Pytest fixtures for the catalog admin API tests.
"""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENV", "test")

from typing import Any, AsyncGenerator, Dict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from catalog_admin.db.init_db import create_tables
from catalog_admin.db.session import enable_sqlite_foreign_keys, get_db
from catalog_admin.main import app


# ============ Database ============

@pytest.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Fresh SQLite database per test with foreign keys enforced."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}", poolclass=NullPool)
    enable_sqlite_foreign_keys(engine)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ============ HTTP client ============

@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient bound to the app with get_db pointed at the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ============ Catalog data ============

@pytest.fixture
async def plan_type(client: AsyncClient) -> Dict[str, Any]:
    response = await client.post("/api/plan_types", json={"name": "Pro", "description": "Paid tier"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def features(client: AsyncClient) -> list[Dict[str, Any]]:
    created = []
    for label in ("Priority support", "Real-time analytics", "Unlimited projects"):
        response = await client.post("/api/features", json={"label": label})
        assert response.status_code == 201
        created.append(response.json())
    return created


@pytest.fixture
def plan_payload(plan_type: Dict[str, Any]) -> Dict[str, Any]:
    """Minimal valid create-plan body."""
    return {
        "plan_type_id": plan_type["id"],
        "label_suffix": "monthly",
        "price": 19.99,
        "currency": "usd",
        "duration_months": 1,
    }
