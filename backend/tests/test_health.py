"""健康检查路由测试。"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from pi_monitor.core.deps import get_health_repository
from pi_monitor.main import app


@pytest.fixture
def broken_health_repo():
    repo = MagicMock()
    repo.check_connection = AsyncMock(side_effect=RuntimeError("unable to open database file"))
    repo.get_database_stats = AsyncMock(return_value={})
    repo.get_table_counts = AsyncMock(return_value={})
    app.dependency_overrides[get_health_repository] = lambda: repo
    return repo


class TestHealth:
    async def test_health_ok(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["checks"] == {"database": "healthy"}
        assert data["timestamp"].endswith("Z")

    async def test_health_unreachable_store(self, client: AsyncClient, broken_health_repo):
        resp = await client.get("/health")
        assert resp.status_code == 503
        data = resp.json()
        assert data["status"] == "unhealthy"
        assert data["checks"]["database"] == "unhealthy: unable to open database file"


class TestDetailedHealth:
    async def test_detailed_ok(self, client: AsyncClient, sample_host, add_metrics):
        await add_metrics(sample_host.id, [100, 200])
        resp = await client.get("/health/detailed")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["database"] == {"status": "healthy"}
        assert data["table_counts"] == {"hosts": 1, "metrics": 2}
        assert data["database_stats"]["pool_class"] == "StaticPool"

    async def test_detailed_unreachable_store(self, client: AsyncClient, broken_health_repo):
        resp = await client.get("/health/detailed")
        assert resp.status_code == 503
        data = resp.json()
        assert data["status"] == "unhealthy"
        assert data["database"]["status"] == "unhealthy"
        assert "table_counts" not in data
