"""
Pi Monitor 测试基础配置

提供 SQLite in-memory 异步数据库、内存版存储实现、FastAPI 测试客户端等通用 fixture。
所有测试使用隔离的数据库，每个测试前建表、测试后删表。
"""
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, List, Optional

# 必须在导入应用之前设置环境变量，避免在工作目录创建数据库文件
os.environ["DB_PATH"] = ":memory:"
os.environ["HOST_DELETE_POLICY"] = "cascade"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pi_monitor import models  # noqa: F401
from pi_monitor.core.config import Settings
from pi_monitor.core.database import Base, enable_sqlite_foreign_keys, get_db, get_engine
from pi_monitor.core.deps import get_settings
from pi_monitor.models.host import Host
from pi_monitor.models.system_metric import SystemMetric
from pi_monitor.repositories.base import HostRepository
from pi_monitor.schemas.host import HostCreate, HostQueryParams, HostUpdate


# ── SQLite 异步引擎 ──────────────────────────────────────────────────
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=StaticPool,
    connect_args={"check_same_thread": False},
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ── 内存版主机存储 ────────────────────────────────────────────────────
class FakeHostRepository(HostRepository):
    """内存级主机存储，记录每次调用，供服务层测试使用。"""

    def __init__(self):
        self.rows: Dict[int, Host] = {}
        self.calls: List[str] = []
        self._next_id = 1
        self.now = 1_700_000_000

    @asynccontextmanager
    async def transaction(self):
        yield

    async def find_by_filters(self, params: HostQueryParams) -> List[Host]:
        self.calls.append("find_by_filters")
        return [
            h for h in self.rows.values()
            if (not params.id or h.id == params.id)
            and (not params.hostname or h.hostname == params.hostname)
            and (not params.ip_address or h.ip_address == params.ip_address)
        ]

    async def find_by_id(self, host_id: int) -> Optional[Host]:
        self.calls.append("find_by_id")
        return self.rows.get(host_id)

    async def find_by_hostname_or_ip(self, hostname: str, ip_address: str) -> Optional[Host]:
        self.calls.append("find_by_hostname_or_ip")
        for h in self.rows.values():
            if h.hostname == hostname or h.ip_address == ip_address:
                return h
        return None

    def _insert(self, host: HostCreate) -> int:
        row = Host(id=self._next_id, hostname=host.hostname, ip_address=host.ip_address,
                   role=host.role, created_at=self.now, last_seen=self.now)
        self.rows[row.id] = row
        self._next_id += 1
        return row.id

    async def create(self, host: HostCreate) -> int:
        self.calls.append("create")
        return self._insert(host)

    async def upsert(self, host: HostCreate) -> int:
        self.calls.append("upsert")
        for h in self.rows.values():
            if h.hostname == host.hostname:
                h.role = host.role
                return h.id
        return self._insert(host)

    async def update(self, host_id: int, host: HostUpdate) -> int:
        self.calls.append("update")
        row = self.rows.get(host_id)
        if row is None:
            return 0
        row.role = host.role
        row.last_seen = self.now + 60
        return 1

    async def delete(self, host_id: int, cascade: bool = False) -> int:
        self.calls.append(f"delete(cascade={cascade})")
        return 1 if self.rows.pop(host_id, None) is not None else 0


# ── Fixtures ──────────────────────────────────────────────────────────

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """每个测试前创建所有表，测试后清空。"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """提供一个干净的数据库会话。"""
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def app_settings() -> Settings:
    return Settings(db_path=":memory:", host_delete_policy="cascade")


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, app_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """提供配置好依赖覆盖的异步 HTTP 测试客户端。"""
    from pi_monitor.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_settings] = lambda: app_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def fake_host_repo() -> FakeHostRepository:
    return FakeHostRepository()


@pytest_asyncio.fixture
async def sample_host(db_session: AsyncSession) -> Host:
    h = Host(hostname="pi-01", ip_address="10.0.0.5", role="sensor", created_at=1_700_000_000, last_seen=1_700_000_000)
    db_session.add(h)
    await db_session.commit()
    await db_session.refresh(h)
    return h


def _make_metric(host_id: int, timestamp: int, **overrides) -> SystemMetric:
    values = dict(
        host_id=host_id,
        timestamp=timestamp,
        cpu_usage=50.0,
        memory_usage_percent=60.0,
        memory_total_bytes=4_294_967_296,
        memory_used_bytes=2_576_980_378,
        memory_available_bytes=1_717_986_918,
        disk_usage_percent=40.0,
        disk_total_bytes=32_212_254_720,
        disk_used_bytes=12_884_901_888,
        disk_available_bytes=19_327_352_832,
    )
    values.update(overrides)
    return SystemMetric(**values)


@pytest.fixture
def metric_factory():
    """构造 SystemMetric 实例的工厂，默认值为一台 4GB 内存、32GB 磁盘的节点。"""
    return _make_metric


@pytest_asyncio.fixture
async def add_metrics(db_session: AsyncSession):
    """批量写入指标：await add_metrics(host_id, [ts, ...], **overrides)。"""
    async def _add(host_id: int, timestamps, **overrides) -> List[SystemMetric]:
        rows = [_make_metric(host_id, ts, **overrides) for ts in timestamps]
        db_session.add_all(rows)
        await db_session.commit()
        return rows
    return _add
