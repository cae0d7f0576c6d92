"""
数据访问层抽象 (Data Access Layer Abstraction)

定义主机、指标、健康检查三类存储能力接口，服务层只依赖这些接口。
生产环境绑定基于 SQLAlchemy 异步会话的实现，测试中可替换为内存实现。

Defines the storage capabilities for hosts, metrics and health checks. The
service layer depends only on these interfaces; production binds the
SQLAlchemy async-session implementations, tests may substitute in-memory fakes.
"""
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from pi_monitor.models.host import Host
from pi_monitor.models.system_metric import SystemMetric
from pi_monitor.schemas.host import HostCreate, HostQueryParams, HostUpdate
from pi_monitor.schemas.metric import MetricCreate, MetricQueryParams


class HostRepository(ABC):
    """主机存储接口"""

    @abstractmethod
    def transaction(self) -> Any:
        """返回异步上下文管理器：正常退出提交，异常时回滚并继续抛出。"""

    @abstractmethod
    async def find_by_filters(self, params: HostQueryParams) -> List[Host]:
        pass

    @abstractmethod
    async def find_by_id(self, host_id: int) -> Optional[Host]:
        pass

    @abstractmethod
    async def find_by_hostname_or_ip(self, hostname: str, ip_address: str) -> Optional[Host]:
        pass

    @abstractmethod
    async def create(self, host: HostCreate) -> int:
        pass

    @abstractmethod
    async def upsert(self, host: HostCreate) -> int:
        """按 hostname 冲突时更新 role 和 last_seen，返回行 ID。"""

    @abstractmethod
    async def update(self, host_id: int, host: HostUpdate) -> int:
        """返回受影响的行数。"""

    @abstractmethod
    async def delete(self, host_id: int, cascade: bool = False) -> int:
        """返回删除的主机行数；cascade 为真时先删除该主机的指标。"""


class MetricRepository(ABC):
    """指标存储接口"""

    @abstractmethod
    def transaction(self) -> Any:
        pass

    @abstractmethod
    async def find_by_filters(self, params: MetricQueryParams) -> List[SystemMetric]:
        """params 必须已填充 limit 和 order 默认值。"""

    @abstractmethod
    async def find_latest(self, host_id: Optional[int] = None) -> Optional[SystemMetric]:
        pass

    @abstractmethod
    async def find_latest_by_host(self) -> List[SystemMetric]:
        pass

    @abstractmethod
    async def create(self, metric: MetricCreate) -> int:
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: int) -> int:
        pass


class HealthRepository(ABC):
    """健康检查接口"""

    @abstractmethod
    async def check_connection(self) -> None:
        """存储不可达时抛出异常。"""

    @abstractmethod
    async def get_database_stats(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def get_table_counts(self) -> Dict[str, int]:
        pass


class SqlRepository:
    """持有请求级会话的 SQL 实现基类。"""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            yield
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
