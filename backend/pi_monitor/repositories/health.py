"""
健康检查数据访问 (Health Check Data Access)

只读：连通性探测、连接池统计、各表行数。
"""
from typing import Any, Dict

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from pi_monitor.models.host import Host
from pi_monitor.models.system_metric import SystemMetric
from pi_monitor.repositories.base import HealthRepository


class SqlHealthRepository(HealthRepository):

    def __init__(self, db: AsyncSession, engine: AsyncEngine):
        self.db = db
        self.engine = engine

    async def check_connection(self) -> None:
        await self.db.execute(text("SELECT 1"))

    async def get_database_stats(self) -> Dict[str, Any]:
        pool = self.engine.sync_engine.pool
        stats: Dict[str, Any] = {
            "pool_class": type(pool).__name__,
            "status": pool.status(),
        }
        # 不同连接池实现提供的计数器不同，只收集存在的 (Counters vary by pool class)
        for name in ("size", "checkedin", "checkedout", "overflow"):
            counter = getattr(pool, name, None)
            if callable(counter):
                stats[name] = counter()
        return stats

    async def get_table_counts(self) -> Dict[str, int]:
        hosts = (await self.db.execute(select(func.count()).select_from(Host))).scalar() or 0
        metrics = (await self.db.execute(select(func.count()).select_from(SystemMetric))).scalar() or 0
        return {"hosts": hosts, "metrics": metrics}
