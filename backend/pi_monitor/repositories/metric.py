"""
指标数据访问 (Metric Data Access)

负责指标的过滤查询、最新值查询、写入和按时间清理。
排序方向来自固定映射，所有条件值均为绑定参数。
"""
from typing import List, Optional

from sqlalchemy import and_, delete, func, select

from pi_monitor.models.system_metric import SystemMetric
from pi_monitor.repositories.base import MetricRepository, SqlRepository
from pi_monitor.schemas.metric import MetricCreate, MetricQueryParams

_ORDER_BY = {
    "ASC": (SystemMetric.timestamp.asc(), SystemMetric.id.asc()),
    "DESC": (SystemMetric.timestamp.desc(), SystemMetric.id.desc()),
}


class SqlMetricRepository(SqlRepository, MetricRepository):
    """基于 SQLAlchemy 异步会话的指标存储实现"""

    async def find_by_filters(self, params: MetricQueryParams) -> List[SystemMetric]:
        query = select(SystemMetric)
        if params.host_id is not None:
            query = query.where(SystemMetric.host_id == params.host_id)
        if params.start_time is not None:
            query = query.where(SystemMetric.timestamp >= params.start_time)
        if params.end_time is not None:
            query = query.where(SystemMetric.timestamp <= params.end_time)

        query = query.order_by(*_ORDER_BY[params.order]).limit(params.limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_latest(self, host_id: Optional[int] = None) -> Optional[SystemMetric]:
        query = select(SystemMetric)
        if host_id is not None:
            query = query.where(SystemMetric.host_id == host_id)
        query = query.order_by(*_ORDER_BY["DESC"]).limit(1)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def find_latest_by_host(self) -> List[SystemMetric]:
        """
        每台主机最新的一条指标

        与按 host_id 分组的 MAX(timestamp) 子查询自连接。同一主机在最大时间戳上
        有多条记录时只保留 ID 最大的一条。
        """
        latest = (
            select(
                SystemMetric.host_id,
                func.max(SystemMetric.timestamp).label("max_ts"),
            )
            .group_by(SystemMetric.host_id)
            .subquery()
        )
        query = (
            select(SystemMetric)
            .join(
                latest,
                and_(
                    SystemMetric.host_id == latest.c.host_id,
                    SystemMetric.timestamp == latest.c.max_ts,
                ),
            )
            .order_by(SystemMetric.host_id.asc(), SystemMetric.id.desc())
        )
        result = await self.db.execute(query)

        rows: List[SystemMetric] = []
        seen = set()
        for metric in result.scalars().all():
            if metric.host_id in seen:
                continue
            seen.add(metric.host_id)
            rows.append(metric)
        return rows

    async def create(self, metric: MetricCreate) -> int:
        row = SystemMetric(**metric.model_dump())
        self.db.add(row)
        await self.db.flush()
        return row.id

    async def delete_older_than(self, cutoff: int) -> int:
        result = await self.db.execute(
            delete(SystemMetric).where(SystemMetric.timestamp < cutoff)
        )
        return result.rowcount
