"""
指标服务 (Metric Service)

写入前校验主机 ID 与三个百分比字段；查询前补齐分页、排序和时间窗口默认值；
提供按截止时间清理旧数据的保留策略操作（不自行调度，由 CLI 或 API 触发）。

Validates host ID and the three percent fields before writing; fills in
pagination, ordering and time-window defaults before querying; provides the
retention sweep, which is triggered externally (CLI or API) and never
self-scheduled.
"""
import logging
import time
from typing import List, Optional, Tuple

from pi_monitor.core.exceptions import ValidationError
from pi_monitor.models.system_metric import SystemMetric
from pi_monitor.repositories.base import MetricRepository
from pi_monitor.schemas import INT64_MIN
from pi_monitor.schemas.metric import MetricCreate, MetricQueryParams

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000
DEFAULT_ORDER = "DESC"
ALLOWED_ORDERS = ("ASC", "DESC")
DEFAULT_WINDOW_SECONDS = 30 * 86400  # 默认查询最近 30 天


def validate_system_metric(metric: MetricCreate) -> None:
    """校验指标数据，不合法时抛出对应字段的 ValidationError。"""
    if metric.host_id <= 0:
        raise ValidationError("invalid host ID", "host_id must be a positive integer")
    if not 0 <= metric.cpu_usage <= 100:
        raise ValidationError("CPU usage must be between 0 and 100")
    if not 0 <= metric.memory_usage_percent <= 100:
        raise ValidationError("memory usage must be between 0 and 100")
    if not 0 <= metric.disk_usage_percent <= 100:
        raise ValidationError("disk usage must be between 0 and 100")
    if metric.timestamp < 0:
        raise ValidationError("invalid timestamp", "timestamp must not be negative")


def apply_metric_query_defaults(params: MetricQueryParams, now: Optional[int] = None) -> MetricQueryParams:
    """
    补齐查询默认值并校验

    - limit <= 0 取 100，超过 1000 截断为 1000
    - order 为空取 DESC，否则转大写后必须是 ASC 或 DESC
    - end_time 为空取当前时间，start_time 为空取 end_time 前 30 天
    """
    limit = params.limit
    if limit <= 0:
        limit = DEFAULT_LIMIT
    if limit > MAX_LIMIT:
        limit = MAX_LIMIT

    order = (params.order or "").strip().upper() or DEFAULT_ORDER
    if order not in ALLOWED_ORDERS:
        raise ValidationError("invalid order parameter", "Must be 'ASC' or 'DESC'")

    end_time = params.end_time
    if end_time is None:
        end_time = now if now is not None else int(time.time())
    start_time = params.start_time
    if start_time is None:
        start_time = max(end_time - DEFAULT_WINDOW_SECONDS, INT64_MIN)
    if start_time > end_time:
        raise ValidationError("invalid time range", "start_time must not be after end_time")

    return params.model_copy(update={
        "limit": limit,
        "order": order,
        "start_time": start_time,
        "end_time": end_time,
    })


class MetricService:
    """指标服务类"""

    def __init__(self, repo: MetricRepository):
        self.repo = repo

    async def create_metric(self, metric: MetricCreate) -> int:
        validate_system_metric(metric)
        if metric.timestamp == 0:
            # 未携带时间戳的采样按到达时间记录
            metric = metric.model_copy(update={"timestamp": int(time.time())})
        async with self.repo.transaction():
            return await self.repo.create(metric)

    async def get_metrics(self, params: MetricQueryParams) -> Tuple[List[SystemMetric], MetricQueryParams]:
        """返回匹配的记录以及实际生效的查询参数。"""
        params = apply_metric_query_defaults(params)
        records = await self.repo.find_by_filters(params)
        return records, params

    async def get_latest_metric(self, host_id: Optional[int] = None) -> Optional[SystemMetric]:
        """返回最新的一条指标；没有数据时返回 None。"""
        return await self.repo.find_latest(host_id)

    async def get_latest_by_host(self) -> List[SystemMetric]:
        return await self.repo.find_latest_by_host()

    async def purge_older_than(self, cutoff: int) -> int:
        """删除 timestamp < cutoff 的全部指标，返回删除条数。重复执行返回 0。"""
        async with self.repo.transaction():
            deleted = await self.repo.delete_older_than(cutoff)
        logger.info(f"Cleaned up {deleted} system_metrics records older than {cutoff}")
        return deleted

    async def purge_expired(self, retention_days: int, now: Optional[int] = None) -> Tuple[int, int]:
        """按保留天数计算截止时间并清理，返回 (删除条数, 截止时间)。"""
        if retention_days <= 0:
            raise ValidationError("invalid retention period", "retention_days must be positive")
        now = now if now is not None else int(time.time())
        cutoff = max(now - retention_days * 86400, INT64_MIN)
        deleted = await self.purge_older_than(cutoff)
        return deleted, cutoff
