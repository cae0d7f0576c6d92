"""
数据访问层 (Data Access Layer)

导出存储接口及其 SQL 实现。
"""
from pi_monitor.repositories.base import HealthRepository, HostRepository, MetricRepository
from pi_monitor.repositories.health import SqlHealthRepository
from pi_monitor.repositories.host import SqlHostRepository
from pi_monitor.repositories.metric import SqlMetricRepository

__all__ = [
    "HostRepository", "MetricRepository", "HealthRepository",
    "SqlHostRepository", "SqlMetricRepository", "SqlHealthRepository",
]
