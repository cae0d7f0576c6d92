"""
数据模型包 (Data Models Package)

集中导出所有 SQLAlchemy ORM 模型。

Centrally exports all SQLAlchemy ORM models.
"""
from pi_monitor.models.host import Host
from pi_monitor.models.system_metric import SystemMetric

__all__ = ["Host", "SystemMetric"]
