"""
系统指标模型 (System Metric Model)

一条记录对应某主机在某一时刻的 CPU、内存、磁盘使用采样。
记录写入后不可修改，只能被保留策略按时间批量清除。

One row is a point-in-time CPU, memory and disk usage sample for a host.
Rows are immutable once written and only removed by the retention sweep.
"""
from sqlalchemy import BigInteger, Float, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from pi_monitor.core.database import Base


class SystemMetric(Base):
    """
    系统指标表 (System Metric Table)

    host_id 引用 hosts.id，外键由存储层强制。字节数三元组（总量/已用/可用）不做一致性校验。
    """
    __tablename__ = "system_metrics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)  # 主键 ID (Primary Key ID)
    host_id: Mapped[int] = mapped_column(Integer, ForeignKey("hosts.id"), nullable=False, index=True)  # 主机 ID (Host ID)
    timestamp: Mapped[int] = mapped_column(Integer, nullable=False, index=True)  # 采样时间 Unix 秒 (Sample Time)
    # CPU 指标 (CPU Metrics)
    cpu_usage: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)  # CPU 使用率百分比
    # 内存指标 (Memory Metrics)
    memory_usage_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    memory_total_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    memory_used_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    memory_available_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    # 磁盘指标 (Disk Metrics)
    disk_usage_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    disk_total_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    disk_used_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    disk_available_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    __table_args__ = (
        Index("ix_system_metrics_host_ts", "host_id", "timestamp"),
    )
