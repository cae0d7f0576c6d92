"""
指标相关请求/响应模型

定义指标上报、过滤查询、最新值查询和数据清理等 API 的数据结构。
时间字段均为 Unix 秒。
"""
from pydantic import BaseModel

from pi_monitor.schemas import Int64


class MetricCreate(BaseModel):
    """Agent 上报的一条系统指标采样。缺省字段按 0 处理，由服务层校验。"""
    host_id: Int64 = 0
    timestamp: Int64 = 0
    cpu_usage: float = 0.0
    memory_usage_percent: float = 0.0
    memory_total_bytes: Int64 = 0
    memory_used_bytes: Int64 = 0
    memory_available_bytes: Int64 = 0
    disk_usage_percent: float = 0.0
    disk_total_bytes: Int64 = 0
    disk_used_bytes: Int64 = 0
    disk_available_bytes: Int64 = 0


class MetricRequest(BaseModel):
    """上报请求体：{"record": {...}}。"""
    record: MetricCreate


class MetricResponse(BaseModel):
    """系统指标响应体。"""
    id: int
    host_id: int
    timestamp: int
    cpu_usage: float
    memory_usage_percent: float
    memory_total_bytes: int
    memory_used_bytes: int
    memory_available_bytes: int
    disk_usage_percent: float
    disk_total_bytes: int
    disk_used_bytes: int
    disk_available_bytes: int

    model_config = {"from_attributes": True}


class MetricQueryParams(BaseModel):
    """
    指标过滤条件

    start_time / end_time 为闭区间；limit <= 0 表示使用默认值；order 大小写不敏感。
    """
    host_id: Int64 | None = None
    start_time: Int64 | None = None
    end_time: Int64 | None = None
    limit: Int64 = 0
    order: str = ""


class MetricLatestQueryParams(BaseModel):
    """最新指标查询条件，host_id 为空时返回全局最新的一条。"""
    host_id: Int64 | None = None


class RetentionRequest(BaseModel):
    """数据清理请求体，older_than 为空时按配置的保留天数计算截止时间。"""
    older_than: Int64 | None = None
