"""健康检查响应模型。"""
from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    checks: dict[str, str]
