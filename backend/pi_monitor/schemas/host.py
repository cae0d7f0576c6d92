"""
主机相关请求/响应模型

定义主机注册、查询、更新等 API 的数据结构。
"""
from pydantic import BaseModel

from pi_monitor.schemas import Int64


class HostCreate(BaseModel):
    """主机注册信息。hostname 与 ip_address 为自然键。"""
    hostname: str = ""
    ip_address: str = ""
    role: str = ""


class HostRequest(BaseModel):
    """注册请求体：{"host": {...}}。"""
    host: HostCreate


class HostUpdate(BaseModel):
    """可变字段：只有 role 可被更新，last_seen 由服务端刷新。"""
    role: str = ""


class HostUpdateRequest(BaseModel):
    host: HostUpdate


class HostResponse(BaseModel):
    """主机基本信息响应体。"""
    id: int
    hostname: str
    ip_address: str
    role: str
    created_at: int | None = None
    last_seen: int | None = None

    model_config = {"from_attributes": True}


class HostQueryParams(BaseModel):
    """主机过滤条件，全部为空时匹配所有主机。"""
    id: Int64 | None = None
    hostname: str | None = None
    ip_address: str | None = None
