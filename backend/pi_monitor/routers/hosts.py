"""
主机管理路由模块 (Host Management Router)

功能说明：主机注册（存在则更新）、过滤查询、详情、更新和删除
API端点：POST/GET /api/v1/hosts, GET/PUT/DELETE /api/v1/hosts/{id}
"""
from fastapi import APIRouter, Depends, Path, Query

from pi_monitor.core.deps import get_host_service
from pi_monitor.core.exceptions import NotFoundError
from pi_monitor.schemas import INT64_MAX, INT64_MIN
from pi_monitor.schemas.host import HostQueryParams, HostRequest, HostResponse, HostUpdateRequest
from pi_monitor.services.host import HostService

router = APIRouter(prefix="/api/v1/hosts", tags=["hosts"])


@router.post("", status_code=201)
async def register_host(
    body: HostRequest,
    service: HostService = Depends(get_host_service),
):
    """注册主机，hostname 或 ip_address 已存在时更新 role 和 last_seen。"""
    host_id = await service.create_or_update_host(body.host)
    return {"message": "Host created successfully", "id": host_id}


@router.get("")
async def list_hosts(
    id: int | None = Query(None, ge=INT64_MIN, le=INT64_MAX),
    hostname: str | None = Query(None),
    ip_address: str | None = Query(None),
    service: HostService = Depends(get_host_service),
):
    """
    主机列表查询接口 (Host List Query)

    Args:
        id: 按主机 ID 过滤
        hostname: 按主机名精确过滤
        ip_address: 按 IP 地址精确过滤
    Returns:
        dict: {"hosts": [...], "meta": {"count": n}}
    """
    params = HostQueryParams(id=id, hostname=hostname, ip_address=ip_address)
    hosts = await service.get_hosts(params)
    items = [HostResponse.model_validate(h).model_dump() for h in hosts]
    return {"hosts": items, "meta": {"count": len(items)}}


@router.get("/{host_id}")
async def get_host(
    host_id: int = Path(ge=INT64_MIN, le=INT64_MAX),
    service: HostService = Depends(get_host_service),
):
    host = await service.get_host(host_id)
    if host is None:
        raise NotFoundError("Host not found", f"No host with id {host_id}")
    return {"host": HostResponse.model_validate(host).model_dump()}


@router.put("/{host_id}")
async def update_host(
    body: HostUpdateRequest,
    host_id: int = Path(ge=INT64_MIN, le=INT64_MAX),
    service: HostService = Depends(get_host_service),
):
    """更新主机 role；没有行被更新时返回 404。"""
    updated = await service.update_host(host_id, body.host)
    if updated == 0:
        raise NotFoundError("Host not found", f"No host with id {host_id}")
    return {"message": "Host updated successfully"}


@router.delete("/{host_id}")
async def delete_host(
    host_id: int = Path(ge=INT64_MIN, le=INT64_MAX),
    service: HostService = Depends(get_host_service),
):
    await service.delete_host(host_id)
    return {"message": "Host deleted successfully"}
