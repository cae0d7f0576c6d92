"""
健康检查路由 (Health Check Router)

GET /health 仅探测存储连通性；GET /health/detailed 额外返回连接池统计和表行数。
存储不可达时返回 503。
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from pi_monitor.core.deps import get_health_service
from pi_monitor.schemas.health import HealthResponse
from pi_monitor.services.health import HealthService

router = APIRouter(tags=["system"])


def _now_rfc3339() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


@router.get("/health")
async def health(service: HealthService = Depends(get_health_service)):
    """
    健康检查接口 (Health Check Endpoint)

    Returns:
        HealthResponse: status 为 healthy/unhealthy，checks 中包含数据库状态
    """
    status, status_code = "healthy", 200
    try:
        await service.check_health()
        checks = {"database": "healthy"}
    except Exception as e:
        status, status_code = "unhealthy", 503
        checks = {"database": f"unhealthy: {e}"}

    body = HealthResponse(status=status, timestamp=_now_rfc3339(), checks=checks)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.get("/health/detailed")
async def detailed_health(service: HealthService = Depends(get_health_service)):
    details, ok = await service.get_detailed_health()
    content = {
        "status": "healthy" if ok else "unhealthy",
        "timestamp": _now_rfc3339(),
        **details,
    }
    return JSONResponse(status_code=200 if ok else 503, content=content)
