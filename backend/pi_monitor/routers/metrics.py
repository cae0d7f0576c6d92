"""
指标路由模块 (Metric Router)

功能说明：指标上报、过滤分页查询、最新指标查询
API端点：POST/GET /api/v1/metrics, GET /api/v1/metrics/latest, GET /api/v1/metrics/latest/hosts
"""
from fastapi import APIRouter, Depends, Query

from pi_monitor.core.deps import get_metric_service
from pi_monitor.core.exceptions import NotFoundError
from pi_monitor.schemas import INT64_MAX, INT64_MIN
from pi_monitor.schemas.metric import (
    MetricLatestQueryParams,
    MetricQueryParams,
    MetricRequest,
    MetricResponse,
)
from pi_monitor.services.metric import MetricService

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])


@router.post("", status_code=201)
async def create_metric(
    body: MetricRequest,
    service: MetricService = Depends(get_metric_service),
):
    """Agent 上报一条系统指标。"""
    metric_id = await service.create_metric(body.record)
    return {"message": "Metric created successfully", "id": metric_id}


@router.get("")
async def list_metrics(
    host_id: int | None = Query(None, ge=INT64_MIN, le=INT64_MAX),
    limit: int = Query(0, ge=INT64_MIN, le=INT64_MAX),
    order: str = Query(""),
    start_time: int | None = Query(None, ge=INT64_MIN, le=INT64_MAX),
    end_time: int | None = Query(None, ge=INT64_MIN, le=INT64_MAX),
    service: MetricService = Depends(get_metric_service),
):
    """
    指标查询接口 (Metric Query)

    Args:
        host_id: 按主机过滤
        limit: 返回条数，默认 100，最大 1000
        order: ASC / DESC（按时间戳），默认 DESC
        start_time: 起始时间（Unix 秒，含），默认 end_time 前 30 天
        end_time: 结束时间（Unix 秒，含），默认当前时间
    Returns:
        dict: {"records": [...], "meta": {"count": n, "limit": limit}}
    """
    params = MetricQueryParams(
        host_id=host_id,
        start_time=start_time,
        end_time=end_time,
        limit=limit,
        order=order,
    )
    records, applied = await service.get_metrics(params)
    items = [MetricResponse.model_validate(r).model_dump() for r in records]
    return {"records": items, "meta": {"count": len(items), "limit": applied.limit}}


@router.get("/latest")
async def get_latest_metric(
    host_id: int | None = Query(None, ge=INT64_MIN, le=INT64_MAX),
    service: MetricService = Depends(get_metric_service),
):
    """指定 host_id 时返回该主机最新指标，否则返回全局最新的一条。"""
    params = MetricLatestQueryParams(host_id=host_id)
    metric = await service.get_latest_metric(params.host_id)
    if metric is None:
        if params.host_id is None:
            raise NotFoundError("Metric not found", "No metrics have been recorded")
        raise NotFoundError("Metric not found", "No latest metric found for the specified host")
    return {"metric": MetricResponse.model_validate(metric).model_dump()}


@router.get("/latest/hosts")
async def get_latest_by_host(service: MetricService = Depends(get_metric_service)):
    """每台主机各返回最新的一条指标。"""
    records = await service.get_latest_by_host()
    items = [MetricResponse.model_validate(r).model_dump() for r in records]
    return {"records": items, "meta": {"count": len(items)}}
