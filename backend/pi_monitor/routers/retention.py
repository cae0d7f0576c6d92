"""
数据保留策略 API (Data Retention Policy API)

手动触发指标清理。服务本身不调度清理任务，由调用方（运维脚本、cron、CLI）决定频率。

Manually triggers the metric retention sweep. The service never schedules it
itself; callers (ops scripts, cron, the CLI) own the cadence.
"""
from fastapi import APIRouter, Depends

from pi_monitor.core.config import Settings
from pi_monitor.core.deps import get_metric_service, get_settings
from pi_monitor.schemas.metric import RetentionRequest
from pi_monitor.services.metric import MetricService

router = APIRouter(prefix="/api/v1/metrics", tags=["retention"])


@router.post("/retention")
async def cleanup_metrics(
    body: RetentionRequest,
    service: MetricService = Depends(get_metric_service),
    app_settings: Settings = Depends(get_settings),
):
    """删除早于 older_than 的指标；未指定时按 metric_retention_days 计算截止时间。"""
    if body.older_than is not None:
        cutoff = body.older_than
        deleted = await service.purge_older_than(cutoff)
    else:
        deleted, cutoff = await service.purge_expired(app_settings.metric_retention_days)
    return {"message": "Metric cleanup completed", "deleted": deleted, "cutoff": cutoff}
