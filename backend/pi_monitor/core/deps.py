"""
FastAPI 依赖项模块 (FastAPI Dependencies Module)

按 会话 → 存储实现 → 服务 的顺序组装请求级对象。服务只接收抽象存储接口，
测试可通过 app.dependency_overrides 替换任意一层。

Assembles request-scoped objects in the order session → repository → service.
Services receive only the abstract repository interfaces; tests may replace
any layer through app.dependency_overrides.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from pi_monitor.core.config import Settings, settings
from pi_monitor.core.database import get_db, get_engine
from pi_monitor.repositories.base import HealthRepository, HostRepository, MetricRepository
from pi_monitor.repositories.health import SqlHealthRepository
from pi_monitor.repositories.host import SqlHostRepository
from pi_monitor.repositories.metric import SqlMetricRepository
from pi_monitor.services.health import HealthService
from pi_monitor.services.host import HostService
from pi_monitor.services.metric import MetricService


def get_settings() -> Settings:
    return settings


def get_host_repository(db: AsyncSession = Depends(get_db)) -> HostRepository:
    return SqlHostRepository(db)


def get_metric_repository(db: AsyncSession = Depends(get_db)) -> MetricRepository:
    return SqlMetricRepository(db)


def get_health_repository(
    db: AsyncSession = Depends(get_db),
    engine: AsyncEngine = Depends(get_engine),
) -> HealthRepository:
    return SqlHealthRepository(db, engine)


def get_host_service(
    repo: HostRepository = Depends(get_host_repository),
    app_settings: Settings = Depends(get_settings),
) -> HostService:
    return HostService(repo, delete_policy=app_settings.host_delete_policy)


def get_metric_service(repo: MetricRepository = Depends(get_metric_repository)) -> MetricService:
    return MetricService(repo)


def get_health_service(repo: HealthRepository = Depends(get_health_repository)) -> HealthService:
    return HealthService(repo)
