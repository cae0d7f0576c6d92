"""
Pi Monitor 后端应用入口模块 (Pi Monitor Backend Application Entry Module)

负责 FastAPI 应用的生命周期管理：启动时建表，关闭时释放连接池；
注册异常处理器、CORS 中间件和全部路由。

Main application entry point. Creates tables at startup and disposes the
connection pool at shutdown; registers exception handlers, CORS middleware
and all routers.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pi_monitor import __version__
from pi_monitor.core.config import settings
from pi_monitor.core.database import engine, init_db
from pi_monitor.core.exceptions import register_exception_handlers
from pi_monitor.routers import health, hosts, metrics, retention

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用生命周期管理器 (Application Lifecycle Manager)

    单一数据库引擎在进程启动时创建，关闭时释放。
    """
    await init_db()
    logger.info(f"Database ready at {settings.db_path}")

    yield

    # 关闭连接池 (Close connection pool)
    await engine.dispose()


# 创建 FastAPI 应用实例 (Create FastAPI application instance)
app = FastAPI(
    title="Pi Monitor API",
    description="System resource monitoring for Raspberry Pi hosts",
    version=__version__,
    lifespan=lifespan,
)

# 注册全局异常处理器 (Register global exception handlers)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# 注册所有 API 路由模块 (Register all API router modules)
app.include_router(health.router)  # 健康检查 (Health checks)
app.include_router(hosts.router)  # 主机管理 (Host management)
app.include_router(metrics.router)  # 指标上报与查询 (Metric ingestion and queries)
app.include_router(retention.router)  # 数据保留策略 (Data retention)
