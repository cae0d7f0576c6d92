"""
数据库连接模块 (Database Connection Module)

基于 SQLAlchemy 2.0 异步模式创建数据库引擎和会话管理。
包含异步引擎创建、会话工厂配置、ORM 基类定义和依赖注入函数。

Creates database engine and session management based on SQLAlchemy 2.0 async
mode. Includes async engine creation, session factory configuration, ORM base
class definition, and dependency injection functions.
"""
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from pi_monitor.core.config import settings


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """
    为每个新连接开启外键约束 (Enable foreign key enforcement on every new connection)

    SQLite 默认不检查外键，指标表对主机表的引用完整性依赖此设置。
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# 创建异步数据库引擎 (Create Async Database Engine)
engine = create_async_engine(settings.database_url, echo=settings.sql_echo)
enable_sqlite_foreign_keys(engine)

# 创建异步会话工厂 (Create Async Session Factory)
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # 提交后不过期对象 (Don't expire objects after commit)
)


class Base(DeclarativeBase):
    """
    ORM 模型基类 (ORM Model Base Class)

    所有数据模型都继承此类。
    """
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 依赖项：获取数据库会话 (FastAPI Dependency: Get Database Session)

    使用异步上下文管理器确保会话在请求结束后正确关闭，防止连接泄漏。

    Yields:
        AsyncSession: 异步数据库会话实例 (Async database session instance)
    """
    async with async_session() as session:
        yield session


def get_engine() -> AsyncEngine:
    """FastAPI 依赖项：返回进程级引擎，供健康检查读取连接池统计。"""
    return engine


async def init_db(bind: AsyncEngine | None = None) -> None:
    """创建所有表 (Create all tables)。"""
    # 导入模型以确保表注册 (Import models so tables are registered)
    from pi_monitor import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
