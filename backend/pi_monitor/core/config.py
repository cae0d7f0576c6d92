"""
应用配置模块 (Application Configuration Module)

使用 Pydantic Settings 管理所有配置项，支持从 .env 文件和环境变量读取。

Uses Pydantic Settings to manage all configuration items, supporting reading
from .env files and environment variables.
"""
import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

HOST_DELETE_POLICIES = ("cascade", "restrict")


class Settings(BaseSettings):
    """
    应用全局配置类 (Application Global Configuration Class)

    字段名自动映射同名环境变量（不区分大小写），支持 .env 文件加载。

    Field names automatically map to same-named environment variables
    (case insensitive), supporting .env file loading.
    """

    # 数据库配置 (Database Configuration)
    db_path: str = "monitor.db"  # SQLite 数据库文件路径 (SQLite database file path)
    sql_echo: bool = False  # 输出 SQL 日志 (Echo SQL statements)

    # 服务配置 (Server Configuration)
    host: str = "0.0.0.0"  # 监听地址 (Bind address)
    port: int = 8191  # 监听端口 (Bind port)
    log_level: str = "INFO"  # 日志级别 (Log level)

    # CORS 允许的来源，逗号分隔 (Comma-separated CORS origins)
    allowed_origins: str = "http://localhost"

    # 删除主机时的指标处理策略：cascade 级联删除 / restrict 外键拒绝
    # (Metric handling when deleting a host: cascade or restrict)
    host_delete_policy: str = "cascade"

    # 指标数据保留天数 (Metric retention days)
    metric_retention_days: int = 30

    @field_validator("host_delete_policy")
    @classmethod
    def _check_delete_policy(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in HOST_DELETE_POLICIES:
            raise ValueError(f"host_delete_policy must be one of {', '.join(HOST_DELETE_POLICIES)}")
        return value

    @property
    def database_url(self) -> str:
        """
        构造 SQLite 异步连接 URL (Build SQLite Async Connection URL)

        生成适用于 aiosqlite 驱动的连接字符串。
        """
        return f"sqlite+aiosqlite:///{self.db_path}"

    @property
    def cors_origins(self) -> list[str]:
        """解析逗号分隔的来源列表，为空时回退到 http://localhost。"""
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return origins or ["http://localhost"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}  # Pydantic 配置：自动加载 .env 文件 (Auto-load .env file)


# 全局配置实例 (Global Configuration Instance)
settings = Settings()
