"""
健康检查服务 (Health Check Service)

只有连通性探测失败才判定为 unhealthy；连接池统计和表行数属于尽力收集，
失败时省略对应字段并记录警告。
"""
import logging
from typing import Any, Dict, Tuple

from pi_monitor.repositories.base import HealthRepository

logger = logging.getLogger(__name__)


class HealthService:

    def __init__(self, repo: HealthRepository):
        self.repo = repo

    async def check_health(self) -> None:
        """存储不可达时抛出原始异常。"""
        await self.repo.check_connection()

    async def get_detailed_health(self) -> Tuple[Dict[str, Any], bool]:
        """
        返回 (详细信息, 是否健康)

        Returns:
            Tuple[Dict[str, Any], bool]: database 必有；database_stats、table_counts 仅在收集成功时出现
        """
        health: Dict[str, Any] = {}
        try:
            await self.repo.check_connection()
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            health["database"] = {"status": "unhealthy", "error": str(e)}
            return health, False

        health["database"] = {"status": "healthy"}

        try:
            health["database_stats"] = await self.repo.get_database_stats()
        except Exception as e:
            logger.warning(f"Failed to collect database stats: {e}")

        try:
            health["table_counts"] = await self.repo.get_table_counts()
        except Exception as e:
            logger.warning(f"Failed to collect table counts: {e}")

        return health, True
