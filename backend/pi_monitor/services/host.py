"""
主机服务 (Host Service)

主机注册采用"存在则更新"语义：按 hostname 或 ip_address 任一匹配视为已存在，
仅更新 role 和 last_seen；不存在时通过存储层的冲突更新语句写入，
并发注册同一 hostname 时收敛为同一行。

Host registration is create-or-update: a match on hostname or IP address
counts as existing and only role and last_seen change. New hosts go through
the store-level conflict-aware insert so concurrent registrations of the same
hostname converge on one row.
"""
import logging
from typing import List, Optional

from pi_monitor.core.exceptions import NotFoundError, ValidationError
from pi_monitor.models.host import Host
from pi_monitor.repositories.base import HostRepository
from pi_monitor.schemas.host import HostCreate, HostQueryParams, HostUpdate

logger = logging.getLogger(__name__)


class HostService:
    """主机服务类"""

    def __init__(self, repo: HostRepository, delete_policy: str = "cascade"):
        self.repo = repo
        self.delete_policy = delete_policy

    @staticmethod
    def _validate(host: HostCreate) -> None:
        if not host.hostname.strip() or not host.ip_address.strip():
            raise ValidationError("invalid host data", "hostname and ip_address are required")

    async def get_hosts(self, params: HostQueryParams) -> List[Host]:
        return await self.repo.find_by_filters(params)

    async def get_host(self, host_id: int) -> Optional[Host]:
        return await self.repo.find_by_id(host_id)

    async def create_host(self, host: HostCreate) -> int:
        """直接新建，hostname/ip_address 冲突时抛出存储层唯一约束错误。"""
        self._validate(host)
        async with self.repo.transaction():
            host_id = await self.repo.create(host)
        logger.info(f"Created host {host.hostname} ({host.ip_address}) with id {host_id}")
        return host_id

    async def create_or_update_host(self, host: HostCreate) -> int:
        """
        注册主机（幂等）

        Args:
            host: 注册信息

        Returns:
            int: 新建或已存在主机的 ID
        """
        self._validate(host)
        async with self.repo.transaction():
            existing = await self.repo.find_by_hostname_or_ip(host.hostname, host.ip_address)
            if existing is None:
                host_id = await self.repo.upsert(host)
                logger.info(f"Registered host {host.hostname} ({host.ip_address}) with id {host_id}")
            else:
                host_id = existing.id
                await self.repo.update(host_id, HostUpdate(role=host.role))
                logger.info(f"Refreshed host {existing.hostname} (id {host_id}), role={host.role!r}")
        return host_id

    async def update_host(self, host_id: int, host: HostUpdate) -> int:
        """更新 role 并刷新 last_seen，返回受影响行数（0 不视为错误）。"""
        async with self.repo.transaction():
            return await self.repo.update(host_id, host)

    async def delete_host(self, host_id: int) -> None:
        cascade = self.delete_policy == "cascade"
        async with self.repo.transaction():
            deleted = await self.repo.delete(host_id, cascade=cascade)
            if deleted == 0:
                raise NotFoundError("Host not found", f"No host with id {host_id}")
        logger.info(f"Deleted host {host_id} (policy={self.delete_policy})")
