"""
主机数据访问 (Host Data Access)

所有条件均通过绑定参数传入，从不拼接进 SQL 文本。
写操作不自行提交，由服务层在 transaction() 中统一提交或回滚。
"""
import time
from typing import List, Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from pi_monitor.models.host import Host
from pi_monitor.models.system_metric import SystemMetric
from pi_monitor.repositories.base import HostRepository, SqlRepository
from pi_monitor.schemas.host import HostCreate, HostQueryParams, HostUpdate


class SqlHostRepository(SqlRepository, HostRepository):
    """基于 SQLAlchemy 异步会话的主机存储实现"""

    async def find_by_filters(self, params: HostQueryParams) -> List[Host]:
        # 从"匹配全部"开始，按 id、hostname、ip_address 顺序逐个收窄
        query = select(Host)
        if params.id:
            query = query.where(Host.id == params.id)
        if params.hostname:
            query = query.where(Host.hostname == params.hostname)
        if params.ip_address:
            query = query.where(Host.ip_address == params.ip_address)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_by_id(self, host_id: int) -> Optional[Host]:
        result = await self.db.execute(select(Host).where(Host.id == host_id))
        return result.scalar_one_or_none()

    async def find_by_hostname_or_ip(self, hostname: str, ip_address: str) -> Optional[Host]:
        result = await self.db.execute(
            select(Host)
            .where(or_(Host.hostname == hostname, Host.ip_address == ip_address))
            .order_by(Host.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def create(self, host: HostCreate) -> int:
        now = int(time.time())
        row = Host(
            hostname=host.hostname,
            ip_address=host.ip_address,
            role=host.role,
            created_at=now,
            last_seen=now,
        )
        self.db.add(row)
        await self.db.flush()
        return row.id

    async def upsert(self, host: HostCreate) -> int:
        now = int(time.time())
        stmt = sqlite_insert(Host).values(
            hostname=host.hostname,
            ip_address=host.ip_address,
            role=host.role,
            created_at=now,
            last_seen=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Host.hostname],
            set_={"role": stmt.excluded.role, "last_seen": stmt.excluded.last_seen},
        ).returning(Host.id)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def update(self, host_id: int, host: HostUpdate) -> int:
        result = await self.db.execute(
            update(Host)
            .where(Host.id == host_id)
            .values(role=host.role, last_seen=int(time.time()))
        )
        return result.rowcount

    async def delete(self, host_id: int, cascade: bool = False) -> int:
        if cascade:
            await self.db.execute(delete(SystemMetric).where(SystemMetric.host_id == host_id))
        result = await self.db.execute(delete(Host).where(Host.id == host_id))
        return result.rowcount
