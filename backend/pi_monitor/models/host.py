"""
主机模型 (Host Model)

定义被监控节点的表结构。hostname 与 ip_address 共同构成自然键，
Agent 重复注册时按其中任一匹配更新已有记录，而不是新建重复行。

Defines the table structure for monitored nodes. Hostname and IP address form
the natural key used for idempotent registration.
"""
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pi_monitor.core.database import Base


class Host(Base):
    """
    主机表 (Host Table)

    时间字段均为 Unix 秒。created_at 在首次注册时写入，last_seen 在每次注册或更新时刷新。
    """
    __tablename__ = "hosts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)  # 主键 ID (Primary Key ID)
    hostname: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)  # 主机名称 (Hostname)
    ip_address: Mapped[str] = mapped_column(String(45), nullable=False, unique=True)  # IP 地址（支持 IPv6） (IP Address)
    role: Mapped[str] = mapped_column(String(100), nullable=False, default="")  # 角色标签，如 web-server (Role tag)
    created_at: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 创建时间 (Creation Time)
    last_seen: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 最后上报时间 (Last Seen Time)
