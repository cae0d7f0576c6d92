"""
Pi Monitor 后端包 (Pi Monitor Backend Package)

树莓派等远程节点推送主机注册信息和系统资源指标，本服务负责持久化并提供过滤、分页查询。

Remote nodes (Raspberry Pi agents) push host registrations and system resource
samples; this service persists them and serves filtered, paginated queries.
"""

__version__ = "0.1.0"
