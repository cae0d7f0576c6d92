"""
路由模块包 (Router Module Package)

- health.py: 健康检查（连通性、连接池统计、表行数）
- hosts.py: 主机注册、查询、更新、删除
- metrics.py: 指标上报、过滤分页查询、最新指标
- retention.py: 手动触发指标清理

所有路由在 main.py 中通过 app.include_router() 统一注册，业务接口使用 /api/v1/ 前缀。
"""
