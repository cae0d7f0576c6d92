"""
核心模块包 (Core Module Package)

包含配置管理、数据库连接、异常处理和依赖注入等基础组件。

Core infrastructure modules: configuration, database connection, exception
handling and dependency injection.
"""
