"""业务服务层 (Service Layer)。"""
