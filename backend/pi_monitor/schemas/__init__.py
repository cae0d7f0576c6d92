"""请求/响应与查询参数模型 (Request, response and query-parameter models)。"""
from typing import Annotated

from pydantic import Field

# SQLite INTEGER 为有符号 64 位，超出范围的输入在校验阶段拒绝 (400)
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
