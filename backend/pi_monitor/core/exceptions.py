"""
全局异常处理模块 (Global Exception Handling Module)

定义业务异常类和 FastAPI 全局异常处理器，提供统一的错误响应格式。
错误分为三类：输入校验失败 (400)、资源不存在 (404)、存储层故障 (500)。
存储层错误原样透传驱动消息，便于诊断，不做重试。

Defines business exception classes and FastAPI global exception handlers,
providing a unified error response format. Errors fall into three classes:
input validation (400), not found (404) and store failures (500). Store
failures pass the driver message through for diagnosability; nothing retries.
"""
import logging
import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# ============================================================
# 业务异常类 (Business Exception Classes)
# ============================================================

class BusinessError(Exception):
    """业务异常基类 (Base Business Exception)"""
    status_code: int = 400
    error: str = "business_error"

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class NotFoundError(BusinessError):
    """资源不存在 (Resource Not Found)"""
    status_code = 404
    error = "not_found"


class ValidationError(BusinessError):
    """数据校验失败 (Validation Error)"""
    status_code = 400
    error = "validation_error"


def _error_body(error: str, message: str, detail: Optional[str], status_code: int) -> dict:
    return {
        "error": error,
        "message": message,
        "detail": detail,
        "status_code": status_code,
    }


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


# ============================================================
# 全局异常处理器注册 (Global Exception Handler Registration)
# ============================================================

def register_exception_handlers(app: FastAPI) -> None:
    """
    注册全局异常处理器到 FastAPI 应用 (Register global exception handlers to FastAPI app)

    处理优先级：
    1. BusinessError 子类 → 对应 HTTP 状态码 + 结构化响应
    2. RequestValidationError → 400（查询参数、路径参数、请求体解析失败）
    3. HTTPException → 保持原样，包装为统一格式（含未知路由 404、方法不允许 405）
    4. SQLAlchemyError → 500，透传驱动错误信息
    5. Exception → 500 + 完整 traceback 日志
    """

    @app.exception_handler(BusinessError)
    async def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error, exc.message, exc.detail, exc.status_code),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", "Invalid request parameters", _format_validation_errors(exc), 400),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("http_error", str(exc.detail), None, exc.status_code),
            headers=exc.headers,
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        # 优先使用驱动原始异常信息 (Prefer the raw driver message)
        driver_message = str(getattr(exc, "orig", None) or exc)
        logger.error("Database error on %s %s: %s", request.method, request.url.path, driver_message)
        return JSONResponse(
            status_code=500,
            content=_error_body("database_error", "Database operation failed", driver_message, 500),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        # 记录完整 traceback 用于调试 (Log full traceback for debugging)
        logger.error(
            "Unhandled exception on %s %s: %s\n%s",
            request.method,
            request.url.path,
            str(exc),
            traceback.format_exc(),
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("internal_server_error", "Internal server error", None, 500),
        )
