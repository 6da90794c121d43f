"""异常定义与 FastAPI 异常处理器"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.models.common import ErrorResponse
from app.utils.logger import logger


class NerineError(Exception):
    """应用异常基类"""


class ConfigError(NerineError):
    """启动配置缺失或非法"""


class SourceError(NerineError):
    """
    上游数据源错误（网络错误、非 2xx 状态、响应体无法解析）

    Args:
        message: 错误描述
        status_code: 上游返回的 HTTP 状态码（已知时）
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ArticleNotFoundError(SourceError):
    """按 ID 获取文章时上游返回 404"""

    def __init__(self, article_id: str):
        self.article_id = article_id
        super().__init__(f"article '{article_id}' not found", status_code=404)


class UnsupportedOperationError(SourceError, NotImplementedError):
    """数据源不支持该操作（最小能力数据源被调用了扩展能力）"""

    def __init__(self, source: str, operation: str):
        self.source = source
        self.operation = operation
        super().__init__(f"{source} does not support {operation}")


class InvalidLimitError(SourceError):
    """limit 非法，请求未发出"""

    def __init__(self, message: str = "limit must be greater than 0"):
        super().__init__(message)


class UsecaseError(NerineError):
    """用例执行失败，message 带有操作前缀，原始异常通过 __cause__ 保留"""


class ApiError(NerineError):
    """
    由路由层抛出、渲染为 {"error": ..., "detail": ...} 的响应

    Args:
        status_code: HTTP 状态码
        error: 简短错误描述
        detail: 详细信息（可选）
    """

    def __init__(self, status_code: int, error: str, detail: Optional[str] = None):
        self.status_code = status_code
        self.error = error
        self.detail = detail
        super().__init__(error)


def _error_body(error: str, detail: Optional[str] = None) -> dict:
    return ErrorResponse(error=error, detail=detail).model_dump(exclude_none=True)


def register_exception_handlers(app: FastAPI) -> None:
    """注册全部异常处理器"""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error, exc.detail),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        detail = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}" for e in errors
        )
        return JSONResponse(
            status_code=400,
            content=_error_body("Invalid request parameters", detail or None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """全局异常处理器"""
        logger.opt(exception=exc).error(f"未处理的异常: {exc}")
        return JSONResponse(
            status_code=500,
            content=_error_body("Internal server error"),
        )
