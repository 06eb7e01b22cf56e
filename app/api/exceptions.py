"""
API 例外與例外處理器
所有失敗回應統一為 {"status": "failed", "message": ..., "errorCode": ...}
"""

import logging
from enum import Enum
from typing import Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.models.responses import ApiErrorResponse

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """內部錯誤碼"""
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    DATA_INVALID = "DATA_INVALID"
    SYSTEM_ERROR = "SYSTEM_ERROR"


class BusinessException(Exception):
    """業務例外基底類別"""

    def __init__(self, message: str, error_code: ErrorCode, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code


class ApiError(BusinessException):
    """帶有 HTTP 狀態碼與錯誤碼的 API 錯誤"""

    @classmethod
    def create(cls, status_code: int, message: str, error_code: ErrorCode) -> "ApiError":
        return cls(message, error_code, status_code)

    @classmethod
    def unauthorized(cls, message: str = "請先登入") -> "ApiError":
        return cls(message, ErrorCode.UNAUTHORIZED, 401)

    @classmethod
    def not_found(cls, resource: str = "資源") -> "ApiError":
        return cls(f"找不到{resource}", ErrorCode.NOT_FOUND, 404)

    @classmethod
    def invalid_data(cls, message: str) -> "ApiError":
        return cls(message, ErrorCode.DATA_INVALID, 400)

    @classmethod
    def system_error(cls, message: str = "系統錯誤，請稍後再試") -> "ApiError":
        return cls(message, ErrorCode.SYSTEM_ERROR, 500)


def _error_response(status_code: int, message: str, error_code: Optional[ErrorCode]) -> JSONResponse:
    body = ApiErrorResponse(
        message=message,
        error_code=error_code.value if error_code else None
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    """業務例外處理"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} 發生系統錯誤: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} 請求失敗: [{exc.error_code.value}] {exc.message}")
    return _error_response(exc.status_code, exc.message, exc.error_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """請求格式驗證失敗"""
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.info(f"{request.method} {request.url.path} 請求格式錯誤: {details}")
    return _error_response(400, f"請求資料格式錯誤: {details}", ErrorCode.DATA_INVALID)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """框架層 HTTP 例外 (例如路由不存在)"""
    status_to_code = {
        401: ErrorCode.UNAUTHORIZED,
        403: ErrorCode.FORBIDDEN,
        404: ErrorCode.NOT_FOUND,
    }
    error_code = status_to_code.get(exc.status_code)
    if error_code is None:
        error_code = ErrorCode.SYSTEM_ERROR if exc.status_code >= 500 else ErrorCode.DATA_INVALID
    return _error_response(exc.status_code, str(exc.detail), error_code)


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """資料庫例外處理"""
    logger.error(f"{request.method} {request.url.path} 資料庫操作失敗: {exc}")
    return _error_response(500, "資料庫操作失敗，請稍後再試", ErrorCode.SYSTEM_ERROR)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """未預期的例外"""
    logger.exception(f"{request.method} {request.url.path} 未預期的錯誤: {exc}")
    return _error_response(500, "系統錯誤，請稍後再試", ErrorCode.SYSTEM_ERROR)
