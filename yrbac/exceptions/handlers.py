"""全局异常处理器

将业务异常和请求验证异常转换为统一的 JSON 响应格式:

    {"status": "error", "message": ..., "error_code": ..., "msg_details": [...], "data": {}}
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from yrbac.log import get_logger
from .exceptions import BusinessException, ErrorCode

logger = get_logger()


def _error_content(message: str, code, details=None) -> dict:
    content = {
        "status": "error",
        "message": message,
        "msg_details": list(details or []),
        "data": {},
    }
    if code:
        content["error_code"] = code.value if isinstance(code, ErrorCode) else code
    return content


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    """业务异常处理器"""
    logger.warning(
        f"Business exception occurred: {exc.code} - {exc.message}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(exc.message, exc.code, exc.details),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """请求参数验证异常处理器"""
    errors = []
    for error in exc.errors():
        loc_parts = [str(loc) for loc in error["loc"] if loc not in ("body", "query", "path", "header", "cookie")]
        field = ".".join(loc_parts) if loc_parts else "请求体"
        errors.append(f"{field}: {error['msg']}")

    logger.warning(f"Validation error: {len(errors)} field(s) failed validation")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_content("请求参数验证失败", ErrorCode.VALIDATION_ERROR, errors),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """未处理异常的兜底处理器"""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {type(exc).__name__}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content("服务器内部错误", ErrorCode.INTERNAL_SERVER_ERROR),
    )


def register_exception_handlers(app) -> None:
    """注册全局异常处理器

    使用示例:
        from fastapi import FastAPI
        from yrbac.exceptions import register_exception_handlers

        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
