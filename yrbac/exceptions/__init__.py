"""异常处理模块

使用示例:
    from yrbac.exceptions import Err, register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)

    raise Err.not_found("角色不存在")
"""

from .exceptions import (
    Err,
    ErrorCode,
    ErrorCodeType,
    BusinessException,
    AuthenticationException,
    ResourceNotFoundException,
    ResourceConflictException,
    ValidationException,
    StructuralException,
    TransactionFailureException,
    ServiceUnavailableException,
)

from .handlers import (
    register_exception_handlers,
    business_exception_handler,
    validation_exception_handler,
    general_exception_handler,
)

__all__ = [
    "Err",
    "ErrorCode",
    "register_exception_handlers",
    "ErrorCodeType",
    "BusinessException",
    "AuthenticationException",
    "ResourceNotFoundException",
    "ResourceConflictException",
    "ValidationException",
    "StructuralException",
    "TransactionFailureException",
    "ServiceUnavailableException",
    "business_exception_handler",
    "validation_exception_handler",
    "general_exception_handler",
]
