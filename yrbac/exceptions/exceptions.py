"""业务异常类定义

授权引擎使用的业务异常类体系，每个异常携带 HTTP 状态码，
可以由 register_exception_handlers 直接转换为 JSON 响应。
"""

import copy
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from fastapi import status


class ErrorCode(str, Enum):
    """错误代码枚举

    继承自 str，可以直接作为字符串使用。

    使用示例:
        raise ResourceNotFoundException("角色不存在", code=ErrorCode.ROLE_NOT_FOUND)
    """

    # ==================== 通用错误 ====================
    BUSINESS_ERROR = "BUSINESS_ERROR"
    OPERATION_FAILED = "OPERATION_FAILED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

    # ==================== 认证相关 (401) ====================
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # ==================== 资源相关 (404) ====================
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ROLE_NOT_FOUND = "ROLE_NOT_FOUND"
    PERMISSION_NOT_FOUND = "PERMISSION_NOT_FOUND"
    MENU_NOT_FOUND = "MENU_NOT_FOUND"
    BUTTON_NOT_FOUND = "BUTTON_NOT_FOUND"

    # ==================== 冲突相关 (409) ====================
    RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    USERNAME_EXISTS = "USERNAME_EXISTS"

    # ==================== 验证相关 (422) ====================
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    INVALID_PAGINATION = "INVALID_PAGINATION"

    # ==================== 结构相关 (400) ====================
    STRUCTURAL_ERROR = "STRUCTURAL_ERROR"
    HIERARCHY_CYCLE = "HIERARCHY_CYCLE"
    MISSING_PARENT = "MISSING_PARENT"
    UNKNOWN_REFERENCE = "UNKNOWN_REFERENCE"

    # ==================== 服务相关 (500/503) ====================
    TRANSACTION_FAILED = "TRANSACTION_FAILED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    DATABASE_ERROR = "DATABASE_ERROR"


ErrorCodeType = Union[str, ErrorCode]


class BusinessException(Exception):
    """业务异常基类

    属性:
        message: 错误消息（面向用户）
        code: 错误代码（ErrorCode 枚举或字符串）
        status_code: HTTP 状态码
        details: 详细错误信息列表
        extra: 额外的上下文信息

    使用示例:
        raise BusinessException("操作失败", code=ErrorCode.OPERATION_FAILED)

        raise BusinessException(
            message="角色权限设置失败",
            code=ErrorCode.OPERATION_FAILED,
            extra={"role_id": 1}
        )
    """

    def __init__(
        self,
        message: str,
        code: ErrorCodeType = ErrorCode.BUSINESS_ERROR,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or []
        self.extra = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "details": copy.deepcopy(self.details),
            "extra": copy.deepcopy(self.extra),
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"status_code={self.status_code})"
        )


class AuthenticationException(BusinessException):
    """认证异常 (401)

    使用示例:
        raise AuthenticationException("用户名或密码错误", code=ErrorCode.INVALID_CREDENTIALS)
    """

    def __init__(
        self,
        message: str = "认证失败",
        code: ErrorCodeType = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            **extra
        )


class ResourceNotFoundException(BusinessException):
    """资源不存在异常 (404)

    使用示例:
        raise ResourceNotFoundException("用户不存在", resource_type="User", resource_id=123)
    """

    def __init__(
        self,
        message: str = "资源不存在",
        code: ErrorCodeType = ErrorCode.RESOURCE_NOT_FOUND,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            **extra
        )


class ResourceConflictException(BusinessException):
    """资源冲突异常 (409)

    使用示例:
        raise ResourceConflictException("用户名已被使用", field="username", value="admin")
    """

    def __init__(
        self,
        message: str = "资源冲突",
        code: ErrorCodeType = ErrorCode.RESOURCE_CONFLICT,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            **extra
        )


class ValidationException(BusinessException):
    """数据验证异常 (422)

    使用示例:
        raise ValidationException("页码必须大于 0", field="page")
    """

    def __init__(
        self,
        message: str = "数据验证失败",
        code: ErrorCodeType = ErrorCode.VALIDATION_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            **extra
        )


class StructuralException(BusinessException):
    """结构异常 (400)

    层级或引用关系不成立时抛出：父节点不存在、出现环、引用了不存在的 id。
    """

    def __init__(
        self,
        message: str = "数据结构错误",
        code: ErrorCodeType = ErrorCode.STRUCTURAL_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            **extra
        )


class TransactionFailureException(BusinessException):
    """事务失败异常 (500)

    多步写入中任何一步失败，事务已回滚，原有数据保持不变。
    """

    def __init__(
        self,
        message: str = "事务执行失败",
        code: ErrorCodeType = ErrorCode.TRANSACTION_FAILED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            **extra
        )


class ServiceUnavailableException(BusinessException):
    """服务不可用异常 (503)"""

    def __init__(
        self,
        message: str = "服务暂时不可用",
        code: ErrorCodeType = ErrorCode.SERVICE_UNAVAILABLE,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
            **extra
        )


class Err:
    """异常快捷创建类

    使用示例:
        from yrbac.exceptions import Err

        raise Err.auth("用户名或密码错误")          # 401
        raise Err.not_found("角色不存在")            # 404
        raise Err.conflict("角色编码已存在")         # 409
        raise Err.invalid("页码必须大于 0")          # 422
        raise Err.structural("菜单层级存在循环")     # 400
        raise Err.tx_failed("角色权限设置失败")      # 500
    """

    @staticmethod
    def auth(message: str = "认证失败", **kwargs) -> AuthenticationException:
        return AuthenticationException(message, **kwargs)

    @staticmethod
    def not_found(message: str = "资源不存在", **kwargs) -> ResourceNotFoundException:
        return ResourceNotFoundException(message, **kwargs)

    @staticmethod
    def conflict(message: str = "资源冲突", **kwargs) -> ResourceConflictException:
        return ResourceConflictException(message, **kwargs)

    @staticmethod
    def invalid(message: str = "数据验证失败", **kwargs) -> ValidationException:
        return ValidationException(message, **kwargs)

    @staticmethod
    def structural(message: str = "数据结构错误", **kwargs) -> StructuralException:
        return StructuralException(message, **kwargs)

    @staticmethod
    def tx_failed(message: str = "事务执行失败", **kwargs) -> TransactionFailureException:
        return TransactionFailureException(message, **kwargs)

    @staticmethod
    def unavailable(message: str = "服务暂时不可用", **kwargs) -> ServiceUnavailableException:
        return ServiceUnavailableException(message, **kwargs)

    @staticmethod
    def fail(message: str = "操作失败", **kwargs) -> BusinessException:
        return BusinessException(message, **kwargs)
