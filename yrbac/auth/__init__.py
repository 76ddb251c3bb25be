"""认证模块

- PasswordHelper: 加盐单向密码哈希
- JWTManager: 访问令牌签发与验证
- parse_bearer_token / create_identity_dependency: 请求身份解析
"""

from .password import (
    PasswordHelper,
    PasswordTooShortError,
    PasswordTooLongError,
    hash_password,
    verify_password,
)
from .schemas import TokenPayload, TokenData
from .jwt import JWTManager
from .dependencies import parse_bearer_token, create_identity_dependency

__all__ = [
    "PasswordHelper",
    "PasswordTooShortError",
    "PasswordTooLongError",
    "hash_password",
    "verify_password",
    "TokenPayload",
    "TokenData",
    "JWTManager",
    "parse_bearer_token",
    "create_identity_dependency",
]
