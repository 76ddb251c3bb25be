"""JWT 工具模块

登录成功后签发访问令牌，令牌携带 user_id 与 username。
签名密钥由 JWTSettings 显式提供。

使用示例:
    from yrbac.auth import JWTManager, TokenPayload

    jwt_manager = JWTManager(secret_key="your-secret-key", access_token_expire_minutes=1440)
    token = jwt_manager.create_access_token(TokenPayload(user_id=1, username="admin"))
    data = jwt_manager.verify_token(token)
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from yrbac.exceptions import AuthenticationException, ErrorCode
from .schemas import TokenData, TokenPayload


class JWTManager:
    """JWT 管理器

    Args:
        secret_key: 签名密钥
        algorithm: 签名算法，默认 HS256
        access_token_expire_minutes: 访问令牌有效期（分钟）
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60 * 24,
    ):
        if not secret_key:
            raise ValueError("secret_key 不能为空")
        if access_token_expire_minutes <= 0:
            raise ValueError("access_token_expire_minutes 必须大于 0")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes

    @classmethod
    def from_settings(cls, settings: Any) -> "JWTManager":
        """从 JWTSettings 创建"""
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            access_token_expire_minutes=settings.access_token_expire_minutes,
        )

    @property
    def expires_in_seconds(self) -> int:
        return self.access_token_expire_minutes * 60

    def create_access_token(self, payload: TokenPayload, expires_delta: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))
        data: Dict[str, Any] = {
            **payload.extra,
            "sub": payload.sub,
            "user_id": payload.user_id,
            "username": payload.username,
            "token_type": "access",
            "exp": expire,
            "iat": now,
        }
        return jwt.encode(data, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str, raise_on_expired: bool = False) -> Optional[TokenData]:
        """验证令牌

        Returns:
            TokenData，验证失败返回 None

        Raises:
            AuthenticationException: raise_on_expired=True 且令牌已过期
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            if raise_on_expired:
                raise AuthenticationException("访问令牌已过期", code=ErrorCode.TOKEN_EXPIRED)
            return None
        except JWTError:
            return None

        user_id = payload.get("user_id")
        username = payload.get("username")
        if user_id is None or username is None:
            return None

        return TokenData(
            user_id=user_id,
            username=username,
            token_type=payload.get("token_type", "access"),
            exp=_to_datetime(payload.get("exp")),
            iat=_to_datetime(payload.get("iat")),
        )


def _to_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)
