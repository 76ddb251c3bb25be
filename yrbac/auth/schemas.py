"""认证相关数据类"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class TokenPayload:
    """Token 载荷

    使用示例:
        payload = TokenPayload(user_id=1, username="admin")
    """
    user_id: int
    username: str
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def sub(self) -> str:
        return str(self.user_id)


@dataclass
class TokenData:
    """验证后的 Token 数据"""
    user_id: int
    username: str
    token_type: str = "access"
    exp: Optional[datetime] = None
    iat: Optional[datetime] = None
