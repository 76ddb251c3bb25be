"""认证依赖

从 Authorization 头解析 Bearer 令牌，得到当前用户身份。

使用示例:
    from fastapi import Depends, FastAPI
    from yrbac.auth import JWTManager, create_identity_dependency

    get_identity = create_identity_dependency(jwt_manager)

    @app.get("/routes")
    def routes(identity: TokenData = Depends(get_identity)):
        return route_service.get_user_routes(identity.user_id)
"""

from typing import Callable, Optional

from fastapi import Header

from yrbac.exceptions import AuthenticationException, ErrorCode
from .jwt import JWTManager
from .schemas import TokenData


def parse_bearer_token(authorization: Optional[str], jwt_manager: JWTManager) -> TokenData:
    """解析 "Bearer <token>" 格式的请求头

    Raises:
        AuthenticationException: 缺少请求头、格式错误、令牌无效或过期
    """
    if not authorization:
        raise AuthenticationException("缺少认证信息", code=ErrorCode.INVALID_TOKEN)

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise AuthenticationException("认证信息格式错误", code=ErrorCode.INVALID_TOKEN)

    data = jwt_manager.verify_token(parts[1].strip(), raise_on_expired=True)
    if data is None:
        raise AuthenticationException("无效的访问令牌", code=ErrorCode.INVALID_TOKEN)
    return data


def create_identity_dependency(jwt_manager: JWTManager) -> Callable[..., TokenData]:
    """创建 FastAPI 依赖函数"""

    def get_identity(authorization: Optional[str] = Header(None)) -> TokenData:
        return parse_bearer_token(authorization, jwt_manager)

    return get_identity
