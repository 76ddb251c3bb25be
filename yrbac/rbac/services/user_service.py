"""
授权模块 - 用户服务

用户的创建、更新、分页，登录认证与签发访问令牌。
密码只保存 passlib 哈希，不存储明文。

使用示例:
    from yrbac.auth import JWTManager
    from yrbac.rbac.services import UserService

    user_service = UserService(jwt_manager=JWTManager(secret_key="secret"))
    user = user_service.create_user("alice", "secret123")
    token = user_service.login("alice", "secret123")
"""

from typing import List, Optional, Type

from yrbac.auth import JWTManager, PasswordHelper, TokenPayload
from yrbac.exceptions import (
    AuthenticationException,
    ErrorCode,
    ServiceUnavailableException,
    ValidationException,
)
from yrbac.log import get_logger
from ..models import Role, User, UserRole
from ..schemas import TokenResponse
from .base import EntityStore

logger = get_logger("yrbac.rbac.user_service")


class UserService(EntityStore[User]):
    """用户服务

    角色的替换使用 AssociationReconciler.replace_user_roles()。
    """

    entity_name = "User"
    not_found_code = ErrorCode.USER_NOT_FOUND

    def __init__(
        self,
        user_model: Type[User] = User,
        role_model: Type[Role] = Role,
        user_role_model: Type[UserRole] = UserRole,
        jwt_manager: Optional[JWTManager] = None,
        max_page_size: Optional[int] = None,
    ):
        super().__init__(user_model, max_page_size=max_page_size)
        self._role_model = role_model
        self._user_role_model = user_role_model
        self._jwt_manager = jwt_manager

    @staticmethod
    def _hash_password(password: str) -> str:
        try:
            return PasswordHelper.hash(password)
        except ValueError as e:
            raise ValidationException(str(e), code=ErrorCode.INVALID_PARAMETER, field="password") from e

    # ==================== 用户 CRUD ====================

    def create_user(self, username: str, password: str) -> User:
        """创建用户

        Raises:
            DuplicateEntityException: 用户名已存在
            ValidationException: 密码长度不合法
        """
        self._ensure_unique("username", username, code=ErrorCode.USERNAME_EXISTS)
        user = self._model(username=username, password=self._hash_password(password))
        self._persist(user, unique_field="username")
        logger.info(f"User created: {username}")
        return user

    def update_user(self, user_id: int, username: Optional[str] = None, password: Optional[str] = None) -> User:
        """更新用户名或密码，username 为 None 或 password 为空时保持不变

        Raises:
            EntityNotFoundException: 用户不存在
            DuplicateEntityException: 新用户名已被占用
            ValidationException: 密码长度不合法
        """
        user = self.get(user_id)
        changes = {}
        if username is not None and username != user.username:
            self._ensure_unique("username", username, exclude_id=user.id, code=ErrorCode.USERNAME_EXISTS)
            changes["username"] = username
        if password:
            changes["password"] = self._hash_password(password)

        user.update(**changes)
        self._persist(user, unique_field="username")
        logger.info(f"User updated: {user.username}")
        return user

    def get_user(self, user_id: int) -> User:
        return self.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._model.query.filter_by(username=username).first()

    def page_users(self, page: int = 1, page_size: int = 10):
        return self.page(page, page_size)

    def get_user_role_ids(self, user_id: int) -> List[int]:
        self.get(user_id)
        return self._user_role_model.get_user_role_ids(user_id)

    def get_user_roles(self, user_id: int) -> List[Role]:
        """用户直接关联的角色（按 id 升序）

        Raises:
            EntityNotFoundException: 用户不存在
        """
        ids = self.get_user_role_ids(user_id)
        if not ids:
            return []
        return self._role_model.query.filter(self._role_model.id.in_(ids)).order_by(self._role_model.id).all()

    # ==================== 认证 ====================

    def authenticate(self, username: str, password: str) -> User:
        """校验用户名与密码

        用户不存在与密码错误返回同一错误，不区分原因。

        Raises:
            AuthenticationException: 用户名或密码错误
        """
        user = self.get_user_by_username(username)
        if user is None or not PasswordHelper.verify(password, user.password):
            logger.warning(f"Login failed: {username}")
            raise AuthenticationException("用户名或密码错误", code=ErrorCode.INVALID_CREDENTIALS)

        if PasswordHelper.needs_rehash(user.password):
            user.update(password=PasswordHelper.hash(password, validate=False), commit=True)
        return user

    def login(self, username: str, password: str) -> TokenResponse:
        """认证并签发访问令牌

        Raises:
            AuthenticationException: 用户名或密码错误
            ServiceUnavailableException: 未配置 JWTManager
        """
        if self._jwt_manager is None:
            raise ServiceUnavailableException("未配置令牌签发")
        user = self.authenticate(username, password)
        token = self._jwt_manager.create_access_token(TokenPayload(user_id=user.id, username=user.username))
        logger.info(f"User logged in: {username}")
        return TokenResponse(
            access_token=token,
            token_type="bearer",
            expires_in=self._jwt_manager.expires_in_seconds,
        )


__all__ = ["UserService"]
