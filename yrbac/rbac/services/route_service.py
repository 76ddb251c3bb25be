"""
授权模块 - 路由服务

为前端生成路由树。meta.authority 的计算方式由 RbacSettings.authority_mode 决定:
    - static: 所有节点使用 static_authority（默认 [1]）
    - permission: 节点值为当前用户中持有该菜单 menu 类型权限的角色 id
"""

from typing import List, Optional, Type, Union

from yrbac.exceptions import ErrorCode
from yrbac.log import get_logger
from ..enums import AuthorityMode, PermissionType
from ..models import Menu, Permission, RolePermission, User, UserRole
from ..schemas import RouteNode
from .authority import AuthorityResolver, PermissionAuthority, StaticAuthority
from .base import EntityStore
from .route_tree import build_route_tree

logger = get_logger("yrbac.rbac.route_service")


class RouteService:
    """路由服务

    使用示例:
        route_service = RouteService(authority_mode="permission")
        routes = route_service.get_user_routes(user_id)
        payload = [node.to_dict() for node in routes]
    """

    def __init__(
        self,
        menu_model: Type[Menu] = Menu,
        user_model: Type[User] = User,
        permission_model: Type[Permission] = Permission,
        user_role_model: Type[UserRole] = UserRole,
        role_permission_model: Type[RolePermission] = RolePermission,
        authority_mode: Union[str, AuthorityMode] = AuthorityMode.STATIC,
        static_authority: Optional[List[int]] = None,
        include_hidden: bool = True,
    ):
        self._menu_model = menu_model
        self._user_store = EntityStore(user_model, entity_name="User", not_found_code=ErrorCode.USER_NOT_FOUND)
        self._permission_model = permission_model
        self._user_role_model = user_role_model
        self._role_permission_model = role_permission_model
        self._authority_mode = AuthorityMode(authority_mode)
        self._static_authority = StaticAuthority(static_authority)
        self._include_hidden = include_hidden

    def get_routes(self, authority: Optional[AuthorityResolver] = None) -> List[RouteNode]:
        """全量菜单生成的路由树

        Raises:
            HierarchyCycleError: 菜单层级存在环
        """
        menus = self._menu_model.get_all()
        return build_route_tree(
            menus,
            authority=authority or self._static_authority,
            include_hidden=self._include_hidden,
        )

    def get_user_routes(self, user_id: int) -> List[RouteNode]:
        """当前用户的路由树

        Raises:
            EntityNotFoundException: 用户不存在
            HierarchyCycleError: 菜单层级存在环
        """
        self._user_store.get(user_id)
        if self._authority_mode == AuthorityMode.PERMISSION:
            authority = self.user_authority(user_id)
        else:
            authority = self._static_authority
        routes = self.get_routes(authority)
        logger.debug(f"Routes built for user {user_id}: {len(routes)} roots")
        return routes

    def user_authority(self, user_id: int) -> PermissionAuthority:
        """按用户角色持有的 menu 类型权限计算授权标记"""
        role_ids = self._user_role_model.get_user_role_ids(user_id)
        if not role_ids:
            return PermissionAuthority()

        rp = self._role_permission_model
        perm = self._permission_model
        rows = (
            rp.query
            .join(perm, perm.id == rp.permission_id)
            .filter(rp.role_id.in_(role_ids))
            .filter(perm.type == PermissionType.MENU.value)
            .filter(perm.menu_id.isnot(None))
            .with_entities(rp.role_id, perm.menu_id)
            .all()
        )
        return PermissionAuthority.from_grants((row[0], row[1]) for row in rows)


__all__ = ["RouteService"]
