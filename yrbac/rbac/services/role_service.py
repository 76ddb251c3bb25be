"""
授权模块 - 角色服务

提供角色管理的业务逻辑。

使用示例:
    from yrbac.rbac.services import RoleService

    role_service = RoleService()

    # 创建角色
    role = role_service.create_role("admin", "管理员")

    # 角色的权限树（enable 标记直接授权）
    tree = role_service.get_role_permission_tree(role.id)
"""

from typing import Dict, List, Optional, Type

from yrbac.exceptions import ErrorCode
from yrbac.log import get_logger
from ..enums import PermissionType
from ..models import Menu, Permission, Role, RolePermission
from ..schemas import PermissionNode
from .base import EntityStore
from .permission_tree import build_permission_tree

logger = get_logger("yrbac.rbac.role_service")


class RoleService(EntityStore[Role]):
    """角色服务

    提供角色 CRUD 与权限读取：
    - 角色创建、更新、分页
    - 角色直接持有的权限
    - 带授权标记的权限树

    权限的替换使用 AssociationReconciler.replace_role_permissions()。
    """

    entity_name = "Role"
    not_found_code = ErrorCode.ROLE_NOT_FOUND

    def __init__(
        self,
        role_model: Type[Role] = Role,
        permission_model: Type[Permission] = Permission,
        role_permission_model: Type[RolePermission] = RolePermission,
        menu_model: Type[Menu] = Menu,
        max_page_size: Optional[int] = None,
    ):
        """初始化角色服务

        Args:
            role_model: 角色模型类
            permission_model: 权限模型类
            role_permission_model: 角色-权限关联模型类
            menu_model: 菜单模型类（权限树的图标来源）
            max_page_size: 分页上限
        """
        super().__init__(role_model, max_page_size=max_page_size)
        self._permission_model = permission_model
        self._role_permission_model = role_permission_model
        self._menu_model = menu_model

    # ==================== 角色 CRUD ====================

    def create_role(self, code: str, name: str, description: Optional[str] = None) -> Role:
        """创建角色

        Args:
            code: 角色编码
            name: 角色名称
            description: 描述

        Returns:
            创建的角色对象

        Raises:
            DuplicateEntityException: 角色编码已存在
        """
        self._ensure_unique("code", code)
        role = self._model(code=code, name=name, description=description)
        self._persist(role, unique_field="code")
        logger.info(f"Role created: {code}")
        return role

    def update_role(
        self,
        role_id: int,
        code: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Role:
        """更新角色，值为 None 的字段保持不变

        Raises:
            EntityNotFoundException: 角色不存在
            DuplicateEntityException: 新编码已被占用
        """
        role = self.get(role_id)
        changes = self._changes(code=code, name=name, description=description)
        if "code" in changes and changes["code"] != role.code:
            self._ensure_unique("code", changes["code"], exclude_id=role.id)

        role.update(**changes)
        self._persist(role, unique_field="code")
        logger.info(f"Role updated: {role.code}")
        return role

    def get_role(self, role_id: int) -> Role:
        return self.get(role_id)

    def get_role_by_code(self, code: str) -> Optional[Role]:
        return self._model.query.filter_by(code=code).first()

    def page_roles(self, page: int = 1, page_size: int = 10):
        return self.page(page, page_size)

    # ==================== 角色权限 ====================

    def get_role_permission_ids(self, role_id: int) -> List[int]:
        self.get(role_id)
        return self._role_permission_model.get_role_permission_ids(role_id)

    def get_role_permissions(self, role_id: int) -> List[Permission]:
        """角色直接持有的权限（按 id 升序）

        Raises:
            EntityNotFoundException: 角色不存在
        """
        ids = self.get_role_permission_ids(role_id)
        if not ids:
            return []
        return (
            self._permission_model.query
            .filter(self._permission_model.id.in_(ids))
            .order_by(self._permission_model.id)
            .all()
        )

    def get_role_permission_tree(self, role_id: int) -> List[PermissionNode]:
        """完整权限目录组成的树，enable 标记角色是否直接持有该权限

        Raises:
            EntityNotFoundException: 角色不存在
            HierarchyCycleError: 权限层级存在环
        """
        granted = self.get_role_permission_ids(role_id)
        permissions = self._permission_model.get_all()
        return build_permission_tree(permissions, granted, icons=self._permission_icons(permissions))

    def _permission_icons(self, permissions: List[Permission]) -> Dict[int, str]:
        menu_perms = [p for p in permissions if p.menu_id and p.type == PermissionType.MENU.value]
        menu_ids = {p.menu_id for p in menu_perms}
        if not menu_ids:
            return {}
        menus = self._menu_model.query.filter(self._menu_model.id.in_(menu_ids)).all()
        menu_icons = {m.id: m.icon or (m.meta or {}).get("icon") for m in menus}
        return {p.id: menu_icons[p.menu_id] for p in menu_perms if menu_icons.get(p.menu_id)}


__all__ = ["RoleService"]
