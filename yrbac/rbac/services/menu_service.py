"""
授权模块 - 菜单服务

菜单目录的维护、子菜单查询以及菜单与 menu 类型权限的绑定。
"""

from typing import Any, Dict, List, Optional, Type, Union

from yrbac.exceptions import ErrorCode
from yrbac.log import get_logger
from yrbac.orm.tree import is_root_parent
from ..enums import PermissionType
from ..models import Menu, Permission
from ..schemas import MenuMeta
from .base import EntityStore, HierarchyGuard
from .permission_service import PermissionService

logger = get_logger("yrbac.rbac.menu_service")

MetaInput = Union[Dict[str, Any], MenuMeta, None]


def _meta_dict(meta: MetaInput) -> Dict[str, Any]:
    """统一为 {title, icon, darkIcon, activeIcon}，省略空值"""
    if meta is None:
        return {}
    if not isinstance(meta, MenuMeta):
        meta = MenuMeta.model_validate(dict(meta))
    return meta.model_dump(by_alias=True, exclude_none=True)


class MenuService(EntityStore[Menu]):
    """菜单服务

    使用示例:
        menu_service = MenuService()
        system = menu_service.create_menu(name="System", path="/system", meta={"title": "系统管理"})
        menu_service.create_menu(name="Users", path="/system/users", parent_id=system.id, order=1)
        menu_service.bind_menu_permission(system.id, code="system", name="系统管理")
    """

    entity_name = "Menu"
    not_found_code = ErrorCode.MENU_NOT_FOUND

    def __init__(
        self,
        menu_model: Type[Menu] = Menu,
        permission_service: Optional[PermissionService] = None,
        max_page_size: Optional[int] = None,
    ):
        super().__init__(menu_model, max_page_size=max_page_size)
        self._guard = HierarchyGuard(menu_model, self.entity_name)
        self._permission_service = permission_service or PermissionService(max_page_size=max_page_size)

    def create_menu(
        self,
        name: str,
        path: str = "",
        component: str = "",
        parent_id: Optional[int] = None,
        icon: Optional[str] = None,
        order: int = 0,
        meta: MetaInput = None,
        is_visible: bool = True,
        button_association: bool = False,
    ) -> Menu:
        """创建菜单

        Raises:
            MissingParentError: 父菜单不存在
        """
        self._guard.check_parent(parent_id)
        menu = self._model(
            name=name,
            path=path,
            component=component,
            parent_id=parent_id,
            icon=icon,
            order=order,
            meta=_meta_dict(meta),
            is_visible=is_visible,
            button_association=button_association,
        )
        self._persist(menu)
        logger.info(f"Menu created: {name}")
        return menu

    def update_menu(self, menu_id: int, **fields) -> Menu:
        """更新菜单，值为 None 的字段不修改；meta 整体替换

        Raises:
            EntityNotFoundException: 菜单不存在
            MissingParentError / HierarchyCycleError: 父菜单非法
        """
        menu = self.get(menu_id)
        changes = self._changes(**fields)
        if "parent_id" in changes:
            self._guard.check_parent(changes["parent_id"], node_id=menu.id)
        if "meta" in changes:
            changes["meta"] = _meta_dict(changes["meta"])

        menu.update(**changes)
        self._persist(menu)
        logger.info(f"Menu updated: {menu.name}")
        return menu

    def get_menu(self, menu_id: int) -> Menu:
        return self.get(menu_id)

    def page_menus(self, page: int = 1, page_size: int = 10):
        return self.page(page, page_size)

    def list_children(self, parent_id: Optional[int]) -> List[Menu]:
        """直接子菜单，按 order 升序；parent_id 为 None 或 0 时返回根菜单"""
        query = self._model.query
        if is_root_parent(parent_id):
            query = query.filter((self._model.parent_id.is_(None)) | (self._model.parent_id == 0))
        else:
            query = query.filter(self._model.parent_id == parent_id)
        return query.order_by(self._model.order, self._model.id).all()

    # ==================== 菜单权限 ====================

    def bind_menu_permission(self, menu_id: int, code: str, name: str, parent_id: Optional[int] = None) -> Permission:
        """为菜单创建一条 menu 类型权限

        Raises:
            EntityNotFoundException: 菜单不存在
            DuplicateEntityException: 权限编码已存在
        """
        menu = self.get(menu_id)
        perm = self._permission_service.create_permission(
            code=code,
            name=name,
            type=PermissionType.MENU,
            menu_id=menu.id,
            parent_id=parent_id,
        )
        logger.info(f"Menu permission bound: menu={menu.id}, code={code}")
        return perm

    def get_menu_permissions(self, menu_id: int) -> List[Permission]:
        self.get(menu_id)
        return self._permission_service.list_by_menu(menu_id)


__all__ = ["MenuService"]
