"""
授权模块 - 按钮服务
"""

from typing import List, Optional, Type

from yrbac.exceptions import ErrorCode
from yrbac.log import get_logger
from yrbac.orm import transaction_manager
from ..enums import PermissionType
from ..models import Button, Menu, Permission
from .base import EntityStore
from .permission_service import PermissionService

logger = get_logger("yrbac.rbac.button_service")


class ButtonService(EntityStore[Button]):
    """按钮服务

    按钮必须属于已存在的菜单；bind_button_permission 创建 button 类型权限。
    """

    entity_name = "Button"
    not_found_code = ErrorCode.BUTTON_NOT_FOUND

    def __init__(
        self,
        button_model: Type[Button] = Button,
        menu_model: Type[Menu] = Menu,
        permission_service: Optional[PermissionService] = None,
        max_page_size: Optional[int] = None,
    ):
        super().__init__(button_model, max_page_size=max_page_size)
        self._menu_store = EntityStore(menu_model, entity_name="Menu", not_found_code=ErrorCode.MENU_NOT_FOUND)
        self._permission_service = permission_service or PermissionService(max_page_size=max_page_size)

    def create_button(self, name: str, menu_id: int, action: str = "", permission_code: str = "") -> Button:
        """创建按钮

        Raises:
            EntityNotFoundException: 所属菜单不存在
        """
        self._menu_store.get(menu_id)
        button = self._model(name=name, menu_id=menu_id, action=action, permission_code=permission_code)
        self._persist(button)
        logger.info(f"Button created: {name} (menu={menu_id})")
        return button

    def update_button(self, button_id: int, **fields) -> Button:
        """更新按钮，值为 None 的字段不修改

        Raises:
            EntityNotFoundException: 按钮或新的所属菜单不存在
        """
        button = self.get(button_id)
        changes = self._changes(**fields)
        if "menu_id" in changes:
            self._menu_store.get(changes["menu_id"])
        button.update(**changes)
        self._persist(button)
        logger.info(f"Button updated: {button.name}")
        return button

    def get_button(self, button_id: int) -> Button:
        return self.get(button_id)

    def page_buttons(self, page: int = 1, page_size: int = 10):
        return self.page(page, page_size)

    def list_by_menu(self, menu_id: int) -> List[Button]:
        return self.list_by(menu_id=menu_id)

    def bind_button_permission(self, button_id: int, code: str, name: str, parent_id: Optional[int] = None) -> Permission:
        """为按钮创建一条 button 类型权限（只记录 button_id）

        按钮的 permission_code 为空时回填为 code，两次写入在同一事务内提交。

        Raises:
            EntityNotFoundException: 按钮不存在
            DuplicateEntityException: 权限编码已存在
        """
        button = self.get(button_id)
        with transaction_manager.transaction(session=button.session):
            perm = self._permission_service.create_permission(
                code=code,
                name=name,
                type=PermissionType.BUTTON,
                button_id=button.id,
                parent_id=parent_id,
            )
            if not button.permission_code:
                button.update(permission_code=code, commit=True)
        logger.info(f"Button permission bound: button={button.id}, code={code}")
        return perm

    def get_button_permissions(self, button_id: int) -> List[Permission]:
        self.get(button_id)
        return self._permission_service.list_by_button(button_id)


__all__ = ["ButtonService"]
