"""
授权模块 - 权限服务

权限目录的增删改查与按类型、菜单、按钮、父节点的查询。
写入时校验：编码唯一、父权限存在、重新挂接不成环。
"""

from typing import List, Optional, Sequence, Type, Union

from yrbac.exceptions import ErrorCode, ValidationException
from yrbac.log import get_logger
from yrbac.orm.tree import is_root_parent
from ..enums import PermissionType
from ..exceptions import UnknownReferenceError
from ..models import Permission
from .base import EntityStore, HierarchyGuard

logger = get_logger("yrbac.rbac.permission_service")


def _coerce_type(value: Union[str, PermissionType]) -> str:
    try:
        return PermissionType(value).value
    except ValueError:
        raise ValidationException(
            f"无效的权限类型: {value}",
            code=ErrorCode.INVALID_PARAMETER,
            field="type",
        ) from None


class PermissionService(EntityStore[Permission]):
    """权限服务

    使用示例:
        service = PermissionService()
        perm = service.create_permission(code="user:read", name="查看用户", type="button")
        children = service.list_children(perm.id)
    """

    entity_name = "Permission"
    not_found_code = ErrorCode.PERMISSION_NOT_FOUND

    def __init__(self, permission_model: Type[Permission] = Permission, max_page_size: Optional[int] = None):
        super().__init__(permission_model, max_page_size=max_page_size)
        self._guard = HierarchyGuard(permission_model, self.entity_name)

    # ==================== 写入 ====================

    def create_permission(
        self,
        code: str,
        name: str,
        type: Union[str, PermissionType] = PermissionType.MENU,
        menu_id: Optional[int] = None,
        button_id: Optional[int] = None,
        parent_id: Optional[int] = None,
    ) -> Permission:
        """创建权限

        Raises:
            DuplicateEntityException: 编码已存在
            MissingParentError: 父权限不存在
        """
        type_value = _coerce_type(type)
        self._ensure_unique("code", code)
        self._guard.check_parent(parent_id)

        if type_value == PermissionType.MENU.value and button_id is not None:
            logger.warning(f"menu permission {code} carries button_id={button_id}")
        if type_value == PermissionType.BUTTON.value and menu_id is not None and button_id is None:
            logger.warning(f"button permission {code} carries only menu_id={menu_id}")

        perm = self._model(
            code=code,
            name=name,
            type=type_value,
            menu_id=menu_id,
            button_id=button_id,
            parent_id=parent_id,
        )
        self._persist(perm, unique_field="code")
        logger.info(f"Permission created: {code}")
        return perm

    def update_permission(self, permission_id: int, **fields) -> Permission:
        """更新权限，值为 None 的字段不修改

        Raises:
            EntityNotFoundException: 权限不存在
            DuplicateEntityException: 新编码已被占用
            MissingParentError / HierarchyCycleError: 父权限非法
        """
        perm = self.get(permission_id)
        changes = self._changes(**fields)

        if "type" in changes:
            changes["type"] = _coerce_type(changes["type"])
        if "code" in changes and changes["code"] != perm.code:
            self._ensure_unique("code", changes["code"], exclude_id=perm.id)
        if "parent_id" in changes:
            self._guard.check_parent(changes["parent_id"], node_id=perm.id)

        perm.update(**changes)
        self._persist(perm, unique_field="code")
        logger.info(f"Permission updated: {perm.code}")
        return perm

    def get_permission(self, permission_id: int) -> Permission:
        return self.get(permission_id)

    def get_permission_by_code(self, code: str) -> Optional[Permission]:
        return self._model.query.filter_by(code=code).first()

    def page_permissions(self, page: int = 1, page_size: int = 10):
        return self.page(page, page_size)

    # ==================== 查询 ====================

    def list_by_type(self, type: Union[str, PermissionType]) -> List[Permission]:
        return self.list_by(type=_coerce_type(type))

    def list_by_menu(self, menu_id: int) -> List[Permission]:
        """菜单的 menu 类型权限"""
        return self.list_by(menu_id=menu_id, type=PermissionType.MENU.value)

    def list_by_button(self, button_id: int) -> List[Permission]:
        """按钮的 button 类型权限"""
        return self.list_by(button_id=button_id, type=PermissionType.BUTTON.value)

    def list_children(self, parent_id: Optional[int]) -> List[Permission]:
        """直接子权限；parent_id 为 None 或 0 时返回所有根权限"""
        query = self._model.query
        if is_root_parent(parent_id):
            query = query.filter((self._model.parent_id.is_(None)) | (self._model.parent_id == 0))
        else:
            query = query.filter(self._model.parent_id == parent_id)
        return query.order_by(self._model.id).all()

    def resolve_codes(self, codes: Sequence[str]) -> List[int]:
        """把权限编码转换为 id，保持输入顺序并去重

        Raises:
            UnknownReferenceError: 存在未知编码
        """
        unique_codes = list(dict.fromkeys(codes))
        if not unique_codes:
            return []
        rows = self._model.query.filter(self._model.code.in_(unique_codes)).all()
        by_code = {row.code: row.id for row in rows}
        unknown = [code for code in unique_codes if code not in by_code]
        if unknown:
            raise UnknownReferenceError(self.entity_name, unknown)
        return [by_code[code] for code in unique_codes]


__all__ = ["PermissionService"]
