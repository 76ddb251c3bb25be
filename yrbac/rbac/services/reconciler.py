"""
授权模块 - 关联替换

用户角色、角色权限的更新采用整体替换：在同一事务内删除 owner 的全部关联，
再按目标集合插入。提交后关联集合恰好等于目标集合；失败时回滚，原关联保持不变。

规则:
    - owner 必须存在，否则 EntityNotFoundException
    - 目标 id 去重，保留首次出现顺序
    - 先校验全部目标 id，存在未知 id 时抛出 UnknownReferenceError，不做任何写入
    - 空集合表示清空关联，重复执行结果相同
    - 同一 owner 的并发替换以最后提交者为准

使用示例:
    reconciler = AssociationReconciler()
    reconciler.replace_role_permissions(role_id, [1, 3])
    reconciler.replace_role_permissions_by_codes(role_id, ["system", "user:read"])
    reconciler.replace_user_roles(user_id, [])
"""

from typing import Any, Callable, Iterable, List, Optional, Sequence, Type

from sqlalchemy.exc import SQLAlchemyError

from yrbac.exceptions import ErrorCode
from yrbac.log import get_logger
from yrbac.orm import CoreModel, transaction_manager
from ..exceptions import AssociationUpdateFailed, EntityNotFoundException, UnknownReferenceError
from ..models import Permission, Role, RolePermission, User, UserRole
from .permission_service import PermissionService

logger = get_logger("yrbac.rbac.reconciler")


def _dedupe(ids: Iterable[int]) -> List[int]:
    return list(dict.fromkeys(ids))


class AssociationReconciler:
    """关联替换器

    Args:
        user_model / role_model / permission_model: 实体模型类
        user_role_model / role_permission_model: 关联模型类
    """

    def __init__(
        self,
        user_model: Type[User] = User,
        role_model: Type[Role] = Role,
        permission_model: Type[Permission] = Permission,
        user_role_model: Type[UserRole] = UserRole,
        role_permission_model: Type[RolePermission] = RolePermission,
    ):
        self._user_model = user_model
        self._role_model = role_model
        self._permission_model = permission_model
        self._user_role_model = user_role_model
        self._role_permission_model = role_permission_model

    # ==================== 用户角色 ====================

    def replace_user_roles(self, user_id: int, role_ids: Sequence[int]) -> List[int]:
        """把用户的角色集合替换为 role_ids

        Returns:
            写入的角色 id（去重后）

        Raises:
            EntityNotFoundException: 用户不存在
            UnknownReferenceError: role_ids 中包含不存在的角色
            AssociationUpdateFailed: 写入失败，已回滚
        """
        self._require(self._user_model, "User", user_id, ErrorCode.USER_NOT_FOUND)
        targets = _dedupe(role_ids)
        self._validate_targets(self._role_model, "Role", targets)
        self._replace(
            "user_role",
            user_id,
            lambda: self._user_role_model.replace_for_user(user_id, targets),
        )
        return targets

    # ==================== 角色权限 ====================

    def replace_role_permissions(self, role_id: int, permission_ids: Sequence[int]) -> List[int]:
        """把角色的权限集合替换为 permission_ids

        Raises:
            EntityNotFoundException: 角色不存在
            UnknownReferenceError: permission_ids 中包含不存在的权限
            AssociationUpdateFailed: 写入失败，已回滚
        """
        self._require(self._role_model, "Role", role_id, ErrorCode.ROLE_NOT_FOUND)
        targets = _dedupe(permission_ids)
        self._validate_targets(self._permission_model, "Permission", targets)
        self._replace(
            "role_permission",
            role_id,
            lambda: self._role_permission_model.replace_for_role(role_id, targets),
        )
        return targets

    def replace_role_permissions_by_codes(self, role_id: int, codes: Sequence[str]) -> List[int]:
        """按权限编码替换角色权限，编码先转换为 id

        Raises:
            EntityNotFoundException: 角色不存在
            UnknownReferenceError: 存在未知编码
            AssociationUpdateFailed: 写入失败，已回滚
        """
        self._require(self._role_model, "Role", role_id, ErrorCode.ROLE_NOT_FOUND)
        ids = PermissionService(self._permission_model).resolve_codes(codes)
        return self.replace_role_permissions(role_id, ids)

    # ==================== 内部方法 ====================

    @staticmethod
    def _require(model: Type[CoreModel], entity: str, entity_id: Any, code: ErrorCode) -> None:
        if model.get(entity_id) is None:
            raise EntityNotFoundException(entity, entity_id, code=code)

    @staticmethod
    def _validate_targets(model: Type[CoreModel], entity: str, ids: List[int]) -> None:
        if not ids:
            return
        rows = model.query.with_entities(model.id).filter(model.id.in_(ids)).all()
        found = {row[0] for row in rows}
        unknown = [i for i in ids if i not in found]
        if unknown:
            logger.warning(f"{entity} ids not found: {unknown}")
            raise UnknownReferenceError(entity, unknown)

    def _replace(self, association: str, owner_id: int, write: Callable[[], None], session: Optional[Any] = None) -> None:
        session = session or self._user_role_model.query.session
        try:
            with transaction_manager.transaction(session=session) as tx:
                @tx.after_commit
                def _log_committed(ctx):
                    logger.info(f"{association} replaced: owner={owner_id}")

                write()
        except SQLAlchemyError as e:
            logger.error(f"{association} replace failed: owner={owner_id}, error={e}")
            raise AssociationUpdateFailed(association, owner_id, reason=str(e)) from e


__all__ = ["AssociationReconciler"]
