"""
授权模块 - 实体存储基类

每个实体服务继承 EntityStore，获得按 id 读取、目录扫描、条件过滤、
分页与唯一性检查；层级实体（权限、菜单）额外使用 HierarchyGuard
校验父节点存在且不成环。
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError

from yrbac.exceptions import ErrorCode, ErrorCodeType
from yrbac.log import get_logger
from yrbac.orm import CoreModel, Page
from yrbac.orm.tree import is_root_parent, would_create_cycle
from ..exceptions import (
    DuplicateEntityException,
    EntityNotFoundException,
    HierarchyCycleError,
    MissingParentError,
)

logger = get_logger("yrbac.rbac.store")

M = TypeVar("M", bound=CoreModel)


class EntityStore(Generic[M]):
    """实体存储基类

    子类设置 entity_name 与 not_found_code。

    使用示例:
        class RoleService(EntityStore[Role]):
            entity_name = "Role"
            not_found_code = ErrorCode.ROLE_NOT_FOUND
    """

    entity_name: str = "Entity"
    not_found_code: ErrorCodeType = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(
        self,
        model: Type[M],
        max_page_size: Optional[int] = None,
        entity_name: Optional[str] = None,
        not_found_code: Optional[ErrorCodeType] = None,
    ):
        self._model = model
        self._max_page_size = max_page_size
        if entity_name:
            self.entity_name = entity_name
        if not_found_code:
            self.not_found_code = not_found_code

    @property
    def model(self) -> Type[M]:
        return self._model

    # ==================== 读取 ====================

    def find(self, entity_id: Any) -> Optional[M]:
        """按 id 读取，不存在返回 None"""
        return self._model.get(entity_id)

    def get(self, entity_id: Any) -> M:
        """按 id 读取

        Raises:
            EntityNotFoundException: 不存在
        """
        obj = self._model.get(entity_id)
        if obj is None:
            raise EntityNotFoundException(self.entity_name, entity_id, code=self.not_found_code)
        return obj

    def list_all(self) -> List[M]:
        """全量目录，按主键升序"""
        return self._model.get_all()

    def list_by(self, **filters) -> List[M]:
        return self._model.get_list_by_conditions(filters)

    def exists(self, **filters) -> bool:
        return self._model.query.filter_by(**filters).first() is not None

    def page(self, page: int = 1, page_size: int = 10) -> Page:
        """分页读取，页码从 1 开始

        Raises:
            ValidationException: page 或 page_size 小于 1，或超过最大页大小
        """
        query = self._model.query.order_by(self._model.id)
        return self._model.paginate(query, page=page, page_size=page_size, max_page_size=self._max_page_size)

    # ==================== 写入 ====================

    def _ensure_unique(self, field: str, value: Any, exclude_id: Any = None, code: ErrorCodeType = ErrorCode.DUPLICATE_ENTRY):
        query = self._model.query.filter(getattr(self._model, field) == value)
        if exclude_id is not None:
            query = query.filter(self._model.id != exclude_id)
        if query.first() is not None:
            logger.warning(f"{self.entity_name} {field} already exists: {value}")
            raise DuplicateEntityException(self.entity_name, field, value, code=code)

    def _persist(self, obj: M, unique_field: Optional[str] = None) -> M:
        """提交单个实体；数据库唯一约束冲突转换为 DuplicateEntityException"""
        try:
            obj.save(commit=True)
        except IntegrityError as e:
            obj.session.rollback()
            field = unique_field or "unique key"
            value = getattr(obj, unique_field, None) if unique_field else None
            raise DuplicateEntityException(self.entity_name, field, value) from e
        return obj

    @staticmethod
    def _changes(**fields) -> Dict[str, Any]:
        """去掉值为 None 的字段（None 表示不修改）"""
        return {k: v for k, v in fields.items() if v is not None}


class HierarchyGuard:
    """层级写入校验：父节点必须存在，重新挂接不能成环"""

    def __init__(self, model: Type[CoreModel], entity_name: str):
        self._model = model
        self._entity_name = entity_name

    def check_parent(self, parent_id: Optional[int], node_id: Optional[int] = None) -> None:
        """
        Raises:
            MissingParentError: 父节点不存在
            HierarchyCycleError: 父节点是自身或自身的后代
        """
        if is_root_parent(parent_id):
            return
        if self._model.get(parent_id) is None:
            raise MissingParentError(self._entity_name, parent_id)
        if node_id is None:
            return
        if parent_id == node_id:
            raise HierarchyCycleError(self._entity_name, [node_id])

        parent_of = dict(self._model.query.with_entities(self._model.id, self._model.parent_id).all())
        if would_create_cycle(node_id, parent_id, parent_of):
            raise HierarchyCycleError(self._entity_name, [node_id, parent_id])
