"""
授权模块 - 异常定义

把存储层与树构建中的错误归为几类：
    - 实体不存在        EntityNotFoundException       (404)
    - 唯一字段冲突      DuplicateEntityException      (409)
    - 层级 / 引用错误   HierarchyCycleError 等        (400)
    - 事务失败          AssociationUpdateFailed       (500)
"""

from typing import Any, Iterable, List, Optional

from yrbac.exceptions import (
    ErrorCode,
    ErrorCodeType,
    ResourceConflictException,
    ResourceNotFoundException,
    StructuralException,
    TransactionFailureException,
)


class EntityNotFoundException(ResourceNotFoundException):
    """实体不存在异常

    使用示例:
        raise EntityNotFoundException("Role", role_id, code=ErrorCode.ROLE_NOT_FOUND)
    """

    def __init__(self, entity: str, entity_id: Any, code: ErrorCodeType = ErrorCode.RESOURCE_NOT_FOUND):
        super().__init__(
            message=f"{entity} 不存在: {entity_id}",
            code=code,
            resource_type=entity,
            resource_id=entity_id,
        )
        self.entity = entity
        self.entity_id = entity_id


class DuplicateEntityException(ResourceConflictException):
    """唯一字段重复异常（角色编码、权限编码、用户名）"""

    def __init__(self, entity: str, field: str, value: Any, code: ErrorCodeType = ErrorCode.DUPLICATE_ENTRY):
        super().__init__(
            message=f"{entity} 的 {field} 已存在: {value}",
            code=code,
            field=field,
            value=value,
        )
        self.entity = entity
        self.field = field
        self.value = value


class HierarchyCycleError(StructuralException):
    """层级中出现环"""

    def __init__(self, entity: str, ids: Iterable[Any]):
        ids = list(ids)
        super().__init__(
            message=f"{entity} 层级存在循环引用: {ids}",
            code=ErrorCode.HIERARCHY_CYCLE,
            details=[f"{entity}#{i}" for i in ids],
            entity=entity,
            ids=ids,
        )
        self.entity = entity
        self.ids = ids


class MissingParentError(StructuralException):
    """写入时指定的父节点不存在"""

    def __init__(self, entity: str, parent_id: Any):
        super().__init__(
            message=f"{entity} 的父节点不存在: {parent_id}",
            code=ErrorCode.MISSING_PARENT,
            entity=entity,
            parent_id=parent_id,
        )
        self.entity = entity
        self.parent_id = parent_id


class UnknownReferenceError(StructuralException):
    """关联目标中包含不存在的 id 或编码"""

    def __init__(self, entity: str, unknown: Iterable[Any]):
        unknown = list(unknown)
        super().__init__(
            message=f"{entity} 不存在: {unknown}",
            code=ErrorCode.UNKNOWN_REFERENCE,
            details=[str(u) for u in unknown],
            entity=entity,
            unknown=unknown,
        )
        self.entity = entity
        self.unknown = unknown


class AssociationUpdateFailed(TransactionFailureException):
    """关联替换事务失败，已回滚"""

    def __init__(self, association: str, owner_id: Any, reason: Optional[str] = None):
        details: List[str] = [reason] if reason else []
        super().__init__(
            message=f"{association} 更新失败: owner={owner_id}",
            details=details,
            association=association,
            owner_id=owner_id,
        )
        self.association = association
        self.owner_id = owner_id


__all__ = [
    "EntityNotFoundException",
    "DuplicateEntityException",
    "HierarchyCycleError",
    "MissingParentError",
    "UnknownReferenceError",
    "AssociationUpdateFailed",
]
