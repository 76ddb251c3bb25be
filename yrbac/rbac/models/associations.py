"""
授权模块 - 关联模型

user_role、role_permission 只是 (owner, target) 集合，不保存顺序。
"""

from typing import List

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from yrbac.orm import CoreModel


class UserRole(CoreModel):
    """用户-角色关联"""

    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uk_user_role_user_role"),
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user.id"),
        nullable=False,
        index=True,
        comment="用户ID"
    )

    role_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("role.id"),
        nullable=False,
        index=True,
        comment="角色ID"
    )

    def __repr__(self) -> str:
        return f"<UserRole(user_id={self.user_id}, role_id={self.role_id})>"

    @classmethod
    def get_user_role_ids(cls, user_id: int) -> List[int]:
        rows = cls.query.filter_by(user_id=user_id).order_by(cls.role_id).all()
        return [row.role_id for row in rows]

    @classmethod
    def replace_for_user(cls, user_id: int, role_ids: List[int]) -> None:
        """删除用户全部角色再逐条插入，不提交；调用方负责事务"""
        cls.query.filter_by(user_id=user_id).delete()
        cls.save_all([cls(user_id=user_id, role_id=role_id) for role_id in role_ids])
        cls.query.session.flush()


class RolePermission(CoreModel):
    """角色-权限关联"""

    __table_args__ = (
        UniqueConstraint("role_id", "permission_id", name="uk_role_permission_role_permission"),
    )

    role_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("role.id"),
        nullable=False,
        index=True,
        comment="角色ID"
    )

    permission_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("permission.id"),
        nullable=False,
        index=True,
        comment="权限ID"
    )

    def __repr__(self) -> str:
        return f"<RolePermission(role_id={self.role_id}, permission_id={self.permission_id})>"

    @classmethod
    def get_role_permission_ids(cls, role_id: int) -> List[int]:
        rows = cls.query.filter_by(role_id=role_id).order_by(cls.permission_id).all()
        return [row.permission_id for row in rows]

    @classmethod
    def get_roles_permission_ids(cls, role_ids: List[int]) -> List[int]:
        """多个角色的权限并集（去重、升序）"""
        if not role_ids:
            return []
        rows = cls.query.filter(cls.role_id.in_(role_ids)).all()
        return sorted({row.permission_id for row in rows})

    @classmethod
    def replace_for_role(cls, role_id: int, permission_ids: List[int]) -> None:
        """删除角色全部权限再逐条插入，不提交；调用方负责事务"""
        cls.query.filter_by(role_id=role_id).delete()
        cls.save_all([cls(role_id=role_id, permission_id=pid) for pid in permission_ids])
        cls.query.session.flush()


__all__ = ["UserRole", "RolePermission"]
