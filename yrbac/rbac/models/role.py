"""
授权模块 - 角色模型
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from yrbac.orm import CoreModel

if TYPE_CHECKING:
    from .permission import Permission
    from .user import User


class Role(CoreModel):
    """角色

    字段说明:
        - code: 角色编码，唯一
        - name: 角色名称
        - description: 角色描述

    permissions / users 为只读视图，关联的替换走 AssociationReconciler。
    """

    code: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="角色编码"
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="角色名称"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="角色描述"
    )

    permissions: Mapped[List["Permission"]] = relationship(
        "Permission",
        secondary="role_permission",
        order_by="Permission.id",
        viewonly=True,
    )

    users: Mapped[List["User"]] = relationship(
        "User",
        secondary="user_role",
        order_by="User.id",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, code={self.code})>"


__all__ = ["Role"]
