"""
授权模块 - 用户模型
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from yrbac.orm import CoreModel

if TYPE_CHECKING:
    from .role import Role


class User(CoreModel):
    """用户

    字段说明:
        - username: 登录名，唯一
        - password: 加盐单向哈希（passlib pbkdf2_sha256），不可逆

    角色关联通过 user_role 表维护，roles 为只读视图，
    修改请使用 AssociationReconciler.replace_user_roles()。
    """

    username: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="用户名"
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="密码哈希"
    )

    roles: Mapped[List["Role"]] = relationship(
        "Role",
        secondary="user_role",
        order_by="Role.id",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"


__all__ = ["User"]
