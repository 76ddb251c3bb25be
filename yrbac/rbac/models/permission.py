"""
授权模块 - 权限模型

权限通过 parent_id 组成层级（None 或 0 为根），类型为 menu 或 button。
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from yrbac.orm import CoreModel
from ..enums import PermissionType


class Permission(CoreModel):
    """权限

    字段说明:
        - code: 权限编码，唯一
        - name: 权限名称
        - type: menu / button
        - menu_id: 关联菜单（menu 类型权限）
        - button_id: 关联按钮（button 类型权限）
        - parent_id: 父权限，None 或 0 表示根；不设外键，0 不是合法行

    使用示例:
        Permission(code="system", name="系统管理", type=PermissionType.MENU.value).save(commit=True)
    """

    code: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="权限编码"
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="权限名称"
    )

    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PermissionType.MENU.value,
        index=True,
        comment="权限类型: menu/button"
    )

    menu_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("menu.id"),
        nullable=True,
        index=True,
        comment="关联菜单ID"
    )

    button_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("button.id"),
        nullable=True,
        index=True,
        comment="关联按钮ID"
    )

    parent_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        index=True,
        comment="父权限ID，None 或 0 为根"
    )

    @property
    def permission_type(self) -> PermissionType:
        return PermissionType(self.type)

    def __repr__(self) -> str:
        return f"<Permission(id={self.id}, code={self.code}, type={self.type})>"


__all__ = ["Permission"]
