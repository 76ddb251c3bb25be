"""
授权模块 - 按钮模型
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from yrbac.orm import CoreModel


class Button(CoreModel):
    """菜单下的操作按钮"""

    name: Mapped[str] = mapped_column(String(100), nullable=False, comment="按钮名称")
    action: Mapped[str] = mapped_column(String(100), nullable=False, default="", comment="操作标识")

    menu_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("menu.id"),
        nullable=False,
        index=True,
        comment="所属菜单ID"
    )

    permission_code: Mapped[str] = mapped_column(String(100), nullable=False, default="", comment="权限编码")

    def __repr__(self) -> str:
        return f"<Button(id={self.id}, name={self.name}, menu_id={self.menu_id})>"


__all__ = ["Button"]
