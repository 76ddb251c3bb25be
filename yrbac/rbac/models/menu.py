"""
授权模块 - 菜单模型
"""

from typing import Any, Dict, Optional

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from yrbac.orm import CoreModel


class Menu(CoreModel):
    """菜单（前端路由来源）

    字段说明:
        - parent_id: 父菜单，None 或 0 表示根
        - name / path / component: 路由名称、路径、前端组件
        - icon: 图标
        - order: 同级排序，升序
        - meta: 元数据 {"title": ..., "icon": ...}
        - is_visible: 是否在导航中显示
        - button_association: 是否关联按钮
    """

    parent_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        index=True,
        comment="父菜单ID，None 或 0 为根"
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False, comment="路由名称")
    path: Mapped[str] = mapped_column(String(255), nullable=False, default="", comment="路由路径")
    component: Mapped[str] = mapped_column(String(255), nullable=False, default="", comment="前端组件")
    icon: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, comment="图标")

    order: Mapped[int] = mapped_column(
        "sort_order",
        Integer,
        nullable=False,
        default=0,
        comment="同级排序"
    )

    meta: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="元数据 {title, icon}"
    )

    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, comment="是否可见")
    button_association: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, comment="是否关联按钮")

    @property
    def title(self) -> Optional[str]:
        return (self.meta or {}).get("title")

    def __repr__(self) -> str:
        return f"<Menu(id={self.id}, name={self.name}, parent_id={self.parent_id})>"


__all__ = ["Menu"]
