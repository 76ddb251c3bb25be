"""
授权模块 - 权限相关 Schema
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from yrbac.orm import BaseSchemas

from ..enums import PermissionType


class PermissionCreate(BaseModel):
    """创建权限请求"""
    code: str = Field(..., min_length=1, max_length=100, description="权限编码")
    name: str = Field(..., min_length=1, max_length=100, description="权限名称")
    type: PermissionType = Field(PermissionType.MENU, description="权限类型")
    menu_id: Optional[int] = Field(None, description="关联菜单ID")
    button_id: Optional[int] = Field(None, description="关联按钮ID")
    parent_id: Optional[int] = Field(None, ge=0, description="父权限ID，0 或空为根")


class PermissionUpdate(BaseModel):
    """更新权限请求，未提供的字段保持不变"""
    code: Optional[str] = Field(None, min_length=1, max_length=100, description="权限编码")
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="权限名称")
    type: Optional[PermissionType] = Field(None, description="权限类型")
    menu_id: Optional[int] = Field(None, description="关联菜单ID")
    button_id: Optional[int] = Field(None, description="关联按钮ID")
    parent_id: Optional[int] = Field(None, ge=0, description="父权限ID，0 为根")


class PermissionResponse(BaseSchemas):
    id: int = Field(..., description="权限ID")
    code: str = Field(..., description="权限编码")
    name: str = Field(..., description="权限名称")
    type: PermissionType = Field(..., description="权限类型")
    menu_id: Optional[int] = Field(None, description="关联菜单ID")
    button_id: Optional[int] = Field(None, description="关联按钮ID")
    parent_id: Optional[int] = Field(None, description="父权限ID")
    created_at: Optional[datetime] = Field(None, description="创建时间")


class PermissionNode(BaseModel):
    """权限树节点

    enable 只表示该节点是否直接授予角色，不向上或向下传递。
    children 始终存在，叶子节点为空列表；icon 未设置时序列化省略。
    """
    id: int = Field(..., description="权限ID")
    name: str = Field(..., description="权限名称")
    enable: bool = Field(False, description="是否授予")
    icon: Optional[str] = Field(None, description="图标")
    children: List["PermissionNode"] = Field(default_factory=list, description="子节点")

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)


PermissionNode.model_rebuild()
