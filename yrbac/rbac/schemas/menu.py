"""
授权模块 - 菜单与按钮 Schema
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from yrbac.orm import BaseSchemas


class MenuMeta(BaseModel):
    """菜单元数据，darkIcon / activeIcon 未设置时路由使用菜单图标"""
    title: Optional[str] = Field(None, description="标题")
    icon: Optional[str] = Field(None, description="图标")
    dark_icon: Optional[str] = Field(None, alias="darkIcon", description="暗色主题图标")
    active_icon: Optional[str] = Field(None, alias="activeIcon", description="激活状态图标")

    model_config = ConfigDict(populate_by_name=True)


class MenuCreate(BaseModel):
    """创建菜单请求"""
    parent_id: Optional[int] = Field(None, ge=0, description="父菜单ID，0 或空为根")
    name: str = Field(..., min_length=1, max_length=100, description="路由名称")
    path: str = Field("", max_length=255, description="路由路径")
    component: str = Field("", max_length=255, description="前端组件")
    icon: Optional[str] = Field(None, max_length=100, description="图标")
    order: int = Field(0, description="同级排序")
    meta: MenuMeta = Field(default_factory=MenuMeta, description="元数据")
    is_visible: bool = Field(True, description="是否可见")
    button_association: bool = Field(False, description="是否关联按钮")


class MenuUpdate(BaseModel):
    """更新菜单请求，未提供的字段保持不变"""
    parent_id: Optional[int] = Field(None, ge=0, description="父菜单ID，0 为根")
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="路由名称")
    path: Optional[str] = Field(None, max_length=255, description="路由路径")
    component: Optional[str] = Field(None, max_length=255, description="前端组件")
    icon: Optional[str] = Field(None, max_length=100, description="图标")
    order: Optional[int] = Field(None, description="同级排序")
    meta: Optional[MenuMeta] = Field(None, description="元数据")
    is_visible: Optional[bool] = Field(None, description="是否可见")
    button_association: Optional[bool] = Field(None, description="是否关联按钮")


class MenuResponse(BaseSchemas):
    id: int
    parent_id: Optional[int] = None
    name: str
    path: str
    component: str
    icon: Optional[str] = None
    order: int
    meta: MenuMeta
    is_visible: bool
    button_association: bool
    created_at: Optional[datetime] = None


class ButtonCreate(BaseModel):
    """创建按钮请求"""
    name: str = Field(..., min_length=1, max_length=100, description="按钮名称")
    action: str = Field("", max_length=100, description="操作标识")
    menu_id: int = Field(..., description="所属菜单ID")
    permission_code: str = Field("", max_length=100, description="权限编码")


class ButtonUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="按钮名称")
    action: Optional[str] = Field(None, max_length=100, description="操作标识")
    menu_id: Optional[int] = Field(None, description="所属菜单ID")
    permission_code: Optional[str] = Field(None, max_length=100, description="权限编码")


class ButtonResponse(BaseSchemas):
    id: int
    name: str
    action: str
    menu_id: int
    permission_code: str
    created_at: Optional[datetime] = None


class BindPermissionRequest(BaseModel):
    """为菜单或按钮创建并绑定权限"""
    code: str = Field(..., min_length=1, max_length=100, description="权限编码")
    name: str = Field(..., min_length=1, max_length=100, description="权限名称")
    parent_id: Optional[int] = Field(None, ge=0, description="父权限ID")
