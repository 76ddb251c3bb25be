"""
授权模块 - 前端路由树 Schema

序列化后的形状:
    {component, name, path, meta: {title, icon?, darkIcon?, activeIcon?, order?, authority?}, children?}
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RouteMeta(BaseModel):
    title: str = Field("", description="标题")
    icon: Optional[str] = Field(None, description="图标")
    dark_icon: Optional[str] = Field(None, alias="darkIcon", description="暗色主题图标")
    active_icon: Optional[str] = Field(None, alias="activeIcon", description="激活状态图标")
    order: Optional[int] = Field(None, description="排序，0 时省略")
    authority: Optional[List[int]] = Field(None, description="访问授权标记")

    model_config = ConfigDict(populate_by_name=True)


class RouteNode(BaseModel):
    """路由树节点，没有子节点时 children 为 None，序列化时省略"""
    component: str = Field("", description="前端组件")
    name: str = Field(..., description="路由名称")
    path: str = Field("", description="路由路径")
    meta: RouteMeta = Field(default_factory=RouteMeta, description="元数据")
    children: Optional[List["RouteNode"]] = Field(None, description="子路由")

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


RouteNode.model_rebuild()
