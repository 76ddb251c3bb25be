"""
授权模块 - 角色相关 Schema
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from yrbac.orm import BaseSchemas


class RoleCreate(BaseModel):
    """创建角色请求"""
    code: str = Field(..., min_length=1, max_length=100, description="角色编码")
    name: str = Field(..., min_length=1, max_length=100, description="角色名称")
    description: Optional[str] = Field(None, description="角色描述")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"code": "admin", "name": "管理员", "description": "系统管理员角色"}
        }
    )


class RoleUpdate(BaseModel):
    """更新角色请求"""
    code: Optional[str] = Field(None, min_length=1, max_length=100, description="角色编码")
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="角色名称")
    description: Optional[str] = Field(None, description="角色描述")


class RoleResponse(BaseSchemas):
    id: int = Field(..., description="角色ID")
    code: str = Field(..., description="角色编码")
    name: str = Field(..., description="角色名称")
    description: Optional[str] = Field(None, description="角色描述")
    created_at: Optional[datetime] = Field(None, description="创建时间")
    updated_at: Optional[datetime] = Field(None, description="更新时间")


class RolePermissionSet(BaseModel):
    """全量设置角色权限"""
    permission_ids: List[int] = Field(default_factory=list, description="权限ID列表")


class UserRoleSet(BaseModel):
    """全量设置用户角色"""
    role_ids: List[int] = Field(default_factory=list, description="角色ID列表")
