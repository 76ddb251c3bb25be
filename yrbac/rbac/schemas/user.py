"""
授权模块 - 用户相关 Schema

UserResponse 不包含密码哈希。
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from yrbac.orm import BaseSchemas


class UserCreate(BaseModel):
    """创建用户请求"""
    username: str = Field(..., min_length=1, max_length=255, description="用户名")
    password: str = Field(..., min_length=1, description="明文密码")


class UserUpdate(BaseModel):
    """更新用户请求，password 为空时不修改"""
    username: Optional[str] = Field(None, min_length=1, max_length=255, description="用户名")
    password: Optional[str] = Field(None, description="新密码")


class UserResponse(BaseSchemas):
    id: int = Field(..., description="用户ID")
    username: str = Field(..., description="用户名")
    created_at: Optional[datetime] = Field(None, description="创建时间")
    updated_at: Optional[datetime] = Field(None, description="更新时间")


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, description="用户名")
    password: str = Field(..., min_length=1, description="密码")


class TokenResponse(BaseModel):
    access_token: str = Field(..., description="访问令牌")
    token_type: str = Field("bearer", description="令牌类型")
    expires_in: int = Field(..., description="有效期（秒）")
