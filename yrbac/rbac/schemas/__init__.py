"""
授权模块 - Pydantic Schema
"""

from .common import PageRequest, PageResponse
from .user import UserCreate, UserUpdate, UserResponse, LoginRequest, TokenResponse
from .role import RoleCreate, RoleUpdate, RoleResponse, RolePermissionSet, UserRoleSet
from .permission import PermissionCreate, PermissionUpdate, PermissionResponse, PermissionNode
from .menu import (
    MenuMeta,
    MenuCreate,
    MenuUpdate,
    MenuResponse,
    ButtonCreate,
    ButtonUpdate,
    ButtonResponse,
    BindPermissionRequest,
)
from .route import RouteMeta, RouteNode

__all__ = [
    "PageRequest",
    "PageResponse",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "LoginRequest",
    "TokenResponse",
    "RoleCreate",
    "RoleUpdate",
    "RoleResponse",
    "RolePermissionSet",
    "UserRoleSet",
    "PermissionCreate",
    "PermissionUpdate",
    "PermissionResponse",
    "PermissionNode",
    "MenuMeta",
    "MenuCreate",
    "MenuUpdate",
    "MenuResponse",
    "ButtonCreate",
    "ButtonUpdate",
    "ButtonResponse",
    "BindPermissionRequest",
    "RouteMeta",
    "RouteNode",
]
