"""
授权模块 - 数据模型

使用示例:
    from yrbac.rbac.models import User, Role, Permission, Menu, Button, UserRole, RolePermission
"""

from .user import User
from .role import Role
from .permission import Permission
from .menu import Menu
from .button import Button
from .associations import UserRole, RolePermission

__all__ = [
    "User",
    "Role",
    "Permission",
    "Menu",
    "Button",
    "UserRole",
    "RolePermission",
]
