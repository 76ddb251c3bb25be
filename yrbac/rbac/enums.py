"""
授权模块 - 枚举定义
"""

from enum import Enum


class PermissionType(str, Enum):
    """权限类型

    menu 权限通常关联 menu_id，button 权限通常关联 button_id
    """
    MENU = "menu"
    BUTTON = "button"


class AuthorityMode(str, Enum):
    """路由节点 meta.authority 的计算方式"""
    STATIC = "static"          # 固定值（默认 [1]）
    PERMISSION = "permission"  # 由当前用户角色绑定的菜单权限计算


__all__ = ["PermissionType", "AuthorityMode"]
