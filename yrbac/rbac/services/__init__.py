"""
授权模块 - 服务

使用示例:
    from yrbac.rbac.services import RoleService, AssociationReconciler, build_permission_tree
"""

from .base import EntityStore, HierarchyGuard
from .permission_tree import build_permission_tree
from .route_tree import build_route_tree
from .authority import DEFAULT_AUTHORITY, AuthorityResolver, StaticAuthority, PermissionAuthority
from .user_service import UserService
from .role_service import RoleService
from .permission_service import PermissionService
from .menu_service import MenuService
from .button_service import ButtonService
from .reconciler import AssociationReconciler
from .route_service import RouteService

__all__ = [
    "EntityStore",
    "HierarchyGuard",
    "build_permission_tree",
    "build_route_tree",
    "DEFAULT_AUTHORITY",
    "AuthorityResolver",
    "StaticAuthority",
    "PermissionAuthority",
    "UserService",
    "RoleService",
    "PermissionService",
    "MenuService",
    "ButtonService",
    "AssociationReconciler",
    "RouteService",
]
