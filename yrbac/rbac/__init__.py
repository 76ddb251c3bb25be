"""
授权模块

- models:    User / Role / Permission / Menu / Button 与关联表
- schemas:   请求、响应与树节点
- services:  实体服务、关联替换、权限树与路由树构建

使用示例:
    from yrbac.rbac import create_rbac_services

    rbac = create_rbac_services()
    routes = rbac.routes.get_user_routes(user_id)
"""

from .enums import PermissionType, AuthorityMode
from .exceptions import (
    EntityNotFoundException,
    DuplicateEntityException,
    HierarchyCycleError,
    MissingParentError,
    UnknownReferenceError,
    AssociationUpdateFailed,
)
from .models import User, Role, Permission, Menu, Button, UserRole, RolePermission
from .schemas import PageRequest, PageResponse, PermissionNode, RouteMeta, RouteNode
from .services import (
    EntityStore,
    build_permission_tree,
    build_route_tree,
    StaticAuthority,
    PermissionAuthority,
    UserService,
    RoleService,
    PermissionService,
    MenuService,
    ButtonService,
    AssociationReconciler,
    RouteService,
)
from .factory import RbacServices, create_rbac_services

__all__ = [
    "PermissionType",
    "AuthorityMode",
    "EntityNotFoundException",
    "DuplicateEntityException",
    "HierarchyCycleError",
    "MissingParentError",
    "UnknownReferenceError",
    "AssociationUpdateFailed",
    "User",
    "Role",
    "Permission",
    "Menu",
    "Button",
    "UserRole",
    "RolePermission",
    "PageRequest",
    "PageResponse",
    "PermissionNode",
    "RouteMeta",
    "RouteNode",
    "EntityStore",
    "build_permission_tree",
    "build_route_tree",
    "StaticAuthority",
    "PermissionAuthority",
    "UserService",
    "RoleService",
    "PermissionService",
    "MenuService",
    "ButtonService",
    "AssociationReconciler",
    "RouteService",
    "RbacServices",
    "create_rbac_services",
]
