"""
授权模块 - 服务装配

根据 AppSettings 创建一组共享配置的服务。

使用示例:
    from yrbac.config import AppSettings
    from yrbac.orm import init_database
    from yrbac.rbac import create_rbac_services

    settings = AppSettings()
    init_database(config=settings.database, create_tables=True)
    rbac = create_rbac_services(settings)

    role = rbac.roles.create_role("admin", "管理员")
    rbac.reconciler.replace_role_permissions(role.id, [1, 2])
    tree = rbac.roles.get_role_permission_tree(role.id)
"""

from dataclasses import dataclass
from typing import Optional

from yrbac.auth import JWTManager
from yrbac.config import AppSettings
from yrbac.log import get_logger
from .services import (
    AssociationReconciler,
    ButtonService,
    MenuService,
    PermissionService,
    RoleService,
    RouteService,
    UserService,
)

logger = get_logger("yrbac.rbac.factory")


@dataclass
class RbacServices:
    """服务容器"""
    users: UserService
    roles: RoleService
    permissions: PermissionService
    menus: MenuService
    buttons: ButtonService
    reconciler: AssociationReconciler
    routes: RouteService
    jwt_manager: JWTManager


def create_rbac_services(settings: Optional[AppSettings] = None) -> RbacServices:
    """按配置创建服务

    Args:
        settings: 应用配置，不传时从环境变量读取
    """
    settings = settings or AppSettings()
    max_page_size = settings.pagination.max_page_size

    jwt_manager = JWTManager.from_settings(settings.jwt)
    permissions = PermissionService(max_page_size=max_page_size)

    services = RbacServices(
        users=UserService(jwt_manager=jwt_manager, max_page_size=max_page_size),
        roles=RoleService(max_page_size=max_page_size),
        permissions=permissions,
        menus=MenuService(permission_service=permissions, max_page_size=max_page_size),
        buttons=ButtonService(permission_service=permissions, max_page_size=max_page_size),
        reconciler=AssociationReconciler(),
        routes=RouteService(
            authority_mode=settings.rbac.authority_mode,
            static_authority=settings.rbac.static_authority,
            include_hidden=settings.rbac.route_include_hidden,
        ),
        jwt_manager=jwt_manager,
    )
    logger.debug(f"RBAC services created (authority_mode={settings.rbac.authority_mode})")
    return services


__all__ = ["RbacServices", "create_rbac_services"]
