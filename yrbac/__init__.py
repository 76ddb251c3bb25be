"""
YRBAC - 基于角色的授权树引擎

提供权限树构建、前端路由树构建、用户角色与角色权限的整体替换，
以及配套的 ORM、配置、日志、异常与认证基础设施。
"""

from .version import __version__, __author__, __description__

# 导出配置
from .config import AppSettings, load_yaml_config

# 导出日志
from .log import get_logger, setup_logger, setup_root_logger

# 导出异常处理模块
from .exceptions import (
    Err,
    ErrorCode,
    BusinessException,
    ValidationException,
    register_exception_handlers,
)

# 导出ORM
from .orm import CoreModel, Page, init_database, db_session_scope, transaction_manager

# 导出认证
from .auth import JWTManager, PasswordHelper, parse_bearer_token, create_identity_dependency

# 导出授权模块
from .rbac import (
    PermissionType,
    AuthorityMode,
    EntityNotFoundException,
    DuplicateEntityException,
    HierarchyCycleError,
    MissingParentError,
    UnknownReferenceError,
    AssociationUpdateFailed,
    PermissionNode,
    RouteNode,
    build_permission_tree,
    build_route_tree,
    StaticAuthority,
    PermissionAuthority,
    AssociationReconciler,
    RbacServices,
    create_rbac_services,
)

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    # Config
    "AppSettings",
    "load_yaml_config",
    # Log
    "get_logger",
    "setup_logger",
    "setup_root_logger",
    # Exceptions
    "Err",
    "ErrorCode",
    "BusinessException",
    "ValidationException",
    "register_exception_handlers",
    # ORM
    "CoreModel",
    "Page",
    "init_database",
    "db_session_scope",
    "transaction_manager",
    # Auth
    "JWTManager",
    "PasswordHelper",
    "parse_bearer_token",
    "create_identity_dependency",
    # RBAC
    "PermissionType",
    "AuthorityMode",
    "EntityNotFoundException",
    "DuplicateEntityException",
    "HierarchyCycleError",
    "MissingParentError",
    "UnknownReferenceError",
    "AssociationUpdateFailed",
    "PermissionNode",
    "RouteNode",
    "build_permission_tree",
    "build_route_tree",
    "StaticAuthority",
    "PermissionAuthority",
    "AssociationReconciler",
    "RbacServices",
    "create_rbac_services",
]
