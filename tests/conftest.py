"""
Pytest 公共配置和 Fixtures

提供测试所需的公共资源：
- 内存数据库与绑定到 CoreModel.query 的会话
- 预置的权限 / 菜单目录
- 服务容器与 JWT 管理器
"""

import os
import tempfile
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from yrbac.config import AppSettings, JWTSettings, PaginationSettings
from yrbac.orm import Base, CoreModel


# ==================== 基础 Fixtures ====================

@pytest.fixture(scope="session")
def temp_dir():
    """创建临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def temp_file(temp_dir):
    """创建临时文件的工厂函数"""
    created_files = []

    def _create_file(filename: str, content: str = "") -> str:
        filepath = os.path.join(temp_dir, filename)
        if os.path.dirname(filepath):
            os.makedirs(os.path.dirname(filepath), exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
        created_files.append(filepath)
        return filepath

    yield _create_file

    for f in created_files:
        if os.path.exists(f):
            os.remove(f)


# ==================== 数据库 Fixtures ====================

@pytest.fixture(scope="function")
def memory_engine():
    """创建内存数据库引擎

    StaticPool + check_same_thread=False：所有操作共用一个连接
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(memory_engine):
    """建表并把 CoreModel.query 绑定到测试会话"""
    import yrbac.rbac.models  # noqa: F401  注册全部模型

    Base.metadata.create_all(memory_engine)
    session_scope = scoped_session(sessionmaker(autoflush=True, bind=memory_engine))
    CoreModel.query = session_scope.query_property()
    try:
        yield session_scope()
    finally:
        session_scope.remove()
        Base.metadata.drop_all(memory_engine)


# ==================== 配置 / 服务 Fixtures ====================

@pytest.fixture
def jwt_secret_key():
    """JWT 测试密钥"""
    return "test-secret-key-for-testing-only"


@pytest.fixture
def app_settings(jwt_secret_key):
    return AppSettings(
        jwt=JWTSettings(secret_key=jwt_secret_key, access_token_expire_minutes=30),
        pagination=PaginationSettings(max_page_size=50),
    )


@pytest.fixture
def jwt_manager(jwt_secret_key):
    """创建 JWT 管理器"""
    from yrbac.auth import JWTManager
    return JWTManager(secret_key=jwt_secret_key, algorithm="HS256", access_token_expire_minutes=30)


@pytest.fixture
def rbac(db_session, app_settings):
    """按测试配置装配的服务容器"""
    from yrbac.rbac import create_rbac_services
    return create_rbac_services(app_settings)


@pytest.fixture
def catalog(rbac):
    """预置目录

    权限:
        system (P1, 根)
        ├── user:read  (P2)
        └── user:write (P3)
        audit (P4, 根)

    菜单:
        System (/system, order=1)
        └── Users (/system/users, order=1)
    """
    system_menu = rbac.menus.create_menu(
        name="System", path="/system", component="Layout", icon="setting", order=1,
        meta={"title": "系统管理"},
    )
    users_menu = rbac.menus.create_menu(
        name="Users", path="/system/users", component="system/users/index", parent_id=system_menu.id, order=1,
    )

    p1 = rbac.menus.bind_menu_permission(system_menu.id, code="system", name="系统管理")
    p2 = rbac.permissions.create_permission(code="user:read", name="查看用户", type="button", parent_id=p1.id)
    p3 = rbac.permissions.create_permission(code="user:write", name="编辑用户", type="button", parent_id=p1.id)
    p4 = rbac.permissions.create_permission(code="audit", name="审计", type="menu")

    admin = rbac.roles.create_role("admin", "管理员")
    auditor = rbac.roles.create_role("auditor", "审计员")

    return SimpleNamespace(
        system_menu=system_menu,
        users_menu=users_menu,
        p1=p1,
        p2=p2,
        p3=p3,
        p4=p4,
        admin=admin,
        auditor=auditor,
    )
