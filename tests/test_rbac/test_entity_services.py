"""实体服务测试"""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from yrbac.auth import PasswordHelper
from yrbac.exceptions import AuthenticationException, ErrorCode, ValidationException
from yrbac.rbac import (
    Button,
    DuplicateEntityException,
    EntityNotFoundException,
    HierarchyCycleError,
    MissingParentError,
    PermissionType,
)


class TestUserService:
    """用户服务"""

    def test_create_hashes_password(self, rbac):
        user = rbac.users.create_user("alice", "secret123")

        assert user.id is not None
        assert user.password != "secret123"
        assert PasswordHelper.verify("secret123", user.password)

    def test_duplicate_username(self, rbac):
        rbac.users.create_user("alice", "secret123")

        with pytest.raises(DuplicateEntityException) as exc_info:
            rbac.users.create_user("alice", "another123")

        assert exc_info.value.status_code == 409
        assert exc_info.value.code == ErrorCode.USERNAME_EXISTS

    def test_short_password_rejected(self, rbac):
        with pytest.raises(ValidationException):
            rbac.users.create_user("bob", "123")

    def test_update_password(self, rbac):
        user = rbac.users.create_user("alice", "secret123")

        rbac.users.update_user(user.id, password="changed456")

        assert rbac.users.authenticate("alice", "changed456").id == user.id

    def test_update_username_conflict(self, rbac):
        rbac.users.create_user("alice", "secret123")
        bob = rbac.users.create_user("bob", "secret123")

        with pytest.raises(DuplicateEntityException):
            rbac.users.update_user(bob.id, username="alice")

    def test_get_missing_user(self, rbac):
        with pytest.raises(EntityNotFoundException) as exc_info:
            rbac.users.get_user(1)

        assert exc_info.value.code == ErrorCode.USER_NOT_FOUND

    def test_authenticate_wrong_password(self, rbac):
        rbac.users.create_user("alice", "secret123")

        with pytest.raises(AuthenticationException) as exc_info:
            rbac.users.authenticate("alice", "wrong-password")

        assert exc_info.value.code == ErrorCode.INVALID_CREDENTIALS

    def test_authenticate_unknown_user(self, rbac):
        with pytest.raises(AuthenticationException):
            rbac.users.authenticate("ghost", "secret123")

    def test_login_issues_token(self, rbac):
        user = rbac.users.create_user("alice", "secret123")

        token = rbac.users.login("alice", "secret123")
        data = rbac.jwt_manager.verify_token(token.access_token)

        assert token.token_type == "bearer"
        assert token.expires_in == 30 * 60
        assert data.user_id == user.id
        assert data.username == "alice"

    def test_page_users(self, rbac):
        for i in range(5):
            rbac.users.create_user(f"user{i}", "secret123")

        page = rbac.users.page_users(page=2, page_size=2)

        assert page.total_records == 5
        assert page.total_pages == 3
        assert [u.username for u in page.rows] == ["user2", "user3"]


class TestRoleService:
    """角色服务"""

    def test_create_and_get(self, rbac):
        role = rbac.roles.create_role("admin", "管理员", description="全部权限")

        assert rbac.roles.get_role(role.id).code == "admin"
        assert rbac.roles.get_role_by_code("admin").id == role.id

    def test_duplicate_code(self, rbac):
        rbac.roles.create_role("admin", "管理员")

        with pytest.raises(DuplicateEntityException):
            rbac.roles.create_role("admin", "另一个")

    def test_update_keeps_unset_fields(self, rbac):
        role = rbac.roles.create_role("admin", "管理员", description="全部权限")

        rbac.roles.update_role(role.id, name="超级管理员")

        role = rbac.roles.get_role(role.id)
        assert role.name == "超级管理员"
        assert role.description == "全部权限"

    def test_permission_tree(self, rbac, catalog):
        rbac.reconciler.replace_role_permissions(catalog.admin.id, [catalog.p2.id])

        tree = [node.to_dict() for node in rbac.roles.get_role_permission_tree(catalog.admin.id)]

        assert tree == [
            {
                "id": catalog.p1.id,
                "name": "系统管理",
                "enable": False,
                "icon": "setting",
                "children": [
                    {"id": catalog.p2.id, "name": "查看用户", "enable": True, "children": []},
                    {"id": catalog.p3.id, "name": "编辑用户", "enable": False, "children": []},
                ],
            },
            {"id": catalog.p4.id, "name": "审计", "enable": False, "children": []},
        ]

    def test_permission_tree_missing_role(self, rbac, catalog):
        with pytest.raises(EntityNotFoundException):
            rbac.roles.get_role_permission_tree(999)


class TestPermissionService:
    """权限服务"""

    def test_list_queries(self, rbac, catalog):
        assert [p.code for p in rbac.permissions.list_by_type(PermissionType.BUTTON)] == ["user:read", "user:write"]
        assert [p.code for p in rbac.permissions.list_by_type("menu")] == ["system", "audit"]
        assert [p.code for p in rbac.permissions.list_by_menu(catalog.system_menu.id)] == ["system"]
        assert [p.code for p in rbac.permissions.list_children(catalog.p1.id)] == ["user:read", "user:write"]
        assert [p.code for p in rbac.permissions.list_children(0)] == ["system", "audit"]

    def test_invalid_type(self, rbac):
        with pytest.raises(ValidationException):
            rbac.permissions.create_permission(code="x", name="x", type="page")

    def test_duplicate_code(self, rbac, catalog):
        with pytest.raises(DuplicateEntityException):
            rbac.permissions.create_permission(code="system", name="重复")

    def test_missing_parent(self, rbac, catalog):
        with pytest.raises(MissingParentError) as exc_info:
            rbac.permissions.create_permission(code="orphan", name="孤儿", parent_id=999)

        assert exc_info.value.status_code == 400

    def test_reparent_under_descendant_rejected(self, rbac, catalog):
        with pytest.raises(HierarchyCycleError):
            rbac.permissions.update_permission(catalog.p1.id, parent_id=catalog.p2.id)

    def test_reparent_to_self_rejected(self, rbac, catalog):
        with pytest.raises(HierarchyCycleError):
            rbac.permissions.update_permission(catalog.p1.id, parent_id=catalog.p1.id)

    def test_reparent_to_root(self, rbac, catalog):
        perm = rbac.permissions.update_permission(catalog.p2.id, parent_id=0)

        assert perm.parent_id == 0
        assert "user:read" in [p.code for p in rbac.permissions.list_children(None)]

    def test_resolve_codes(self, rbac, catalog):
        assert rbac.permissions.resolve_codes(["audit", "system", "audit"]) == [catalog.p4.id, catalog.p1.id]


class TestMenuService:
    """菜单服务"""

    def test_children_ordered(self, rbac, catalog):
        rbac.menus.create_menu(name="Roles", path="/system/roles", parent_id=catalog.system_menu.id, order=0)

        children = rbac.menus.list_children(catalog.system_menu.id)

        assert [m.name for m in children] == ["Roles", "Users"]

    def test_missing_parent(self, rbac):
        with pytest.raises(MissingParentError):
            rbac.menus.create_menu(name="Lost", parent_id=77)

    def test_reparent_cycle_rejected(self, rbac, catalog):
        with pytest.raises(HierarchyCycleError):
            rbac.menus.update_menu(catalog.system_menu.id, parent_id=catalog.users_menu.id)

    def test_update_meta_and_visibility(self, rbac, catalog):
        menu = rbac.menus.update_menu(catalog.users_menu.id, meta={"title": "用户管理"}, is_visible=False)

        assert menu.title == "用户管理"
        assert menu.is_visible is False

    def test_menu_permissions(self, rbac, catalog):
        assert [p.code for p in rbac.menus.get_menu_permissions(catalog.system_menu.id)] == ["system"]

    def test_bind_permission_to_missing_menu(self, rbac):
        with pytest.raises(EntityNotFoundException) as exc_info:
            rbac.menus.bind_menu_permission(404, code="nope", name="nope")

        assert exc_info.value.code == ErrorCode.MENU_NOT_FOUND


class TestButtonService:
    """按钮服务"""

    def test_create_requires_menu(self, rbac):
        with pytest.raises(EntityNotFoundException):
            rbac.buttons.create_button(name="新增", menu_id=5)

    def test_bind_button_permission(self, rbac, catalog):
        button = rbac.buttons.create_button(name="新增", action="create", menu_id=catalog.users_menu.id)

        perm = rbac.buttons.bind_button_permission(button.id, code="user:create", name="新增用户", parent_id=catalog.p1.id)

        assert perm.type == PermissionType.BUTTON.value
        assert perm.button_id == button.id
        assert perm.menu_id is None
        assert rbac.buttons.get_button(button.id).permission_code == "user:create"
        assert [p.code for p in rbac.buttons.get_button_permissions(button.id)] == ["user:create"]
        assert [b.name for b in rbac.buttons.list_by_menu(catalog.users_menu.id)] == ["新增"]

    def test_menu_permissions_exclude_button_permissions(self, rbac, catalog):
        button = rbac.buttons.create_button(name="新增", action="create", menu_id=catalog.system_menu.id)
        rbac.buttons.bind_button_permission(button.id, code="user:create", name="新增用户", parent_id=catalog.p1.id)
        rbac.permissions.create_permission(
            code="user:import", name="导入用户", type="button",
            menu_id=catalog.system_menu.id, button_id=button.id, parent_id=catalog.p1.id,
        )

        assert [p.code for p in rbac.menus.get_menu_permissions(catalog.system_menu.id)] == ["system"]
        assert [p.code for p in rbac.buttons.get_button_permissions(button.id)] == ["user:create", "user:import"]

    def test_button_permission_takes_no_menu_icon(self, rbac, catalog):
        perm = rbac.permissions.create_permission(
            code="user:import", name="导入用户", type="button", menu_id=catalog.system_menu.id, parent_id=catalog.p1.id,
        )

        tree = rbac.roles.get_role_permission_tree(catalog.admin.id)

        assert tree[0].icon == "setting"
        assert tree[0].children[-1].id == perm.id
        assert "icon" not in tree[0].children[-1].to_dict()

    def test_bind_button_permission_is_atomic(self, rbac, catalog, monkeypatch):
        """按钮回填失败时新权限一并回滚"""
        button = rbac.buttons.create_button(name="新增", menu_id=catalog.users_menu.id)

        def broken_update(self, commit=False, **kwargs):
            raise SQLAlchemyError("database is locked")

        monkeypatch.setattr(Button, "update", broken_update)

        with pytest.raises(SQLAlchemyError):
            rbac.buttons.bind_button_permission(button.id, code="user:create", name="新增用户")

        monkeypatch.undo()
        assert rbac.buttons.get_button_permissions(button.id) == []
        assert not rbac.permissions.exists(code="user:create")
        assert rbac.buttons.get_button(button.id).permission_code == ""


class TestPagination:
    """分页参数校验"""

    @pytest.mark.parametrize("page,page_size", [(0, 10), (1, 0), (-1, 5), (1, 51)])
    def test_invalid_arguments(self, rbac, page, page_size):
        with pytest.raises(ValidationException) as exc_info:
            rbac.roles.page_roles(page=page, page_size=page_size)

        assert exc_info.value.code == ErrorCode.INVALID_PAGINATION
        assert exc_info.value.status_code == 422

    def test_page_beyond_end_is_empty(self, rbac, catalog):
        page = rbac.roles.page_roles(page=5, page_size=10)

        assert page.rows == []
        assert page.total_records == 2
