"""CoreModel 测试

使用 Role 模型验证 CRUD 与分页
"""

import pytest

from yrbac.exceptions import ErrorCode, ValidationException
from yrbac.orm import Page, validate_page_args
from yrbac.rbac import Role


class TestCoreModelCrud:
    """CRUD 操作"""

    def test_save_assigns_id_and_timestamp(self, db_session):
        role = Role(code="admin", name="管理员").save(commit=True)

        assert role.id is not None
        assert role.created_at is not None

    def test_system_fields_ignored_on_init(self, db_session):
        role = Role(id=99, code="admin", name="管理员")

        assert role.id is None

    def test_get(self, db_session):
        role = Role(code="admin", name="管理员").save(commit=True)

        assert Role.get(role.id) is role
        assert Role.get(12345) is None
        assert Role.get(None) is None

    def test_update(self, db_session):
        role = Role(code="admin", name="管理员").save(commit=True)

        role.update(name="超级管理员", commit=True)

        assert Role.get(role.id).name == "超级管理员"

    def test_save_all_and_get_all(self, db_session):
        Role.save_all([Role(code=f"r{i}", name=f"角色{i}") for i in range(3)], commit=True)

        assert [r.code for r in Role.get_all()] == ["r0", "r1", "r2"]

    def test_get_list_by_conditions(self, db_session):
        Role.save_all([Role(code="a", name="same"), Role(code="b", name="same"), Role(code="c", name="other")], commit=True)

        assert [r.code for r in Role.get_list_by_conditions({"name": "same"})] == ["a", "b"]


class TestPaginate:
    """分页"""

    @pytest.fixture
    def roles(self, db_session):
        return Role.save_all([Role(code=f"r{i:02d}", name=f"角色{i}") for i in range(25)], commit=True)

    def test_offset(self, roles):
        page = Role.paginate(Role.query.order_by(Role.id), page=3, page_size=10)

        assert isinstance(page, Page)
        assert [r.code for r in page.rows] == [f"r{i:02d}" for i in range(20, 25)]
        assert page.total_records == 25
        assert page.total_pages == 3
        assert page.has_prev is True
        assert page.has_next is False

    def test_empty_table(self, db_session):
        page = Role.paginate(Role.query.order_by(Role.id), page=1, page_size=10)

        assert page.rows == []
        assert page.total_pages == 0

    def test_to_dict(self, roles):
        data = Role.paginate(Role.query.order_by(Role.id), page=1, page_size=5).to_dict()

        assert data["total_records"] == 25
        assert data["has_next"] is True
        assert len(data["rows"]) == 5

    @pytest.mark.parametrize("page,page_size", [(0, 10), (1, 0), (1, -3)])
    def test_rejects_invalid(self, db_session, page, page_size):
        with pytest.raises(ValidationException):
            Role.paginate(Role.query, page=page, page_size=page_size)

    def test_max_page_size(self, roles):
        with pytest.raises(ValidationException) as exc_info:
            Role.paginate(Role.query, page=1, page_size=11, max_page_size=10)

        assert exc_info.value.extra["field"] == "page_size"


class TestValidatePageArgs:

    def test_valid(self):
        validate_page_args(1, 1)
        validate_page_args(3, 1000, max_page_size=1000)

    def test_error_code(self):
        with pytest.raises(ValidationException) as exc_info:
            validate_page_args(0, 10)

        assert exc_info.value.code == ErrorCode.INVALID_PAGINATION
        assert exc_info.value.extra["field"] == "page"
