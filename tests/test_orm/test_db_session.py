"""数据库会话管理测试"""

import pytest

from yrbac.config import DatabaseSettings
from yrbac.orm import db_manager, db_session_scope, get_engine, init_database
from yrbac.rbac import Role


@pytest.fixture
def initialized_db():
    engine, session_scope = init_database(config=DatabaseSettings(url="sqlite:///:memory:"), create_tables=True)
    yield engine
    db_manager.dispose()


class TestInitDatabase:

    def test_requires_url(self):
        with pytest.raises(ValueError):
            init_database(database_url="")

    def test_memory_database(self, initialized_db):
        assert db_manager.is_initialized
        assert get_engine() is initialized_db

    def test_session_scope_commits(self, initialized_db):
        with db_session_scope():
            Role(code="admin", name="管理员").save()

        with db_session_scope():
            assert Role.query.filter_by(code="admin").count() == 1

    def test_session_scope_rolls_back(self, initialized_db):
        with pytest.raises(RuntimeError):
            with db_session_scope():
                Role(code="admin", name="管理员").save()
                raise RuntimeError("boom")

        with db_session_scope():
            assert Role.query.count() == 0

    def test_engine_unavailable_after_dispose(self, initialized_db):
        db_manager.dispose()

        with pytest.raises(RuntimeError):
            get_engine()
