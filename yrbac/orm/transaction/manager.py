"""事务管理器

提供事务管理的统一入口
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from typing import Callable, Generator, Optional, TypeVar

from sqlalchemy.orm import Session

from yrbac.log import get_logger

from .context import TransactionContext

logger = get_logger("yrbac.orm.transaction")

T = TypeVar("T")

# 当前事务上下文（线程/协程安全）
_current_transaction: ContextVar[Optional[TransactionContext]] = ContextVar(
    "_current_transaction", default=None
)


def get_current_transaction() -> Optional[TransactionContext]:
    """获取当前事务上下文，不在事务中返回 None"""
    return _current_transaction.get()


class TransactionManager:
    """事务管理器（单例）

    使用示例:
        from yrbac.orm import transaction_manager as tm

        with tm.transaction(session) as tx:
            RolePermission.query.filter_by(role_id=1).delete()
            RolePermission(role_id=1, permission_id=3).save()

        @tm.transactional()
        def bind_menu_permission(menu_id, code, name):
            ...
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._default_suppress_commit = True
        self._initialized = True

    def get_session(self) -> Session:
        from ..db_session import db_manager
        return db_manager.get_session()

    @property
    def current_transaction(self) -> Optional[TransactionContext]:
        return _current_transaction.get()

    def configure(self, suppress_commit_in_transaction: bool = None) -> None:
        if suppress_commit_in_transaction is not None:
            self._default_suppress_commit = suppress_commit_in_transaction

    @contextmanager
    def transaction(
        self,
        session: Session = None,
        auto_commit: bool = True,
        suppress_commit: bool = None
    ) -> Generator[TransactionContext, None, None]:
        """创建事务上下文

        已有活跃事务时加入该事务，由最外层负责提交或回滚。
        内层抛出的异常会继续向外传播，外层随之回滚。

        Args:
            session: 数据库会话，不传则从 db_manager 获取
            auto_commit: 上下文正常结束时是否自动提交
            suppress_commit: 是否抑制事务内的 commit=True，None 使用默认配置
        """
        current = self.current_transaction
        if current is not None and current.is_active:
            current.begin()
            try:
                yield current
            finally:
                if current.nesting_level > 1:
                    current._nesting_level -= 1
            return

        if session is None:
            session = self.get_session()
        if suppress_commit is None:
            suppress_commit = self._default_suppress_commit

        ctx = TransactionContext(
            session=session,
            auto_commit=auto_commit,
            suppress_commit=suppress_commit
        )
        token = _current_transaction.set(ctx)
        try:
            with ctx:
                yield ctx
        finally:
            _current_transaction.reset(token)

    def transactional(self, session_getter: Callable[[], Session] = None, suppress_commit: bool = None):
        """事务装饰器

        Args:
            session_getter: 返回 session 的函数，不传则从 db_manager 获取
            suppress_commit: 是否抑制内部提交

        使用示例:
            @tm.transactional(session_getter=lambda: Role.query.session)
            def create_role_with_permissions(data):
                ...
        """
        def decorator(func: Callable[..., T]) -> Callable[..., T]:
            @wraps(func)
            def wrapper(*args, **kwargs) -> T:
                session = session_getter() if session_getter is not None else None
                with self.transaction(session=session, suppress_commit=suppress_commit):
                    return func(*args, **kwargs)
            return wrapper
        return decorator

    def is_in_transaction(self) -> bool:
        tx = self.current_transaction
        return tx is not None and tx.is_active


# 全局单例
transaction_manager = TransactionManager()
