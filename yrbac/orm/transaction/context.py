"""事务上下文

管理单个事务的生命周期与提交后回调
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List

from sqlalchemy.orm import Session

from yrbac.log import get_logger

from .exceptions import TransactionAlreadyCommittedError, TransactionNotActiveError

logger = get_logger("yrbac.orm.transaction")


class TransactionState(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    FAILED = "failed"


class TransactionContext:
    """事务上下文

    - 事务状态跟踪
    - 嵌套加入（同一事务内的内层 transaction() 只增加层级）
    - 提交抑制：事务内 model.save(commit=True) 只 flush
    - after_commit / after_rollback 回调

    使用示例:
        with TransactionContext(session) as tx:
            RolePermission(role_id=1, permission_id=2).save()

            @tx.after_commit
            def on_committed(ctx):
                logger.info("已提交")
    """

    def __init__(self, session: Session, auto_commit: bool = True, suppress_commit: bool = True):
        self._session = session
        self._auto_commit = auto_commit
        self._suppress_commit = suppress_commit
        self._state = TransactionState.INACTIVE
        self._nesting_level = 0
        self._after_commit: List[Callable[["TransactionContext"], Any]] = []
        self._after_rollback: List[Callable[["TransactionContext"], Any]] = []

        # 回调之间传递数据
        self.data: Dict[str, Any] = {}

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state == TransactionState.ACTIVE

    @property
    def nesting_level(self) -> int:
        return self._nesting_level

    def should_suppress_commit(self) -> bool:
        return self.is_active and self._suppress_commit

    # ==================== 生命周期 ====================

    def begin(self) -> "TransactionContext":
        if self._state == TransactionState.ACTIVE:
            self._nesting_level += 1
            logger.debug(f"加入现有事务 (level={self._nesting_level})")
            return self

        self._state = TransactionState.ACTIVE
        self._nesting_level = 1
        logger.debug("事务开始")
        return self

    def commit(self) -> None:
        if self._state == TransactionState.COMMITTED:
            raise TransactionAlreadyCommittedError()
        if self._state != TransactionState.ACTIVE:
            raise TransactionNotActiveError(f"无法提交：事务状态为 {self._state.value}")

        if self._nesting_level > 1:
            self._nesting_level -= 1
            return

        try:
            self._session.commit()
        except Exception:
            self._state = TransactionState.FAILED
            raise

        self._state = TransactionState.COMMITTED
        self._nesting_level = 0
        logger.debug("事务提交成功")
        self._run_callbacks(self._after_commit, "after_commit")

    def rollback(self) -> None:
        if self._state == TransactionState.COMMITTED:
            raise TransactionAlreadyCommittedError("无法回滚：事务已提交")
        if self._state == TransactionState.ROLLED_BACK:
            return
        if self._state not in (TransactionState.ACTIVE, TransactionState.FAILED):
            return

        self._session.rollback()
        self._state = TransactionState.ROLLED_BACK
        self._nesting_level = 0
        logger.debug("事务回滚成功")
        self._run_callbacks(self._after_rollback, "after_rollback")

    def flush(self) -> None:
        if not self.is_active:
            raise TransactionNotActiveError("无法刷新：事务未激活")
        self._session.flush()

    # ==================== 回调 ====================

    def after_commit(self, func: Callable) -> Callable:
        """注册提交后回调（装饰器方式），回调失败只记录日志"""
        self._after_commit.append(func)
        return func

    def after_rollback(self, func: Callable) -> Callable:
        self._after_rollback.append(func)
        return func

    def _run_callbacks(self, callbacks: List[Callable], name: str) -> None:
        for callback in callbacks:
            try:
                callback(self)
            except Exception as e:
                logger.warning(f"{name} 回调 {getattr(callback, '__name__', callback)} 执行失败: {e}")

    # ==================== 上下文管理器 ====================

    def __enter__(self) -> "TransactionContext":
        return self.begin()

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.rollback()
            return False

        if self._auto_commit and self._nesting_level == 1:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        elif self._nesting_level > 1:
            self._nesting_level -= 1

        return False

    def __repr__(self) -> str:
        return (
            f"TransactionContext("
            f"state={self._state.value}, "
            f"nesting_level={self._nesting_level})"
        )
