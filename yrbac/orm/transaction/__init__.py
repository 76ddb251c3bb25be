"""事务管理模块

使用示例:
    from yrbac.orm.transaction import transaction_manager as tm

    with tm.transaction(session) as tx:
        ...
"""

from .context import TransactionContext, TransactionState
from .manager import TransactionManager, transaction_manager, get_current_transaction
from .exceptions import (
    TransactionError,
    TransactionNotActiveError,
    TransactionAlreadyCommittedError,
)

__all__ = [
    "TransactionContext",
    "TransactionState",
    "TransactionManager",
    "transaction_manager",
    "get_current_transaction",
    "TransactionError",
    "TransactionNotActiveError",
    "TransactionAlreadyCommittedError",
]
