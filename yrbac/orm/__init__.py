"""ORM 模块

使用示例:
    from yrbac.orm import CoreModel, init_database, db_session_scope, transaction_manager
"""

from .base_schemas import Page, BaseSchemas
from .core_model import Base, CoreModel, validate_page_args
from .db_session import db_manager, init_database, get_engine, db_session_scope
from .transaction import (
    TransactionContext,
    TransactionManager,
    transaction_manager,
    get_current_transaction,
)

__all__ = [
    "Page",
    "BaseSchemas",
    "Base",
    "CoreModel",
    "validate_page_args",
    "db_manager",
    "init_database",
    "get_engine",
    "db_session_scope",
    "TransactionContext",
    "TransactionManager",
    "transaction_manager",
    "get_current_transaction",
]
