"""
ORM基础模型

提供常用的CRUD操作与分页查询
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, List, Optional

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, Query, Session, declarative_base, declared_attr, mapped_column

if TYPE_CHECKING:
    from typing_extensions import Self

from yrbac.exceptions import ErrorCode, ValidationException
from yrbac.log import get_logger
from .base_schemas import Page
from .utils import to_snake_case


logger = get_logger("yrbac.orm.transaction")

# 声明基类
Base = declarative_base()


def validate_page_args(page: int, page_size: int, max_page_size: Optional[int] = None) -> None:
    """校验分页参数（页码从 1 开始）

    Raises:
        ValidationException: page 或 page_size 小于 1，或 page_size 超过上限
    """
    if page is None or page < 1:
        raise ValidationException(
            f"页码必须大于 0，当前为 {page}",
            code=ErrorCode.INVALID_PAGINATION,
            field="page",
        )
    if page_size is None or page_size < 1:
        raise ValidationException(
            f"每页条数必须大于 0，当前为 {page_size}",
            code=ErrorCode.INVALID_PAGINATION,
            field="page_size",
        )
    if max_page_size is not None and page_size > max_page_size:
        raise ValidationException(
            f"每页条数不能超过 {max_page_size}，当前为 {page_size}",
            code=ErrorCode.INVALID_PAGINATION,
            field="page_size",
        )


class CoreModel(Base):
    """ORM基础模型类

    提供功能：
    - 自增整数主键
    - 自动表名生成（驼峰转下划线）
    - 创建 / 更新时间戳
    - 常用CRUD操作方法
    - 分页查询

    使用示例:
        from yrbac.orm import CoreModel, init_database

        init_database("sqlite:///./rbac.db")

        class Role(CoreModel):
            code: Mapped[str] = mapped_column(String(100), unique=True)

        role = Role(code="admin").save(commit=True)
        Role.get(role.id)
    """
    __abstract__ = True

    # query 属性由 init_database() 或测试夹具通过 scoped_session.query_property() 设置
    if TYPE_CHECKING:
        query: ClassVar[Query[Self]]

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return to_snake_case(cls.__name__)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, comment="主键")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        comment="创建时间"
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=False),
        nullable=True,
        onupdate=func.now(),
        comment="更新时间"
    )

    _system_fields: ClassVar[set] = {"id", "created_at", "updated_at"}

    def __init__(self, **kwargs):
        # 系统字段由数据库维护
        for field in self._system_fields:
            kwargs.pop(field, None)
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<{self.__class__.__name__} id={self.id}>"

    @property
    def session(self) -> Session:
        return self.__class__.query.session

    # ==================== CRUD 操作方法 ====================

    def save(self, commit: bool = False) -> Self:
        """保存对象（新增或更新）

        Args:
            commit: 是否立即提交
                   - 无事务时：执行 session.commit()
                   - 有事务时：commit 被抑制，只 flush 以获取自动生成字段
        """
        self.session.add(self)
        self._commit_or_flush(commit)
        return self

    def update(self, commit: bool = False, **kwargs) -> Self:
        """更新对象属性

        使用示例:
            role.update(name="管理员", commit=True)
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
        self._commit_or_flush(commit)
        return self

    @classmethod
    def save_all(cls, objects: list, commit: bool = False):
        if not objects:
            return objects
        cls.query.session.add_all(objects)
        cls._cls_commit(commit)
        return objects

    @classmethod
    def get(cls, id: int):
        """根据ID获取对象，不存在返回None"""
        if id is None:
            return None
        return cls.query.session.get(cls, id)

    @classmethod
    def get_all(cls) -> List[Self]:
        """按主键顺序获取所有记录"""
        return cls.query.order_by(cls.id).all()

    @classmethod
    def get_list_by_conditions(cls, conditions: dict) -> List[Self]:
        return cls.query.filter_by(**conditions).order_by(cls.id).all()

    @classmethod
    def paginate(
        cls,
        query: Query,
        page: int = 1,
        page_size: int = 10,
        max_page_size: Optional[int] = None,
    ) -> Page:
        """分页查询

        offset = (page - 1) * page_size。非法参数抛出 ValidationException，不做静默修正。

        使用示例:
            result = Role.paginate(Role.query.order_by(Role.id), page=1, page_size=10)
        """
        validate_page_args(page, page_size, max_page_size)

        total = query.order_by(None).count()
        total_pages = math.ceil(total / page_size) if total > 0 else 0
        rows = query.offset((page - 1) * page_size).limit(page_size).all()

        return Page(
            rows=rows,
            total_records=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
        )

    # ==================== 提交控制 ====================

    def _commit_or_flush(self, commit: bool = False):
        if not commit:
            return
        if _should_suppress_commit():
            self.session.flush()
            self.session.refresh(self)
            return
        self.session.commit()

    @classmethod
    def _cls_commit(cls, commit: bool = False):
        if not commit:
            return
        if _should_suppress_commit():
            cls.query.session.flush()
            return
        cls.query.session.commit()


def _should_suppress_commit() -> bool:
    from .transaction import get_current_transaction

    tx = get_current_transaction()
    if tx is not None and tx.should_suppress_commit():
        logger.debug("commit=True 被事务上下文抑制")
        return True
    return False
