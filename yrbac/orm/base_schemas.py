from dataclasses import dataclass
from typing import Generic, List, TypeVar

from pydantic import BaseModel as PydanticBaseModel


T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    rows: List[T]  # 当前页数据
    total_records: int  # 总条数
    page: int  # 当前页码（从 1 开始）
    page_size: int  # 每页条数
    total_pages: int  # 总页数

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_dict(self):
        return {
            "rows": self.rows,
            "total_records": self.total_records,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
        }


class BaseSchemas(PydanticBaseModel):
    """基础参数"""
    model_config = {"from_attributes": True, "populate_by_name": True}
