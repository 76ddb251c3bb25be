"""
授权模块 - 分页 Schema
"""

from typing import Any, Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from yrbac.orm import Page


T = TypeVar("T")


class PageRequest(BaseModel):
    """分页请求，页码从 1 开始"""
    page: int = Field(1, ge=1, description="页码")
    page_size: int = Field(10, ge=1, alias="pageSize", description="每页条数")

    model_config = ConfigDict(populate_by_name=True)


class PageResponse(BaseModel, Generic[T]):
    """分页响应 {data, total, page, pageSize}"""
    data: List[T] = Field(default_factory=list, description="当前页数据")
    total: int = Field(..., description="总条数")
    page: int = Field(..., description="当前页码")
    page_size: int = Field(..., alias="pageSize", description="每页条数")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_page(cls, page: Page, converter: Optional[Callable[[Any], T]] = None) -> "PageResponse[T]":
        rows = page.rows if converter is None else [converter(row) for row in page.rows]
        return cls(data=rows, total=page.total_records, page=page.page, page_size=page.page_size)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
