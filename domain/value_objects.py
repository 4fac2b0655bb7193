"""Domain Value Objects"""
import math
from pydantic import BaseModel, Field
from typing import Any, List


class PageRequest(BaseModel):
    """Value Object for a page of a sorted listing"""
    page: int = Field(ge=0, default=0)
    size: int = Field(ge=1, default=10)
    sort_by: str

    @property
    def offset(self) -> int:
        return self.page * self.size

    class Config:
        frozen = True


class Page(BaseModel):
    """Value Object for one page of results"""
    content: List[Any]
    total_elements: int = Field(ge=0)
    number: int = Field(ge=0)
    size: int = Field(ge=1)

    @property
    def total_pages(self) -> int:
        """Number of pages needed for total_elements"""
        return math.ceil(self.total_elements / self.size)

    @staticmethod
    def of(items: List[Any], page_request: PageRequest) -> "Page":
        """Slice an already sorted list according to page_request"""
        start = page_request.offset
        return Page(
            content=items[start:start + page_request.size],
            total_elements=len(items),
            number=page_request.page,
            size=page_request.size
        )

    class Config:
        frozen = True
