"""
Response envelopes shared by all endpoints.

Successful responses wrap their payload as ``{"data": ...}``; search
results additionally carry a ``paging`` block.
"""

from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    data: T


class PageMeta(BaseModel):
    current_page: int = Field(..., examples=[1])
    total_page: int = Field(..., examples=[3])
    size: int = Field(..., examples=[10])


class PagedResponse(BaseModel, Generic[T]):
    data: List[T]
    paging: PageMeta
