"""Common API response schemas."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Consistent JSON envelope for API responses."""

    data: T


class PageMeta(BaseModel):
    """Pagination window of a listing response."""

    total: int
    limit: int
    offset: int


class PagedApiResponse(BaseModel, Generic[T]):
    """Listing envelope with pagination metadata."""

    data: list[T]
    meta: PageMeta
