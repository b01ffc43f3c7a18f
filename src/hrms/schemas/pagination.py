"""Pagination schemas for offset-based pagination."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic page of results with the total count for the same filter.

    ``total`` is computed by a separate count query, so it may be off by a few
    rows when other callers write between the two queries.
    """

    items: list[T]
    total: int = Field(ge=0, description="Number of rows matching the filter.")
    limit: int | None = Field(default=None, description="Page size, None if unbounded.")
    offset: int = Field(default=0, ge=0)
    has_more: bool = Field(
        default=False,
        description="Whether there are more items after this page.",
    )
