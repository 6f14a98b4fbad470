"""Shared response envelope for paginated results."""

from typing import Generic, List, TypeVar

from pydantic import BaseModel

from app.core.pagination import Page

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page) -> "PageResponse[T]":
        return cls(
            content=page.content,
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
        )
