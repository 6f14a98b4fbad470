"""Query-string paging parameters -> PageRequest."""

from typing import Annotated, Callable, Literal

from fastapi import Query

from app.core.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageRequest


def _page_params(default_sort: str) -> Callable[..., PageRequest]:
    def dependency(
        page: Annotated[int, Query(ge=0, description="Zero-based page index")] = 0,
        size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
        sort_by: Annotated[str, Query(min_length=1)] = default_sort,
        sort_dir: Annotated[Literal["asc", "desc"], Query()] = "desc",
    ) -> PageRequest:
        return PageRequest(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)

    return dependency


entity_page_params = _page_params("created_at")
audit_page_params = _page_params("timestamp")
