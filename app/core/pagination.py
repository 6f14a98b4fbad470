"""Page request / page result types shared by the audit and domain layers. No framework imports."""

import math
from dataclasses import dataclass
from typing import Callable, Generic, List, Literal, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")

SortDirection = Literal["asc", "desc"]

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index, page size and a single sort key."""

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort_by: str = "timestamp"
    sort_dir: SortDirection = "desc"

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError(f"page must be >= 0, got {self.page}")
        if self.size < 1:
            raise ValueError(f"size must be >= 1, got {self.size}")

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def descending(self) -> bool:
        return self.sort_dir == "desc"


@dataclass(frozen=True)
class Page(Generic[T]):
    """A bounded slice of a result set plus its total count and position."""

    content: List[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(
            content=[fn(item) for item in self.content],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )


def paginate_in_memory(items: Sequence[T], request: PageRequest) -> Page[T]:
    """
    Slice an already-materialized result list into a page.
    total_elements is always the unsliced size; an offset past the end yields empty content.
    """
    total = len(items)
    start = request.offset
    end = min(start + request.size, total)
    content = list(items[start:end]) if start < total else []
    return Page(content=content, page=request.page, size=request.size, total_elements=total)
